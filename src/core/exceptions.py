class DomainError(Exception):
    """Base class for domain-specific errors."""

    pass


class HistoryItemNotFoundError(DomainError):
    """Exception raised when a history entry does not exist (or was trimmed)."""

    pass
