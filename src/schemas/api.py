"""API response schemas.

Envelope types shared by the history, health and error responses. Generation
results use their own flat schemas in ``schemas.generate``.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel


# Type variable for generic response types
T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard API response wrapper.

    Attributes:
        success: Whether the request was successful.
        data: The actual response data (when success is True).
        message: A human-readable message about the response.
        error: Error details (when success is False).
    """

    success: bool = True
    data: T | None = None
    message: str = "Operation completed successfully"
    error: dict[str, Any] | None = None


class ErrorResponse(ApiResponse[None]):
    """Error envelope with ``success`` fixed to False.

    ``error`` carries the correlation id, an error type and, outside
    production, diagnostic details.
    """

    success: bool = False
    message: str = "An error occurred"
    error: dict[str, Any] | None = None
