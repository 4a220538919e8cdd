"""Security configuration constants for the copy console API.

This module centralizes security-related configuration including:
- Sensitive keys that should be sanitized from logs
- Error handling security settings
"""

# Keys redacted from structured log entries. Matching is substring based and
# case-insensitive, so "x-api-key" and "GEMINI_API_KEY" are both covered.
SENSITIVE_KEYS: set[str] = {
    # Credentials for the generator and any upstream service
    "api_key",
    "apikey",
    "secret",
    "token",
    "access_token",
    "authorization",
    "bearer",
    "password",
    "cookie",
    "set-cookie",
    "x-api-key",
    "session_id",
    # Contact details an editor might paste into a prompt
    "email",
    "phone",
    "phone_number",
    "address",
}

# Production-only error response fields
# In production, error responses should only contain these fields to
# prevent information leakage
PRODUCTION_ERROR_FIELDS: set[str] = {
    "correlation_id",
    "type",
}

# Development error response fields (additional fields allowed in development)
DEVELOPMENT_ERROR_FIELDS: set[str] = PRODUCTION_ERROR_FIELDS | {
    "details",
    "traceback",
    "exception_type",
    "validation_errors",
}


def get_allowed_error_fields(environment: str) -> set[str]:
    """Get allowed error response fields based on environment.

    Args:
        environment: The application environment (production, development, etc.)

    Returns:
        Set of allowed field names for error responses
    """
    if environment == "production":
        return PRODUCTION_ERROR_FIELDS.copy()
    return DEVELOPMENT_ERROR_FIELDS.copy()


def is_sensitive_key(key: str) -> bool:
    """Check if a key should be considered sensitive and redacted."""
    key_lower = key.lower()
    return any(sensitive in key_lower for sensitive in SENSITIVE_KEYS)
