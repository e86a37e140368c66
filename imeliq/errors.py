"""Application error taxonomy.

Each error carries the HTTP status it maps to. The exception handlers in
``imeliq.main`` turn them into ``{"error": ...}`` JSON responses.
"""

from typing import Optional

from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from imeliq.utils.logging import error_log


class ImeliqError(Exception):
    """Base class for errors reported to API callers."""
    
    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"
    
    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ImeliqError):
    """Missing or malformed request fields."""
    
    status_code = HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(ImeliqError):
    """Bad password, session or API key."""
    
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class ConflictError(ImeliqError):
    """A unique field is already taken."""
    
    status_code = HTTP_409_CONFLICT
    default_message = "Already exists"


class ConfigurationError(ImeliqError):
    """A required server-side secret or credential is missing."""
    
    default_message = "Server not configured"


class StoreError(ImeliqError):
    """The database failed. Callers only ever see a generic message."""
    
    default_message = "Database error"
    
    def __init__(self, message: Optional[str] = None, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.details = details


def store_error_from(exc: Exception, operation: str) -> StoreError:
    """Log a database failure server-side and wrap it for the caller."""
    error_log(f"Database error while {operation}", exc=exc)
    return StoreError(details=str(exc))
