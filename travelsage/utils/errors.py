"""Domain error taxonomy shared by stores, repositories and routes"""
from typing import Any, Dict, List, Optional


class TravelSageError(Exception):
    """
    Base class for errors that map onto an HTTP status.

    Rendered by the application exception handler as
    ``{"error": ..., "message": ..., "details": {...}}``.
    """
    status_code: int = 500
    error: str = "InternalServerError"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.error,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(TravelSageError):
    """Missing or malformed input"""
    status_code = 400
    error = "ValidationError"

    @classmethod
    def for_fields(cls, message: str, field_errors: List[Dict[str, str]]) -> "ValidationError":
        """Build an error carrying a structured list of ``{"field", "message"}`` entries"""
        return cls(message, {"errors": field_errors})

    @classmethod
    def missing(cls, *fields: str) -> "ValidationError":
        return cls.for_fields(
            f"Missing required fields: {', '.join(fields)}",
            [{"field": name, "message": "Field is required"} for name in fields],
        )


class AuthenticationError(TravelSageError):
    """Missing, invalid or expired session, or bad credentials"""
    status_code = 401
    error = "AuthenticationError"


class AuthorizationError(TravelSageError):
    """Authenticated, but not the owner of the resource (or not an admin)"""
    status_code = 403
    error = "AuthorizationError"


class NotFoundError(TravelSageError):
    status_code = 404
    error = "NotFound"


class ConflictError(TravelSageError):
    """Unique constraint violated (username or email already taken)"""
    status_code = 409
    error = "Conflict"


class RateLimitError(TravelSageError):
    status_code = 429
    error = "RateLimitExceeded"


class DependencyError(TravelSageError):
    """A downstream store or hosted model failed"""
    status_code = 500
    error = "DependencyError"
