"""Base exception for neo-auth-providers.

Every error carries a machine-readable code, structured details and the HTTP
status an API should answer with, so routers never map exceptions by hand.
"""

from typing import Any, Dict, Optional


class NeoAuthProvidersError(Exception):
    """Root of the package's exception hierarchy."""

    http_status: int = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": type(self).__name__,
        }


def get_http_status_code(exception: Exception) -> int:
    """HTTP status for an exception; anything foreign is a 500."""
    if isinstance(exception, NeoAuthProvidersError):
        return exception.http_status
    return 500


def create_error_response(exception: NeoAuthProvidersError) -> Dict[str, Any]:
    """Wrap an exception in the ``{"error": {...}}`` response envelope."""
    return {"error": exception.to_dict()}
