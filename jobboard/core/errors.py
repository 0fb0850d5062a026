"""Domain error taxonomy.

Every failure that reaches a client is one of these exceptions. Each carries
the HTTP status it maps to; the FastAPI exception handlers in
``jobboard.app.main`` turn them into ``{"success": false, "message": ...}``
envelopes.
"""
from typing import Optional


class JobBoardError(Exception):
    """Base class for all errors raised by the jobboard core."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(JobBoardError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Invalid request"


class ConflictError(JobBoardError):
    """The resource already exists."""

    status_code = 400
    default_message = "Resource already exists"


class AuthError(JobBoardError):
    """Missing, malformed or expired credentials."""

    status_code = 401
    default_message = "Not authorized"


class InvalidCredentialsError(AuthError):
    """Login failure. Same message for unknown email and wrong password."""

    status_code = 400
    default_message = "Invalid credentials"


class ForbiddenError(JobBoardError):
    """Authenticated, but not permitted to perform the operation."""

    status_code = 403
    default_message = "Not authorized to perform this action"


class NotFoundError(JobBoardError):
    status_code = 404
    default_message = "Resource not found"


class ServerError(JobBoardError):
    status_code = 500


class ConfigurationError(JobBoardError):
    """Raised at startup when the environment is not usable."""
