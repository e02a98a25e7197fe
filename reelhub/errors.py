"""
Error taxonomy for the ReelHub backend.

Services raise these; the API layer turns each into a tagged failure body
({"success": false, "error": <code>, "message": <text>}) with the matching
HTTP status. Database failures use DatabaseError from reelhub.db.helpers.
"""

from typing import Any


class AppError(Exception):
    """Base class for every error that is reported back to the caller."""

    status_code: int = 400
    code: str = "error"

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = context


class ValidationError(AppError):
    """Malformed or missing input."""

    status_code = 400
    code = "validation_error"


class OtpMismatchError(ValidationError):
    """A one-time code was supplied but does not match the issued one."""

    code = "otp_mismatch"


class AuthError(AppError):
    """Missing, invalid or expired credentials."""

    status_code = 401
    code = "auth_error"


class NotFoundError(AppError):
    """Unknown identity or resource."""

    status_code = 404
    code = "not_found"


class ConflictError(AppError):
    """Request conflicts with current state (duplicate registration, ...)."""

    status_code = 409
    code = "conflict"


class SelfFollowError(ConflictError):
    code = "self_follow"

    def __init__(self, identity: str):
        super().__init__("Can't follow yourself", identity=identity)


class ExpiredError(AppError):
    """One-time code used after its window closed."""

    status_code = 410
    code = "expired"


class ServiceUnavailableError(AppError):
    """A backing service (Redis, SMTP) could not complete the request."""

    status_code = 503
    code = "service_unavailable"
