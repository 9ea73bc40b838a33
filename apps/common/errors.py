from __future__ import annotations


class ServiceError(Exception):
    """Base for errors reported back to the caller with a short reason."""

    status = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ServiceError):
    status = 400
    default_message = "Invalid request"


class UnauthorizedError(ServiceError):
    status = 401
    default_message = "Unauthorized"

    def __init__(self, message: str | None = None):
        # never leak why the check failed
        super().__init__(self.default_message)


class NotFoundError(ServiceError):
    status = 404
    default_message = "Not found"


class ConflictError(ServiceError):
    status = 409
    default_message = "Conflict"


class RateLimitedError(ServiceError):
    status = 429
    default_message = "Too many attempts. Try again in a few seconds."

    def __init__(self, message: str | None = None, retry_after: int = 0):
        super().__init__(message)
        self.retry_after = retry_after


class PersistenceError(ServiceError):
    status = 500
    default_message = "Internal server error"


class DependencyFailure(Exception):
    """Email dispatch or image storage failed; logged, never surfaced."""
