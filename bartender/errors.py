"""Errors raised by the persistence layer.

Each class carries the HTTP status the API answers with, so the web layer
maps them with a single exception handler.
"""


class BartenderError(Exception):
    status_code = 500
    default_message = "Internal server error"
    retryable = False

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(BartenderError):
    """Malformed or missing input."""

    status_code = 400
    default_message = "Invalid request"


class DuplicateError(BartenderError):
    status_code = 409
    default_message = "Already exists"


class NotFoundError(BartenderError):
    status_code = 404
    default_message = "Not found"


class ForbiddenError(BartenderError):
    """Attempted mutation of a standard (read-only) recipe."""

    status_code = 403
    default_message = "Forbidden"


class ConflictError(BartenderError):
    status_code = 409
    default_message = "Conflict"


class StorageUnavailableError(BartenderError):
    """Transient database failure. The only error worth retrying."""

    status_code = 503
    default_message = "Storage unavailable"
    retryable = True
