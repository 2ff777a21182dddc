"""Domain exceptions shared by the reminder engine and the HTTP layer."""


class AgribooksError(Exception):
    """Base error carrying the HTTP status and error code it maps to."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str = "Internal server error", code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class InvalidArgument(AgribooksError):
    """User-correctable input error (bad reminder type, missing field)."""

    status_code = 400
    code = "INVALID_INPUT"


class UnauthorizedError(AgribooksError):
    status_code = 401
    code = "UNAUTHORIZED"


class ForbiddenError(AgribooksError):
    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(AgribooksError):
    """Referenced user, reminder, category, transaction or alert does not exist."""

    status_code = 404
    code = "NOT_FOUND"


class StorageUnavailable(AgribooksError):
    """Persistence layer unreachable. Retryable: background callers skip and retry next cycle."""

    status_code = 503
    code = "STORAGE_UNAVAILABLE"


class AlertSinkFailure(AgribooksError):
    """Writing an alert failed. Never retried within the same evaluation."""

    status_code = 500
    code = "ALERT_SINK_FAILURE"
