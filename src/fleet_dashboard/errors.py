"""Error normalization and user-facing error notifications."""

from __future__ import annotations

from collections.abc import Mapping

from fleet_dashboard.notifications import Notifier

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


class ApiError(RuntimeError):
    """Normalized failure from the data store or a fetch hook."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code

    def to_dict(self) -> dict:
        return {"message": self.message, "status": self.status, "code": self.code}


def _message_of(error: object) -> str | None:
    """Return the message an arbitrary failure value carries, if any."""
    if isinstance(error, Mapping):
        message = error.get("message")
    else:
        message = getattr(error, "message", None)
        if message is None and isinstance(error, BaseException):
            message = str(error)
    if isinstance(message, str) and message:
        return message
    return None


def normalize_error(error: object) -> ApiError:
    """Convert any caught value into an ApiError.

    ApiError instances pass through untouched, anything exposing a message is
    wrapped, and everything else gets the generic unknown-error message.
    """
    if isinstance(error, ApiError):
        return error
    message = _message_of(error)
    if message is not None:
        return ApiError(message)
    return ApiError(UNKNOWN_ERROR_MESSAGE)


class ErrorHandler:
    """Normalizes failures and reports each one to the notifier."""

    def __init__(self, notifier: Notifier) -> None:
        self._notifier = notifier

    def handle(self, error: object, custom_message: str | None = None) -> ApiError:
        """Normalize, log and notify. The caller decides whether to raise."""
        api_error = normalize_error(error)
        print(
            f"[api-error] {api_error.message} "
            f"(status={api_error.status}, code={api_error.code})",
            flush=True,
        )
        self._notifier.notify(
            "Error",
            custom_message or api_error.message,
            severity="destructive",
        )
        return api_error
