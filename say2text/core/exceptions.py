"""
Say2Text exception hierarchy.

All application-specific exceptions inherit from Say2TextError so the
controller can turn any of them into a user notification.
"""

from datetime import UTC, datetime


class Say2TextError(Exception):
    """Base exception for all Say2Text errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "SAY2TEXT_ERROR",
    ) -> None:
        self.detail = detail
        self.code = code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class MicrophoneAccessError(Say2TextError):
    """Raised when the input device cannot be opened (denied, missing, busy)."""

    def __init__(self, detail: str = "Microphone access denied.") -> None:
        super().__init__(detail=detail, code="MICROPHONE_ACCESS_DENIED")


class RecordingAlreadyActiveError(Say2TextError):
    """Raised when trying to start a recording while one is already active."""

    def __init__(self) -> None:
        super().__init__(
            detail="A recording is already active",
            code="RECORDING_ALREADY_ACTIVE",
        )


class UploadInProgressError(Say2TextError):
    """Raised when a new recording or upload is requested mid-upload."""

    def __init__(self) -> None:
        super().__init__(
            detail="An upload is already in progress",
            code="UPLOAD_IN_PROGRESS",
        )


class EmptyRecordingError(Say2TextError):
    """Raised when a stopped session captured no audio frames."""

    def __init__(self) -> None:
        super().__init__(
            detail="No audio was captured.",
            code="EMPTY_RECORDING",
        )


class APIError(Say2TextError):
    """User-friendly API error with categorized message.

    Categories: "connection", "timeout", "http", "network",
    "invalid_response", "unknown".

    ``backend_message`` carries the error string the backend put in its
    response body, if any; callers prefer it over their generic message.
    """

    def __init__(
        self,
        message: str,
        category: str = "unknown",
        backend_message: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.message = message
        self.category = category
        self.backend_message = backend_message
        self.status_code = status_code
        super().__init__(detail=message, code=f"API_{category.upper()}")
