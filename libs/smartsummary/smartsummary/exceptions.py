"""SmartSummary exception hierarchy."""

from __future__ import annotations

from smartsummary.error_codes import ErrorCode


class SmartSummaryError(Exception):
    """Base error for SmartSummary.

    `status_code` is the HTTP status the API answers with when the error
    escapes to a route; `details` is optional diagnostic text.
    """

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ConfigurationError(SmartSummaryError):
    """Raised when configuration or inputs are invalid."""


class InvalidArtifactError(SmartSummaryError):
    """Raised when an uploaded audio file is missing, of the wrong type or too big."""

    status_code = 400
    error_code = ErrorCode.INVALID_ARTIFACT

    def __init__(
        self, message: str, *, details: str | None = None, status_code: int = 400
    ) -> None:
        super().__init__(message, details=details)
        self.status_code = status_code


class InvalidInputError(SmartSummaryError):
    """Raised when a request body lacks a required value."""

    status_code = 400
    error_code = ErrorCode.INVALID_INPUT


class ExternalProcessFailure(SmartSummaryError):
    """Raised when an engine process exits non-zero, times out or cannot start."""

    def __init__(
        self,
        engine: str,
        stderr: str,
        *,
        exit_code: int | None = None,
        timed_out: bool = False,
    ) -> None:
        if timed_out:
            summary = "timed out"
        elif exit_code is None:
            summary = "could not be started"
        else:
            summary = f"exited with code {exit_code}"
        super().__init__(f"{engine}: {summary}", details=stderr)
        self.engine = engine
        self.stderr = stderr
        self.exit_code = exit_code
        self.timed_out = timed_out


class StorageUnavailableError(SmartSummaryError):
    """Raised when the note database cannot be reached or rejects a statement."""

    error_code = ErrorCode.STORAGE_UNAVAILABLE


class NoteNotFoundError(SmartSummaryError):
    """Raised when a note id does not exist."""

    status_code = 404
    error_code = ErrorCode.NOT_FOUND

    def __init__(self, note_id: str) -> None:
        super().__init__("Note not found")
        self.note_id = note_id


class NotificationError(SmartSummaryError):
    """Raised by the mail transport; never surfaced to API callers."""

    error_code = ErrorCode.NOTIFICATION_FAILED
