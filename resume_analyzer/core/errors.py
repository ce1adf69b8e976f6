from __future__ import annotations

from fastapi import status


class AnalyzerError(RuntimeError):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    public_message: str = "Internal server error"

    def __init__(
        self,
        message: str,
        *,
        public_message: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        if public_message is not None:
            self.public_message = public_message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AnalyzerError):
    """Caller input failed a precondition. The message is safe to return."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message, public_message=message, status_code=status_code)


class UploadTooLargeError(ValidationError):
    status_code = 413


class RemoteServiceError(AnalyzerError):
    public_message = "AI analysis failed"


class MalformedModelOutput(AnalyzerError):
    public_message = "AI analysis failed"

    def __init__(self, message: str, *, raw_reply: str = "", **kwargs):
        super().__init__(message, **kwargs)
        self.raw_reply = raw_reply


class ExtractionError(AnalyzerError):
    public_message = "PDF analysis failed"
