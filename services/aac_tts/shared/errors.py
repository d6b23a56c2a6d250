"""Errors raised while handling a synthesis request.

Each error knows the HTTP status and public message it maps to, so the
app-level handler in ``main`` can turn any of them into a JSON response.
"""

from .constants import (
    SYNTHESIS_FAILED_MESSAGE,
    TEXT_REQUIRED_MESSAGE,
    UPLOAD_FAILED_MESSAGE,
)


class TTSServiceError(Exception):
    status_code = 500
    message = SYNTHESIS_FAILED_MESSAGE

    def __init__(self, details: str | None = None):
        super().__init__(details or self.message)
        self.details = details

    def to_response(self) -> dict:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class InvalidInput(TTSServiceError):
    """Missing or empty text; the client's fault"""

    status_code = 400
    message = TEXT_REQUIRED_MESSAGE


class SynthesisError(TTSServiceError):
    """Polly failed or returned no audio"""


class StorageError(TTSServiceError):
    """S3 rejected the upload"""

    message = UPLOAD_FAILED_MESSAGE


class UnexpectedError(TTSServiceError):
    pass
