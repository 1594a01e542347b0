"""
Error types raised by the correction pipeline.

Every failure is terminal for the call that raised it: nothing is retried
and nothing is replaced with placeholder data. Callers render
localized_message() and let the user retry.
"""

from __future__ import annotations

from typing import Optional

from kodiary.prompts.catalog import error_message


class CorrectionError(Exception):
    """Base class for all correction failures."""

    kind = "correction_error"
    default_message = "Correction failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    def localized_message(self, language: str = "en") -> str:
        return error_message(self.kind, language)


class EmptyTextError(CorrectionError):
    """Input text was empty or whitespace only."""
    kind = "empty_text"
    default_message = "Diary text is empty"


class InvalidCredentialError(CorrectionError):
    """The API rejected the configured key (HTTP 401)."""
    kind = "invalid_credential"
    default_message = "API key was rejected (HTTP 401)"


class InvalidResponseError(CorrectionError):
    """No usable HTTP response: transport failure or a non-JSON envelope."""
    kind = "invalid_response"
    default_message = "Invalid response from server"


class HttpError(CorrectionError):
    """Any non-200, non-401 HTTP status."""
    kind = "http_error"

    def __init__(self, status_code: int, message: Optional[str] = None):
        self.status_code = status_code
        super().__init__(message or f"Server error (HTTP {status_code})")

    def localized_message(self, language: str = "en") -> str:
        return error_message(self.kind, language, code=self.status_code)


class EmptyResponseError(CorrectionError):
    """The envelope decoded but carried no choice or content."""
    kind = "empty_response"
    default_message = "Completion response contained no content"


class InvalidJSONError(CorrectionError):
    """The model content was not a valid corrections document."""
    kind = "invalid_json"
    default_message = "Model output is not a valid corrections document"
