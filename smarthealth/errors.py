from __future__ import annotations

from typing import Optional


def _single_line(message: str) -> str:
    message = (message or "").replace("\n", " ").strip()
    if len(message) > 200:
        message = message[:200] + "..."
    return message


class AssessmentError(RuntimeError):
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class InvalidInput(AssessmentError, ValueError):
    """Raised when a vitals field is missing, non-numeric or holds an unknown code."""

    def __init__(self, code: str, message: str, field: Optional[str] = None):
        super().__init__(code, message)
        self.field = field


class ExternalServiceError(AssessmentError):
    """Raised when the prediction service fails or returns no usable label."""

    def __init__(self, code: str, message: str, provider_name: str = ""):
        super().__init__(code, _single_line(message))
        self.provider_name = provider_name


class StoreError(AssessmentError):
    """Raised when the history store cannot persist or read records."""

    def __init__(self, code: str, message: str):
        super().__init__(code, _single_line(message))
