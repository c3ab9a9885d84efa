# FILE: errors.py
from typing import Any, Dict, Optional


class PracticeError(Exception):
    """
    Base class for every failure the practice API reports to its callers.

    Attributes:
        code (str): stable error identifier, also used as the JSON "error" field
        message (str): human readable message
        details (dict): extra context (session id, answer id, ...)
        status_code (int): HTTP status the API layer answers with
    """

    code = "PRACTICE_ERROR"
    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(f"[{self.code}] {message}")

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "message": self.message, "details": self.details}


class ValidationError(PracticeError):
    """Malformed or out-of-range input."""

    code = "VALIDATION_ERROR"
    status_code = 400


class NotFoundError(PracticeError):
    """Session, question or answer absent, or not owned by the caller."""

    code = "NOT_FOUND"
    status_code = 404


class ConflictError(PracticeError):
    """Write rejected because of the session state or a concurrent update."""

    code = "CONFLICT"
    status_code = 409


class InsufficientDataError(PracticeError):
    """The question pool cannot satisfy a full-interview request."""

    code = "INSUFFICIENT_DATA"
    status_code = 422


class QuotaExceededError(PracticeError):
    """Free-tier daily practice limit reached."""

    code = "QUOTA_EXCEEDED"
    status_code = 403


class UpstreamError(PracticeError):
    """Scoring provider unreachable, timed out or answered with an error."""

    code = "UPSTREAM_ERROR"
    status_code = 502


class SchemaError(PracticeError):
    """Scoring provider answered, but the payload breaks the feedback contract."""

    code = "SCHEMA_ERROR"
    status_code = 502
