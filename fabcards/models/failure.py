"""
Failure Classification: Known, Explainable Errors.

Every failure the system surfaces is classified by a FailureKind and carried
by a KnownError. Lookups that find nothing are not failures in the core:
they return None or an empty list, and the consuming surface (REST route,
tool dispatcher) decides whether to raise.

Response types:
- KnownError: the system knows exactly what went wrong
- DataLoadError: the bundled data could not be decoded (fatal at startup)
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    MISSING_REQUIRED = "missing_required"

    # Resource failures
    NOT_FOUND = "not_found"

    # Data failures
    DATA_LOAD_FAILED = "data_load_failed"

    # Service failures
    EXTERNAL_API_ERROR = "external_api_error"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class DataLoadError(KnownError):
    """
    Raised when a data file is missing or cannot be decoded.

    This is always fatal: no store is built from partial data.
    """

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        super().__init__(
            kind=FailureKind.DATA_LOAD_FAILED,
            message=f"Failed to load {filename}: {reason}",
            detail=reason,
            suggestion="Run `python -m fabcards.jobs.sync_data` to refresh the data snapshot.",
            status_code=500,
        )
