"""Analysis request, result and error models."""

from dataclasses import dataclass
from typing import Optional, Union
from enum import Enum


class ErrorKind(Enum):
    """Failure kinds reported by the analysis caller."""
    RATE_LIMITED = "rate_limited"
    UPSTREAM_ERROR = "upstream_error"
    NO_RESPONSE = "no_response"
    REQUEST_SETUP_ERROR = "request_setup_error"
    RETRIES_EXHAUSTED = "retries_exhausted"


@dataclass
class AnalysisRequest:
    """A code snippet submitted for analysis."""
    code: str = ""


@dataclass
class AnalysisResult:
    """Free-form vulnerability report returned by the model."""
    text: str
    model: str = ""
    attempts: int = 1


@dataclass
class CallerError:
    """
    Tagged failure of an analysis call.

    `status` is only set for UPSTREAM_ERROR and RATE_LIMITED; `detail`
    holds the underlying transport error text, if any.
    """
    kind: ErrorKind
    message: str
    status: Optional[int] = None
    detail: Optional[str] = None

    @classmethod
    def rate_limited(cls, message: str = "Rate limit exceeded") -> "CallerError":
        return cls(ErrorKind.RATE_LIMITED, message, status=429)

    @classmethod
    def upstream(cls, status: int, upstream_message: str) -> "CallerError":
        return cls(
            ErrorKind.UPSTREAM_ERROR,
            f"OpenAI API Error: {status} - {upstream_message}",
            status=status,
            detail=upstream_message
        )

    @classmethod
    def no_response(cls, detail: Optional[str] = None) -> "CallerError":
        return cls(ErrorKind.NO_RESPONSE, "No response received from OpenAI API", detail=detail)

    @classmethod
    def request_setup(cls, detail: Optional[str] = None) -> "CallerError":
        return cls(ErrorKind.REQUEST_SETUP_ERROR, "Error setting up OpenAI API request", detail=detail)

    @classmethod
    def retries_exhausted(cls, attempts: int) -> "CallerError":
        return cls(ErrorKind.RETRIES_EXHAUSTED, f"Failed to make request after {attempts} retries.")

    @property
    def retryable(self) -> bool:
        return self.kind == ErrorKind.RATE_LIMITED


class AnalysisFailed(Exception):
    """Raised at the HTTP boundary to hand a CallerError to the error handler."""

    def __init__(self, error: CallerError):
        super().__init__(error.message)
        self.error = error


# Outcome of one upstream attempt or of a whole analysis
AnalysisOutcome = Union[AnalysisResult, CallerError]
