"""Data models for code vulnerability analysis."""

from .analysis import (
    AnalysisRequest,
    AnalysisResult,
    AnalysisOutcome,
    AnalysisFailed,
    CallerError,
    ErrorKind
)

__all__ = [
    "AnalysisRequest",
    "AnalysisResult",
    "AnalysisOutcome",
    "AnalysisFailed",
    "CallerError",
    "ErrorKind"
]
