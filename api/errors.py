"""
Error responses for the analysis front end.

Quota exhaustion gets a short, user-actionable 429. Everything else is
reported as a generic 500; the real message and traceback are only
included when `expose_error_details` is enabled.
"""

import traceback
from typing import Iterable, Optional

from fastapi.responses import JSONResponse, PlainTextResponse

from src.models import CallerError

QUOTA_EXCEEDED_MESSAGE = "Quota exceeded. Please check your plan and billing details."
GENERIC_ERROR_MESSAGE = "The analysis request could not be completed."
NOT_FOUND_BODY = "404 Page Not Found!"


def is_quota_error(error: CallerError, markers: Iterable[str]) -> bool:
    """Check whether a failure message reports quota exhaustion."""
    message = error.message.lower()
    return any(marker.lower() in message for marker in markers)


def quota_response() -> JSONResponse:
    return JSONResponse(status_code=429, content={"error": QUOTA_EXCEEDED_MESSAGE})


def internal_error_response(exc: Exception, expose_details: bool = False) -> JSONResponse:
    """Build the 500 body for an unhandled or non-quota failure."""
    message: str = GENERIC_ERROR_MESSAGE
    stack: Optional[str] = None
    if expose_details:
        message = str(exc)
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": message,
            "stack": stack
        }
    )


def not_found_response() -> PlainTextResponse:
    return PlainTextResponse(NOT_FOUND_BODY, status_code=404)
