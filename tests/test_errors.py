"""Tests for error classification and error bodies."""

import json

from api.errors import (
    QUOTA_EXCEEDED_MESSAGE,
    internal_error_response,
    is_quota_error,
    not_found_response,
    quota_response,
)
from config import ServerSettings
from src.models import AnalysisFailed, CallerError

MARKERS = ServerSettings().quota_markers


def test_quota_markers():
    assert is_quota_error(CallerError.upstream(400, "insufficient quota"), MARKERS)
    assert is_quota_error(
        CallerError.upstream(429, "You exceeded your current quota, please check your plan"),
        MARKERS
    )
    assert is_quota_error(CallerError.upstream(400, "Insufficient_Quota"), MARKERS)


def test_non_quota_errors():
    assert not is_quota_error(CallerError.upstream(503, "server overloaded"), MARKERS)
    assert not is_quota_error(CallerError.no_response(), MARKERS)
    assert not is_quota_error(CallerError.retries_exhausted(5), MARKERS)


def test_quota_response_body():
    resp = quota_response()

    assert resp.status_code == 429
    assert json.loads(resp.body) == {"error": QUOTA_EXCEEDED_MESSAGE}


def test_internal_error_hides_details_by_default():
    exc = AnalysisFailed(CallerError.request_setup("secret path /etc/app"))

    body = json.loads(internal_error_response(exc).body)

    assert body["error"] == "Internal Server Error"
    assert "secret" not in body["message"]
    assert body["stack"] is None


def test_internal_error_with_details():
    try:
        raise AnalysisFailed(CallerError.no_response("connection refused"))
    except AnalysisFailed as exc:
        resp = internal_error_response(exc, expose_details=True)

    body = json.loads(resp.body)
    assert resp.status_code == 500
    assert body["message"] == "No response received from OpenAI API"
    assert "Traceback" in body["stack"]


def test_not_found_response():
    resp = not_found_response()

    assert resp.status_code == 404
    assert resp.body == b"404 Page Not Found!"
