"""Tests for the chat completion client."""

import requests

from src.agent import OpenAIClient
from src.models import AnalysisResult, CallerError, ErrorKind
from fakes import FakeSession, api_error, completion, make_response

MESSAGES = [
    {"role": "system", "content": "sys"},
    {"role": "user", "content": "usr"}
]


def make_client(session, api_key="sk-test"):
    return OpenAIClient(
        api_key=api_key,
        base_url="https://api.example.test/v1/",
        model="gpt-3.5-turbo",
        timeout=30,
        session=session
    )


def test_success_returns_content_verbatim():
    text = "  1. SQL injection in `query()`\n\n2. Hardcoded secret  \n"
    session = FakeSession(make_response(200, completion(text)))

    outcome = make_client(session).chat(MESSAGES, max_tokens=1500)

    assert isinstance(outcome, AnalysisResult)
    assert outcome.text == text
    assert outcome.model == "gpt-3.5-turbo"


def test_request_shape():
    session = FakeSession(make_response(200, completion("ok")))

    make_client(session).chat(MESSAGES, max_tokens=1500)

    assert len(session.calls) == 1
    call = session.calls[0]
    assert call["url"] == "https://api.example.test/v1/chat/completions"
    assert call["headers"]["Authorization"] == "Bearer sk-test"
    assert call["json"] == {"model": "gpt-3.5-turbo", "messages": MESSAGES, "max_tokens": 1500}
    assert call["timeout"] == 30


def test_429_is_rate_limited():
    session = FakeSession(make_response(429, api_error("Rate limit reached")))

    outcome = make_client(session).chat(MESSAGES)

    assert isinstance(outcome, CallerError)
    assert outcome.kind == ErrorKind.RATE_LIMITED
    assert outcome.status == 429
    assert outcome.retryable


def test_error_status_is_upstream_error():
    session = FakeSession(make_response(503, api_error("server overloaded")))

    outcome = make_client(session).chat(MESSAGES)

    assert outcome.kind == ErrorKind.UPSTREAM_ERROR
    assert outcome.status == 503
    assert outcome.message == "OpenAI API Error: 503 - server overloaded"
    assert not outcome.retryable


def test_error_without_json_body_uses_raw_text():
    session = FakeSession(make_response(502, text="Bad Gateway"))

    outcome = make_client(session).chat(MESSAGES)

    assert outcome.kind == ErrorKind.UPSTREAM_ERROR
    assert outcome.detail == "Bad Gateway"


def test_connection_failure_is_no_response():
    session = FakeSession(requests.ConnectionError("connection reset"))

    outcome = make_client(session).chat(MESSAGES)

    assert outcome.kind == ErrorKind.NO_RESPONSE
    assert "connection reset" in outcome.detail


def test_timeout_is_no_response():
    session = FakeSession(requests.ReadTimeout("read timed out"))

    outcome = make_client(session).chat(MESSAGES)

    assert outcome.kind == ErrorKind.NO_RESPONSE


def test_invalid_url_is_request_setup_error():
    session = FakeSession(requests.exceptions.MissingSchema("No scheme supplied"))

    outcome = make_client(session).chat(MESSAGES)

    assert outcome.kind == ErrorKind.REQUEST_SETUP_ERROR


def test_missing_api_key_never_sends():
    session = FakeSession(make_response(200, completion("unused")))

    outcome = make_client(session, api_key=None).chat(MESSAGES)

    assert outcome.kind == ErrorKind.REQUEST_SETUP_ERROR
    assert session.calls == []


def test_malformed_payload_is_upstream_error():
    session = FakeSession(make_response(200, {"choices": []}))

    outcome = make_client(session).chat(MESSAGES)

    assert outcome.kind == ErrorKind.UPSTREAM_ERROR
    assert outcome.status == 200


def test_null_content_is_upstream_error():
    body = completion("x")
    body["choices"][0]["message"]["content"] = None
    session = FakeSession(make_response(200, body))

    outcome = make_client(session).chat(MESSAGES)

    assert outcome.kind == ErrorKind.UPSTREAM_ERROR


def test_close_releases_session():
    session = FakeSession(make_response(200, completion("ok")))
    client = make_client(session)

    client.close()

    assert session.closed
