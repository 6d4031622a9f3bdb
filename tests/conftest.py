import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from fastapi.testclient import TestClient

import api.main as api_main
from src.agent import OpenAIClient, VulnerabilityAnalyzer
from fakes import FakeSession


@pytest.fixture()
def sleeps():
    """Delays requested by the analyzer, recorded instead of slept."""
    return []


@pytest.fixture()
def session():
    return FakeSession()


@pytest.fixture()
def client(monkeypatch, session, sleeps):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    with TestClient(api_main.app) as c:
        api_main.analyzer.close()
        upstream = OpenAIClient(api_key="sk-test", session=session)
        monkeypatch.setattr(api_main, "analyzer", VulnerabilityAnalyzer(upstream, sleep=sleeps.append))
        yield c
