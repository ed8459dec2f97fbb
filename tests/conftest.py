import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from plant_diagnosis.services import gemini

TEST_API_KEY = "test-key"


class _DummyResponse:
    def __init__(self, status_code=200, body=None, invalid_json=False):
        self.status_code = status_code
        self._body = body
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._body


class _DummySession:
    def __init__(self, upstream):
        self._upstream = upstream

    def __enter__(self):
        return self

    def __exit__(self, *_exc_info):
        return False

    def post(self, url, **kwargs):
        self._upstream.calls.append({"url": url, **kwargs})
        if self._upstream.error is not None:
            raise self._upstream.error
        return self._upstream.response


class FakeUpstream:
    """Stand-in for gemini._get_session that records every POST."""

    def __init__(self):
        self.calls = []
        self.error = None
        self.response = _DummyResponse(200, {"candidates": []})

    def __call__(self):
        return _DummySession(self)

    def respond(self, status_code=200, body=None, invalid_json=False):
        self.response = _DummyResponse(status_code, body, invalid_json)

    def respond_with_text(self, text):
        self.respond(200, {"candidates": [{"content": {"parts": [{"text": text}]}}]})


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()
    monkeypatch.setattr(gemini, "_get_session", fake)
    return fake


@pytest.fixture
def app(monkeypatch):
    for name in ("GEMINI_API_KEY", "GEMINI_MODEL", "GEMINI_API_BASE", "GEMINI_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    from plant_diagnosis.app import create_app

    return create_app({"GEMINI_API_KEY": TEST_API_KEY})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def client_without_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    from plant_diagnosis.app import create_app

    return create_app().test_client()


@pytest.fixture
def valid_body():
    return {"image": "aGVsbG8=", "mimeType": "image/jpeg"}
