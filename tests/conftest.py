"""Fake Spotify upstream and app fixtures shared by all tests."""

import json

import pytest
import requests
from fastapi.testclient import TestClient

import spotify
from main import create_app
from settings import Settings


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeUpstream:
    """Records every outbound call and answers with a canned response."""

    def __init__(self):
        self.calls = []
        self.response = FakeResponse(200, {})
        self.error = None

    def respond(self, status_code=200, payload=None, text=None):
        self.response = FakeResponse(status_code, payload, text)

    def _answer(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self._answer("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._answer("POST", url, **kwargs)


@pytest.fixture
def settings():
    return Settings(
        client_id="client-123",
        client_secret="secret-456",
        redirect_uri="http://localhost:3000/callback",
        frontend_url="http://localhost:3000",
    )


@pytest.fixture
def upstream(monkeypatch):
    fake = FakeUpstream()
    monkeypatch.setattr(spotify.requests, "get", fake.get)
    monkeypatch.setattr(spotify.requests, "post", fake.post)
    return fake


@pytest.fixture
def client(settings, upstream):
    return TestClient(create_app(settings))


@pytest.fixture
def auth_header():
    return {"Authorization": "Bearer user-token"}
