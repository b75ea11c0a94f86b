"""Shared fixtures: isolated settings and a recording transport."""

from __future__ import annotations

import json
from typing import Any

import pytest

from thrivecart.core.config import AppSettings
from thrivecart.core.domain.models import RawResponse, RequestSpec
from thrivecart.core.services.api_client import ThriveCartClient

NOW = 1_700_000_000


class RecordingTransport:
    """`HttpTransport` fake: records every spec and replays queued outcomes."""

    def __init__(self, *outcomes: RawResponse | Exception) -> None:
        self.requests: list[RequestSpec] = []
        self._outcomes = list(outcomes)
        self.closed = False

    def queue(self, outcome: RawResponse | Exception) -> None:
        self._outcomes.append(outcome)

    def execute(self, spec: RequestSpec) -> RawResponse:
        self.requests.append(spec)
        outcome = self._outcomes.pop(0) if self._outcomes else json_response({"ok": True})
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    def close(self) -> None:
        self.closed = True

    @property
    def last(self) -> RequestSpec:
        return self.requests[-1]


def json_response(data: Any, status_code: int = 200) -> RawResponse:
    return RawResponse(status_code=status_code, body=json.dumps(data).encode("utf-8"))


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    for key in (
        "THRIVECART_ACCESS_TOKEN",
        "THRIVECART_MODE",
        "THRIVECART_BASE_URI",
        "THRIVECART_HTTP_TIMEOUT_SECONDS",
        "THRIVECART_OAUTH_BASE_URI",
        "THRIVECART_OAUTH_CLIENT_ID",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, access_token="tok_123")


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client(settings, transport) -> ThriveCartClient:
    tc = ThriveCartClient(settings=settings, transport=transport)
    tc.subscriptions.clock = lambda: NOW
    return tc
