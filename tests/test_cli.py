"""Tests for the `thrivecart` CLI."""

from __future__ import annotations

import functools

import pytest
from typer.testing import CliRunner

from tests.conftest import RecordingTransport, json_response
from thrivecart.cli import main as cli_main
from thrivecart.core.errors import TransportError
from thrivecart.core.services.api_client import ThriveCartClient

runner = CliRunner()


@pytest.fixture
def fake_transport(monkeypatch) -> RecordingTransport:
    transport = RecordingTransport()
    monkeypatch.setattr(cli_main, "ThriveCartClient", functools.partial(ThriveCartClient, transport=transport))
    return transport


class TestCommands:
    def test_ping(self, fake_transport):
        fake_transport.queue(json_response({"account_name": "Shop"}))
        result = runner.invoke(cli_main.app, ["--token", "tok", "ping"])
        assert result.exit_code == 0, result.output
        assert "Shop" in result.output
        assert fake_transport.last.headers["Authorization"] == "Bearer tok"

    def test_test_mode_flag(self, fake_transport):
        runner.invoke(cli_main.app, ["--token", "tok", "--test", "ping"])
        assert fake_transport.last.headers["X-TC-Mode"] == "test"

    def test_products_table(self, fake_transport):
        fake_transport.queue(json_response([{"product_id": 3, "name": "Course", "status": "live"}]))
        result = runner.invoke(cli_main.app, ["--token", "tok", "products", "--status", "live"])
        assert result.exit_code == 0, result.output
        assert "Course" in result.output
        assert fake_transport.last.query == (("status", "live"),)

    def test_transactions_options(self, fake_transport):
        result = runner.invoke(
            cli_main.app, ["--token", "tok", "transactions", "--type", "refund", "--per-page", "5"]
        )
        assert result.exit_code == 0, result.output
        assert dict(fake_transport.last.query) == {"transactionType": "refund", "perPage": "5"}

    def test_validation_error_exits_non_zero(self, fake_transport):
        result = runner.invoke(cli_main.app, ["--token", "tok", "customer", "not-an-email"])
        assert result.exit_code == 1
        assert fake_transport.requests == []

    def test_remote_error_exits_non_zero(self, fake_transport):
        fake_transport.queue(TransportError("HTTP 401", status_code=401, body='{"error":"unauthorized"}'))
        result = runner.invoke(cli_main.app, ["--token", "tok", "product", "42"])
        assert result.exit_code == 1
        assert fake_transport.last.path == "/products/42"

    def test_missing_token(self):
        result = runner.invoke(cli_main.app, ["ping"])
        assert result.exit_code == 1


class TestDoctor:
    def test_setup_writes_user_env(self, tmp_path):
        result = runner.invoke(cli_main.app, ["doctor", "setup", "--test"], input="tok_secret\n")
        assert result.exit_code == 0, result.output
        env_text = (tmp_path / "config" / "thrivecart" / ".env").read_text(encoding="utf-8")
        assert "THRIVECART_ACCESS_TOKEN=tok_secret" in env_text
        assert "THRIVECART_MODE=test" in env_text

    def test_run_without_token(self):
        result = runner.invoke(cli_main.app, ["doctor", "run"])
        assert result.exit_code == 0, result.output
        assert "MISSING" in result.output
