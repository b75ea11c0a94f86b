"""Tests for the client pipeline and the resource groups."""

from __future__ import annotations

import json

import pytest

from tests.conftest import NOW, RecordingTransport, json_response
from thrivecart.core.config import AppSettings
from thrivecart.core.domain.models import Mode, RawResponse
from thrivecart.core.errors import RemoteError, TransportError, ValidationError
from thrivecart.core.services.api_client import ThriveCartClient


def _body(spec) -> dict:
    return json.loads(spec.body)


class TestConstruction:
    def test_requires_access_token(self, transport):
        with pytest.raises(ValidationError, match="access token"):
            ThriveCartClient(settings=AppSettings(_env_file=None), transport=transport)

    def test_token_from_settings(self, settings, transport):
        tc = ThriveCartClient(settings=settings, transport=transport)
        tc.ping()
        assert transport.last.headers["Authorization"] == "Bearer tok_123"

    def test_explicit_token_wins(self, settings, transport):
        tc = ThriveCartClient("other", settings=settings, transport=transport)
        tc.ping()
        assert transport.last.headers["Authorization"] == "Bearer other"

    def test_injected_transport_is_not_closed(self, settings, transport):
        with ThriveCartClient(settings=settings, transport=transport):
            pass
        assert transport.closed is False


class TestPerInstanceConfiguration:
    def test_mode_is_not_shared(self, settings):
        first_transport, second_transport = RecordingTransport(), RecordingTransport()
        first = ThriveCartClient(settings=settings, transport=first_transport)
        second = ThriveCartClient(settings=settings, transport=second_transport)

        first.set_mode("test")
        first.ping()
        second.ping()

        assert first.mode is Mode.TEST
        assert first_transport.last.headers["X-TC-Mode"] == "test"
        assert second_transport.last.headers["X-TC-Mode"] == "live"

    def test_invalid_mode(self, client):
        with pytest.raises(ValidationError) as exc_info:
            client.set_mode("staging")
        assert exc_info.value.message == 'Invalid mode provided to the API ("staging").'
        assert client.mode is Mode.LIVE

    def test_base_uri_override(self, settings, transport):
        tc = ThriveCartClient(settings=settings, transport=transport, base_uri="http://dev-thrivecart.com/")
        tc.ping()
        assert transport.last.url == "http://dev-thrivecart.com/api/external/ping"

        tc.set_base_uri("https://staging.thrivecart.com")
        tc.ping()
        assert transport.last.url == "https://staging.thrivecart.com/api/external/ping"

    def test_constructor_mode(self, settings, transport):
        tc = ThriveCartClient(settings=settings, transport=transport, mode=Mode.TEST)
        tc.ping()
        assert transport.last.headers["X-TC-Mode"] == "test"


class TestRequestPipeline:
    def test_returns_parsed_body(self, client, transport):
        transport.queue(json_response({"account_name": "Shop"}))
        assert client.ping() == {"account_name": "Shop"}

    def test_empty_body_returns_none(self, client, transport):
        transport.queue(RawResponse(status_code=204, body=b""))
        assert client.request("POST", "/unsubscribe", parameters={"target_url": "https://x.io"}) is None

    def test_invalid_json_success_body(self, client, transport):
        transport.queue(RawResponse(status_code=200, body=b"<html>"))
        with pytest.raises(TransportError, match="Invalid JSON"):
            client.ping()

    def test_non_utf8_success_body(self, client, transport):
        transport.queue(RawResponse(status_code=200, body=b'{"a": "\xc3\x28"}'))
        with pytest.raises(TransportError, match="Invalid JSON") as exc_info:
            client.ping()
        assert exc_info.value.status_code == 200

    def test_json_error_body_becomes_remote_error(self, client, transport):
        transport.queue(
            TransportError(
                "HTTP 400",
                status_code=400,
                body='{"error":"invalid_request","reason":"missing field"}',
            )
        )
        with pytest.raises(RemoteError) as exc_info:
            client.products.get(42)
        assert exc_info.value.message == "[invalid_request] missing field"
        assert exc_info.value.status_code == 400

    def test_plain_error_body_stays_transport_error(self, client, transport):
        transport.queue(TransportError("HTTP 503", status_code=503, body="Service Unavailable"))
        with pytest.raises(TransportError) as exc_info:
            client.ping()
        assert exc_info.value.message == "Service Unavailable"
        assert exc_info.value.status_code == 503

    def test_transport_failure_without_response(self, client, transport):
        transport.queue(TransportError("Connection refused"))
        with pytest.raises(TransportError, match="Connection refused"):
            client.ping()


class TestCatalog:
    @pytest.mark.parametrize(
        "group, token_value, path",
        [
            ("products", 42, "/products/42"),
            ("bumps", "7", "/bumps/7"),
            ("upsells", 3, "/upsells/3"),
            ("downsells", 9, "/downsells/9"),
        ],
    )
    def test_get(self, client, transport, group, token_value, path):
        getattr(client, group).get(token_value)
        assert transport.last.method == "GET"
        assert transport.last.path == path

    @pytest.mark.parametrize("group", ["products", "bumps", "upsells", "downsells"])
    def test_pricing_options(self, client, transport, group):
        getattr(client, group).pricing_options(5)
        assert transport.last.path == f"/{group}/5/pricing_options"

    def test_list_with_status_filter(self, client, transport):
        client.products.list(status="test")
        assert transport.last.path == "/products"
        assert transport.last.query == (("status", "test"),)


class TestTransactions:
    def test_query_encoding(self, client, transport):
        client.transactions.list(query="jane@gmail.com", transaction_type="charge", per_page=10, page=2)
        assert transport.last.method == "GET"
        assert dict(transport.last.query) == {
            "query": "jane@gmail.com",
            "transactionType": "charge",
            "perPage": "10",
            "page": "2",
        }

    @pytest.mark.parametrize("per_page", [26, -1, "abc", float("nan")])
    def test_invalid_per_page_never_reaches_transport(self, client, transport, per_page):
        with pytest.raises(ValidationError):
            client.transactions.list(per_page=per_page)
        assert transport.requests == []

    def test_invalid_type(self, client, transport):
        with pytest.raises(ValidationError, match="Invalid transaction type"):
            client.transactions.list(transaction_type="bogus")
        assert transport.requests == []


class TestCustomers:
    @pytest.mark.parametrize(
        "email",
        ["jane", "jane@", "@gmail.com", "jane@gmail", "Jane Doe <jane.doe@gmail.com>", " jane.doe@gmail.com"],
    )
    def test_malformed_email(self, client, transport, email):
        with pytest.raises(ValidationError) as exc_info:
            client.customers.get(email)
        assert exc_info.value.field == "email"
        assert transport.requests == []

    def test_non_string_email_gets_format_message(self, client, transport):
        with pytest.raises(ValidationError, match="valid email address"):
            client.customers.get(123)
        assert transport.requests == []

    def test_valid_email_is_posted(self, client, transport):
        client.customers.get("jane.doe@gmail.com")
        assert transport.last.method == "POST"
        assert transport.last.path == "/customer"
        assert _body(transport.last) == {"email": "jane.doe@gmail.com"}


class TestRefunds:
    def test_refund(self, client, transport):
        client.refunds.create(order_id=123, reference="prod-1", reason="duplicate")
        assert transport.last.path == "/refund"
        assert _body(transport.last) == {"order_id": 123, "reference": "prod-1", "reason": "duplicate"}

    def test_exact_message(self, client, transport):
        with pytest.raises(ValidationError) as exc_info:
            client.refunds.create(order_id="X", reference="prod-1")
        assert str(exc_info.value) == 'You must provide a valid order ID to refund (you provided "X").'
        assert transport.requests == []


class TestSubscriptions:
    def test_cancel_and_resume(self, client, transport):
        client.subscriptions.cancel(order_id=1, subscription_id=2)
        assert transport.last.path == "/cancelSubscription"
        client.subscriptions.resume(order_id=1, subscription_id=2)
        assert transport.last.path == "/resumeSubscription"
        assert _body(transport.last) == {"order_id": 1, "subscription_id": 2}

    def test_pause_boundary(self, client, transport):
        client.subscriptions.pause(order_id=1, subscription_id=2, auto_resume=NOW + 86400)
        assert transport.last.path == "/pauseSubscription"
        assert _body(transport.last)["auto_resume"] == NOW + 86400

    @pytest.mark.parametrize("auto_resume", [NOW, NOW - 10, NOW + 60, NOW + 86398])
    def test_pause_too_soon(self, client, transport, auto_resume):
        with pytest.raises(ValidationError):
            client.subscriptions.pause(order_id=1, subscription_id=2, auto_resume=auto_resume)
        assert transport.requests == []

    def test_pause_message_names_action(self, client):
        with pytest.raises(ValidationError, match="to pause"):
            client.subscriptions.pause(subscription_id=2)


class TestAffiliates:
    def test_list(self, client, transport):
        client.affiliates.list(product_id=5, per_page=25)
        assert transport.last.path == "/affiliates"
        assert dict(transport.last.query) == {"product_id": "5", "perPage": "25"}

    def test_list_rejects_per_page(self, client, transport):
        with pytest.raises(ValidationError, match="maximum results per page"):
            client.affiliates.list(per_page=50)
        assert transport.requests == []

    def test_lookup(self, client, transport):
        client.affiliates.get("jane@gmail.com")
        assert transport.last.path == "/affiliate"
        assert _body(transport.last) == {"affiliate_id": "jane@gmail.com"}

    def test_lookup_invalid_email(self, client, transport):
        with pytest.raises(ValidationError, match="if searching via email address"):
            client.affiliates.get("jane@")
        assert transport.requests == []

    def test_create_encodes_product_ids(self, client, transport):
        client.affiliates.create(email="aff@gmail.com", product_ids=[1, 2, 3])
        assert transport.last.path == "/affiliates"
        assert _body(transport.last) == {"email": "aff@gmail.com", "product_ids": "[1,2,3]"}

    def test_pre_encoded_product_ids_pass_through(self, client, transport):
        client.affiliates.register(10, product_ids="[4]")
        assert transport.last.path == "/affiliates/10/register"
        assert _body(transport.last) == {"product_ids": "[4]"}

    @pytest.mark.parametrize(
        "action", ["favorite", "unfavorite", "register", "approve", "reject", "custom_commissions", "delete"]
    )
    def test_actions(self, client, transport, action):
        getattr(client.affiliates, action)("aff_7")
        assert transport.last.method == "POST"
        assert transport.last.path == f"/affiliates/aff_7/{action}"

    def test_action_requires_affiliate_id(self, client, transport):
        with pytest.raises(ValidationError) as exc_info:
            client.affiliates.approve("")
        assert exc_info.value.message == 'You must provide an affiliate ID to approve (you provided "").'
        assert transport.requests == []

    def test_unknown_action(self, client):
        with pytest.raises(ValidationError, match="Unknown affiliate action"):
            client.affiliates.action("promote", 1)


class TestEvents:
    def test_subscribe(self, client, transport):
        client.events.subscribe("order.success", "https://hooks.mysite.com/tc", {"product_id": 5})
        assert transport.last.path == "/subscribe"
        assert _body(transport.last) == {
            "event": "order.success",
            "target_url": "https://hooks.mysite.com/tc",
            "trigger_fields": {"product_id": 5},
        }

    def test_subscribe_defaults_trigger_fields(self, client, transport):
        client.events.subscribe("*", "https://hooks.mysite.com/tc")
        assert _body(transport.last)["trigger_fields"] == {}

    def test_subscribe_invalid_url(self, client, transport):
        with pytest.raises(ValidationError, match="valid target URL to create"):
            client.events.subscribe("*", "hooks.mysite.com")
        assert transport.requests == []

    def test_unsubscribe(self, client, transport):
        client.events.unsubscribe("https://hooks.mysite.com/tc")
        assert transport.last.path == "/unsubscribe"
        assert _body(transport.last) == {"target_url": "https://hooks.mysite.com/tc"}

    def test_unsubscribe_requires_url(self, client, transport):
        with pytest.raises(ValidationError, match="target URL to cancel"):
            client.events.unsubscribe(None)
