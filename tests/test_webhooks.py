"""Tests for outgoing webhook delivery."""

import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from preptrac.services.webhook_service import (
    DISCORD_MAX_CONTENT,
    SIGNATURE_HEADER,
    WebhookItem,
    WebhookPayload,
    WebhookResult,
    build_body,
    send_webhook,
    sign_body,
    verify_webhook_signature,
)

DISCORD_URL = "https://discord.com/api/webhooks/123/abc"
SLACK_URL = "https://hooks.slack.com/services/T000/B000/XXX"
GENERIC_URL = "https://example.com/hooks/preptrac"


def make_payload(message="Rice expires on 2026-06-01"):
    return WebhookPayload(
        type="expiration",
        message=message,
        date="2026-06-01",
        item_id=7,
        item=WebhookItem(
            id=7,
            name="Rice",
            quantity=20,
            unit="lbs",
            category="Food",
            location="Home",
            expiration_date="2026-06-01",
        ),
    )


def mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestBuildBody:
    """Tests for per-provider body formatting."""

    def test_discord_uses_content(self):
        body = json.loads(build_body(DISCORD_URL, make_payload()))
        assert body["content"].splitlines() == [
            "Rice expires on 2026-06-01",
            "Item: Rice (20 lbs)",
            "Category: Food",
            "Location: Home",
            "Expiration: 2026-06-01",
            "Type: expiration",
        ]

    def test_discord_content_is_truncated(self):
        body = json.loads(build_body(DISCORD_URL, make_payload(message="x" * 5000)))
        assert len(body["content"]) == DISCORD_MAX_CONTENT

    def test_discordapp_domain(self):
        body = json.loads(build_body("https://discordapp.com/api/webhooks/1/a", make_payload()))
        assert "content" in body

    def test_slack_uses_text(self):
        body = json.loads(build_body(SLACK_URL, make_payload()))
        assert body["text"].startswith("Rice expires on 2026-06-01\nItem: Rice")

    def test_generic_sends_payload(self):
        body = json.loads(build_body(GENERIC_URL, make_payload()))
        assert body["type"] == "expiration"
        assert body["item"]["name"] == "Rice"
        assert body["item_id"] == 7
        assert "event_id" not in body
        assert "timestamp" in body


class TestSignature:
    """Tests for HMAC signing."""

    def test_round_trip(self):
        body = '{"hello": "world"}'
        signature = sign_body(body, "s3cret")

        assert signature.startswith("sha256=")
        assert verify_webhook_signature(body, signature, "s3cret")
        assert verify_webhook_signature(body, signature.removeprefix("sha256="), "s3cret")

    def test_rejects_tampered_body(self):
        signature = sign_body('{"hello": "world"}', "s3cret")
        assert not verify_webhook_signature('{"hello": "there"}', signature, "s3cret")

    def test_rejects_wrong_secret(self):
        signature = sign_body("{}", "s3cret")
        assert not verify_webhook_signature("{}", signature, "other")


class TestSendWebhook:
    """Tests for send_webhook."""

    @pytest.mark.asyncio
    async def test_success_with_signature(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(204)

        async with mock_client(handler) as client:
            result = await send_webhook(GENERIC_URL, make_payload(), secret="s3cret", client=client)

        assert result == WebhookResult(success=True)
        body = requests[0].content.decode()
        assert verify_webhook_signature(body, requests[0].headers[SIGNATURE_HEADER], "s3cret")
        assert requests[0].headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_no_signature_without_secret(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200)

        async with mock_client(handler) as client:
            await send_webhook(GENERIC_URL, make_payload(), client=client)

        assert SIGNATURE_HEADER not in requests[0].headers

    @pytest.mark.asyncio
    async def test_error_status_is_reported(self):
        def handler(request):
            return httpx.Response(500, text="boom\n" + "x" * 500)

        async with mock_client(handler) as client:
            result = await send_webhook(GENERIC_URL, make_payload(), client=client)

        assert result.success is False
        assert result.error.startswith("Webhook returned 500: boom x")
        assert result.error.endswith("...")

    @pytest.mark.asyncio
    async def test_transport_error_is_reported(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with mock_client(handler) as client:
            result = await send_webhook(GENERIC_URL, make_payload(), client=client)

        assert result.success is False
        assert "connection refused" in result.error


def enable_webhook(client, auth_headers, **fields):
    response = client.put(
        "/api/v1/notifications/settings",
        headers=auth_headers,
        json={"webhook_enabled": True, "webhook_url": GENERIC_URL, **fields},
    )
    assert response.status_code == 200
    return response.json()


def test_test_webhook_requires_configuration(client, auth_headers):
    response = client.post("/api/v1/notifications/test-webhook", headers=auth_headers)
    assert response.status_code == 400


def test_test_webhook_success(client, auth_headers):
    enable_webhook(client, auth_headers, webhook_secret="s3cret")

    with patch(
        "preptrac.api.notifications.send_webhook",
        new=AsyncMock(return_value=WebhookResult(success=True)),
    ) as sender:
        response = client.post("/api/v1/notifications/test-webhook", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["success"] is True
    url, payload, secret = sender.await_args.args
    assert url == GENERIC_URL
    assert payload.message == "Test webhook from PrepTrac"
    assert secret == "s3cret"


def test_test_webhook_failure(client, auth_headers):
    enable_webhook(client, auth_headers)

    with patch(
        "preptrac.api.notifications.send_webhook",
        new=AsyncMock(return_value=WebhookResult(success=False, error="Webhook returned 404: Not Found")),
    ):
        response = client.post("/api/v1/notifications/test-webhook", headers=auth_headers)

    assert response.status_code == 502
    assert response.json()["detail"] == "Webhook returned 404: Not Found"
