"""Outgoing webhook delivery with optional HMAC signatures.

Discord and Slack incoming-webhook URLs get a plain-text body in the shape
they expect; any other URL receives the JSON payload as-is.
"""

import hashlib
import hmac
import json
import logging
import re
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime

import httpx

from preptrac.config import get_settings

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "X-PrepTrac-Signature"
DISCORD_MAX_CONTENT = 2000
ERROR_DETAIL_LIMIT = 200

_DISCORD_URL = re.compile(r"discord(app)?\.com/api/webhooks", re.IGNORECASE)
_SLACK_URL = re.compile(r"hooks\.slack\.com/services", re.IGNORECASE)


@dataclass
class WebhookItem:
    id: int
    name: str
    quantity: float
    unit: str
    category: str | None = None
    location: str | None = None
    expiration_date: str | None = None


@dataclass
class WebhookPayload:
    """Body sent to generic webhook endpoints."""

    type: str
    message: str
    date: str
    item_id: int | None = None
    event_id: int | None = None
    item: WebhookItem | None = None
    timestamp: str = field(default_factory=lambda: datetime.now(UTC).isoformat())

    def to_dict(self) -> dict:
        return {key: value for key, value in asdict(self).items() if value is not None}


@dataclass
class WebhookResult:
    success: bool
    error: str | None = None


def format_payload_text(payload: WebhookPayload) -> str:
    """Plain-text rendering used for Discord and Slack."""
    lines = [payload.message]
    if payload.item:
        item = payload.item
        lines.append(f"Item: {item.name} ({item.quantity:g} {item.unit})")
        if item.category:
            lines.append(f"Category: {item.category}")
        if item.location:
            lines.append(f"Location: {item.location}")
        if item.expiration_date:
            lines.append(f"Expiration: {item.expiration_date}")
    lines.append(f"Type: {payload.type}")
    return "\n".join(lines)


def build_body(url: str, payload: WebhookPayload) -> str:
    """Serialize the request body for the target URL."""
    if _DISCORD_URL.search(url):
        return json.dumps({"content": format_payload_text(payload)[:DISCORD_MAX_CONTENT]})
    if _SLACK_URL.search(url):
        return json.dumps({"text": format_payload_text(payload)})
    return json.dumps(payload.to_dict())


def sign_body(body: str, secret: str) -> str:
    digest = hmac.new(secret.encode(), body.encode(), hashlib.sha256).hexdigest()
    return f"sha256={digest}"


def verify_webhook_signature(body: str, signature: str, secret: str) -> bool:
    """Check a ``sha256=<hex>`` signature against the body in constant time."""
    expected = sign_body(body, secret)
    provided = signature if signature.startswith("sha256=") else f"sha256={signature}"
    return hmac.compare_digest(expected, provided)


async def send_webhook(
    url: str,
    payload: WebhookPayload,
    secret: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> WebhookResult:
    """POST a payload to a webhook URL.

    The signature covers the exact bytes sent. Transport errors and non-2xx
    responses are reported in the result rather than raised.
    """
    settings = get_settings()
    body = build_body(url, payload)
    headers = {
        "Content-Type": "application/json",
        "User-Agent": settings.webhook_user_agent,
    }
    if secret:
        headers[SIGNATURE_HEADER] = sign_body(body, secret)

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.webhook_timeout_seconds) as own_client:
                response = await own_client.post(url, content=body, headers=headers)
        else:
            response = await client.post(url, content=body, headers=headers)
    except httpx.HTTPError as e:
        logger.warning(f"Webhook delivery to {url} failed: {e}")
        return WebhookResult(success=False, error=str(e) or e.__class__.__name__)

    if not response.is_success:
        detail = response.text.replace("\n", " ") or response.reason_phrase
        if len(detail) > ERROR_DETAIL_LIMIT:
            detail = detail[:ERROR_DETAIL_LIMIT] + "..."
        logger.warning(f"Webhook {url} returned {response.status_code}")
        return WebhookResult(
            success=False, error=f"Webhook returned {response.status_code}: {detail}"
        )

    return WebhookResult(success=True)
