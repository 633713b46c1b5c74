"""Webhook delivery of serialized cards."""

from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.request
from dataclasses import dataclass

from teams_notifier.config import DELIVERY_CONTENT_TYPE

logger = logging.getLogger(__name__)


@dataclass
class DeliveryResult:
    success: bool
    status_code: int | None
    body: str
    error: str = ""


def _read_error_body(error: urllib.error.HTTPError) -> str:
    try:
        return error.read().decode("utf-8", errors="replace")
    except (OSError, http.client.HTTPException):
        return ""


def send_card(webhook_url: str, payload: bytes) -> DeliveryResult:
    """POST ``payload`` to the webhook once. Only HTTP 200 counts as delivered."""
    request = urllib.request.Request(
        webhook_url,
        data=payload,
        headers={"Content-Type": DELIVERY_CONTENT_TYPE},
        method="POST",
    )

    try:
        with urllib.request.urlopen(request) as response:
            status = response.status
            body = response.read().decode("utf-8", errors="replace")
    except urllib.error.HTTPError as e:
        status = e.code
        body = _read_error_body(e)
    except Exception as e:
        logger.error(f"Webhook request failed: {e}")
        return DeliveryResult(success=False, status_code=None, body="", error=str(e))

    logger.debug(f"Webhook responded with HTTP {status}")
    return DeliveryResult(success=status == 200, status_code=status, body=body)
