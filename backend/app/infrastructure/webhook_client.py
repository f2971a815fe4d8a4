"""Webhook Client — delivers workflow events to the configured notification endpoint.

Invariants:
    - POSTs JSON, expects 2xx; anything else -> NotificationError
    - No retries (callers decide whether a failed notification matters)
"""

import logging
from typing import Any

import httpx

from app.core.errors import NotificationError

logger = logging.getLogger(__name__)


class WebhookClient:
    def __init__(
        self,
        url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def send(self, event: dict[str, Any]) -> None:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport,
            ) as client:
                response = await client.post(self.url, json=event)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NotificationError(f"webhook returned {e.response.status_code}")
        except httpx.HTTPError as e:
            raise NotificationError(str(e) or type(e).__name__)
        logger.info(f"Webhook delivered: {event.get('event')}")
