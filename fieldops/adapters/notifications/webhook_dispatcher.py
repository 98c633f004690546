"""Webhook notification adapter: implements NotificationPort over HTTP."""

from __future__ import annotations

import logging

import httpx

from fieldops.adapters.clock.system_clock import SystemClock
from fieldops.application.ports.clock_port import ClockPort
from fieldops.application.ports.notification_port import NotificationPort
from fieldops.config import settings

logger = logging.getLogger(__name__)


class WebhookNotificationDispatcher(NotificationPort):
    """POSTs one JSON message per assignment to an external notification service."""

    def __init__(
        self,
        url: str | None = None,
        timeout_s: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: ClockPort | None = None,
    ):
        self._url = url or settings.notification_webhook_url
        self._timeout = timeout_s if timeout_s is not None else settings.notification_timeout_s
        self._transport = transport
        self._clock = clock or SystemClock()

    async def send(self, order_id, technician_id, channels):
        payload = {
            "orderId": order_id,
            "technicianId": technician_id,
            "channels": list(channels),
            "sentAt": self._clock.now().isoformat(),
        }
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            resp = await client.post(self._url, json=payload)
            resp.raise_for_status()
        logger.info(
            "Webhook notification sent for order %s (channels=%s)",
            order_id, ",".join(channels),
        )
