"""Logging notification adapter: records deliveries in the application log."""

from __future__ import annotations

import logging

from fieldops.application.ports.notification_port import NotificationPort

logger = logging.getLogger(__name__)


class LoggingNotificationDispatcher(NotificationPort):
    async def send(self, order_id, technician_id, channels):
        for channel in channels:
            logger.info(
                "Notification via %s: order %s assigned to technician %s",
                channel, order_id, technician_id,
            )
