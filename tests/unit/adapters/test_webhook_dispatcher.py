"""Tests for WebhookNotificationDispatcher using httpx.MockTransport (no network)."""

import json

import httpx
import pytest

from fieldops.adapters.notifications.logging_dispatcher import LoggingNotificationDispatcher
from fieldops.adapters.notifications.webhook_dispatcher import WebhookNotificationDispatcher

from conftest import T0, FrozenClock

HOOK_URL = "http://notify.test/hooks/assignments"


@pytest.mark.asyncio
async def test_posts_assignment_payload():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(202)

    clock = FrozenClock()
    dispatcher = WebhookNotificationDispatcher(
        url=HOOK_URL, transport=httpx.MockTransport(handler), clock=clock
    )
    await dispatcher.send("WO-1", "T1", ["email", "sms"])

    assert len(seen) == 1
    assert seen[0].method == "POST"
    assert str(seen[0].url) == HOOK_URL
    body = json.loads(seen[0].content)
    assert body["orderId"] == "WO-1"
    assert body["technicianId"] == "T1"
    assert body["channels"] == ["email", "sms"]
    assert body["sentAt"] == T0.isoformat()

    clock.advance(minutes=5)
    await dispatcher.send("WO-2", "T1", ["sms"])
    assert json.loads(seen[1].content)["sentAt"] == "2026-03-02T09:05:00+00:00"


@pytest.mark.asyncio
async def test_server_error_is_raised():
    dispatcher = WebhookNotificationDispatcher(
        url=HOOK_URL, transport=httpx.MockTransport(lambda request: httpx.Response(503))
    )
    with pytest.raises(httpx.HTTPStatusError):
        await dispatcher.send("WO-1", "T1", ["email"])


@pytest.mark.asyncio
async def test_logging_dispatcher_logs_each_channel(caplog):
    caplog.set_level("INFO")
    await LoggingNotificationDispatcher().send("WO-7", "T3", ["email", "sms"])
    assert "Notification via email: order WO-7 assigned to technician T3" in caplog.text
    assert "Notification via sms: order WO-7 assigned to technician T3" in caplog.text
