"""Tests for insight -> notification mapping and the dispatchers."""

import logging
from unittest.mock import AsyncMock

import httpx
import pytest

from vitalcore.schemas.insight import Priority
from vitalcore.schemas.notification import NotificationPayload, NotificationType
from vitalcore.schemas.user import UserSettings
from vitalcore.services.insight_engine import evaluate
from vitalcore.services.notifications import (
    EXPO_PUSH_URL,
    ExpoPushDispatcher,
    RecordingDispatcher,
    bracelet_status_payload,
    notification_type_for,
    select_for_dispatch,
)


@pytest.fixture
def strained_insights(vitals, sleep, activity, recovery, now):
    return evaluate(
        vitals.model_copy(update={"stress_level": 50}),
        sleep.model_copy(update={"sleep_score": 60}),
        activity.model_copy(update={"steps": 3000}),
        recovery.model_copy(update={"recovery_score": 60}),
        now=now,
    )


def test_notification_types(strained_insights):
    types = {i.id: notification_type_for(i) for i in strained_insights}
    assert types == {
        "insight_sleep_1": NotificationType.SLEEP_REMINDER,
        "insight_activity_1": NotificationType.ACTIVITY_REMINDER,
        "insight_recovery_1": NotificationType.HEALTH_ALERT,
        "insight_stress_1": NotificationType.AI_INSIGHT,
        "insight_positive_1": NotificationType.AI_INSIGHT,
    }


def test_select_high_priority_only(strained_insights):
    payloads = select_for_dispatch(strained_insights, UserSettings())
    assert [p.title for p in payloads] == ["Recovery Day Recommended"]
    assert payloads[0].body.startswith("Your recovery score is 60%.")
    assert payloads[0].priority == Priority.HIGH


def test_select_medium_keeps_insight_order(strained_insights):
    payloads = select_for_dispatch(strained_insights, UserSettings(), Priority.MEDIUM)
    assert [p.type for p in payloads] == [
        NotificationType.SLEEP_REMINDER,
        NotificationType.HEALTH_ALERT,
        NotificationType.AI_INSIGHT,
    ]


def test_muted_user_gets_nothing(strained_insights):
    assert select_for_dispatch(strained_insights, UserSettings(notifications_enabled=False), Priority.LOW) == []


def _payload() -> NotificationPayload:
    return NotificationPayload(
        title="Recovery Day Recommended",
        body="Your recovery score is 60%.",
        type=NotificationType.HEALTH_ALERT,
        priority=Priority.HIGH,
    )


@pytest.mark.asyncio
async def test_recording_dispatcher_keeps_payloads():
    dispatcher = RecordingDispatcher()
    await dispatcher.dispatch(_payload())
    assert dispatcher.sent == [_payload()]


@pytest.mark.asyncio
async def test_expo_dispatcher_posts_message():
    client = AsyncMock()
    client.post = AsyncMock(return_value=httpx.Response(200, request=httpx.Request("POST", EXPO_PUSH_URL)))
    await ExpoPushDispatcher("ExponentPushToken[abc]", client=client).dispatch(_payload())
    client.post.assert_awaited_once()
    url = client.post.call_args.args[0]
    body = client.post.call_args.kwargs["json"]
    assert url == EXPO_PUSH_URL
    assert body["to"] == "ExponentPushToken[abc]"
    assert body["title"] == "Recovery Day Recommended"
    assert body["priority"] == "high"
    assert body["channelId"] == "health-alerts"
    assert body["data"] == {"type": "health_alert", "priority": "high"}


@pytest.mark.asyncio
async def test_expo_dispatcher_skips_without_token():
    client = AsyncMock()
    await ExpoPushDispatcher("  ", client=client).dispatch(_payload())
    client.post.assert_not_called()


@pytest.mark.asyncio
async def test_expo_dispatcher_logs_and_swallows_transport_errors(caplog):
    client = AsyncMock()
    client.post = AsyncMock(side_effect=httpx.ConnectError("unreachable"))
    with caplog.at_level(logging.WARNING, logger="vitalcore.services.notifications"):
        await ExpoPushDispatcher("ExponentPushToken[abc]", client=client).dispatch(_payload())
    assert "Expo push send failed" in caplog.text


def test_bracelet_status_payloads():
    connected, disconnected = bracelet_status_payload(True), bracelet_status_payload(False)
    assert connected.title == "Bracelet Connected"
    assert disconnected.title == "Bracelet Disconnected"
    assert {connected.type, disconnected.type} == {NotificationType.BRACELET_STATUS}
    assert {connected.priority, disconnected.priority} == {Priority.LOW}
