"""Insight -> notification payloads, and dispatchers (Expo push, in-memory)."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable

import httpx

from vitalcore.schemas.insight import Insight, InsightType, Priority
from vitalcore.schemas.notification import NotificationPayload, NotificationType
from vitalcore.schemas.user import UserSettings

logger = logging.getLogger(__name__)

EXPO_PUSH_URL = "https://exp.host/--/api/v2/push/send"
DEFAULT_TITLE = "Vitalcore"

# Android channel per notification type, as registered by the mobile app
ANDROID_CHANNELS: dict[NotificationType, str] = {
    NotificationType.HEALTH_ALERT: "health-alerts",
    NotificationType.AI_INSIGHT: "ai-insights",
}
DEFAULT_ANDROID_CHANNEL = "activity-reminders"

ALERT_TYPES = {InsightType.HEALTH, InsightType.RECOVERY, InsightType.STRESS}


def notification_type_for(insight: Insight) -> NotificationType:
    if insight.type == InsightType.SLEEP:
        return NotificationType.SLEEP_REMINDER
    if insight.type == InsightType.ACTIVITY:
        return NotificationType.ACTIVITY_REMINDER
    if insight.priority == Priority.HIGH and insight.type in ALERT_TYPES:
        return NotificationType.HEALTH_ALERT
    return NotificationType.AI_INSIGHT


def to_notification(insight: Insight) -> NotificationPayload:
    return NotificationPayload(
        title=insight.title,
        body=insight.description,
        type=notification_type_for(insight),
        priority=insight.priority,
    )


def bracelet_status_payload(connected: bool) -> NotificationPayload:
    """Device connection change. Low priority; sent outside the insight priority floor."""
    if connected:
        return NotificationPayload(
            title="Bracelet Connected",
            body="Live readings have resumed. Your scores are up to date again.",
            type=NotificationType.BRACELET_STATUS,
            priority=Priority.LOW,
        )
    return NotificationPayload(
        title="Bracelet Disconnected",
        body="No new readings are coming in. Your last summary is kept until the bracelet reconnects.",
        type=NotificationType.BRACELET_STATUS,
        priority=Priority.LOW,
    )


def select_for_dispatch(
    insights: Iterable[Insight],
    user_settings: UserSettings,
    min_priority: Priority = Priority.HIGH,
) -> list[NotificationPayload]:
    """Payloads for insights at or above min_priority, in insight order; none if the user muted notifications."""
    if not user_settings.notifications_enabled:
        return []
    return [to_notification(i) for i in insights if i.priority.rank >= min_priority.rank]


class NotificationDispatcher(ABC):
    @abstractmethod
    async def dispatch(self, payload: NotificationPayload) -> None:
        ...


class RecordingDispatcher(NotificationDispatcher):
    """Keeps payloads in memory; used when no push token is configured and in tests."""

    def __init__(self):
        self.sent: list[NotificationPayload] = []

    async def dispatch(self, payload: NotificationPayload) -> None:
        self.sent.append(payload)
        logger.debug("Notification recorded: %s (%s)", payload.title, payload.type.value)


class ExpoPushDispatcher(NotificationDispatcher):
    """
    Send via the Expo push API. Fire-and-forget; logs errors.

    The client is owned by the caller (the app lifespan opens and closes it).
    """

    def __init__(self, token: str, client: httpx.AsyncClient):
        self.token = (token or "").strip()
        self.client = client

    async def dispatch(self, payload: NotificationPayload) -> None:
        if not self.token:
            logger.debug("Push skipped (no token): %s", payload.title)
            return
        title = (payload.title or DEFAULT_TITLE).strip() or DEFAULT_TITLE
        try:
            response = await self.client.post(
                EXPO_PUSH_URL,
                json={
                    "to": self.token,
                    "title": title[:100],
                    "body": (payload.body or "").strip()[:200],
                    "priority": "high" if payload.priority == Priority.HIGH else "default",
                    "channelId": ANDROID_CHANNELS.get(payload.type, DEFAULT_ANDROID_CHANNEL),
                    "data": {"type": payload.type.value, "priority": payload.priority.value},
                },
            )
            response.raise_for_status()
        except Exception as e:
            logger.warning("Expo push send failed: %s", e)
