from enum import Enum

from pydantic import BaseModel, ConfigDict

from vitalcore.schemas.insight import Priority


class NotificationType(str, Enum):
    """bracelet_status is produced by the monitor when the device link drops or returns; the rest map from insights."""

    HEALTH_ALERT = "health_alert"
    AI_INSIGHT = "ai_insight"
    ACTIVITY_REMINDER = "activity_reminder"
    SLEEP_REMINDER = "sleep_reminder"
    BRACELET_STATUS = "bracelet_status"


class NotificationPayload(BaseModel):
    """What the notification dispatcher receives for one insight."""

    model_config = ConfigDict(frozen=True)

    title: str
    body: str
    type: NotificationType
    priority: Priority
