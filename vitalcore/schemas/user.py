"""Per-user settings handed to the engine explicitly (never read from globals)."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class Theme(str, Enum):
    DARK = "dark"
    LIGHT = "light"
    AUTO = "auto"


class UserSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    gender: Gender = Gender.FEMALE
    cycle_tracking_enabled: bool = True
    notifications_enabled: bool = True
    refresh_interval_minutes: int = Field(5, ge=1, le=24 * 60)
    theme: Theme = Theme.LIGHT

    @property
    def cycle_applicable(self) -> bool:
        """Cycle model runs only for women who opted in to tracking."""
        return self.gender == Gender.FEMALE and self.cycle_tracking_enabled
