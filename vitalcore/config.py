from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from vitalcore.schemas.cycle import CycleBoundaries
from vitalcore.schemas.insight import Priority
from vitalcore.schemas.user import Gender, Theme, UserSettings


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = "development"
    debug: bool = False
    cors_origins: str = "http://localhost:8081,http://localhost:19006,http://localhost:19000"
    http_timeout_seconds: float = 30.0

    # Monitor: full recomputation every N minutes
    refresh_interval_minutes: int = 5
    monitor_enabled: bool = True
    telemetry_seed: int = 42

    # Profile defaults for the single-user device app
    default_gender: Gender = Gender.FEMALE
    cycle_tracking_enabled: bool = True
    notifications_enabled: bool = True
    theme: Theme = Theme.LIGHT

    # Notifications: forward insights at or above this priority
    notify_min_priority: Priority = Priority.HIGH
    expo_push_token: str = ""

    # Cycle model
    cycle_length_days: int = 28
    menstrual_end_day: int = 5
    follicular_end_day: int = 12
    ovulation_end_day: int = 14
    ovulation_temp_rise_c: float = 0.4
    baseline_temp_c: float = 36.5

    def user_settings(self) -> UserSettings:
        """Explicit parameter object passed to the engine."""
        return UserSettings(
            gender=self.default_gender,
            cycle_tracking_enabled=self.cycle_tracking_enabled,
            notifications_enabled=self.notifications_enabled,
            refresh_interval_minutes=self.refresh_interval_minutes,
            theme=self.theme,
        )

    def cycle_boundaries(self) -> CycleBoundaries:
        return CycleBoundaries(
            menstrual_end=self.menstrual_end_day,
            follicular_end=self.follicular_end_day,
            ovulation_end=self.ovulation_end_day,
            cycle_length=self.cycle_length_days,
        )

    def validate_cycle_config(self) -> None:
        """Raise if configured phase boundaries are inconsistent."""
        try:
            self.cycle_boundaries()
        except ValidationError as e:
            raise RuntimeError(f"Invalid cycle phase configuration: {e.errors()[0]['msg']}") from e


settings = Settings()
