"""Tests for settings validation."""

import pytest

from vitalcore.config import Settings


def test_default_cycle_config_is_valid():
    Settings().validate_cycle_config()


def test_overlapping_phase_boundaries_fail_startup():
    with pytest.raises(RuntimeError, match="Invalid cycle phase configuration"):
        Settings(follicular_end_day=15, ovulation_end_day=14).validate_cycle_config()


def test_user_settings_follow_profile_defaults():
    user = Settings(notifications_enabled=False, refresh_interval_minutes=10).user_settings()
    assert user.notifications_enabled is False
    assert user.refresh_interval_minutes == 10
