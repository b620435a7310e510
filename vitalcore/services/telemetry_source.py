"""
Telemetry sources: where vitals and daily records come from.

The monitor depends only on the abstract interfaces, so a BLE bracelet bridge,
the seeded synthetic generator, or test fixtures can be swapped in.
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone

from vitalcore.core.numeric import clamp, round_half_up
from vitalcore.schemas.telemetry import ActivityRecord, RecoveryInputs, SleepRecord, VitalSample
from vitalcore.schemas.user import Gender
from vitalcore.services.score_engine import derive_muscle_fatigue


class TelemetryUnavailableError(RuntimeError):
    """No sample can be produced right now (device disconnected, fixture exhausted)."""


class TelemetrySource(ABC):
    @abstractmethod
    def next_sample(self) -> VitalSample:
        """Return the next vitals sample. Raises TelemetryUnavailableError if none."""
        ...

    def recent_samples(self, limit: int) -> list[VitalSample]:
        """Up to `limit` most recent samples already produced, newest first."""
        return []


class DailyRecordSource(ABC):
    @abstractmethod
    def sleep_for(self, day: date) -> SleepRecord:
        """Sleep for the night ending on `day`."""
        ...

    @abstractmethod
    def activity_for(self, day: date) -> ActivityRecord:
        ...

    @abstractmethod
    def recovery_inputs_for(self, day: date) -> RecoveryInputs:
        ...

    def cycle_day_for(self, day: date) -> int | None:
        """Cycle day as tracked by the day-tracking collaborator; None when not tracked."""
        return None


# ---------------------------------------------------------------------------
# Synthetic source
# ---------------------------------------------------------------------------

class SeededRandom:
    """Park-Miller minimal standard PRNG; same seed, same sequence."""

    MODULUS = 2147483647
    MULTIPLIER = 16807

    def __init__(self, seed: int = 42):
        self._state = seed % self.MODULUS or 1

    def random(self) -> float:
        self._state = (self._state * self.MULTIPLIER) % self.MODULUS
        return (self._state - 1) / (self.MODULUS - 1)

    def gauss(self, mean: float, std_dev: float) -> float:
        # Box-Muller; u1 must stay above 0 for the log
        u1 = max(self.random(), 1e-12)
        u2 = self.random()
        z = math.sqrt(-2 * math.log(u1)) * math.cos(2 * math.pi * u2)
        return mean + z * std_dev

    def noise(self, spread: float) -> float:
        return (self.random() - 0.5) * spread


@dataclass(frozen=True)
class BaselineProfile:
    gender: Gender
    baseline_hr: float
    baseline_hrv: float
    baseline_spo2: float
    baseline_temp: float
    baseline_smo2: float
    avg_sleep_hours: float
    avg_steps: int


DEFAULT_FEMALE_PROFILE = BaselineProfile(
    gender=Gender.FEMALE,
    baseline_hr=68,
    baseline_hrv=52,
    baseline_spo2=98,
    baseline_temp=36.5,
    baseline_smo2=72,
    avg_sleep_hours=7.2,
    avg_steps=8500,
)

DEFAULT_MALE_PROFILE = BaselineProfile(
    gender=Gender.MALE,
    baseline_hr=65,
    baseline_hrv=58,
    baseline_spo2=98,
    baseline_temp=36.4,
    baseline_smo2=70,
    avg_sleep_hours=6.8,
    avg_steps=9200,
)

# 3 days push, 1 day rest
TRAINING_BLOCK_STRAIN = (0.7, 0.85, 0.95, 0.3)
SYNTHETIC_CYCLE_LENGTH = 28
SYNTHETIC_CYCLE_OFFSET = 18


class SyntheticTelemetrySource(TelemetrySource, DailyRecordSource):
    """
    Deterministic stand-in for the bracelet. Vitals random-walk around the
    profile baseline within physiological bounds; daily records are derived from
    a per-day seed so the same day always yields the same records.
    """

    def __init__(
        self,
        profile: BaselineProfile = DEFAULT_FEMALE_PROFILE,
        seed: int = 42,
        *,
        epoch: date = date(2025, 1, 1),
        clock: Callable[[], datetime] | None = None,
        history_size: int = 30,
    ):
        self.profile = profile
        self.seed = seed
        self.epoch = epoch
        self._rng = SeededRandom(seed)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._previous: VitalSample | None = None
        self._history: deque[VitalSample] = deque(maxlen=history_size)

    def next_sample(self) -> VitalSample:
        p = self.profile
        prev = self._previous
        rng = self._rng
        if prev is None:
            hr, hrv, spo2, temp, smo2, stress = (
                p.baseline_hr, p.baseline_hrv, p.baseline_spo2, p.baseline_temp, p.baseline_smo2, 25.0,
            )
        else:
            hr = prev.heart_rate + rng.noise(3)
            hrv = prev.hrv + rng.noise(4)
            spo2 = prev.blood_oxygen + rng.noise(1)
            temp = prev.skin_temperature + rng.noise(0.05)
            smo2 = (prev.muscle_oxygen if prev.muscle_oxygen is not None else p.baseline_smo2) + rng.noise(3)
            stress = prev.stress_level + rng.noise(5)
        muscle_oxygen = clamp(round_half_up(smo2), 30, 95)
        sample = VitalSample(
            timestamp=self._clock(),
            heart_rate=clamp(round_half_up(hr), 50, 120),
            hrv=clamp(round_half_up(hrv), 20, 90),
            blood_oxygen=clamp(round_half_up(spo2), 94, 100),
            skin_temperature=clamp(round(temp, 1), 35.8, 37.5),
            stress_level=clamp(round_half_up(stress), 5, 95),
            muscle_oxygen=muscle_oxygen,
            muscle_fatigue=derive_muscle_fatigue(muscle_oxygen),
        )
        self._previous = sample
        self._history.appendleft(sample)
        return sample

    def recent_samples(self, limit: int) -> list[VitalSample]:
        return list(self._history)[:limit]

    def _day_index(self, day: date) -> int:
        return (day - self.epoch).days

    def _day_rng(self, day: date, stream: int) -> SeededRandom:
        return SeededRandom(self.seed + self._day_index(day) * 1000 + stream)

    def strain_target(self, day: date) -> float:
        return TRAINING_BLOCK_STRAIN[self._day_index(day) % len(TRAINING_BLOCK_STRAIN)]

    def sleep_for(self, day: date) -> SleepRecord:
        rng = self._day_rng(day, 100)
        total = clamp(round_half_up(rng.gauss(self.profile.avg_sleep_hours * 60, 30)), 300, 600)
        deep_pct = clamp(rng.gauss(0.2, 0.05), 0.1, 0.35)
        rem_pct = clamp(rng.gauss(0.23, 0.04), 0.12, 0.3)
        awake_pct = clamp(rng.gauss(0.04, 0.02), 0.01, 0.15)
        deep = round_half_up(total * deep_pct)
        rem = round_half_up(total * rem_pct)
        awake = round_half_up(total * awake_pct)
        score = clamp(
            round_half_up(
                (deep_pct / 0.25) * 30
                + (rem_pct / 0.23) * 25
                + (min(total, 480) / 480) * 25
                + (1 - awake_pct / 0.1) * 20
            ),
            40,
            100,
        )
        bed_minute = int(rng.random() * 59)
        bed_time = datetime.combine(day - timedelta(days=1), time(23, bed_minute), tzinfo=timezone.utc)
        return SleepRecord(
            date=day,
            total_duration=total,
            deep_sleep=deep,
            light_sleep=total - deep - rem - awake,
            rem_sleep=rem,
            awake_time=awake,
            sleep_score=score,
            bed_time=bed_time,
            wake_time=bed_time + timedelta(minutes=total),
        )

    def activity_for(self, day: date) -> ActivityRecord:
        rng = self._day_rng(day, 200)
        strain = self.strain_target(day)
        steps = int(clamp(round_half_up(rng.gauss(self.profile.avg_steps * (0.5 + strain), 1500)), 1000, 25000))
        return ActivityRecord(
            date=day,
            steps=steps,
            distance=round(steps * 0.00075, 1),
            calories_burned=round_half_up(steps * 0.04 + strain * 200),
            active_minutes=clamp(round_half_up(rng.gauss(30 + strain * 60, 15)), 5, 180),
            standing_hours=clamp(round_half_up(rng.gauss(8, 2)), 3, 16),
            floors=int(clamp(round_half_up(rng.gauss(8 + strain * 10, 4)), 0, 40)),
        )

    def recovery_inputs_for(self, day: date) -> RecoveryInputs:
        rng = self._day_rng(day, 300)
        strain = self.strain_target(day)
        return RecoveryInputs(
            recovery_score=clamp(round_half_up(rng.gauss(65 + (1 - strain) * 25, 5)), 20, 100),
            muscle_recovery=clamp(round_half_up(rng.gauss(85 - strain * 30, 8)), 30, 100),
            energy_level=clamp(round_half_up(rng.gauss(75 - strain * 15, 8)), 20, 100),
        )

    def cycle_day_for(self, day: date) -> int | None:
        if self.profile.gender != Gender.FEMALE:
            return None
        return (self._day_index(day) + SYNTHETIC_CYCLE_OFFSET) % SYNTHETIC_CYCLE_LENGTH + 1


# ---------------------------------------------------------------------------
# Fixture sources
# ---------------------------------------------------------------------------

class FixtureTelemetrySource(TelemetrySource):
    """Replays a fixed sequence of samples."""

    def __init__(self, samples: Iterable[VitalSample]):
        self._samples = iter(list(samples))
        self._served: list[VitalSample] = []

    def next_sample(self) -> VitalSample:
        try:
            sample = next(self._samples)
        except StopIteration:
            raise TelemetryUnavailableError("Fixture telemetry exhausted") from None
        self._served.insert(0, sample)
        return sample

    def recent_samples(self, limit: int) -> list[VitalSample]:
        return self._served[:limit]


class FixtureDailyRecordSource(DailyRecordSource):
    """Returns the same records for every day."""

    def __init__(
        self,
        sleep: SleepRecord,
        activity: ActivityRecord,
        recovery_inputs: RecoveryInputs,
        cycle_day: int | None = None,
    ):
        self._sleep = sleep
        self._activity = activity
        self._recovery_inputs = recovery_inputs
        self._cycle_day = cycle_day

    def sleep_for(self, day: date) -> SleepRecord:
        return self._sleep

    def activity_for(self, day: date) -> ActivityRecord:
        return self._activity

    def recovery_inputs_for(self, day: date) -> RecoveryInputs:
        return self._recovery_inputs

    def cycle_day_for(self, day: date) -> int | None:
        return self._cycle_day
