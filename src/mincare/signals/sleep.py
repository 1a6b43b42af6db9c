"""Sleep duration derivation and window averages."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from mincare.errors import InvalidObservationError
from mincare.models import SleepSession
from mincare.signals.rounding import round_half_up

DEFAULT_SLEEP_WINDOW = 7


@dataclass(frozen=True)
class SleepSummary:
    """Averages over a sleep window; zeros mean "no data"."""
    avg_hours: float = 0.0
    avg_quality: float = 0.0

    @property
    def has_data(self) -> bool:
        return self.avg_hours > 0


def as_naive_utc(value: datetime) -> datetime:
    """Naive UTC form of *value*, the way timestamps are stored."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def sleep_duration_minutes(sleep_start: datetime, sleep_end: datetime) -> int:
    """Whole minutes between *sleep_start* and *sleep_end*.

    Raises :class:`InvalidObservationError` when the session ends before it
    starts.  Aware and naive timestamps are compared as UTC.
    """
    start = as_naive_utc(sleep_start)
    end = as_naive_utc(sleep_end)
    if end < start:
        raise InvalidObservationError(
            "Sleep end must not be before sleep start.",
            details={"sleep_start": start.isoformat(), "sleep_end": end.isoformat()},
        )
    return int((end - start).total_seconds() // 60)


def aggregate_sleep(
    sessions: Sequence[SleepSession],
    window: int = DEFAULT_SLEEP_WINDOW,
) -> SleepSummary:
    """Average duration (hours) and quality over the most recent *window* sessions.

    *sessions* are expected newest first, as the repository returns them.
    """
    recent = list(sessions)[:window]
    if not recent:
        return SleepSummary()
    avg_minutes = sum(s.duration_minutes for s in recent) / len(recent)
    avg_quality = sum(s.quality_score for s in recent) / len(recent)
    return SleepSummary(
        avg_hours=round_half_up(avg_minutes / 60, 1),
        avg_quality=round_half_up(avg_quality, 1),
    )
