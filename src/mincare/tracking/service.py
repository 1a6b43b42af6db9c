"""Tracking service — turns user actions into derived signals and persists them.

:class:`TrackingService` is the one place where the pure functions in
:mod:`mincare.signals` meet the storage collaborator.  Each action follows
the same shape:

1. Validate the raw observation
2. Derive the interpreted signal (sentiment, tier, duration, progress)
3. Append the resulting record

The wellness snapshot is the exception: it is recomputed from scratch by
reading every category concurrently, then upserted if it changed.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import date, datetime

import structlog

from mincare.catalog import default_daily_tasks, default_sleep_tips
from mincare.errors import NotFoundError
from mincare.models import (
    DailyRoutine,
    DataSource,
    ExerciseCompletion,
    MoodCategory,
    MoodEntry,
    SleepSession,
    SleepTip,
    StressReading,
    WellnessSnapshot,
)
from mincare.signals.insights import InsightGenerator
from mincare.signals.progress import STARTING_FITNESS_LEVEL, advance_progress
from mincare.signals.sentiment import score_sentiment
from mincare.signals.sleep import (
    SleepSummary,
    aggregate_sleep,
    as_naive_utc,
    sleep_duration_minutes,
)
from mincare.signals.stress import (
    average_stress_tier,
    classify_stress,
    should_trigger_intervention,
)
from mincare.signals.wellness import build_snapshot
from mincare.storage.repository import (
    ExerciseRepository,
    MoodRepository,
    ProgressRepository,
    RoutineRepository,
    SleepRepository,
    SleepTipRepository,
    SnapshotRepository,
    StressRepository,
)

logger = structlog.get_logger(__name__)


@dataclass
class StressOverview:
    readings: list[StressReading] = field(default_factory=list)
    avg_stress: int = 0


@dataclass
class SleepOverview:
    sessions: list[SleepSession] = field(default_factory=list)
    summary: SleepSummary = field(default_factory=SleepSummary)


@dataclass
class ProgressOverview:
    streak_count: int = 0
    fitness_level: int = STARTING_FITNESS_LEVEL
    total_completed: int = 0


class TrackingService:
    """Orchestrator for mood, stress, MindGym, sleep and wellness signals.

    Parameters
    ----------
    moods, stress, sleep, progress, snapshots, exercises, tips, routines
        Repositories for each stored entity; defaults bind to the
        application database.
    insight_generator : InsightGenerator
        Source of coaching text; inject a seeded one for repeatable output.
    sleep_window, stress_window : int
        Number of most recent sessions / readings averaged.
    history_limit : int
        Number of entries returned by the ``recent_*`` listings.
    """

    def __init__(
        self,
        *,
        moods: MoodRepository | None = None,
        stress: StressRepository | None = None,
        sleep: SleepRepository | None = None,
        progress: ProgressRepository | None = None,
        snapshots: SnapshotRepository | None = None,
        exercises: ExerciseRepository | None = None,
        tips: SleepTipRepository | None = None,
        routines: RoutineRepository | None = None,
        insight_generator: InsightGenerator | None = None,
        sleep_window: int = 7,
        stress_window: int = 7,
        history_limit: int = 10,
        tip_limit: int = 3,
    ) -> None:
        self._moods = moods or MoodRepository()
        self._stress = stress or StressRepository()
        self._sleep = sleep or SleepRepository()
        self._progress = progress or ProgressRepository()
        self._snapshots = snapshots or SnapshotRepository()
        self._exercises = exercises or ExerciseRepository()
        self._tips = tips or SleepTipRepository()
        self._routines = routines or RoutineRepository()
        self._insights = insight_generator or InsightGenerator()
        self._sleep_window = sleep_window
        self._stress_window = stress_window
        self._history_limit = history_limit
        self._tip_limit = tip_limit

    # ── Mood journal ──────────────────────────────────────────

    async def record_mood(
        self,
        user_id: str,
        mood: MoodCategory,
        entry_text: str = "",
        *,
        shared_to_community: bool = False,
    ) -> MoodEntry:
        sentiment = score_sentiment(entry_text)
        entry = MoodEntry(
            user_id=user_id,
            mood_type=mood,
            entry_text=entry_text,
            sentiment_score=sentiment,
            ai_insights=self._insights.generate(mood, sentiment),
            shared_to_community=shared_to_community,
        )
        await self._moods.save(entry)
        logger.info(
            "tracking.mood_recorded",
            user_id=user_id,
            mood=mood.value,
            sentiment=sentiment,
        )
        return entry

    async def recent_moods(self, user_id: str) -> list[MoodEntry]:
        return await self._moods.list_recent(user_id, limit=self._history_limit)

    # ── StressSnap ────────────────────────────────────────────

    async def record_stress(
        self,
        user_id: str,
        heart_rate: int,
        data_source: DataSource = DataSource.MANUAL,
    ) -> StressReading:
        tier = classify_stress(heart_rate)
        reading = StressReading(
            user_id=user_id,
            heart_rate=heart_rate,
            stress_level=tier,
            data_source=data_source,
            intervention_triggered=should_trigger_intervention(tier),
        )
        await self._stress.save(reading)
        logger.info(
            "tracking.stress_recorded",
            user_id=user_id,
            heart_rate=heart_rate,
            tier=tier,
            intervention=reading.intervention_triggered,
        )
        return reading

    async def stress_overview(self, user_id: str) -> StressOverview:
        readings = await self._stress.list_recent(user_id, limit=self._history_limit)
        return StressOverview(
            readings=readings,
            avg_stress=average_stress_tier(r.stress_level for r in readings),
        )

    # ── MindGym ───────────────────────────────────────────────

    async def complete_exercise(
        self, user_id: str, exercise_id: str, score: int = 0
    ) -> ExerciseCompletion:
        """Log a completed exercise and advance the user's streak and level.

        Users without any completion start from streak 0 at the starting
        fitness level, so their first completion records level 2.
        """
        exercise, latest = await asyncio.gather(
            self._exercises.get(exercise_id),
            self._progress.latest(user_id),
        )
        if exercise is None:
            raise NotFoundError("Exercise", exercise_id)

        current_streak = latest.streak_count if latest else 0
        current_level = latest.fitness_level if latest else STARTING_FITNESS_LEVEL
        progress = advance_progress(current_streak, current_level)

        completion = ExerciseCompletion(
            user_id=user_id,
            exercise_id=exercise_id,
            score=score,
            streak_count=progress.streak,
            fitness_level=progress.fitness_level,
        )
        await self._progress.save(completion)
        logger.info(
            "tracking.exercise_completed",
            user_id=user_id,
            exercise=exercise.name,
            streak=progress.streak,
            fitness_level=progress.fitness_level,
        )
        return completion

    async def progress_overview(self, user_id: str) -> ProgressOverview:
        latest, total = await asyncio.gather(
            self._progress.latest(user_id),
            self._progress.count(user_id),
        )
        if latest is None:
            return ProgressOverview()
        return ProgressOverview(
            streak_count=latest.streak_count,
            fitness_level=latest.fitness_level,
            total_completed=total,
        )

    # ── SleepPal ──────────────────────────────────────────────

    async def log_sleep(
        self,
        user_id: str,
        sleep_start: datetime,
        sleep_end: datetime,
        quality_score: int,
        *,
        bedtime_routine_followed: bool = False,
    ) -> SleepSession:
        # Raises InvalidObservationError before anything is written.
        duration = sleep_duration_minutes(sleep_start, sleep_end)
        session = SleepSession(
            user_id=user_id,
            sleep_start=as_naive_utc(sleep_start),
            sleep_end=as_naive_utc(sleep_end),
            duration_minutes=duration,
            quality_score=quality_score,
            bedtime_routine_followed=bedtime_routine_followed,
        )
        await self._sleep.save(session)
        logger.info("tracking.sleep_logged", user_id=user_id, minutes=duration)
        return session

    async def sleep_overview(self, user_id: str) -> SleepOverview:
        sessions = await self._sleep.list_recent(user_id, limit=self._sleep_window)
        return SleepOverview(
            sessions=sessions,
            summary=aggregate_sleep(sessions, window=self._sleep_window),
        )

    async def sleep_tips(self, user_id: str) -> list[SleepTip]:
        """Latest coaching tips, handing out the starter set on first visit."""
        tips = await self._tips.list_recent(user_id, limit=self._tip_limit)
        if tips:
            return tips
        tips = [
            SleepTip(user_id=user_id, tip_text=text, tip_type=tip_type)
            for text, tip_type in default_sleep_tips()
        ]
        await self._tips.save_batch(tips)
        return tips

    # ── Dashboard ─────────────────────────────────────────────

    async def refresh_wellness(self, user_id: str) -> WellnessSnapshot:
        """Recompute the wellness snapshot from the stored signals.

        All five reads run concurrently and must finish before scoring.  If
        any of them fails the stored snapshot is left untouched and the
        first error is raised.  The snapshot is written only when the
        recomputed values differ from the stored ones.
        """
        results = await asyncio.gather(
            self._snapshots.get(user_id),
            self._moods.count(user_id),
            self._progress.latest(user_id),
            self._stress.recent_tiers(user_id, limit=self._stress_window),
            self._sleep.list_recent(user_id, limit=self._sleep_window),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            logger.warning(
                "tracking.wellness_refresh_aborted",
                user_id=user_id,
                failures=len(failures),
            )
            raise failures[0]

        previous, mood_count, latest, tiers, sleeps = results
        snapshot = build_snapshot(
            user_id,
            mood_count=mood_count,
            fitness_level=latest.fitness_level if latest else 0,
            avg_stress=average_stress_tier(tiers),
            avg_sleep_hours=aggregate_sleep(sleeps, window=self._sleep_window).avg_hours,
            streak_days=latest.streak_count if latest else 0,
        )

        if previous is not None and _same_values(previous, snapshot):
            return previous

        await self._snapshots.upsert(snapshot)
        logger.info(
            "tracking.wellness_updated",
            user_id=user_id,
            score=snapshot.score,
            previous=previous.score if previous else None,
        )
        return snapshot

    async def daily_flow(self, user_id: str, today: date | None = None) -> DailyRoutine:
        """Today's routine, created from the default task list on first access."""
        today = today or date.today()
        routine = await self._routines.get(user_id, today)
        if routine is not None:
            return routine
        routine = DailyRoutine(
            user_id=user_id, routine_date=today, tasks=default_daily_tasks()
        )
        await self._routines.save(routine)
        return routine


def _same_values(a: WellnessSnapshot, b: WellnessSnapshot) -> bool:
    return a.model_dump(exclude={"updated_at"}) == b.model_dump(exclude={"updated_at"})
