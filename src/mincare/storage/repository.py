"""Data-access layer — thin async wrappers around SQLAlchemy queries.

Repositories are the storage collaborator of the signal engine: entries,
readings, sessions and completions are appended; the wellness snapshot is
upserted.  Any database failure surfaces as
:class:`~mincare.errors.StorageUnavailableError` so callers can tell
"storage is down" apart from bad input.
"""

from __future__ import annotations

import json
from contextlib import asynccontextmanager
from datetime import date
from enum import Enum
from typing import Any, AsyncIterator, Iterable

import structlog
from pydantic import BaseModel
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mincare.errors import AlreadyMemberError, StorageUnavailableError
from mincare.models import (
    CircleGroup,
    CirclePost,
    DailyRoutine,
    Exercise,
    ExerciseCompletion,
    ExerciseType,
    ModerationStatus,
    MoodEntry,
    SleepSession,
    SleepTip,
    StressReading,
    WellnessSnapshot,
)
from mincare.storage.database import (
    CircleGroupRow,
    CircleMembershipRow,
    CirclePostRow,
    DailyRoutineRow,
    ExerciseCompletionRow,
    ExerciseRow,
    MoodEntryRow,
    SleepSessionRow,
    SleepTipRow,
    StressReadingRow,
    WellnessSnapshotRow,
    get_session_factory,
)

logger = structlog.get_logger(__name__)


def _columns(model: BaseModel) -> dict[str, Any]:
    """Model fields as column values, with enums reduced to their values."""
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in model.model_dump().items()
    }


class BaseRepository:
    """Shared base with session management for all repositories.

    Each operation opens its own session, so independent reads may run
    concurrently.  Pass *session_factory* to bind to a specific engine.
    """

    def __init__(
        self, session_factory: async_sessionmaker[AsyncSession] | None = None
    ) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            factory = self._session_factory or get_session_factory()
            async with factory() as session:
                yield session
        except SQLAlchemyError as exc:
            logger.error("storage.unavailable", operation=operation, error=str(exc))
            raise StorageUnavailableError(operation) from exc


class MoodRepository(BaseRepository):
    """Append and read :class:`MoodEntry` records."""

    async def save(self, entry: MoodEntry) -> None:
        async with self._session("mood.save") as session:
            session.add(MoodEntryRow(**_columns(entry)))
            await session.commit()

    async def list_recent(self, user_id: str, limit: int = 10) -> list[MoodEntry]:
        async with self._session("mood.list_recent") as session:
            stmt = (
                select(MoodEntryRow)
                .where(MoodEntryRow.user_id == user_id)
                .order_by(MoodEntryRow.created_at.desc())
                .limit(limit)
            )
            rows = (await session.execute(stmt)).scalars().all()
        return [MoodEntry.model_validate(r, from_attributes=True) for r in rows]

    async def count(self, user_id: str) -> int:
        async with self._session("mood.count") as session:
            stmt = (
                select(func.count())
                .select_from(MoodEntryRow)
                .where(MoodEntryRow.user_id == user_id)
            )
            return (await session.execute(stmt)).scalar() or 0


class StressRepository(BaseRepository):
    """Append and read :class:`StressReading` records."""

    async def save(self, reading: StressReading) -> None:
        async with self._session("stress.save") as session:
            session.add(StressReadingRow(**_columns(reading)))
            await session.commit()

    async def list_recent(self, user_id: str, limit: int = 10) -> list[StressReading]:
        async with self._session("stress.list_recent") as session:
            stmt = (
                select(StressReadingRow)
                .where(StressReadingRow.user_id == user_id)
                .order_by(StressReadingRow.recorded_at.desc())
                .limit(limit)
            )
            rows = (await session.execute(stmt)).scalars().all()
        return [StressReading.model_validate(r, from_attributes=True) for r in rows]

    async def recent_tiers(self, user_id: str, limit: int = 7) -> list[int]:
        async with self._session("stress.recent_tiers") as session:
            stmt = (
                select(StressReadingRow.stress_level)
                .where(StressReadingRow.user_id == user_id)
                .order_by(StressReadingRow.recorded_at.desc())
                .limit(limit)
            )
            return list((await session.execute(stmt)).scalars().all())


class SleepRepository(BaseRepository):
    """Append and read :class:`SleepSession` records, newest night first."""

    async def save(self, sleep: SleepSession) -> None:
        async with self._session("sleep.save") as session:
            session.add(SleepSessionRow(**_columns(sleep)))
            await session.commit()

    async def list_recent(self, user_id: str, limit: int = 7) -> list[SleepSession]:
        async with self._session("sleep.list_recent") as session:
            stmt = (
                select(SleepSessionRow)
                .where(SleepSessionRow.user_id == user_id)
                .order_by(SleepSessionRow.sleep_start.desc())
                .limit(limit)
            )
            rows = (await session.execute(stmt)).scalars().all()
        return [SleepSession.model_validate(r, from_attributes=True) for r in rows]


class ProgressRepository(BaseRepository):
    """Append-only MindGym completion log."""

    async def save(self, completion: ExerciseCompletion) -> None:
        async with self._session("progress.save") as session:
            session.add(ExerciseCompletionRow(**_columns(completion)))
            await session.commit()

    async def latest(self, user_id: str) -> ExerciseCompletion | None:
        async with self._session("progress.latest") as session:
            stmt = (
                select(ExerciseCompletionRow)
                .where(ExerciseCompletionRow.user_id == user_id)
                .order_by(ExerciseCompletionRow.completed_at.desc())
                .limit(1)
            )
            row = (await session.execute(stmt)).scalars().first()
        if row is None:
            return None
        return ExerciseCompletion.model_validate(row, from_attributes=True)

    async def count(self, user_id: str) -> int:
        async with self._session("progress.count") as session:
            stmt = (
                select(func.count())
                .select_from(ExerciseCompletionRow)
                .where(ExerciseCompletionRow.user_id == user_id)
            )
            return (await session.execute(stmt)).scalar() or 0


class SnapshotRepository(BaseRepository):
    """The single current :class:`WellnessSnapshot` per user."""

    async def get(self, user_id: str) -> WellnessSnapshot | None:
        async with self._session("snapshot.get") as session:
            row = await session.get(WellnessSnapshotRow, user_id)
        if row is None:
            return None
        return WellnessSnapshot.model_validate(row, from_attributes=True)

    async def upsert(self, snapshot: WellnessSnapshot) -> None:
        """Insert or overwrite the user's snapshot (last write wins)."""
        async with self._session("snapshot.upsert") as session:
            await session.merge(WellnessSnapshotRow(**_columns(snapshot)))
            await session.commit()


class ExerciseRepository(BaseRepository):
    """Read access to the MindGym exercise catalog."""

    async def list_all(self, exercise_type: ExerciseType | None = None) -> list[Exercise]:
        async with self._session("exercise.list") as session:
            stmt = select(ExerciseRow).order_by(
                ExerciseRow.difficulty_level, ExerciseRow.name
            )
            if exercise_type is not None:
                stmt = stmt.where(ExerciseRow.type == exercise_type.value)
            rows = (await session.execute(stmt)).scalars().all()
        return [Exercise.model_validate(r, from_attributes=True) for r in rows]

    async def get(self, exercise_id: str) -> Exercise | None:
        async with self._session("exercise.get") as session:
            row = await session.get(ExerciseRow, exercise_id)
        if row is None:
            return None
        return Exercise.model_validate(row, from_attributes=True)

    async def seed(self, exercises: Iterable[Exercise]) -> int:
        """Insert catalog exercises whose names are not present yet."""
        async with self._session("exercise.seed") as session:
            existing = set((await session.execute(select(ExerciseRow.name))).scalars())
            new_rows = [
                ExerciseRow(**_columns(e))
                for e in exercises
                if e.name not in existing
            ]
            session.add_all(new_rows)
            await session.commit()
        return len(new_rows)


class SleepTipRepository(BaseRepository):

    async def list_recent(self, user_id: str, limit: int = 3) -> list[SleepTip]:
        async with self._session("sleep_tip.list_recent") as session:
            stmt = (
                select(SleepTipRow)
                .where(SleepTipRow.user_id == user_id)
                .order_by(SleepTipRow.created_at.desc())
                .limit(limit)
            )
            rows = (await session.execute(stmt)).scalars().all()
        return [SleepTip.model_validate(r, from_attributes=True) for r in rows]

    async def save_batch(self, tips: list[SleepTip]) -> int:
        async with self._session("sleep_tip.save_batch") as session:
            session.add_all([SleepTipRow(**_columns(t)) for t in tips])
            await session.commit()
        return len(tips)


class RoutineRepository(BaseRepository):
    """Daily Flow routines, one per user per day."""

    async def get(self, user_id: str, routine_date: date) -> DailyRoutine | None:
        async with self._session("routine.get") as session:
            stmt = select(DailyRoutineRow).where(
                DailyRoutineRow.user_id == user_id,
                DailyRoutineRow.routine_date == routine_date,
            )
            row = (await session.execute(stmt)).scalars().first()
        if row is None:
            return None
        return DailyRoutine(
            user_id=row.user_id,
            routine_date=row.routine_date,
            tasks=json.loads(row.tasks_json),
            completed=row.completed,
        )

    async def save(self, routine: DailyRoutine) -> None:
        async with self._session("routine.save") as session:
            session.add(
                DailyRoutineRow(
                    user_id=routine.user_id,
                    routine_date=routine.routine_date,
                    tasks_json=json.dumps(routine.tasks),
                    completed=routine.completed,
                )
            )
            await session.commit()


class CircleRepository(BaseRepository):
    """CalmCircle groups, memberships and posts."""

    # ── Groups ────────────────────────────────────────────────

    async def list_groups(self) -> list[CircleGroup]:
        async with self._session("circle.list_groups") as session:
            stmt = select(CircleGroupRow).order_by(CircleGroupRow.name)
            rows = (await session.execute(stmt)).scalars().all()
        return [CircleGroup.model_validate(r, from_attributes=True) for r in rows]

    async def get_group(self, group_id: str) -> CircleGroup | None:
        async with self._session("circle.get_group") as session:
            row = await session.get(CircleGroupRow, group_id)
        if row is None:
            return None
        return CircleGroup.model_validate(row, from_attributes=True)

    async def seed_groups(self, groups: Iterable[CircleGroup]) -> int:
        async with self._session("circle.seed_groups") as session:
            existing = set((await session.execute(select(CircleGroupRow.name))).scalars())
            new_rows = [
                CircleGroupRow(**_columns(g))
                for g in groups
                if g.name not in existing
            ]
            session.add_all(new_rows)
            await session.commit()
        return len(new_rows)

    # ── Memberships ───────────────────────────────────────────

    async def memberships(self, user_id: str) -> list[str]:
        """Return the ids of the groups *user_id* belongs to."""
        async with self._session("circle.memberships") as session:
            stmt = select(CircleMembershipRow.group_id).where(
                CircleMembershipRow.user_id == user_id
            )
            return list((await session.execute(stmt)).scalars().all())

    async def is_member(self, user_id: str, group_id: str) -> bool:
        async with self._session("circle.is_member") as session:
            stmt = select(CircleMembershipRow.id).where(
                CircleMembershipRow.user_id == user_id,
                CircleMembershipRow.group_id == group_id,
            )
            return (await session.execute(stmt)).first() is not None

    async def join(self, user_id: str, group_id: str) -> None:
        """Add a membership and bump the group's member count atomically."""
        async with self._session("circle.join") as session:
            try:
                session.add(CircleMembershipRow(user_id=user_id, group_id=group_id))
                await session.execute(
                    update(CircleGroupRow)
                    .where(CircleGroupRow.id == group_id)
                    .values(member_count=CircleGroupRow.member_count + 1)
                )
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                raise AlreadyMemberError(group_id) from exc

    # ── Posts ─────────────────────────────────────────────────

    async def save_post(self, post: CirclePost) -> None:
        async with self._session("circle.save_post") as session:
            session.add(CirclePostRow(**_columns(post)))
            await session.commit()

    async def list_posts(self, group_id: str, limit: int = 20) -> list[CirclePost]:
        """Newest approved posts in a group."""
        async with self._session("circle.list_posts") as session:
            stmt = (
                select(CirclePostRow)
                .where(
                    CirclePostRow.group_id == group_id,
                    CirclePostRow.moderation_status == ModerationStatus.APPROVED.value,
                )
                .order_by(CirclePostRow.created_at.desc())
                .limit(limit)
            )
            rows = (await session.execute(stmt)).scalars().all()
        return [CirclePost.model_validate(r, from_attributes=True) for r in rows]
