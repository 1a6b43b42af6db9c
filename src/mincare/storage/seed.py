"""Idempotent seeding of the built-in exercise and group catalogs."""

from __future__ import annotations

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mincare.catalog import default_exercises, default_groups
from mincare.storage.repository import CircleRepository, ExerciseRepository

logger = structlog.get_logger(__name__)


async def seed_catalog(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> dict[str, int]:
    """Insert any missing catalog rows and return how many were added."""
    exercises = await ExerciseRepository(session_factory).seed(default_exercises())
    groups = await CircleRepository(session_factory).seed_groups(default_groups())
    logger.info("storage.catalog_seeded", exercises=exercises, groups=groups)
    return {"exercises": exercises, "groups": groups}
