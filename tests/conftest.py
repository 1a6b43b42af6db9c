"""Shared pytest fixtures."""

from __future__ import annotations

import os
import random
import tempfile
from pathlib import Path

# Point the application at a throwaway database before anything reads settings.
_TEST_DB_DIR = Path(tempfile.mkdtemp(prefix="mincare-tests-"))
os.environ.setdefault("MINCARE_DATABASE_URL", f"sqlite+aiosqlite:///{_TEST_DB_DIR / 'api.db'}")
os.environ.setdefault("MINCARE_INSIGHT_SEED", "7")

import pytest  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402

from mincare.models import Exercise  # noqa: E402
from mincare.signals.insights import InsightGenerator  # noqa: E402
from mincare.storage.database import init_db  # noqa: E402
from mincare.storage.repository import ExerciseRepository  # noqa: E402
from mincare.storage.seed import seed_catalog  # noqa: E402


@pytest.fixture
async def session_factory(tmp_path: Path):
    """Session factory bound to a fresh SQLite file for one test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'mincare.db'}")
    await init_db(engine)
    yield async_sessionmaker(engine, expire_on_commit=False)
    await engine.dispose()


@pytest.fixture
async def exercises(session_factory) -> list[Exercise]:
    await seed_catalog(session_factory)
    return await ExerciseRepository(session_factory).list_all()


@pytest.fixture
def seeded_insights() -> InsightGenerator:
    return InsightGenerator(random.Random(42))
