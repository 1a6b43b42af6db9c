"""FastAPI application — wellness tracking API.

This module wires together all infrastructure:
- CORS, API key, request logging and error mapping middleware
- Database initialisation and catalog seeding
- Tracking service (mood, stress, MindGym, sleep, dashboard)
- CalmCircle community service
"""

from __future__ import annotations

import random
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from mincare.api.middleware import setup_middleware
from mincare.api.routes.circles import router as circles_router
from mincare.api.routes.dashboard import router as dashboard_router
from mincare.api.routes.mindgym import router as mindgym_router
from mincare.api.routes.mood import router as mood_router
from mincare.api.routes.sleep import router as sleep_router
from mincare.api.routes.stress import router as stress_router
from mincare.config import get_settings
from mincare.signals.insights import InsightGenerator
from mincare.storage.database import dispose_engine, init_db
from mincare.storage.seed import seed_catalog
from mincare.tracking.community import CommunityService
from mincare.tracking.service import TrackingService

logger = structlog.get_logger(__name__)

# ── Shared state (initialised in lifespan) ────────────────────

_tracking: TrackingService | None = None
_community: CommunityService | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle hooks."""
    global _tracking, _community

    settings = get_settings()

    # 1. Database
    await init_db()
    if settings.seed_catalog_on_startup:
        await seed_catalog()
    logger.info("server.db_ready")

    # 2. Services
    rng = random.Random(settings.insight_seed) if settings.insight_seed is not None else None
    _tracking = TrackingService(
        insight_generator=InsightGenerator(rng),
        sleep_window=settings.sleep_window_sessions,
        stress_window=settings.stress_window_readings,
        history_limit=settings.history_limit,
        tip_limit=settings.sleep_tip_limit,
    )
    _community = CommunityService(post_limit=settings.community_post_limit)

    logger.info("server.started", port=settings.api_port)

    yield  # ← application runs

    # Shutdown
    _tracking = None
    _community = None
    await dispose_engine()
    logger.info("server.stopped")


app = FastAPI(
    title="MinCare API",
    description="Personal wellness tracking: mood, stress, MindGym, sleep and community.",
    version="0.1.0",
    lifespan=lifespan,
)

# ── Middleware ────────────────────────────────────────────────
setup_middleware(app)

# ── Routers ───────────────────────────────────────────────────
app.include_router(mood_router)
app.include_router(stress_router)
app.include_router(mindgym_router)
app.include_router(sleep_router)
app.include_router(dashboard_router)
app.include_router(circles_router)


# ── Health ────────────────────────────────────────────────────

@app.get("/health", tags=["system"])
async def health():
    return {
        "status": "ok",
        "tracking_ready": _tracking is not None,
        "community_ready": _community is not None,
    }
