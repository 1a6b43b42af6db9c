"""SleepPal routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from mincare.api.schemas import SleepOverviewResponse, SleepRequest
from mincare.models import SleepSession, SleepTip
from mincare.tracking.service import TrackingService

router = APIRouter(prefix="/sleep", tags=["sleep"])


def _service() -> TrackingService:
    from mincare.api.server import _tracking

    if _tracking is None:
        raise HTTPException(503, "Tracking service not ready.")
    return _tracking


@router.get("/{user_id}", response_model=SleepOverviewResponse)
async def sleep_overview(user_id: str):
    """Recent nights with their average duration and quality."""
    overview = await _service().sleep_overview(user_id)
    return SleepOverviewResponse(
        sessions=overview.sessions,
        avg_hours=overview.summary.avg_hours,
        avg_quality=overview.summary.avg_quality,
    )


@router.post("/{user_id}", status_code=201, response_model=SleepSession)
async def log_sleep(user_id: str, req: SleepRequest):
    return await _service().log_sleep(
        user_id,
        req.sleep_start,
        req.sleep_end,
        req.quality_score,
        bedtime_routine_followed=req.bedtime_routine_followed,
    )


@router.get("/{user_id}/tips", response_model=list[SleepTip])
async def sleep_tips(user_id: str):
    return await _service().sleep_tips(user_id)
