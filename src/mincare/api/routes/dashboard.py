"""Wellness dashboard routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from mincare.api.schemas import DailyFlowResponse, DashboardResponse
from mincare.signals.wellness import balance_report, quick_insights
from mincare.tracking.service import TrackingService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _service() -> TrackingService:
    from mincare.api.server import _tracking

    if _tracking is None:
        raise HTTPException(503, "Tracking service not ready.")
    return _tracking


@router.get("/{user_id}", response_model=DashboardResponse)
async def dashboard(user_id: str):
    """Recompute the wellness score and return it with today's coaching lines."""
    snapshot = await _service().refresh_wellness(user_id)
    return DashboardResponse(
        snapshot=snapshot,
        balance_report=balance_report(snapshot.score),
        quick_insights=quick_insights(snapshot),
    )


@router.get("/{user_id}/daily-flow", response_model=DailyFlowResponse)
async def daily_flow(user_id: str):
    routine = await _service().daily_flow(user_id)
    return DailyFlowResponse(
        routine_date=routine.routine_date,
        tasks=routine.tasks,
        completed=routine.completed,
    )
