"""StressSnap routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from mincare.api.schemas import StressOverviewResponse, StressRequest, StressResponse
from mincare.signals.stress import INTERVENTION_PROMPT, stress_label
from mincare.tracking.service import TrackingService

router = APIRouter(prefix="/stress", tags=["stress"])


def _service() -> TrackingService:
    from mincare.api.server import _tracking

    if _tracking is None:
        raise HTTPException(503, "Tracking service not ready.")
    return _tracking


@router.get("/{user_id}", response_model=StressOverviewResponse)
async def stress_overview(user_id: str):
    overview = await _service().stress_overview(user_id)
    return StressOverviewResponse(
        readings=overview.readings,
        avg_stress=overview.avg_stress,
        label=stress_label(overview.avg_stress) if overview.avg_stress else None,
    )


@router.post("/{user_id}", status_code=201, response_model=StressResponse)
async def record_stress(user_id: str, req: StressRequest):
    """Classify a heart-rate sample and suggest a breathing break when stressed."""
    reading = await _service().record_stress(user_id, req.heart_rate, req.data_source)
    return StressResponse(
        reading=reading,
        label=stress_label(reading.stress_level),
        intervention_prompt=INTERVENTION_PROMPT if reading.intervention_triggered else None,
    )
