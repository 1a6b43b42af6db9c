"""MindGym exercise catalog and progress routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query

from mincare.api.schemas import CompleteExerciseRequest, ProgressResponse
from mincare.models import Exercise, ExerciseCompletion, ExerciseType
from mincare.storage.repository import ExerciseRepository
from mincare.tracking.service import TrackingService

router = APIRouter(prefix="/mindgym", tags=["mindgym"])


def _service() -> TrackingService:
    from mincare.api.server import _tracking

    if _tracking is None:
        raise HTTPException(503, "Tracking service not ready.")
    return _tracking


@router.get("/exercises", response_model=list[Exercise])
async def list_exercises(
    type: ExerciseType | None = Query(None, description="Only exercises of this type"),
):
    return await ExerciseRepository().list_all(type)


@router.get("/{user_id}/progress", response_model=ProgressResponse)
async def get_progress(user_id: str):
    overview = await _service().progress_overview(user_id)
    return ProgressResponse(
        streak_count=overview.streak_count,
        fitness_level=overview.fitness_level,
        total_completed=overview.total_completed,
    )


@router.post("/{user_id}/complete", status_code=201, response_model=ExerciseCompletion)
async def complete_exercise(user_id: str, req: CompleteExerciseRequest):
    return await _service().complete_exercise(user_id, req.exercise_id, req.score)
