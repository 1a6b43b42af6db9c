"""Mood journal routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from mincare.api.schemas import MoodRequest
from mincare.models import MoodEntry
from mincare.tracking.service import TrackingService

router = APIRouter(prefix="/mood", tags=["mood"])


def _service() -> TrackingService:
    from mincare.api.server import _tracking

    if _tracking is None:
        raise HTTPException(503, "Tracking service not ready.")
    return _tracking


@router.get("/{user_id}", response_model=list[MoodEntry])
async def list_mood_entries(user_id: str):
    """Most recent journal entries, newest first."""
    return await _service().recent_moods(user_id)


@router.post("/{user_id}", status_code=201, response_model=MoodEntry)
async def create_mood_entry(user_id: str, req: MoodRequest):
    """Save an entry; sentiment and insight are derived from the text."""
    return await _service().record_mood(
        user_id,
        req.mood_type,
        req.entry_text,
        shared_to_community=req.shared_to_community,
    )
