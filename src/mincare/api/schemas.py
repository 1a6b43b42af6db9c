"""Request / response models shared across API route modules."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

from mincare.models import (
    CirclePost,
    DataSource,
    MoodCategory,
    SleepSession,
    StressReading,
    WellnessSnapshot,
)


# ── Requests ──────────────────────────────────────────────────


class MoodRequest(BaseModel):
    mood_type: MoodCategory
    entry_text: str = Field("", max_length=5000)
    shared_to_community: bool = False


class StressRequest(BaseModel):
    heart_rate: int = Field(..., ge=40, le=200)  # bpm
    data_source: DataSource = DataSource.MANUAL


class CompleteExerciseRequest(BaseModel):
    exercise_id: str
    score: int = Field(0, ge=0, le=100)


class SleepRequest(BaseModel):
    sleep_start: datetime
    sleep_end: datetime
    quality_score: int = Field(7, ge=1, le=10)
    bedtime_routine_followed: bool = False


class PostRequest(BaseModel):
    user_id: str
    content: str = Field(..., max_length=2000)

    @field_validator("content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("content must not be blank")
        return value


class JoinRequest(BaseModel):
    user_id: str


# ── Responses ─────────────────────────────────────────────────


class StressResponse(BaseModel):
    reading: StressReading
    label: str
    intervention_prompt: str | None = None


class StressOverviewResponse(BaseModel):
    readings: list[StressReading]
    avg_stress: int
    label: str | None = None  # None when there is no data


class SleepOverviewResponse(BaseModel):
    sessions: list[SleepSession]
    avg_hours: float
    avg_quality: float


class ProgressResponse(BaseModel):
    streak_count: int
    fitness_level: int
    total_completed: int


class DashboardResponse(BaseModel):
    snapshot: WellnessSnapshot
    balance_report: str
    quick_insights: list[str]


class DailyFlowResponse(BaseModel):
    routine_date: date
    tasks: list[str]
    completed: bool


class PostResponse(BaseModel):
    """A post as shown to group members; the author stays anonymous."""
    id: str
    group_id: str
    content: str
    moderation_status: str
    created_at: datetime

    @classmethod
    def from_post(cls, post: CirclePost) -> PostResponse:
        return cls(
            id=post.id,
            group_id=post.group_id,
            content=post.content,
            moderation_status=post.moderation_status.value,
            created_at=post.created_at,
        )
