"""Shared Pydantic models used across the tracker."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field

# ── Enums ─────────────────────────────────────────────────────


class MoodCategory(str, Enum):
    """Moods offered by the mood journal."""
    HAPPY = "happy"
    SAD = "sad"
    ANXIOUS = "anxious"
    CALM = "calm"
    FRUSTRATED = "frustrated"
    TIRED = "tired"


class DataSource(str, Enum):
    """Where a heart-rate sample came from."""
    CAMERA = "camera"
    WATCH = "watch"
    MANUAL = "manual"
    SENSOR = "sensor"


class ExerciseType(str, Enum):
    FOCUS = "focus"
    MEDITATION = "meditation"
    BREATHING = "breathing"
    CHALLENGE = "challenge"


class TipType(str, Enum):
    ROUTINE = "routine"
    ENVIRONMENT = "environment"
    EXERCISE = "exercise"
    NUTRITION = "nutrition"
    TIMING = "timing"


class CircleTopic(str, Enum):
    STRESS_RELIEF = "stress-relief"
    SLEEP_IMPROVEMENT = "sleep-improvement"
    POSITIVE_THINKING = "positive-thinking"
    MINDFULNESS = "mindfulness"
    GENERAL = "general"


class ModerationStatus(str, Enum):
    APPROVED = "approved"
    PENDING = "pending"
    FLAGGED = "flagged"
    REMOVED = "removed"


def _new_id() -> str:
    return str(uuid.uuid4())


# ── Observations ──────────────────────────────────────────────


class MoodEntry(BaseModel):
    """A journal entry with its derived sentiment and coaching insight."""
    id: str = Field(default_factory=_new_id)
    user_id: str
    mood_type: MoodCategory
    entry_text: str = ""
    sentiment_score: float = Field(0.0, ge=-1.0, le=1.0)
    ai_insights: str = ""
    shared_to_community: bool = False
    created_at: datetime = Field(default_factory=datetime.utcnow)


class StressReading(BaseModel):
    """A heart-rate sample classified into a stress tier."""
    id: str = Field(default_factory=_new_id)
    user_id: str
    heart_rate: int = Field(..., ge=40, le=200)
    stress_level: int = Field(..., ge=1, le=10)
    data_source: DataSource = DataSource.MANUAL
    intervention_triggered: bool = False
    recorded_at: datetime = Field(default_factory=datetime.utcnow)


class SleepSession(BaseModel):
    """One night of sleep; ``duration_minutes`` is derived from the timestamps."""
    id: str = Field(default_factory=_new_id)
    user_id: str
    sleep_start: datetime
    sleep_end: datetime
    duration_minutes: int = Field(..., ge=0)
    quality_score: int = Field(..., ge=1, le=10)
    bedtime_routine_followed: bool = False


class ExerciseCompletion(BaseModel):
    """Append-only record of a finished MindGym exercise.

    ``streak_count`` and ``fitness_level`` are the progress values *after*
    this completion, not a reference to earlier records.
    """
    id: str = Field(default_factory=_new_id)
    user_id: str
    exercise_id: str
    score: int = Field(0, ge=0, le=100)
    streak_count: int = Field(1, ge=0)
    fitness_level: int = Field(1, ge=1, le=100)
    completed_at: datetime = Field(default_factory=datetime.utcnow)


class WellnessSnapshot(BaseModel):
    """The single current wellness aggregate for a user."""
    user_id: str
    score: int = Field(..., ge=0, le=100)
    label: str
    mood_count: int = 0
    fitness_level: int = 0
    avg_stress: int = 0
    avg_sleep_hours: float = 0.0
    streak_days: int = 0
    updated_at: datetime = Field(default_factory=datetime.utcnow)


# ── Catalog & community ───────────────────────────────────────


class Exercise(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str
    type: ExerciseType
    difficulty_level: int = Field(..., ge=1, le=10)
    description: str
    duration_seconds: int = 300
    premium_only: bool = False


class SleepTip(BaseModel):
    id: str = Field(default_factory=_new_id)
    user_id: str
    tip_text: str
    tip_type: TipType
    created_at: datetime = Field(default_factory=datetime.utcnow)


class CircleGroup(BaseModel):
    id: str = Field(default_factory=_new_id)
    name: str
    topic: CircleTopic
    description: str
    member_count: int = 0


class CirclePost(BaseModel):
    """A community post.  ``user_id`` is stored but never listed back."""
    id: str = Field(default_factory=_new_id)
    user_id: str
    group_id: str
    content: str = Field(..., min_length=1)
    moderation_status: ModerationStatus = ModerationStatus.APPROVED
    created_at: datetime = Field(default_factory=datetime.utcnow)


class DailyRoutine(BaseModel):
    user_id: str
    routine_date: date
    tasks: list[str] = Field(default_factory=list)
    completed: bool = False
