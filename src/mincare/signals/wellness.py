"""Wellness score aggregation and dashboard coaching text.

The score is a sum of five independent buckets clamped to ``[0, 100]``:

=================  ==============================================
Bucket             Contribution
=================  ==============================================
Mood activity      +20 when at least one mood entry exists
Exercise           +25 when fitness level is above zero
Stress             +20 for an average tier in (0, 5], +10 above 5
Sleep              +25 for 7–9 h average, +15 for any other data
Streak             +2 per streak day (uncapped before the clamp)
=================  ==============================================

Zero averages mean "no data" and contribute nothing.
"""

from __future__ import annotations

from mincare.models import WellnessSnapshot

MAX_SCORE = 100

MOOD_POINTS = 20
EXERCISE_POINTS = 25
LOW_STRESS_POINTS = 20
HIGH_STRESS_POINTS = 10
HEALTHY_SLEEP_POINTS = 25
OTHER_SLEEP_POINTS = 15
STREAK_POINTS_PER_DAY = 2

LOW_STRESS_CEILING = 5
HEALTHY_SLEEP_HOURS = (7.0, 9.0)

ELEVATED_STRESS_TIER = 7
STREAK_CELEBRATION_DAYS = 7


def _stress_points(avg_stress_tier: float) -> int:
    if avg_stress_tier <= 0:
        return 0
    if avg_stress_tier <= LOW_STRESS_CEILING:
        return LOW_STRESS_POINTS
    return HIGH_STRESS_POINTS


def _sleep_points(avg_sleep_hours: float) -> int:
    low, high = HEALTHY_SLEEP_HOURS
    if low <= avg_sleep_hours <= high:
        return HEALTHY_SLEEP_POINTS
    if avg_sleep_hours > 0:
        return OTHER_SLEEP_POINTS
    return 0


def compute_wellness_score(
    mood_entry_count: int,
    fitness_level: int,
    avg_stress_tier: float,
    avg_sleep_hours: float,
    streak_days: int,
) -> int:
    """Combine the five buckets into a score in ``[0, 100]``."""
    total = (
        (MOOD_POINTS if mood_entry_count > 0 else 0)
        + (EXERCISE_POINTS if fitness_level > 0 else 0)
        + _stress_points(avg_stress_tier)
        + _sleep_points(avg_sleep_hours)
        + STREAK_POINTS_PER_DAY * streak_days
    )
    return max(0, min(MAX_SCORE, total))


def wellness_label(score: int) -> str:
    if score >= 75:
        return "Excellent"
    if score >= 50:
        return "Good"
    if score >= 25:
        return "Fair"
    return "Needs Attention"


def build_snapshot(
    user_id: str,
    *,
    mood_count: int,
    fitness_level: int,
    avg_stress: int,
    avg_sleep_hours: float,
    streak_days: int,
) -> WellnessSnapshot:
    """Score the aggregates and wrap them in a :class:`WellnessSnapshot`."""
    score = compute_wellness_score(
        mood_count, fitness_level, avg_stress, avg_sleep_hours, streak_days
    )
    return WellnessSnapshot(
        user_id=user_id,
        score=score,
        label=wellness_label(score),
        mood_count=mood_count,
        fitness_level=fitness_level,
        avg_stress=avg_stress,
        avg_sleep_hours=avg_sleep_hours,
        streak_days=streak_days,
    )


def balance_report(score: int) -> str:
    if score >= 75:
        return "You're doing great! Your wellness routine is balanced and consistent."
    if score >= 50:
        return "Good progress! Consider adding more consistency to your routine."
    return "Let's work on building healthy habits. Start with one feature today!"


def quick_insights(snapshot: WellnessSnapshot) -> list[str]:
    """Short nudges shown under the score, in display order."""
    insights: list[str] = []
    if snapshot.mood_count == 0:
        insights.append("Start tracking your mood to unlock personalized insights!")
    if snapshot.avg_stress >= ELEVATED_STRESS_TIER:
        insights.append(
            "Your stress levels are elevated. Try a breathing exercise from MindGym."
        )
    if 0 < snapshot.avg_sleep_hours < HEALTHY_SLEEP_HOURS[0]:
        insights.append(
            f"You're averaging {snapshot.avg_sleep_hours:g}h of sleep. "
            "Aim for 7-9 hours for optimal wellness."
        )
    if snapshot.streak_days >= STREAK_CELEBRATION_DAYS:
        insights.append(
            f"Amazing! You've maintained a {snapshot.streak_days}-day streak. Keep it up!"
        )
    return insights
