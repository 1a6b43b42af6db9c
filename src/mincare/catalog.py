"""Built-in content: MindGym exercises, CalmCircle groups, tips and Daily Flow tasks."""

from __future__ import annotations

from mincare.models import CircleGroup, CircleTopic, Exercise, ExerciseType, TipType


def default_exercises() -> list[Exercise]:
    """Return the starter MindGym catalog, easiest first within each type."""
    return [
        Exercise(
            name="Box Breathing",
            type=ExerciseType.BREATHING,
            difficulty_level=1,
            description=(
                "Breathe in for 4, hold for 4, out for 4, hold for 4. "
                "Perfect for quick stress relief."
            ),
            duration_seconds=240,
        ),
        Exercise(
            name="Focus Sprint",
            type=ExerciseType.FOCUS,
            difficulty_level=3,
            description=(
                "Concentrate on a single task without distraction. "
                "Build your attention muscle."
            ),
            duration_seconds=300,
        ),
        Exercise(
            name="Body Scan Meditation",
            type=ExerciseType.MEDITATION,
            difficulty_level=2,
            description="Progressive relaxation through mindful body awareness.",
            duration_seconds=600,
        ),
        Exercise(
            name="Memory Challenge",
            type=ExerciseType.CHALLENGE,
            difficulty_level=5,
            description=(
                "Test and improve your working memory with pattern recognition."
            ),
            duration_seconds=180,
        ),
        Exercise(
            name="4-7-8 Breathing",
            type=ExerciseType.BREATHING,
            difficulty_level=2,
            description=(
                "Inhale for 4, hold for 7, exhale for 8. "
                "Ancient relaxation technique."
            ),
            duration_seconds=300,
        ),
        Exercise(
            name="Mindful Minutes",
            type=ExerciseType.MEDITATION,
            difficulty_level=1,
            description="Simple guided meditation for beginners.",
            duration_seconds=300,
        ),
        Exercise(
            name="Concentration Builder",
            type=ExerciseType.FOCUS,
            difficulty_level=4,
            description="Advanced focus exercises with increasing difficulty.",
            duration_seconds=420,
            premium_only=True,
        ),
        Exercise(
            name="Deep Meditation",
            type=ExerciseType.MEDITATION,
            difficulty_level=6,
            description=(
                "Extended meditation session for experienced practitioners."
            ),
            duration_seconds=1200,
            premium_only=True,
        ),
    ]


def default_groups() -> list[CircleGroup]:
    """Return the CalmCircle groups every installation starts with."""
    return [
        CircleGroup(
            name="Stress Warriors",
            topic=CircleTopic.STRESS_RELIEF,
            description="Share techniques and support for managing daily stress",
        ),
        CircleGroup(
            name="Sleep Better Club",
            topic=CircleTopic.SLEEP_IMPROVEMENT,
            description="Tips, tricks, and encouragement for better sleep habits",
        ),
        CircleGroup(
            name="Positive Vibes",
            topic=CircleTopic.POSITIVE_THINKING,
            description="Cultivate optimism and share uplifting experiences",
        ),
        CircleGroup(
            name="Mindful Living",
            topic=CircleTopic.MINDFULNESS,
            description="Practice presence and awareness in everyday life",
        ),
        CircleGroup(
            name="Wellness Journey",
            topic=CircleTopic.GENERAL,
            description="General wellness discussion and community support",
        ),
    ]


def default_sleep_tips() -> list[tuple[str, TipType]]:
    """Starter coaching tips handed to users who have none yet."""
    return [
        (
            "Avoid screens 1 hour before bedtime for better melatonin production",
            TipType.ROUTINE,
        ),
        ("Keep your bedroom cool (60-67°F) for optimal sleep", TipType.ENVIRONMENT),
        ("Try gentle stretching or yoga 30 minutes before bed", TipType.EXERCISE),
    ]


def default_daily_tasks() -> list[str]:
    return [
        "Morning mood check-in",
        "Complete one MindGym exercise",
        "Check stress levels",
        "Evening reflection",
    ]
