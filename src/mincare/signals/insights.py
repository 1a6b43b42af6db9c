"""Mood-specific coaching insights for journal entries."""

from __future__ import annotations

import random

import structlog

from mincare.models import MoodCategory

logger = structlog.get_logger(__name__)

INSIGHT_POOLS: dict[MoodCategory, tuple[str, ...]] = {
    MoodCategory.ANXIOUS: (
        "Try the 4-7-8 breathing technique to calm your nervous system.",
        "Consider a 5-minute meditation to ground yourself.",
        "Take a short walk outside to reset your mind.",
    ),
    MoodCategory.SAD: (
        "Reach out to a friend or loved one for connection.",
        "Practice self-compassion - it's okay to feel this way.",
        "Try gentle movement like yoga or stretching.",
    ),
    MoodCategory.FRUSTRATED: (
        "Take a brief break to reset before continuing.",
        "Journal about what's causing frustration to gain clarity.",
        "Try progressive muscle relaxation to release tension.",
    ),
    MoodCategory.TIRED: (
        "Consider your sleep schedule - are you getting 7-9 hours?",
        "A 10-minute power nap might help recharge.",
        "Review your evening routine for better rest tonight.",
    ),
    MoodCategory.HAPPY: (
        "Great! Capture this moment in your gratitude journal.",
        "Share your positivity with the CalmCircle community.",
        "Notice what contributed to this feeling.",
    ),
    MoodCategory.CALM: (
        "Wonderful! You're in a great state for meditation or reflection.",
        "This is an ideal time for creative work or planning.",
        "Consider what helped you reach this peaceful state.",
    ),
}

FALLBACK_INSIGHT = "Keep tracking your mood to identify patterns."

LOW_SENTIMENT_SUFFIX = "Your entry suggests you might benefit from extra self-care today."
HIGH_SENTIMENT_SUFFIX = "Your positive energy is wonderful to see!"

SENTIMENT_SUFFIX_THRESHOLD = 0.3


class InsightGenerator:
    """Pick a coaching message for a mood and colour it by sentiment.

    Selection within a mood's pool is uniform.  Pass a seeded
    :class:`random.Random` to make the choice repeatable.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def pool_for(self, mood: MoodCategory | str) -> tuple[str, ...]:
        try:
            return INSIGHT_POOLS[MoodCategory(mood)]
        except ValueError:
            logger.debug("insights.unknown_mood", mood=str(mood))
            return (FALLBACK_INSIGHT,)

    def generate(self, mood: MoodCategory | str, sentiment: float) -> str:
        message = self._rng.choice(self.pool_for(mood))
        if sentiment < -SENTIMENT_SUFFIX_THRESHOLD:
            return f"{message} {LOW_SENTIMENT_SUFFIX}"
        if sentiment > SENTIMENT_SUFFIX_THRESHOLD:
            return f"{message} {HIGH_SENTIMENT_SUFFIX}"
        return message


def generate_insight(
    mood: MoodCategory | str,
    sentiment: float,
    rng: random.Random | None = None,
) -> str:
    """Convenience wrapper around a throwaway :class:`InsightGenerator`."""
    return InsightGenerator(rng).generate(mood, sentiment)
