"""Heart-rate to stress-tier classification."""

from __future__ import annotations

from typing import Iterable

from mincare.signals.rounding import round_half_up

# (exclusive upper bound in bpm, tier); anything at or above the last bound is 9.
_TIER_BREAKPOINTS: tuple[tuple[int, int], ...] = (
    (60, 2),
    (70, 3),
    (80, 5),
    (90, 7),
    (100, 8),
)
_CEILING_TIER = 9

INTERVENTION_THRESHOLD = 7

INTERVENTION_PROMPT = (
    "Stress detected! Take a moment for the Box Breathing exercise: "
    "Breathe in for 4, hold for 4, out for 4, hold for 4."
)


def classify_stress(heart_rate: float) -> int:
    """Map a heart-rate sample to a stress tier in ``{2, 3, 5, 7, 8, 9}``.

    Step function with no interpolation; a breakpoint value belongs to the
    higher tier (70 bpm -> 5).
    """
    for upper, tier in _TIER_BREAKPOINTS:
        if heart_rate < upper:
            return tier
    return _CEILING_TIER


def should_trigger_intervention(tier: int) -> bool:
    return tier >= INTERVENTION_THRESHOLD


def stress_label(tier: float) -> str:
    if tier <= 3:
        return "Low"
    if tier <= 6:
        return "Moderate"
    return "High"


def average_stress_tier(tiers: Iterable[int]) -> int:
    """Mean tier rounded half-up to an integer; ``0`` means no data."""
    values = list(tiers)
    if not values:
        return 0
    return int(round_half_up(sum(values) / len(values)))
