"""MindGym streak and fitness-level progression."""

from __future__ import annotations

from dataclasses import dataclass

MAX_FITNESS_LEVEL = 100
STARTING_FITNESS_LEVEL = 1  # level of a user with no completions yet


@dataclass(frozen=True)
class Progress:
    streak: int
    fitness_level: int


def advance_progress(current_streak: int, current_fitness_level: int) -> Progress:
    """Progress after one more completed exercise.

    The streak counts completions: it always increments and is never reset
    by a missed day.  Fitness level saturates at :data:`MAX_FITNESS_LEVEL`.
    """
    return Progress(
        streak=current_streak + 1,
        fitness_level=min(MAX_FITNESS_LEVEL, current_fitness_level + 1),
    )
