"""Half-up rounding shared by the aggregators.

Python's :func:`round` rounds half to even; dashboard averages round
half away from zero for positive values (7.25 -> 7.3, 4.5 -> 5).
"""

from __future__ import annotations

import math


def round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor
