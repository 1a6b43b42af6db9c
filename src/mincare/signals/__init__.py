"""Wellness signals — small, deterministic, explainable heuristics.

Each module turns one kind of raw observation into an interpreted signal:

1. **Sentiment** (`sentiment.py`) — lexicon score in ``[-1, 1]`` for
   journal text.
2. **Stress** (`stress.py`) — heart rate to a stress tier, intervention
   threshold, tier labels and window averages.
3. **Insights** (`insights.py`) — mood-specific coaching text with an
   injectable random source.
4. **Sleep** (`sleep.py`) — session duration and window averages.
5. **Progress** (`progress.py`) — MindGym streak and fitness level.
6. **Wellness** (`wellness.py`) — five-bucket aggregate score, label and
   dashboard nudges.

Everything here is a pure function of its inputs, except insight selection,
which draws from the generator's random source.  No statistical models and
no external inference calls.
"""

from mincare.signals.insights import InsightGenerator, generate_insight
from mincare.signals.progress import Progress, advance_progress
from mincare.signals.sentiment import score_sentiment
from mincare.signals.sleep import SleepSummary, aggregate_sleep, sleep_duration_minutes
from mincare.signals.stress import (
    average_stress_tier,
    classify_stress,
    should_trigger_intervention,
    stress_label,
)
from mincare.signals.wellness import (
    build_snapshot,
    compute_wellness_score,
    wellness_label,
)

__all__ = [
    "InsightGenerator",
    "Progress",
    "SleepSummary",
    "advance_progress",
    "aggregate_sleep",
    "average_stress_tier",
    "build_snapshot",
    "classify_stress",
    "compute_wellness_score",
    "generate_insight",
    "score_sentiment",
    "should_trigger_intervention",
    "sleep_duration_minutes",
    "stress_label",
    "wellness_label",
]
