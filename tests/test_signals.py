"""Tests for the wellness signal functions."""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone

import pytest

from mincare.errors import InvalidObservationError
from mincare.models import MoodCategory, SleepSession, WellnessSnapshot
from mincare.signals import (
    InsightGenerator,
    advance_progress,
    aggregate_sleep,
    average_stress_tier,
    classify_stress,
    compute_wellness_score,
    score_sentiment,
    should_trigger_intervention,
    sleep_duration_minutes,
    stress_label,
    wellness_label,
)
from mincare.signals.insights import (
    FALLBACK_INSIGHT,
    HIGH_SENTIMENT_SUFFIX,
    INSIGHT_POOLS,
    LOW_SENTIMENT_SUFFIX,
)
from mincare.signals.wellness import balance_report, build_snapshot, quick_insights


def _night(minutes: int, quality: int = 7) -> SleepSession:
    start = datetime(2026, 10, 1, 22, 0)
    return SleepSession(
        user_id="U1",
        sleep_start=start,
        sleep_end=start + timedelta(minutes=minutes),
        duration_minutes=minutes,
        quality_score=quality,
    )


# ── Sentiment ────────────────────────────────────────────────


class TestSentiment:
    def test_empty_text_is_neutral(self):
        assert score_sentiment("") == 0

    def test_positive_text(self):
        assert score_sentiment("I am happy and love this") > 0

    def test_negative_text(self):
        assert score_sentiment("I am sad and angry") < 0

    def test_each_word_counts_once(self):
        assert score_sentiment("happy happy happy") == pytest.approx(0.1)

    def test_case_insensitive_substring_match(self):
        # "unhappy" still contains "happy": no negation handling.
        assert score_sentiment("UNHAPPY") == pytest.approx(0.1)
        assert score_sentiment("Feeling peaceful and joyful") == pytest.approx(0.2)

    def test_mixed_words_cancel(self):
        assert score_sentiment("good day but stressful") == 0
        assert score_sentiment("stressed and anxious but grateful") == pytest.approx(-0.1)

    def test_no_float_drift(self):
        assert score_sentiment("good great wonderful") == 0.3

    def test_always_bounded(self):
        texts = [
            "happy good great wonderful excellent love joy peace calm grateful",
            "sad bad terrible awful hate angry stress anxious worried pain",
            "nothing to see here",
        ]
        for text in texts:
            assert -1.0 <= score_sentiment(text) <= 1.0
        assert score_sentiment(texts[0]) == 1.0
        assert score_sentiment(texts[1]) == -1.0


# ── Stress ───────────────────────────────────────────────────


class TestStressClassifier:
    @pytest.mark.parametrize(
        ("low", "high", "tier"),
        [(40, 59, 2), (60, 69, 3), (70, 79, 5), (80, 89, 7), (90, 99, 8), (100, 200, 9)],
    )
    def test_buckets(self, low, high, tier):
        for bpm in range(low, high + 1):
            assert classify_stress(bpm) == tier

    def test_boundaries_belong_to_higher_bucket(self):
        assert [classify_stress(b) for b in (60, 70, 80, 90, 100)] == [3, 5, 7, 8, 9]

    def test_out_of_range_uses_floor_and_ceiling(self):
        assert classify_stress(0) == 2
        assert classify_stress(250) == 9

    def test_intervention_threshold(self):
        assert [should_trigger_intervention(t) for t in (2, 3, 5, 6)] == [False] * 4
        assert all(should_trigger_intervention(t) for t in (7, 8, 9, 10))

    def test_labels(self):
        assert stress_label(2) == "Low"
        assert stress_label(5) == "Moderate"
        assert stress_label(7) == "High"

    def test_average_rounds_half_up(self):
        assert average_stress_tier([]) == 0
        assert average_stress_tier([4, 5]) == 5
        assert average_stress_tier([2, 3, 3]) == 3
        assert average_stress_tier([2, 2, 3]) == 2


# ── Insights ─────────────────────────────────────────────────


class TestInsightGenerator:
    def test_message_comes_from_mood_pool(self, seeded_insights):
        message = seeded_insights.generate(MoodCategory.ANXIOUS, 0.0)
        assert message in INSIGHT_POOLS[MoodCategory.ANXIOUS]

    def test_accepts_plain_mood_strings(self, seeded_insights):
        assert seeded_insights.generate("calm", 0.0) in INSIGHT_POOLS[MoodCategory.CALM]

    def test_seeded_generators_agree(self):
        a = InsightGenerator(random.Random(3))
        b = InsightGenerator(random.Random(3))
        moods = list(MoodCategory) * 3
        assert [a.generate(m, 0) for m in moods] == [b.generate(m, 0) for m in moods]

    def test_selection_covers_pool(self):
        generator = InsightGenerator(random.Random(0))
        seen = {generator.generate(MoodCategory.TIRED, 0) for _ in range(200)}
        assert seen == set(INSIGHT_POOLS[MoodCategory.TIRED])

    def test_low_sentiment_suffix(self, seeded_insights):
        message = seeded_insights.generate(MoodCategory.SAD, -0.4)
        assert message.endswith(LOW_SENTIMENT_SUFFIX)

    def test_high_sentiment_suffix(self, seeded_insights):
        message = seeded_insights.generate(MoodCategory.HAPPY, 0.5)
        assert message.endswith(HIGH_SENTIMENT_SUFFIX)

    def test_threshold_values_get_no_suffix(self, seeded_insights):
        for sentiment in (-0.3, 0.0, 0.3):
            message = seeded_insights.generate(MoodCategory.CALM, sentiment)
            assert message in INSIGHT_POOLS[MoodCategory.CALM]

    def test_unknown_mood_falls_back(self, seeded_insights):
        assert seeded_insights.generate("bored", 0.0) == FALLBACK_INSIGHT
        assert seeded_insights.generate("bored", 0.9) == (
            f"{FALLBACK_INSIGHT} {HIGH_SENTIMENT_SUFFIX}"
        )


# ── Sleep ────────────────────────────────────────────────────


class TestSleepAggregator:
    def test_empty_history(self):
        summary = aggregate_sleep([])
        assert (summary.avg_hours, summary.avg_quality) == (0, 0)
        assert summary.has_data is False

    def test_three_nights(self):
        summary = aggregate_sleep([_night(420, 7), _night(480, 8), _night(450, 8)])
        assert summary.avg_hours == round((420 + 480 + 450) / 3 / 60, 1)
        assert summary.avg_quality == 7.7

    def test_rounds_half_up(self):
        # 435 minutes is exactly 7.25 hours.
        assert aggregate_sleep([_night(435)]).avg_hours == 7.3

    def test_only_most_recent_window_counts(self):
        nights = [_night(480)] * 7 + [_night(60)]
        assert aggregate_sleep(nights).avg_hours == 8.0
        assert aggregate_sleep(nights, window=8).avg_hours == 7.1


class TestSleepDuration:
    def test_overnight(self):
        start = datetime(2026, 10, 1, 22, 0)
        assert sleep_duration_minutes(start, start + timedelta(hours=8, minutes=30)) == 510

    def test_partial_minutes_are_dropped(self):
        start = datetime(2026, 10, 1, 22, 0)
        assert sleep_duration_minutes(start, start + timedelta(seconds=119)) == 1

    def test_zero_length_is_allowed(self):
        start = datetime(2026, 10, 1, 22, 0)
        assert sleep_duration_minutes(start, start) == 0

    def test_end_before_start_is_rejected(self):
        start = datetime(2026, 10, 2, 6, 0)
        with pytest.raises(InvalidObservationError) as info:
            sleep_duration_minutes(start, start - timedelta(hours=8))
        assert info.value.code == "INVALID_OBSERVATION"

    def test_aware_and_naive_compare_as_utc(self):
        start = datetime(2026, 10, 1, 22, 0, tzinfo=timezone.utc)
        end = datetime(2026, 10, 2, 6, 0)
        assert sleep_duration_minutes(start, end) == 480


# ── Progress ─────────────────────────────────────────────────


class TestProgressTracker:
    def test_first_completion(self):
        progress = advance_progress(0, 0)
        assert (progress.streak, progress.fitness_level) == (1, 1)

    def test_level_ceiling(self):
        progress = advance_progress(3, 99)
        assert (progress.streak, progress.fitness_level) == (4, 100)
        assert advance_progress(4, 100).fitness_level == 100

    def test_streak_always_increments(self):
        assert advance_progress(41, 100).streak == 42


# ── Wellness ─────────────────────────────────────────────────


class TestWellnessScore:
    def test_reference_example(self):
        score = compute_wellness_score(5, 10, 4, 8, 3)
        assert score == 96
        assert wellness_label(score) == "Excellent"

    def test_streak_alone_clamps_to_100(self):
        assert compute_wellness_score(0, 0, 0, 0, 50) == 100
        assert compute_wellness_score(5, 10, 4, 8, 50) == 100

    def test_no_data_scores_zero(self):
        assert compute_wellness_score(0, 0, 0, 0, 0) == 0
        assert wellness_label(0) == "Needs Attention"

    @pytest.mark.parametrize(("avg_stress", "points"), [(0, 0), (1, 20), (5, 20), (6, 10), (9, 10)])
    def test_stress_bucket(self, avg_stress, points):
        assert compute_wellness_score(0, 0, avg_stress, 0, 0) == points

    @pytest.mark.parametrize(
        ("hours", "points"),
        [(0, 0), (5.5, 15), (6.9, 15), (7.0, 25), (9.0, 25), (9.1, 15)],
    )
    def test_sleep_bucket(self, hours, points):
        assert compute_wellness_score(0, 0, 0, hours, 0) == points

    @pytest.mark.parametrize(
        ("score", "label"),
        [(100, "Excellent"), (75, "Excellent"), (74, "Good"), (50, "Good"),
         (49, "Fair"), (25, "Fair"), (24, "Needs Attention")],
    )
    def test_labels(self, score, label):
        assert wellness_label(score) == label

    def test_recompute_is_idempotent(self):
        args = (2, 7, 6, 6.5, 4)
        assert compute_wellness_score(*args) == compute_wellness_score(*args)
        first = build_snapshot("U1", mood_count=2, fitness_level=7, avg_stress=6,
                               avg_sleep_hours=6.5, streak_days=4)
        second = build_snapshot("U1", mood_count=2, fitness_level=7, avg_stress=6,
                                avg_sleep_hours=6.5, streak_days=4)
        assert first.model_dump(exclude={"updated_at"}) == second.model_dump(exclude={"updated_at"})


class TestDashboardCoaching:
    def test_balance_report_tiers(self):
        assert balance_report(80).startswith("You're doing great")
        assert balance_report(60).startswith("Good progress")
        assert balance_report(10).startswith("Let's work on")

    def test_quick_insights_for_new_user(self):
        snapshot = WellnessSnapshot(user_id="U1", score=0, label="Needs Attention")
        assert quick_insights(snapshot) == [
            "Start tracking your mood to unlock personalized insights!"
        ]

    def test_quick_insights_flags(self):
        snapshot = WellnessSnapshot(
            user_id="U1", score=70, label="Good", mood_count=3,
            avg_stress=8, avg_sleep_hours=6.5, streak_days=9,
        )
        insights = quick_insights(snapshot)
        assert len(insights) == 3
        assert "stress levels are elevated" in insights[0]
        assert "averaging 6.5h of sleep" in insights[1]
        assert "9-day streak" in insights[2]
