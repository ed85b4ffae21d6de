"""
Unit tests for the decision analytics core.

These tests verify:
1. Tone classification of a single decision
2. Daily mood aggregation
3. Decision validation
4. Weekly summary building
5. Highlight extraction

Usage:
    pytest tests/test_decision_analytics.py -v
"""
import itertools
from datetime import date, timezone

import pytest

from decision_analytics import (
    Category,
    DailyMood,
    Decision,
    DecisionValidationError,
    Emotion,
    Tone,
    Weekday,
    build_weekly_summary,
    calculate_daily_mood,
    classify_tone,
    extract_highlights,
    validate_decision,
    window_bounds,
)
from decision_analytics.highlights import (
    TREND_BALANCED,
    TREND_NEGATIVE,
    TREND_POSITIVE,
    find_most_challenging_day,
    most_frequent_emotion,
)

from conftest import make_decision, ms

UTC = timezone.utc
MONDAY = date(2024, 1, 1)
TUESDAY = date(2024, 1, 2)
WEDNESDAY = date(2024, 1, 3)
THURSDAY = date(2024, 1, 4)


# ============================================================================
# Tone Classifier Tests
# ============================================================================


class TestToneClassifier:
    """Test the tone of a single decision."""

    def test_positive_low_intensity_is_calm(self):
        """All-positive emotions at intensity <= 3 are calm."""
        assert classify_tone([Emotion.JOYFUL], 3) == Tone.CALM
        assert classify_tone([Emotion.SECURE, Emotion.MOTIVATED], 1) == Tone.CALM

    def test_positive_high_intensity_is_neutral(self):
        """Positive emotions lived intensely are not calm."""
        assert classify_tone([Emotion.JOYFUL], 4) == Tone.NEUTRAL

    def test_negative_high_intensity_is_impulsive(self):
        """Any negative emotion at intensity >= 4 is impulsive."""
        assert classify_tone([Emotion.ANGRY], 4) == Tone.IMPULSIVE
        assert classify_tone([Emotion.FEAR], 5) == Tone.IMPULSIVE

    def test_mixed_emotions_high_intensity_is_impulsive(self):
        """A single negative emotion is enough for impulsive."""
        assert classify_tone([Emotion.JOYFUL, Emotion.FEAR], 5) == Tone.IMPULSIVE

    def test_mixed_emotions_low_intensity_is_neutral(self):
        """Mixed emotions at low intensity are neither calm nor impulsive."""
        assert classify_tone([Emotion.JOYFUL, Emotion.SAD], 2) == Tone.NEUTRAL

    def test_normal_is_neutral(self):
        """NORMAL is neither positive nor negative."""
        for intensity in range(1, 6):
            assert classify_tone([Emotion.NORMAL], intensity) == Tone.NEUTRAL

    def test_decision_tone_is_derived(self):
        """Decision computes its tone on construction."""
        decision = make_decision(MONDAY, Emotion.UNCOMFORTABLE, intensity=4)
        assert decision.tone == Tone.IMPULSIVE

    def test_tone_recomputed_on_edit(self):
        """Replacing intensity recomputes the tone."""
        from dataclasses import replace

        decision = make_decision(MONDAY, Emotion.SAD, intensity=5)
        edited = replace(decision, intensity=2)

        assert decision.tone == Tone.IMPULSIVE
        assert edited.tone == Tone.NEUTRAL


# ============================================================================
# Daily Mood Tests
# ============================================================================


class TestDailyMood:
    """Test daily mood aggregation."""

    def test_no_decisions_is_undefined(self):
        """An empty day has no mood."""
        assert calculate_daily_mood([]) == DailyMood.UNDEFINED

    def test_more_positive_decisions(self):
        decisions = [
            make_decision(MONDAY, Emotion.JOYFUL),
            make_decision(MONDAY, Emotion.SECURE),
            make_decision(MONDAY, Emotion.SAD),
        ]
        assert calculate_daily_mood(decisions) == DailyMood.POSITIVE

    def test_counts_decisions_not_intensity(self):
        """Three mild sad decisions outweigh two intense joyful ones."""
        decisions = [
            make_decision(MONDAY, Emotion.SAD, intensity=1),
            make_decision(MONDAY, Emotion.SAD, intensity=1),
            make_decision(MONDAY, Emotion.SAD, intensity=1),
            make_decision(MONDAY, Emotion.JOYFUL, intensity=5),
            make_decision(MONDAY, Emotion.JOYFUL, intensity=5),
        ]
        assert calculate_daily_mood(decisions) == DailyMood.NEGATIVE

    def test_tie_is_neutral(self):
        decisions = [
            make_decision(MONDAY, Emotion.JOYFUL),
            make_decision(MONDAY, Emotion.ANGRY),
        ]
        assert calculate_daily_mood(decisions) == DailyMood.NEUTRAL

    def test_zero_valence_decisions_do_not_count(self):
        """NORMAL and balanced mixed decisions do not tip the scale."""
        decisions = [
            make_decision(MONDAY, Emotion.NORMAL),
            make_decision(MONDAY, [Emotion.JOYFUL, Emotion.FEAR]),
        ]
        assert calculate_daily_mood(decisions) == DailyMood.NEUTRAL

    def test_order_does_not_matter(self):
        """The mood is invariant under permutation of the decisions."""
        decisions = [
            make_decision(MONDAY, Emotion.JOYFUL, hour=9),
            make_decision(MONDAY, Emotion.SAD, hour=10),
            make_decision(MONDAY, Emotion.FEAR, hour=11),
            make_decision(MONDAY, Emotion.NORMAL, hour=12),
        ]
        moods = {calculate_daily_mood(p) for p in itertools.permutations(decisions)}
        assert moods == {DailyMood.NEGATIVE}


# ============================================================================
# Validation Tests
# ============================================================================


class TestValidation:
    """Test decision invariants enforced at the boundary."""

    def test_valid_decision_is_normalized(self):
        """Text is stripped, values are parsed and duplicates dropped."""
        text, emotions, intensity, category = validate_decision(
            "  Took the job  ", ["joyful", Emotion.JOYFUL, "fear"], 3, "work_study"
        )
        assert text == "Took the job"
        assert emotions == (Emotion.JOYFUL, Emotion.FEAR)
        assert intensity == 3
        assert category == Category.WORK_STUDY

    def test_blank_text_rejected(self):
        with pytest.raises(DecisionValidationError):
            validate_decision("   ", [Emotion.JOYFUL], 3, Category.OTHER)

    def test_no_emotion_rejected(self):
        with pytest.raises(DecisionValidationError, match="at least one emotion"):
            validate_decision("text", [], 3, Category.OTHER)

    def test_more_than_two_emotions_rejected(self):
        with pytest.raises(DecisionValidationError, match="at most 2"):
            validate_decision(
                "text", [Emotion.JOYFUL, Emotion.SECURE, Emotion.MOTIVATED], 3, Category.OTHER
            )

    def test_normal_cannot_be_combined(self):
        with pytest.raises(DecisionValidationError, match="NORMAL"):
            validate_decision("text", [Emotion.NORMAL, Emotion.JOYFUL], 3, Category.OTHER)

    def test_unknown_emotion_rejected(self):
        with pytest.raises(DecisionValidationError, match="Unknown emotion"):
            validate_decision("text", ["bored"], 3, Category.OTHER)

    @pytest.mark.parametrize("intensity", [0, 6, -1, 2.5, "3", True])
    def test_invalid_intensity_rejected(self, intensity):
        """Intensity must be an int in 1..5."""
        with pytest.raises(DecisionValidationError):
            validate_decision("text", [Emotion.JOYFUL], intensity, Category.OTHER)

    def test_missing_category_rejected(self):
        with pytest.raises(DecisionValidationError, match="category"):
            validate_decision("text", [Emotion.JOYFUL], 3, None)

    def test_validation_error_is_value_error(self):
        """Callers catching ValueError also catch validation errors."""
        with pytest.raises(ValueError):
            Decision.create(ms(MONDAY), "text", [], 3, Category.OTHER)


# ============================================================================
# Model Tests
# ============================================================================


class TestModels:
    """Test enum helpers and decision serialization."""

    def test_emotion_polarity(self):
        assert Emotion.SURPRISED.is_positive
        assert Emotion.UNCOMFORTABLE.is_negative
        assert Emotion.NORMAL.valence == 0

    def test_growth_categories(self):
        growth = {c for c in Category if c.is_personal_growth}
        assert growth == {
            Category.HEALTH_WELLBEING,
            Category.RELATIONSHIPS_SOCIAL,
            Category.HABITS_GROWTH,
            Category.LEISURE,
        }

    def test_weekday_parse(self):
        assert Weekday.parse("sunday") == Weekday.SUNDAY
        assert Weekday.parse(0) == Weekday.MONDAY
        assert Weekday.parse(Weekday.FRIDAY) == Weekday.FRIDAY
        with pytest.raises(ValueError):
            Weekday.parse("someday")
        with pytest.raises(ValueError):
            Weekday.parse(7)

    def test_decision_to_dict(self):
        decision = make_decision(
            MONDAY, [Emotion.SECURE], intensity=2, category=Category.LEISURE, id=7
        )
        data = decision.to_dict()

        assert data["id"] == 7
        assert data["emotions"] == ["secure"]
        assert data["category"] == "leisure"
        assert data["tone"] == "calm"


# ============================================================================
# Weekly Summary Tests
# ============================================================================


class TestWeeklySummary:
    """Test the quantitative weekly summary."""

    def _week(self):
        return [
            make_decision(MONDAY, Emotion.JOYFUL, intensity=2, category=Category.LEISURE, hour=9),
            make_decision(MONDAY, Emotion.FEAR, intensity=5, category=Category.WORK_STUDY, hour=18),
            make_decision(TUESDAY, Emotion.SAD, intensity=2, category=Category.WORK_STUDY),
            make_decision(WEDNESDAY, Emotion.NORMAL, intensity=3, category=Category.OTHER),
        ]

    def test_empty_window(self):
        """No decisions gives zero percentages and empty maps."""
        start, end = window_bounds(MONDAY, date(2024, 1, 7), UTC)
        summary = build_weekly_summary([], start, end, UTC)

        assert summary.total_count == 0
        assert summary.calm_percentage == 0.0
        assert summary.impulsive_percentage == 0.0
        assert summary.neutral_percentage == 0.0
        assert summary.daily_moods == {}
        assert summary.emotion_distribution == {}
        assert summary.category_distribution == {}
        assert summary.category_emotion_matrix == {}

    def test_tone_percentages(self):
        summary = build_weekly_summary(self._week(), 0, 1, UTC)

        assert summary.total_count == 4
        assert summary.calm_percentage == pytest.approx(25.0)
        assert summary.impulsive_percentage == pytest.approx(25.0)
        assert summary.neutral_percentage == pytest.approx(50.0)

    def test_percentages_sum_to_100(self):
        decisions = [
            make_decision(MONDAY, Emotion.JOYFUL, intensity=1),
            make_decision(MONDAY, Emotion.ANGRY, intensity=5),
            make_decision(TUESDAY, Emotion.NORMAL),
        ]
        summary = build_weekly_summary(decisions, 0, 1, UTC)
        total = summary.calm_percentage + summary.impulsive_percentage + summary.neutral_percentage
        assert total == pytest.approx(100.0)

    def test_daily_moods_use_weekday_labels(self):
        """Days are labelled with weekday names in chronological order."""
        summary = build_weekly_summary(self._week(), 0, 1, UTC)

        assert list(summary.daily_moods) == ["Monday", "Tuesday", "Wednesday"]
        assert summary.daily_moods["Monday"] == DailyMood.NEUTRAL
        assert summary.daily_moods["Tuesday"] == DailyMood.NEGATIVE
        assert summary.daily_moods["Wednesday"] == DailyMood.NEUTRAL

    def test_distributions(self):
        summary = build_weekly_summary(self._week(), 0, 1, UTC)

        assert summary.category_distribution[Category.WORK_STUDY] == 2
        assert Category.HEALTH_WELLBEING not in summary.category_distribution
        assert len(summary.emotion_distribution) == len(Emotion)
        assert summary.emotion_distribution[Emotion.FEAR] == 1
        assert summary.emotion_distribution[Emotion.ANGRY] == 0
        assert summary.category_emotion_matrix[Category.WORK_STUDY][Emotion.SAD] == 1

    def test_decision_with_two_emotions_counts_for_both(self):
        decisions = [make_decision(MONDAY, [Emotion.JOYFUL, Emotion.FEAR])]
        summary = build_weekly_summary(decisions, 0, 1, UTC)

        assert summary.emotion_distribution[Emotion.JOYFUL] == 1
        assert summary.emotion_distribution[Emotion.FEAR] == 1

    def test_to_dict_uses_enum_values(self):
        summary = build_weekly_summary(self._week(), 10, 20, UTC)
        data = summary.to_dict()

        assert data["start"] == 10
        assert data["category_distribution"]["work_study"] == 2
        assert data["daily_moods"]["Tuesday"] == "negative"


# ============================================================================
# Highlight Tests
# ============================================================================


class TestHighlights:
    """Test qualitative weekly highlights."""

    def test_empty_week(self):
        summary = build_weekly_summary([], 0, 1, UTC)
        highlight = extract_highlights(summary, [], UTC)

        assert highlight.strongest_positive_day is None
        assert highlight.strongest_negative_day is None
        assert highlight.most_frequent_category is None
        assert highlight.emotional_trend == TREND_BALANCED
        assert highlight.most_challenging_day_emotion is None

    def test_positive_week(self):
        decisions = [
            make_decision(MONDAY, Emotion.JOYFUL, intensity=2, category=Category.LEISURE),
            make_decision(TUESDAY, Emotion.SECURE, intensity=1, category=Category.LEISURE),
            make_decision(WEDNESDAY, Emotion.MOTIVATED, intensity=2, category=Category.HABITS_GROWTH),
        ]
        summary = build_weekly_summary(decisions, 0, 1, UTC)
        highlight = extract_highlights(summary, decisions, UTC)

        assert highlight.strongest_positive_day == "Monday"
        assert highlight.strongest_negative_day is None
        assert highlight.most_frequent_category == Category.LEISURE
        assert highlight.emotional_trend == TREND_POSITIVE

    def test_most_challenging_day(self):
        """The day with most negative or intense decisions wins."""
        decisions = [
            make_decision(MONDAY, Emotion.SAD, intensity=2, hour=9),
            make_decision(TUESDAY, Emotion.FEAR, intensity=4, hour=9),
            make_decision(TUESDAY, Emotion.FEAR, intensity=3, hour=10),
            make_decision(TUESDAY, Emotion.JOYFUL, intensity=5, hour=11),
            make_decision(WEDNESDAY, Emotion.JOYFUL, intensity=2),
        ]
        summary = build_weekly_summary(decisions, 0, 1, UTC)
        highlight = extract_highlights(summary, decisions, UTC)

        assert highlight.strongest_negative_day == "Tuesday"
        assert highlight.most_challenging_day_emotion == Emotion.FEAR

    def test_challenging_day_tie_goes_to_earliest(self):
        decisions = [
            make_decision(WEDNESDAY, Emotion.ANGRY),
            make_decision(MONDAY, Emotion.SAD),
        ]
        day, _ = find_most_challenging_day(decisions, UTC)
        assert day == MONDAY

    def test_no_challenging_day_without_negative_or_intense(self):
        decisions = [make_decision(MONDAY, Emotion.JOYFUL, intensity=2)]
        assert find_most_challenging_day(decisions, UTC) is None

    def test_emotion_tie_goes_to_first_seen(self):
        """Ties are broken by the first emotion in timestamp order."""
        decisions = [
            make_decision(MONDAY, Emotion.ANGRY, hour=15),
            make_decision(MONDAY, Emotion.FEAR, hour=9),
        ]
        assert most_frequent_emotion(decisions) == Emotion.FEAR

    def test_negative_trend(self):
        decisions = [
            make_decision(MONDAY, Emotion.SAD),
            make_decision(TUESDAY, Emotion.ANGRY),
            make_decision(THURSDAY, Emotion.JOYFUL),
        ]
        summary = build_weekly_summary(decisions, 0, 1, UTC)
        highlight = extract_highlights(summary, decisions, UTC)

        assert highlight.emotional_trend == TREND_NEGATIVE
        assert highlight.strongest_positive_day == "Thursday"

    def test_to_dict(self):
        decisions = [make_decision(MONDAY, Emotion.FEAR, intensity=5, category=Category.FINANCES_SHOPPING)]
        summary = build_weekly_summary(decisions, 0, 1, UTC)
        data = extract_highlights(summary, decisions, UTC).to_dict()

        assert data["most_frequent_category"] == "finances_shopping"
        assert data["most_challenging_day_emotion"] == "fear"
        assert data["strongest_negative_day"] == "Monday"
