"""Qualitative highlights extracted from a weekly summary."""

import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Dict, Iterable, List, Optional

from .models import Category, DailyMood, Decision, Emotion, weekday_label
from .weekly_summary import WeeklySummary, group_by_date

logger = logging.getLogger(__name__)

TREND_POSITIVE = "predominantly positive"
TREND_NEGATIVE = "predominantly negative"
TREND_BALANCED = "balanced"


@dataclass(frozen=True)
class WeeklyHighlight:
    """Highlights of a week; any field may be None when the week has no signal for it."""

    strongest_positive_day: Optional[str]
    strongest_negative_day: Optional[str]
    most_frequent_category: Optional[Category]
    emotional_trend: str
    most_challenging_day_emotion: Optional[Emotion]

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "strongest_positive_day": self.strongest_positive_day,
            "strongest_negative_day": self.strongest_negative_day,
            "most_frequent_category": (
                self.most_frequent_category.value if self.most_frequent_category else None
            ),
            "emotional_trend": self.emotional_trend,
            "most_challenging_day_emotion": (
                self.most_challenging_day_emotion.value
                if self.most_challenging_day_emotion else None
            ),
        }


def first_day_with_mood(summary: WeeklySummary, mood: DailyMood) -> Optional[str]:
    """
    First day label carrying ``mood``.

    This is a representative day, not the strongest one by magnitude.
    """
    for day, day_mood in summary.daily_moods.items():
        if day_mood == mood:
            return day
    return None


def challenge_score(decisions: Iterable[Decision]) -> int:
    """Number of decisions that carry a negative emotion or were made at intensity >= 4."""
    return sum(1 for d in decisions if d.is_emotionally_negative or d.is_high_intensity)


def find_most_challenging_day(decisions: Iterable[Decision], tz: Optional[tzinfo] = None):
    """
    Date with the highest challenge score, earliest date on ties.

    Returns:
        Tuple of (date, decisions of that date), or None when no date scores above zero
    """
    best = None
    best_score = 0
    for day, day_decisions in group_by_date(decisions, tz).items():
        score = challenge_score(day_decisions)
        if score > best_score:
            best, best_score = (day, day_decisions), score
    return best


def most_frequent_emotion(decisions: List[Decision]) -> Optional[Emotion]:
    """Most frequent emotion, ties going to the first one seen in timestamp order."""
    counts: Dict[Emotion, int] = {}
    for decision in sorted(decisions, key=lambda d: d.timestamp):
        for emotion in sorted(decision.emotions, key=list(Emotion).index):
            counts[emotion] = counts.get(emotion, 0) + 1
    if not counts:
        return None
    return max(counts, key=counts.get)


def most_frequent_category(summary: WeeklySummary) -> Optional[Category]:
    if not summary.category_distribution:
        return None
    distribution = summary.category_distribution
    return max(distribution, key=distribution.get)


def emotional_trend(summary: WeeklySummary) -> str:
    positive_days = sum(1 for mood in summary.daily_moods.values() if mood == DailyMood.POSITIVE)
    negative_days = sum(1 for mood in summary.daily_moods.values() if mood == DailyMood.NEGATIVE)

    if positive_days > negative_days:
        return TREND_POSITIVE
    if negative_days > positive_days:
        return TREND_NEGATIVE
    return TREND_BALANCED


def extract_highlights(
    summary: WeeklySummary,
    decisions: Iterable[Decision],
    tz: Optional[tzinfo] = None,
) -> WeeklyHighlight:
    """
    Derive the highlights of a week.

    Args:
        summary: Summary built from ``decisions``
        decisions: The decisions of the same window
        tz: Zone used for calendar grouping (system local if None)
    """
    challenging = find_most_challenging_day(list(decisions), tz)

    if challenging is not None:
        day, day_decisions = challenging
        strongest_negative_day = weekday_label(day)
        challenging_emotion = most_frequent_emotion(day_decisions)
    else:
        strongest_negative_day = first_day_with_mood(summary, DailyMood.NEGATIVE)
        challenging_emotion = None

    highlight = WeeklyHighlight(
        strongest_positive_day=first_day_with_mood(summary, DailyMood.POSITIVE),
        strongest_negative_day=strongest_negative_day,
        most_frequent_category=most_frequent_category(summary),
        emotional_trend=emotional_trend(summary),
        most_challenging_day_emotion=challenging_emotion,
    )
    logger.debug(f"[HIGHLIGHTS] {highlight.to_dict()}")
    return highlight
