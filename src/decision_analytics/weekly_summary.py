"""
Weekly Summary Builder.

Folds the decisions of a multi-day window into aggregate statistics:
tone percentages, a mood per day and category/emotion distributions.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import tzinfo
from typing import Dict, Iterable, List, Optional

from .daily_mood import calculate_daily_mood
from .models import Category, DailyMood, Decision, Emotion, Tone, local_date, weekday_label

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WeeklySummary:
    """Aggregate statistics for one window of decisions."""

    start: int  # epoch ms, as supplied by the caller
    end: int
    total_count: int
    calm_percentage: float
    impulsive_percentage: float
    neutral_percentage: float
    daily_moods: Dict[str, DailyMood] = field(default_factory=dict)
    category_distribution: Dict[Category, int] = field(default_factory=dict)
    emotion_distribution: Dict[Emotion, int] = field(default_factory=dict)
    category_emotion_matrix: Dict[Category, Dict[Emotion, int]] = field(default_factory=dict)
    tone_emotion_distribution: Dict[Tone, Dict[Emotion, int]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "start": self.start,
            "end": self.end,
            "total_count": self.total_count,
            "calm_percentage": self.calm_percentage,
            "impulsive_percentage": self.impulsive_percentage,
            "neutral_percentage": self.neutral_percentage,
            "daily_moods": {day: mood.value for day, mood in self.daily_moods.items()},
            "category_distribution": {
                category.value: count for category, count in self.category_distribution.items()
            },
            "emotion_distribution": {
                emotion.value: count for emotion, count in self.emotion_distribution.items()
            },
            "category_emotion_matrix": {
                category.value: {emotion.value: count for emotion, count in row.items()}
                for category, row in self.category_emotion_matrix.items()
            },
            "tone_emotion_distribution": {
                tone.value: {emotion.value: count for emotion, count in row.items()}
                for tone, row in self.tone_emotion_distribution.items()
            },
        }


def percentage(count: int, total: int) -> float:
    """``100 * count / total``, or 0.0 when there is nothing to divide."""
    if total == 0:
        return 0.0
    return count / total * 100.0


def _emotion_counts(decisions: List[Decision]) -> Dict[Emotion, int]:
    return {
        emotion: sum(1 for d in decisions if emotion in d.emotions)
        for emotion in Emotion
    }


def group_by_date(decisions: Iterable[Decision], tz: Optional[tzinfo] = None) -> Dict:
    """Group decisions by local calendar date, dates in chronological order."""
    groups: Dict = {}
    for decision in decisions:
        groups.setdefault(local_date(decision.timestamp, tz), []).append(decision)
    return {day: groups[day] for day in sorted(groups)}


def build_daily_moods(
    decisions: List[Decision],
    tz: Optional[tzinfo] = None,
) -> Dict[str, DailyMood]:
    """
    Mood per weekday label, in chronological order.

    Windows longer than a week repeat labels; a later date then replaces the
    earlier value while keeping its position.
    """
    return {
        weekday_label(day): calculate_daily_mood(day_decisions)
        for day, day_decisions in group_by_date(decisions, tz).items()
    }


def build_weekly_summary(
    decisions: Iterable[Decision],
    start: int,
    end: int,
    tz: Optional[tzinfo] = None,
) -> WeeklySummary:
    """
    Build the summary of a window of decisions.

    Args:
        decisions: Decisions of the window (not re-filtered against start/end)
        start: Window start, epoch ms, used as a label
        end: Window end, epoch ms, used as a label
        tz: Zone used for calendar grouping (system local if None)

    Returns:
        WeeklySummary; all percentages are 0 and maps empty with no decisions
    """
    decisions = list(decisions)
    total = len(decisions)
    tones = Counter(d.tone for d in decisions)

    category_distribution: Dict[Category, int] = {}
    for decision in decisions:
        category_distribution[decision.category] = category_distribution.get(decision.category, 0) + 1

    if decisions:
        emotion_distribution = _emotion_counts(decisions)
        by_category: Dict[Category, List[Decision]] = {}
        for decision in decisions:
            by_category.setdefault(decision.category, []).append(decision)
        category_emotion_matrix = {
            category: _emotion_counts(items) for category, items in by_category.items()
        }
        tone_emotion_distribution = {
            tone: _emotion_counts([d for d in decisions if d.tone == tone]) for tone in Tone
        }
    else:
        emotion_distribution = {}
        category_emotion_matrix = {}
        tone_emotion_distribution = {}

    summary = WeeklySummary(
        start=start,
        end=end,
        total_count=total,
        calm_percentage=percentage(tones[Tone.CALM], total),
        impulsive_percentage=percentage(tones[Tone.IMPULSIVE], total),
        neutral_percentage=percentage(tones[Tone.NEUTRAL], total),
        daily_moods=build_daily_moods(decisions, tz),
        category_distribution=category_distribution,
        emotion_distribution=emotion_distribution,
        category_emotion_matrix=category_emotion_matrix,
        tone_emotion_distribution=tone_emotion_distribution,
    )

    logger.debug(
        f"[SUMMARY] Built summary: total={total}, calm={summary.calm_percentage:.1f}%, "
        f"impulsive={summary.impulsive_percentage:.1f}%, days={len(summary.daily_moods)}"
    )
    return summary
