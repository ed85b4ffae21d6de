"""Daily mood aggregation over the decisions of one calendar date."""

from typing import Iterable

from .models import DailyMood, Decision


def decision_valence(decision: Decision) -> int:
    """Sum of the valences of a decision's emotions."""
    return sum(emotion.valence for emotion in decision.emotions)


def calculate_daily_mood(decisions: Iterable[Decision]) -> DailyMood:
    """
    Reduce one day's decisions to a single mood.

    The caller groups decisions by date. A decision counts as positive when
    its valence is above zero and negative when below; zero-valence
    decisions do not count for either side.

    Returns:
        UNDEFINED with no decisions, POSITIVE or NEGATIVE for the side with
        more decisions, NEUTRAL on a tie
    """
    positive = 0
    negative = 0
    seen = 0

    for decision in decisions:
        seen += 1
        valence = decision_valence(decision)
        if valence > 0:
            positive += 1
        elif valence < 0:
            negative += 1

    if seen == 0:
        return DailyMood.UNDEFINED
    if positive > negative:
        return DailyMood.POSITIVE
    if negative > positive:
        return DailyMood.NEGATIVE
    return DailyMood.NEUTRAL
