"""
Decision Analytics Module.

Pure, side-effect-free analytics over journaled decisions: tone, daily
mood, weekly summaries, highlights, release schedule and insights.
"""

from .models import (
    Category,
    DailyMood,
    Decision,
    Emotion,
    Polarity,
    Tone,
    Weekday,
)
from .validation import DecisionValidationError, validate_decision
from .tone import classify_tone
from .daily_mood import calculate_daily_mood
from .schedule import ScheduleState, calculate_schedule, window_bounds
from .weekly_summary import WeeklySummary, build_weekly_summary
from .highlights import WeeklyHighlight, extract_highlights
from .insight_rules import InsightRuleEngine, InsightRuleResult, generate_insights

__all__ = [
    "Category",
    "DailyMood",
    "Decision",
    "Emotion",
    "Polarity",
    "Tone",
    "Weekday",
    "DecisionValidationError",
    "validate_decision",
    "classify_tone",
    "calculate_daily_mood",
    "ScheduleState",
    "calculate_schedule",
    "window_bounds",
    "WeeklySummary",
    "build_weekly_summary",
    "WeeklyHighlight",
    "extract_highlights",
    "InsightRuleEngine",
    "InsightRuleResult",
    "generate_insights",
]
