"""Weekly review orchestration.

Wires the decision store and preferences into the pure analytics core:
fetch a window of decisions, then build the summary, highlights and
insights from that single list.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Callable, List, Optional

from decision_analytics import (
    InsightRuleEngine,
    InsightRuleResult,
    ScheduleState,
    WeeklyHighlight,
    WeeklySummary,
    build_weekly_summary,
    calculate_schedule,
    extract_highlights,
    window_bounds,
)
from decision_analytics.models import local_date

from ..database import DecisionStore, PreferencesStore

logger = logging.getLogger(__name__)

FALLBACK_INSIGHT = InsightRuleResult(
    title="Explore more",
    description=(
        "The more decisions you record, the more precise your emotional map becomes. "
        "Add a couple of decisions every day to unlock personalised insights."
    ),
    tag="Getting started",
)


@dataclass(frozen=True)
class WindowReport:
    """Everything derived from one window of decisions."""

    window_start: date
    window_end: date
    summary: WeeklySummary
    highlight: WeeklyHighlight
    insights: List[InsightRuleResult]


class WeeklyReviewService:
    """Computes schedule-gated weekly reports from explicit dependencies."""

    def __init__(
        self,
        decisions: DecisionStore,
        preferences: PreferencesStore,
        clock: Optional[Callable[[], datetime]] = None,
        tz: Optional[tzinfo] = None,
        minimum_tracked_days: int = 4,
    ):
        self.decisions = decisions
        self.preferences = preferences
        self.tz = tz
        self.clock = clock or (lambda: datetime.now(self.tz).astimezone(self.tz))
        self.minimum_tracked_days = minimum_tracked_days

    def today(self) -> date:
        now = self.clock()
        return (now.astimezone(self.tz) if now.tzinfo else now).date()

    def now_ms(self) -> int:
        return int(self.clock().timestamp() * 1000)

    def get_schedule(self, today: Optional[date] = None) -> ScheduleState:
        first_use_ms = self.preferences.ensure_first_use_date(self.now_ms())
        return calculate_schedule(
            first_use_date=local_date(first_use_ms, self.tz),
            week_start_day=self.preferences.week_start_day,
            today=today or self.today(),
            minimum_tracked_days=self.minimum_tracked_days,
        )

    def build_report(self, window_start: date, window_end: date) -> WindowReport:
        """Summary, highlights and insights for the inclusive date range."""
        start, end = window_bounds(window_start, window_end, self.tz)
        decisions = self.decisions.get_by_date_range(start, end)

        summary = build_weekly_summary(decisions, start, end, self.tz)
        highlight = extract_highlights(summary, decisions, self.tz)
        insights = InsightRuleEngine(tz=self.tz).generate(decisions) or [FALLBACK_INSIGHT]

        logger.info(
            f"[REVIEW] Report {window_start}..{window_end}: {summary.total_count} decisions, "
            f"{len(insights)} insights"
        )
        return WindowReport(window_start, window_end, summary, highlight, insights)

    def current_report(self, today: Optional[date] = None):
        """
        Schedule plus the report of the latest released window.

        Returns:
            Tuple of (ScheduleState, WindowReport or None before the first release)
        """
        schedule = self.get_schedule(today)
        if not schedule.has_window:
            return schedule, None
        return schedule, self.build_report(schedule.window_start, schedule.window_end)

    def recent_insights(self, days: int) -> List[InsightRuleResult]:
        """Insights over the last ``days`` calendar days, including today."""
        today = self.today()
        start, end = window_bounds(today - timedelta(days=days - 1), today, self.tz)
        insights = InsightRuleEngine(tz=self.tz).generate(self.decisions.get_by_date_range(start, end))
        return insights or [FALLBACK_INSIGHT]
