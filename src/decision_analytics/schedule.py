"""
Weekly Summary Release Schedule.

Pure calendar arithmetic deciding which weekly window is summarized and
when the next one is released. A window is released once, on its anchor
day; callers that poll daily keep track of the last acknowledged anchor
themselves.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional, Tuple

from .models import Weekday

logger = logging.getLogger(__name__)

DEFAULT_MINIMUM_TRACKED_DAYS = 4
WEEK = timedelta(days=7)


@dataclass(frozen=True)
class ScheduleState:
    """Release state of the weekly summary for a given day."""

    today: date
    week_start_day: Weekday
    first_release: date  # first anchor with enough tracked days behind it
    next_release: date
    is_available: bool
    anchor: Optional[date] = None
    window_start: Optional[date] = None
    window_end: Optional[date] = None

    @property
    def has_window(self) -> bool:
        return self.anchor is not None

    @property
    def days_until_next_release(self) -> int:
        return (self.next_release - self.today).days

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "today": self.today.isoformat(),
            "week_start_day": self.week_start_day.value,
            "first_release": self.first_release.isoformat(),
            "anchor": self.anchor.isoformat() if self.anchor else None,
            "window_start": self.window_start.isoformat() if self.window_start else None,
            "window_end": self.window_end.isoformat() if self.window_end else None,
            "next_release": self.next_release.isoformat(),
            "days_until_next_release": self.days_until_next_release,
            "is_available": self.is_available,
        }


def next_or_same(day: date, weekday: Weekday) -> date:
    """First date on or after ``day`` that falls on ``weekday``."""
    return day + timedelta(days=(weekday.index - day.weekday()) % 7)


def first_release_date(
    first_use_date: date,
    week_start_day: Weekday,
    minimum_tracked_days: int = DEFAULT_MINIMUM_TRACKED_DAYS,
) -> date:
    """
    First anchor date at which a complete window can be released.

    Starts at the first ``week_start_day`` on or after ``first_use_date`` and
    moves forward one week at a time until at least ``minimum_tracked_days``
    separate it from the first use, so a partial first week is never
    summarized.
    """
    candidate = next_or_same(first_use_date, week_start_day)
    while (candidate - first_use_date).days < minimum_tracked_days:
        candidate += WEEK
    return candidate


def calculate_schedule(
    first_use_date: date,
    week_start_day,
    today: date,
    minimum_tracked_days: int = DEFAULT_MINIMUM_TRACKED_DAYS,
) -> ScheduleState:
    """
    Compute the current weekly window and its release cadence.

    Args:
        first_use_date: Date the journal was first used
        week_start_day: Weekday (or its name) on which weekly windows start
        today: Reference date, in the caller's time zone
        minimum_tracked_days: Days of tracking required before the first release

    Returns:
        ScheduleState; without a window yet, anchor and window bounds are None
    """
    week_start_day = Weekday.parse(week_start_day)
    first_release = first_release_date(first_use_date, week_start_day, minimum_tracked_days)

    if today < first_release:
        logger.debug(
            f"[SCHEDULE] No window yet: first release {first_release}, today {today}"
        )
        return ScheduleState(
            today=today,
            week_start_day=week_start_day,
            first_release=first_release,
            next_release=first_release,
            is_available=False,
        )

    weeks_elapsed = (today - first_release).days // 7
    anchor = first_release + WEEK * weeks_elapsed

    state = ScheduleState(
        today=today,
        week_start_day=week_start_day,
        first_release=first_release,
        next_release=anchor + WEEK,
        is_available=today == anchor,
        anchor=anchor,
        window_start=anchor - WEEK,
        window_end=anchor - timedelta(days=1),
    )
    logger.debug(
        f"[SCHEDULE] anchor={anchor}, window={state.window_start}..{state.window_end}, "
        f"available={state.is_available}"
    )
    return state


def window_bounds(
    window_start: date,
    window_end: date,
    tz: Optional[tzinfo] = None,
) -> Tuple[int, int]:
    """
    Half-open epoch-millisecond range covering whole days ``window_start..window_end``.

    Midnight is taken in ``tz`` (system local when None).
    """
    start = datetime.combine(window_start, time.min, tzinfo=tz)
    end = datetime.combine(window_end + timedelta(days=1), time.min, tzinfo=tz)
    if tz is None:
        start, end = start.astimezone(), end.astimezone()
    return int(start.timestamp() * 1000), int(end.timestamp() * 1000)
