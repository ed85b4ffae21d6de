"""
Reminder Scheduler.

Periodically checks whether a weekly summary has been released and whether
today's journal is still empty, and publishes reminder notifications.

The scheduler owns no analytics: it asks the release schedule whether a
window is available today and remembers, through the preferences store,
the last anchor it has already announced.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone, tzinfo
from enum import Enum
from typing import Callable, Optional, Dict, Any

from decision_analytics.models import local_date
from decision_analytics.schedule import (
    DEFAULT_MINIMUM_TRACKED_DAYS,
    calculate_schedule,
    window_bounds,
)

from .notifications import Notification, NotificationQueue, NotificationType

logger = logging.getLogger(__name__)


class CheckStatus(str, Enum):
    """Outcome of a reminder check."""

    DISABLED = "disabled"
    IDLE = "idle"
    NOTIFIED = "notified"
    FAILED = "failed"


@dataclass
class ReminderCheckResult:
    """Result of one reminder check."""

    check: str
    status: CheckStatus
    message: str
    checked_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    notification: Optional[Notification] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "check": self.check,
            "status": self.status.value,
            "message": self.message,
            "checked_at": self.checked_at.isoformat(),
            "notification": self.notification.to_dict() if self.notification else None,
            "error": self.error,
        }


class ReminderScheduler:
    """
    Runs the weekly-summary and daily-journal reminder checks.

    Dependencies are passed in explicitly:
    - decision_store: provides get_by_date_range(start_ms, end_ms)
    - preferences: reminder toggles, week start day, first use date, the
      last acknowledged weekly anchor and the last daily reminder date
    - notifier: NotificationQueue receiving the reminders
    - clock: callable returning the current aware datetime
    """

    def __init__(
        self,
        decision_store,
        preferences,
        notifier: NotificationQueue,
        clock: Optional[Callable[[], datetime]] = None,
        tz: Optional[tzinfo] = None,
        minimum_tracked_days: int = DEFAULT_MINIMUM_TRACKED_DAYS,
        daily_reminder_hour: int = 21,
    ):
        self.decision_store = decision_store
        self.preferences = preferences
        self.notifier = notifier
        self.tz = tz
        self.clock = clock or (lambda: datetime.now(self.tz).astimezone(self.tz))
        self.minimum_tracked_days = minimum_tracked_days
        self.daily_reminder_hour = daily_reminder_hour

        self._lock = threading.Lock()
        self._last_results: Dict[str, ReminderCheckResult] = {}

        # Background scheduler
        self._scheduler_timer: Optional[threading.Timer] = None
        self._daily_timer: Optional[threading.Timer] = None
        self._scheduler_running = False

        logger.info(
            f"[REMINDERS] Initialized with minimum_tracked_days={minimum_tracked_days}, "
            f"daily_reminder_hour={daily_reminder_hour}"
        )

    def _now(self) -> datetime:
        now = self.clock()
        return now.astimezone(self.tz) if now.tzinfo else now

    def _record(self, result: ReminderCheckResult) -> ReminderCheckResult:
        with self._lock:
            self._last_results[result.check] = result
        return result

    def check_weekly_summary(self, today: Optional[date] = None) -> ReminderCheckResult:
        """
        Announce a newly released weekly summary, once per anchor.

        Args:
            today: Reference date (defaults to the clock's date)

        Returns:
            ReminderCheckResult describing what happened
        """
        check = "weekly_summary"
        if not self.preferences.weekly_reminder_enabled:
            return self._record(ReminderCheckResult(check, CheckStatus.DISABLED, "Weekly reminders are disabled"))

        try:
            now = self._now()
            today = today or now.date()
            first_use_ms = self.preferences.ensure_first_use_date(int(now.timestamp() * 1000))
            schedule = calculate_schedule(
                first_use_date=local_date(first_use_ms, self.tz),
                week_start_day=self.preferences.week_start_day,
                today=today,
                minimum_tracked_days=self.minimum_tracked_days,
            )

            if not schedule.is_available:
                return self._record(ReminderCheckResult(
                    check,
                    CheckStatus.IDLE,
                    f"Next weekly summary on {schedule.next_release.isoformat()}",
                ))

            last_anchor = self.preferences.get_last_weekly_anchor()
            if last_anchor is not None and last_anchor >= schedule.anchor:
                return self._record(ReminderCheckResult(
                    check,
                    CheckStatus.IDLE,
                    f"Weekly summary for {schedule.anchor.isoformat()} already announced",
                ))

            label = f"{schedule.window_start.isoformat()} - {schedule.window_end.isoformat()}"
            notification = Notification(
                notification_type=NotificationType.WEEKLY_SUMMARY_READY,
                title="Your weekly summary is ready",
                message=f"Take a look at how your week went ({label}).",
                anchor=schedule.anchor,
                window_start=schedule.window_start,
                window_end=schedule.window_end,
            )
            self.notifier.publish(notification)
            # Acknowledge only after the notification went out
            self.preferences.set_last_weekly_anchor(schedule.anchor)

            logger.info(f"[REMINDERS] Weekly summary announced for window {label}")
            return self._record(ReminderCheckResult(
                check, CheckStatus.NOTIFIED, f"Weekly summary announced for {label}", notification=notification
            ))

        except Exception as e:
            logger.error(f"[REMINDERS] Weekly summary check failed: {e}")
            return self._record(ReminderCheckResult(
                check, CheckStatus.FAILED, "Weekly summary check failed", error=str(e)
            ))

    def check_daily_reminder(self, now: Optional[datetime] = None) -> ReminderCheckResult:
        """
        Remind the user to journal when nothing was recorded today.

        Only fires from ``daily_reminder_hour`` on, at most once per day.
        """
        check = "daily_reminder"
        if not self.preferences.daily_reminder_enabled:
            return self._record(ReminderCheckResult(check, CheckStatus.DISABLED, "Daily reminders are disabled"))

        try:
            now = now or self._now()
            today = now.date()

            if now.hour < self.daily_reminder_hour:
                return self._record(ReminderCheckResult(
                    check, CheckStatus.IDLE, f"Daily reminder runs from {self.daily_reminder_hour}:00"
                ))
            if self.preferences.get_last_daily_reminder() == today:
                return self._record(ReminderCheckResult(check, CheckStatus.IDLE, "Already reminded today"))

            start, end = window_bounds(today, today, self.tz)
            decisions = self.decision_store.get_by_date_range(start, end)
            if decisions:
                return self._record(ReminderCheckResult(
                    check, CheckStatus.IDLE, f"{len(decisions)} decisions recorded today"
                ))

            notification = Notification(
                notification_type=NotificationType.DAILY_REMINDER,
                title="How did today go?",
                message="You have not recorded any decision today. Take a minute to add one.",
            )
            self.notifier.publish(notification)
            self.preferences.set_last_daily_reminder(today)

            logger.info(f"[REMINDERS] Daily reminder sent for {today.isoformat()}")
            return self._record(ReminderCheckResult(
                check, CheckStatus.NOTIFIED, "Daily reminder sent", notification=notification
            ))

        except Exception as e:
            logger.error(f"[REMINDERS] Daily reminder check failed: {e}")
            return self._record(ReminderCheckResult(
                check, CheckStatus.FAILED, "Daily reminder check failed", error=str(e)
            ))

    def run_checks(self) -> list:
        """Run every reminder check once."""
        return [self.check_weekly_summary(), self.check_daily_reminder()]

    def get_status(self) -> Dict[str, Any]:
        """Get scheduler status."""
        with self._lock:
            return {
                "scheduler_running": self._scheduler_running,
                "minimum_tracked_days": self.minimum_tracked_days,
                "daily_reminder_hour": self.daily_reminder_hour,
                "last_results": {name: r.to_dict() for name, r in self._last_results.items()},
            }

    def seconds_until_daily_reminder(self, now: Optional[datetime] = None) -> float:
        """Seconds until the next ``daily_reminder_hour:00`` in the scheduler's zone."""
        now = now or self._now()
        target = now.replace(hour=self.daily_reminder_hour, minute=0, second=0, microsecond=0)
        if target <= now:
            target += timedelta(days=1)
        # Timestamps keep the delay right across DST transitions
        return target.timestamp() - now.timestamp()

    def start(self, interval_hours: float = 24) -> None:
        """
        Start background reminder checks.

        The weekly summary check runs every ``interval_hours``. The daily
        reminder check is timed to the reminder hour of every day.

        Args:
            interval_hours: Hours between check rounds
        """
        if self._scheduler_running:
            logger.warning("[REMINDERS] Scheduler already running")
            return

        self._scheduler_running = True
        self._schedule_next(interval_hours)
        self._schedule_daily_reminder()
        logger.info(f"[REMINDERS] Started with interval={interval_hours}h")

    def stop(self) -> None:
        """Stop the background scheduler."""
        self._scheduler_running = False
        for timer in (self._scheduler_timer, self._daily_timer):
            if timer:
                timer.cancel()
        self._scheduler_timer = None
        self._daily_timer = None
        logger.info("[REMINDERS] Stopped")

    def _schedule_next(self, interval_hours: float) -> None:
        """Schedule the next round of checks."""
        if not self._scheduler_running:
            return

        def run_and_reschedule():
            if not self._scheduler_running:
                return
            self.run_checks()
            self._schedule_next(interval_hours)

        self._scheduler_timer = threading.Timer(interval_hours * 3600, run_and_reschedule)
        self._scheduler_timer.daemon = True
        self._scheduler_timer.start()

    def _schedule_daily_reminder(self) -> None:
        """Arm the timer for the next daily reminder hour."""
        if not self._scheduler_running:
            return

        delay = self.seconds_until_daily_reminder()
        self._daily_timer = threading.Timer(delay, self._run_daily_reminder)
        self._daily_timer.daemon = True
        self._daily_timer.start()
        logger.debug(f"[REMINDERS] Next daily reminder check in {delay / 3600:.2f}h")

    def _run_daily_reminder(self) -> None:
        if not self._scheduler_running:
            return
        self.check_daily_reminder()
        self._schedule_daily_reminder()
