"""FastAPI dependency providers.

Routes receive their collaborators through these functions so tests can
swap them with ``app.dependency_overrides``.
"""
from functools import lru_cache

from automation import NotificationQueue, ReminderScheduler, notification_queue

from .config import get_settings
from .database import DecisionStore, PreferencesStore, decision_store, preferences_store
from .services.weekly_review import WeeklyReviewService


def get_decision_store() -> DecisionStore:
    return decision_store


def get_preferences_store() -> PreferencesStore:
    return preferences_store


def get_notification_queue() -> NotificationQueue:
    return notification_queue


@lru_cache
def get_review_service() -> WeeklyReviewService:
    settings = get_settings()
    return WeeklyReviewService(
        decisions=decision_store,
        preferences=preferences_store,
        tz=settings.tz,
        minimum_tracked_days=settings.minimum_tracked_days,
    )


@lru_cache
def get_reminder_scheduler() -> ReminderScheduler:
    settings = get_settings()
    return ReminderScheduler(
        decision_store=decision_store,
        preferences=preferences_store,
        notifier=notification_queue,
        tz=settings.tz,
        minimum_tracked_days=settings.minimum_tracked_days,
        daily_reminder_hour=settings.daily_reminder_hour,
    )
