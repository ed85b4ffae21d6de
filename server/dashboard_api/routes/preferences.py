"""User preference API routes."""

from fastapi import APIRouter, Depends

from decision_analytics.models import local_date

from ..database import PreferencesStore
from ..dependencies import get_preferences_store, get_review_service
from ..models.preferences import PreferencesResponse, PreferencesUpdate
from ..services.weekly_review import WeeklyReviewService

router = APIRouter(prefix="/api", tags=["Preferences"])


def _to_response(preferences: PreferencesStore, review: WeeklyReviewService) -> PreferencesResponse:
    first_use = preferences.get_first_use_date()
    last_anchor = preferences.get_last_weekly_anchor()
    return PreferencesResponse(
        week_start_day=preferences.week_start_day,
        first_use_date=local_date(first_use, review.tz).isoformat() if first_use is not None else None,
        daily_reminder_enabled=preferences.daily_reminder_enabled,
        weekly_reminder_enabled=preferences.weekly_reminder_enabled,
        last_weekly_anchor=last_anchor.isoformat() if last_anchor else None,
        user_name=preferences.user_name,
    )


@router.get("/preferences", response_model=PreferencesResponse)
async def get_preferences(
    preferences: PreferencesStore = Depends(get_preferences_store),
    review: WeeklyReviewService = Depends(get_review_service),
):
    """Get user preferences."""
    return _to_response(preferences, review)


@router.put("/preferences", response_model=PreferencesResponse)
async def update_preferences(
    update: PreferencesUpdate,
    preferences: PreferencesStore = Depends(get_preferences_store),
    review: WeeklyReviewService = Depends(get_review_service),
):
    """Update user preferences; omitted fields are left unchanged."""
    if update.week_start_day is not None:
        preferences.set_week_start_day(update.week_start_day)
    if update.daily_reminder_enabled is not None:
        preferences.set_daily_reminder_enabled(update.daily_reminder_enabled)
    if update.weekly_reminder_enabled is not None:
        preferences.set_weekly_reminder_enabled(update.weekly_reminder_enabled)
    if update.user_name is not None:
        preferences.set_user_name(update.user_name)
    return _to_response(preferences, review)
