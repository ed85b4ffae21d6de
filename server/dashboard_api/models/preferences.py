"""User preference API models."""
from pydantic import BaseModel
from typing import Optional

from decision_analytics import Weekday


class PreferencesResponse(BaseModel):
    """Current user preferences."""

    week_start_day: Weekday
    first_use_date: Optional[str] = None
    daily_reminder_enabled: bool
    weekly_reminder_enabled: bool
    last_weekly_anchor: Optional[str] = None
    user_name: Optional[str] = None


class PreferencesUpdate(BaseModel):
    """Partial preference update; omitted fields keep their value."""

    week_start_day: Optional[Weekday] = None
    daily_reminder_enabled: Optional[bool] = None
    weekly_reminder_enabled: Optional[bool] = None
    user_name: Optional[str] = None
