"""Weekly release schedule API models."""
from pydantic import BaseModel
from typing import Optional

from decision_analytics import ScheduleState


class ScheduleResponse(BaseModel):
    """Release state of the weekly summary."""

    today: str
    week_start_day: str
    first_release: str
    anchor: Optional[str] = None
    window_start: Optional[str] = None
    window_end: Optional[str] = None
    next_release: str
    days_until_next_release: int
    is_available: bool

    @classmethod
    def from_state(cls, state: ScheduleState) -> "ScheduleResponse":
        return cls(**state.to_dict())
