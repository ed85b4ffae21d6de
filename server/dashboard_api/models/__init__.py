"""Pydantic models for decision journal API requests and responses."""
from .decision import DecisionCreate, DecisionRecord
from .insight import Insight
from .preferences import PreferencesResponse, PreferencesUpdate
from .schedule import ScheduleResponse
from .summary import CurrentSummaryResponse, Highlights, SummaryStats, WeeklyReport

__all__ = [
    "DecisionCreate",
    "DecisionRecord",
    "Insight",
    "PreferencesResponse",
    "PreferencesUpdate",
    "ScheduleResponse",
    "CurrentSummaryResponse",
    "Highlights",
    "SummaryStats",
    "WeeklyReport",
]
