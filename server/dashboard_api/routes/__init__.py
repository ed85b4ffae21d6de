"""API route modules."""
from .decisions import router as decisions_router
from .summary import router as summary_router
from .insights import router as insights_router
from .schedule import router as schedule_router
from .preferences import router as preferences_router
from .notifications import router as notifications_router

__all__ = [
    "decisions_router",
    "summary_router",
    "insights_router",
    "schedule_router",
    "preferences_router",
    "notifications_router",
]
