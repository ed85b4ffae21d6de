"""Journal insights API routes."""
from fastapi import APIRouter, Depends, Query

from ..dependencies import get_review_service
from ..models.insight import Insight
from ..services.weekly_review import WeeklyReviewService

router = APIRouter(prefix="/api", tags=["Insights"])


@router.get("/insights", response_model=list[Insight])
async def get_insights(
    days: int = Query(default=7, ge=1, le=365, description="Number of days to analyze"),
    review: WeeklyReviewService = Depends(get_review_service),
):
    """
    Get ranked insights over the last ``days`` days.

    With no decisions in range a single "explore more" insight is returned.
    """
    return [Insight(**i.to_dict()) for i in review.recent_insights(days)]
