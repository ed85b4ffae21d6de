"""Weekly release schedule API routes."""
from fastapi import APIRouter, Depends

from ..dependencies import get_review_service
from ..models.schedule import ScheduleResponse
from ..services.weekly_review import WeeklyReviewService

router = APIRouter(prefix="/api", tags=["Schedule"])


@router.get("/schedule", response_model=ScheduleResponse)
async def get_schedule(review: WeeklyReviewService = Depends(get_review_service)):
    """Get the current weekly window and the next release date."""
    return ScheduleResponse.from_state(review.get_schedule())
