"""Weekly summary API routes."""
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from ..dependencies import get_review_service
from ..models.insight import Insight
from ..models.schedule import ScheduleResponse
from ..models.summary import CurrentSummaryResponse, Highlights, SummaryStats, WeeklyReport
from ..services.weekly_review import WeeklyReviewService, WindowReport

router = APIRouter(prefix="/api/summary", tags=["Weekly Summary"])

MAX_RANGE_DAYS = 366


def _to_weekly_report(report: WindowReport) -> WeeklyReport:
    """Convert a WindowReport into its API model."""
    return WeeklyReport(
        window_start=report.window_start.isoformat(),
        window_end=report.window_end.isoformat(),
        summary=SummaryStats.from_summary(report.summary),
        highlights=Highlights.from_highlight(report.highlight),
        insights=[Insight(**i.to_dict()) for i in report.insights],
    )


@router.get("/current", response_model=CurrentSummaryResponse, response_model_by_alias=True)
async def get_current_summary(
    review: WeeklyReviewService = Depends(get_review_service),
):
    """
    Get the latest released weekly summary.
    Before the first release only the schedule is returned.
    """
    schedule, report = review.current_report()
    return CurrentSummaryResponse(
        schedule=ScheduleResponse.from_state(schedule),
        report=_to_weekly_report(report) if report else None,
    )


@router.get("/range", response_model=WeeklyReport, response_model_by_alias=True)
async def get_summary_for_range(
    start: date = Query(..., description="First day of the window (YYYY-MM-DD)"),
    end: date = Query(..., description="Last day of the window, inclusive (YYYY-MM-DD)"),
    review: WeeklyReviewService = Depends(get_review_service),
):
    """Get the summary of any past window, e.g. for the weekly history."""
    if end < start:
        raise HTTPException(status_code=400, detail="end must not be before start")
    if (end - start).days >= MAX_RANGE_DAYS:
        raise HTTPException(status_code=400, detail=f"Range is limited to {MAX_RANGE_DAYS} days")

    return _to_weekly_report(review.build_report(start, end))
