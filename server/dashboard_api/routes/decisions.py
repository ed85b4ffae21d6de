"""Decision journal API routes."""
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, Query

from decision_analytics import Decision, DecisionValidationError, window_bounds

from ..database import DecisionStore, PreferencesStore
from ..dependencies import get_decision_store, get_preferences_store, get_review_service
from ..models.decision import DecisionCreate, DecisionRecord
from ..services.weekly_review import WeeklyReviewService

router = APIRouter(prefix="/api/decisions", tags=["Decisions"])


def _build_decision(payload: DecisionCreate, timestamp: int, decision_id=None) -> Decision:
    """Validate the payload into a Decision, mapping invariant violations to 422."""
    try:
        return Decision.create(
            timestamp=timestamp,
            text=payload.text,
            emotions=payload.emotions,
            intensity=payload.intensity,
            category=payload.category,
            id=decision_id,
        )
    except DecisionValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


def _get_or_404(store: DecisionStore, decision_id: int) -> Decision:
    decision = store.get_by_id(decision_id)
    if decision is None:
        raise HTTPException(status_code=404, detail=f"Decision {decision_id} not found")
    return decision


@router.post("", response_model=DecisionRecord, status_code=201)
async def create_decision(
    payload: DecisionCreate,
    store: DecisionStore = Depends(get_decision_store),
    preferences: PreferencesStore = Depends(get_preferences_store),
    review: WeeklyReviewService = Depends(get_review_service),
):
    """Record a new decision. Its tone is derived from emotions and intensity."""
    timestamp = payload.timestamp if payload.timestamp is not None else review.now_ms()
    decision = _build_decision(payload, timestamp)

    decision = decision.with_id(store.insert(decision))
    preferences.update_first_use_date_if_earlier(decision.timestamp)
    return DecisionRecord.from_decision(decision)


@router.get("", response_model=list[DecisionRecord])
async def get_decisions(
    days: int = Query(default=7, ge=1, le=365, description="Number of days of history"),
    store: DecisionStore = Depends(get_decision_store),
    review: WeeklyReviewService = Depends(get_review_service),
):
    """Get decisions recorded over the last ``days`` days, newest first."""
    today = review.today()
    start, end = window_bounds(today - timedelta(days=days - 1), today, review.tz)
    decisions = store.get_by_date_range(start, end)
    return [DecisionRecord.from_decision(d) for d in reversed(decisions)]


@router.get("/today", response_model=list[DecisionRecord])
async def get_today_decisions(
    store: DecisionStore = Depends(get_decision_store),
    review: WeeklyReviewService = Depends(get_review_service),
):
    """Get today's decisions, oldest first."""
    today = review.today()
    start, end = window_bounds(today, today, review.tz)
    return [DecisionRecord.from_decision(d) for d in store.get_by_date_range(start, end)]


@router.get("/{decision_id}", response_model=DecisionRecord)
async def get_decision(
    decision_id: int,
    store: DecisionStore = Depends(get_decision_store),
):
    """Get a single decision."""
    return DecisionRecord.from_decision(_get_or_404(store, decision_id))


@router.put("/{decision_id}", response_model=DecisionRecord)
async def update_decision(
    decision_id: int,
    payload: DecisionCreate,
    store: DecisionStore = Depends(get_decision_store),
    preferences: PreferencesStore = Depends(get_preferences_store),
):
    """Edit a decision. The tone is recomputed from the new values."""
    existing = _get_or_404(store, decision_id)
    timestamp = payload.timestamp if payload.timestamp is not None else existing.timestamp
    decision = _build_decision(payload, timestamp, decision_id)

    store.update(decision)
    preferences.update_first_use_date_if_earlier(decision.timestamp)
    return DecisionRecord.from_decision(decision)


@router.delete("/{decision_id}", status_code=204)
async def delete_decision(
    decision_id: int,
    store: DecisionStore = Depends(get_decision_store),
):
    """Delete a decision."""
    store.delete(_get_or_404(store, decision_id))
