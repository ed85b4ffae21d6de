"""Reminder notification API routes.

Exposes the reminder history, a Server-Sent Events stream and a manual
trigger for the reminder checks.
"""
import json
from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from automation import NotificationQueue, ReminderScheduler

from ..dependencies import get_notification_queue, get_reminder_scheduler

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("")
async def get_notification_history(
    count: int = Query(50, ge=1, le=100, description="Number of notifications to return"),
    queue: NotificationQueue = Depends(get_notification_queue),
):
    """
    Get recent reminder notifications, ordered from newest to oldest.
    """
    return [notification.to_dict() for notification in queue.get_history(count)]


@router.get("/stream")
async def stream_notifications(
    include_history: bool = Query(True, description="Include recent notifications on connect"),
    history_count: int = Query(10, ge=0, le=50, description="Number of historical notifications"),
    queue: NotificationQueue = Depends(get_notification_queue),
):
    """
    Stream reminder notifications via Server-Sent Events (SSE).

    The stream never closes - clients should handle reconnection.

    Usage with curl:
        curl -N http://localhost:8082/api/notifications/stream
    """
    async def event_generator():
        async for notification in queue.subscribe(
            include_history=include_history,
            history_count=history_count
        ):
            data = json.dumps(notification.to_dict())
            yield f"event: notification\ndata: {data}\n\n"

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        }
    )


@router.get("/stats")
async def get_notification_stats(queue: NotificationQueue = Depends(get_notification_queue)):
    """Get publish counts by type and current subscribers."""
    return queue.get_stats()


@router.post("/check")
async def run_reminder_checks(scheduler: ReminderScheduler = Depends(get_reminder_scheduler)):
    """
    Run the weekly-summary and daily-journal reminder checks now.

    Returns the outcome of each check.
    """
    return [result.to_dict() for result in scheduler.run_checks()]


@router.get("/scheduler")
async def get_scheduler_status(scheduler: ReminderScheduler = Depends(get_reminder_scheduler)):
    """Get the reminder scheduler status and the last result of each check."""
    return scheduler.get_status()
