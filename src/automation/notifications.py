"""Thread-safe in-memory notification queue for reminder delivery.

This module provides a publish-subscribe mechanism for reminder
notifications that can be streamed to connected clients via SSE.
"""
import asyncio
import threading
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, AsyncIterator


class NotificationType(str, Enum):
    """Types of reminder notifications."""
    DAILY_REMINDER = "daily_reminder"
    WEEKLY_SUMMARY_READY = "weekly_summary_ready"


@dataclass
class Notification:
    """Reminder notification published by the scheduler."""

    notification_type: NotificationType
    title: str
    message: str
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    # Weekly summary context
    anchor: Optional[date] = None
    window_start: Optional[date] = None
    window_end: Optional[date] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        result = {
            "id": self.id,
            "notification_type": self.notification_type.value,
            "title": self.title,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }

        if self.anchor:
            result["anchor"] = self.anchor.isoformat()
        if self.window_start:
            result["window_start"] = self.window_start.isoformat()
        if self.window_end:
            result["window_end"] = self.window_end.isoformat()

        return result


class NotificationQueue:
    """Thread-safe in-memory queue for reminder notifications.

    Supports multiple SSE subscribers and maintains a history buffer
    for new connections to catch up on recent notifications.
    """

    def __init__(self, max_history: int = 100):
        """Initialize the notification queue.

        Args:
            max_history: Maximum number of notifications to keep in history buffer.
        """
        self._history: deque[Notification] = deque(maxlen=max_history)
        self._subscribers: list[tuple[asyncio.AbstractEventLoop, asyncio.Queue]] = []
        self._lock = threading.Lock()
        self._stats = {
            "total_published": 0,
            "total_subscribers": 0,
            "notifications_by_type": {},
        }

    def publish(self, notification: Notification) -> None:
        """Publish a notification to all subscribers.

        Thread-safe method that can be called from any thread. Subscribers
        living on another thread's event loop are handed the notification
        through that loop, which also wakes it up.
        """
        try:
            current_loop = asyncio.get_running_loop()
        except RuntimeError:
            current_loop = None

        with self._lock:
            self._history.append(notification)

            self._stats["total_published"] += 1
            kind = notification.notification_type.value
            self._stats["notifications_by_type"][kind] = \
                self._stats["notifications_by_type"].get(kind, 0) + 1

            # Subscribers that cannot keep up are dropped
            dead_subscribers = []
            for subscriber in self._subscribers:
                loop, queue = subscriber
                if loop is current_loop:
                    try:
                        queue.put_nowait(notification)
                    except asyncio.QueueFull:
                        dead_subscribers.append(subscriber)
                    continue
                try:
                    loop.call_soon_threadsafe(self._deliver, subscriber, notification)
                except RuntimeError:
                    # Event loop already closed
                    dead_subscribers.append(subscriber)

            for subscriber in dead_subscribers:
                self._subscribers.remove(subscriber)

    def _deliver(self, subscriber: tuple, notification: Notification) -> None:
        """Put a notification on a subscriber queue from its own event loop."""
        try:
            subscriber[1].put_nowait(notification)
        except asyncio.QueueFull:
            with self._lock:
                if subscriber in self._subscribers:
                    self._subscribers.remove(subscriber)

    async def subscribe(
        self,
        include_history: bool = True,
        history_count: int = 10
    ) -> AsyncIterator[Notification]:
        """Subscribe to notifications via async generator.

        Args:
            include_history: Whether to yield recent notifications first.
            history_count: Number of recent notifications to include from history.

        Yields:
            Notification objects as they arrive.
        """
        queue: asyncio.Queue[Notification] = asyncio.Queue(maxsize=100)
        subscriber = (asyncio.get_running_loop(), queue)

        with self._lock:
            self._subscribers.append(subscriber)
            self._stats["total_subscribers"] += 1

            if include_history and history_count > 0:
                for notification in list(self._history)[-history_count:]:
                    queue.put_nowait(notification)

        try:
            while True:
                notification = await queue.get()
                yield notification
        finally:
            with self._lock:
                if subscriber in self._subscribers:
                    self._subscribers.remove(subscriber)

    def get_history(self, count: int = 50) -> list[Notification]:
        """Get recent notifications, newest first."""
        with self._lock:
            return list(self._history)[-count:][::-1]

    def get_stats(self) -> dict:
        """Get queue statistics."""
        with self._lock:
            return {
                **self._stats,
                "current_subscribers": len(self._subscribers),
                "history_size": len(self._history),
            }

    def clear_history(self) -> None:
        """Clear the notification history buffer."""
        with self._lock:
            self._history.clear()


# Global singleton instance
notification_queue = NotificationQueue()
