"""Decision Journal Automation Module.

Provides scheduled reminder checks and the notification queue they
publish to.
"""

from .notifications import Notification, NotificationQueue, NotificationType, notification_queue
from .scheduler import CheckStatus, ReminderCheckResult, ReminderScheduler

__all__ = [
    "Notification",
    "NotificationQueue",
    "NotificationType",
    "notification_queue",
    "CheckStatus",
    "ReminderCheckResult",
    "ReminderScheduler",
]
