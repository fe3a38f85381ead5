"""Notification inbox commands."""

from .mark_read import (
    MarkAllNotificationsReadCommand,
    MarkAllNotificationsReadHandler,
    MarkNotificationReadCommand,
    MarkNotificationReadHandler,
)

__all__ = [
    "MarkNotificationReadCommand",
    "MarkNotificationReadHandler",
    "MarkAllNotificationsReadCommand",
    "MarkAllNotificationsReadHandler",
]
