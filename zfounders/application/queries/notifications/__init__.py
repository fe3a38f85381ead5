"""Notification inbox queries."""

from zfounders.application.queries.notifications.list_notifications import (
    ListNotificationsHandler,
    ListNotificationsQuery,
)

__all__ = ["ListNotificationsQuery", "ListNotificationsHandler"]
