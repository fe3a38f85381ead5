"""Calendar helpers for quota periods. All inputs are timezone-aware UTC."""

from datetime import datetime, timedelta


def start_of_day(now: datetime) -> datetime:
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def next_midnight(now: datetime) -> datetime:
    return start_of_day(now) + timedelta(days=1)


def first_of_next_month(now: datetime) -> datetime:
    if now.month == 12:
        return start_of_day(now).replace(year=now.year + 1, month=1, day=1)
    return start_of_day(now).replace(month=now.month + 1, day=1)
