"""Date manipulation utilities"""

from datetime import date, timedelta

from dateutil.relativedelta import relativedelta


def add_days(from_date: date, days: int) -> date:
    """Add calendar days to a date"""
    return from_date + timedelta(days=days)


def add_months(from_date: date, months: int) -> date:
    """Add calendar months, clamping the day to the end of shorter months (Jan 31 + 1 → Feb 28/29)"""
    return from_date + relativedelta(months=months)


def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative when end is before start)"""
    return (end - start).days
