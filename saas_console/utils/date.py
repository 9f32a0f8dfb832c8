"""
Date utility functions
"""
from datetime import date
from typing import Optional
from dateutil.relativedelta import relativedelta


def add_months(start_date: date, months: int) -> date:
    """
    Date ``months`` calendar months after ``start_date``

    Args:
        start_date: The first day covered
        months: Number of months to add

    Returns:
        date: Same day-of-month, clamped to the last day of shorter months
    """
    return start_date + relativedelta(months=months)


def is_active(end_date: date, today: Optional[date] = None) -> bool:
    """
    Check whether a period ending on ``end_date`` is still running

    Args:
        end_date: Last date of the period
        today: Reference date (default: today)

    Returns:
        bool: True while the end date lies in the future
    """
    return end_date > (today or date.today())


def isoformat_or_none(value) -> Optional[str]:
    return value.isoformat() if value else None
