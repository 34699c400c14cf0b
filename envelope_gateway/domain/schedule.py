"""Pay schedule generation for recurring income"""

from datetime import date
from typing import Iterator, List

from envelope_gateway.domain.models import Frequency
from envelope_gateway.domain.policy import MAX_PAY_DATES
from envelope_gateway.utils.date_utils import add_days, add_months

# Days per period when counting pay periods until a due date
PERIOD_LENGTH_DAYS = {
    Frequency.WEEKLY: 7,
    Frequency.FORTNIGHTLY: 14,
    Frequency.MONTHLY: 30,
    Frequency.QUARTERLY: 90,
    Frequency.ANNUALLY: 365,
}


def add_period(from_date: date, frequency: Frequency) -> date:
    """Advance a date by one period of the given frequency"""
    if frequency == Frequency.WEEKLY:
        return add_days(from_date, 7)
    if frequency == Frequency.FORTNIGHTLY:
        return add_days(from_date, 14)
    if frequency == Frequency.MONTHLY:
        return add_months(from_date, 1)
    if frequency == Frequency.QUARTERLY:
        return add_months(from_date, 3)
    return add_months(from_date, 12)


def iter_pay_dates(
    frequency: Frequency,
    start_date: date,
    end_date: date,
    max_dates: int = MAX_PAY_DATES,
) -> Iterator[date]:
    """
    Yield pay dates from start_date (inclusive) up to end_date (exclusive).

    Each call returns a fresh iterator. At most max_dates dates are produced,
    however far away end_date is, so callers must not rely on more than a
    year of weekly projections.
    """
    current = start_date
    emitted = 0
    while current < end_date and emitted < max_dates:
        yield current
        current = add_period(current, frequency)
        emitted += 1


def generate_pay_dates(
    frequency: Frequency,
    start_date: date,
    end_date: date,
    max_dates: int = MAX_PAY_DATES,
) -> List[date]:
    """
    Ordered pay dates in [start_date, end_date).

    Example:
        monthly, 2024-01-15 → 2024-04-15
        [2024-01-15, 2024-02-15, 2024-03-15]
    """
    return list(iter_pay_dates(frequency, start_date, end_date, max_dates))


def pay_periods_remaining(frequency: Frequency, days_until_due: int) -> int:
    """Whole pay periods that fit before a due date (0 when due or overdue)"""
    if days_until_due <= 0:
        return 0
    return days_until_due // PERIOD_LENGTH_DAYS[frequency]
