"""Conversion of bill amounts into per-pay contributions"""

from decimal import Decimal
from typing import Optional

from envelope_gateway.domain.models import Frequency
from envelope_gateway.domain.policy import DEFAULT_POLICY, PredictionPolicy
from envelope_gateway.domain.schedule import pay_periods_remaining
from envelope_gateway.utils.money import round_cents


def weeks_per_period(frequency: Frequency, policy: PredictionPolicy = DEFAULT_POLICY) -> Decimal:
    """Weeks in one period of the frequency (monthly uses the average from the policy)"""
    if frequency == Frequency.WEEKLY:
        return Decimal(1)
    if frequency == Frequency.FORTNIGHTLY:
        return Decimal(2)
    if frequency == Frequency.MONTHLY:
        return policy.weeks_per_month
    if frequency == Frequency.QUARTERLY:
        return Decimal(13)
    return Decimal(52)


def weekly_equivalent(
    amount_cents: int,
    frequency: Frequency,
    policy: PredictionPolicy = DEFAULT_POLICY,
) -> Decimal:
    """Unrounded weekly rate of a recurring amount, in cents"""
    return Decimal(amount_cents) / weeks_per_period(frequency, policy)


def per_pay_contribution(
    bill_amount_cents: int,
    bill_frequency: Frequency,
    income_frequency: Frequency,
    days_until_due: Optional[int] = None,
    policy: PredictionPolicy = DEFAULT_POLICY,
) -> int:
    """
    Amount to set aside from each pay to cover a bill.

    Open-ended (no due date, or due beyond the policy threshold):
        bill → weekly rate → income frequency
        $433/month paid fortnightly: 43300 / 4.33 * 2 = 20000

    Due-date mode:
        bill / whole pay periods left before the due date; the full bill
        when no full period remains.
    """
    if days_until_due is None or days_until_due > policy.open_ended_threshold_days:
        weekly = weekly_equivalent(bill_amount_cents, bill_frequency, policy)
        return round_cents(weekly * weeks_per_period(income_frequency, policy))

    periods = pay_periods_remaining(income_frequency, days_until_due)
    if periods <= 0:
        return bill_amount_cents

    return round_cents(Decimal(bill_amount_cents) / periods)


def target_by_due_date(bill_amount_cents: int) -> int:
    """Amount needed at the due date: one full bill"""
    return bill_amount_cents
