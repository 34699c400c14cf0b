"""Funding projection - balance an envelope will hold at its horizon"""

from datetime import date
from typing import List, Optional, Sequence

from envelope_gateway.domain.contributions import target_by_due_date
from envelope_gateway.domain.models import (
    Envelope,
    FundingProjection,
    FutureIncomeEvent,
    RecurringIncomeSource,
)
from envelope_gateway.domain.policy import DEFAULT_POLICY, PredictionPolicy
from envelope_gateway.domain.schedule import iter_pay_dates
from envelope_gateway.utils.date_utils import add_days


def resolve_horizon(
    envelope: Envelope,
    today: date,
    horizon: Optional[date] = None,
    policy: PredictionPolicy = DEFAULT_POLICY,
) -> date:
    """Explicit horizon, else the due date, else the default window from today"""
    if horizon is not None:
        return horizon
    if envelope.due_date is not None:
        return envelope.due_date
    return add_days(today, policy.default_horizon_days)


def resolve_target(envelope: Envelope) -> int:
    """Explicit target when set, otherwise the bill due at the horizon"""
    if envelope.target_amount_cents:
        return envelope.target_amount_cents
    if envelope.bill_amount_cents and envelope.bill_frequency:
        return target_by_due_date(envelope.bill_amount_cents)
    return 0


def collect_future_income(
    envelope: Envelope,
    income_sources: Sequence[RecurringIncomeSource],
    horizon: date,
    policy: PredictionPolicy = DEFAULT_POLICY,
) -> List[FutureIncomeEvent]:
    """Allocated pay events for the envelope before the horizon, oldest first"""
    events: List[FutureIncomeEvent] = []

    for income in income_sources:
        allocation = income.allocation_for(envelope.envelope_id)
        if allocation is None or allocation.amount_cents <= 0:
            continue

        for pay_date in iter_pay_dates(income.frequency, income.next_date, horizon, policy.max_pay_dates):
            events.append(
                FutureIncomeEvent(
                    date=pay_date,
                    income_id=income.income_id,
                    source=income.name,
                    amount_cents=allocation.amount_cents,
                )
            )

    # Stable sort keeps source order for same-day pays
    events.sort(key=lambda e: e.date)
    return events


def project_funding(
    envelope: Envelope,
    income_sources: Sequence[RecurringIncomeSource],
    current_balance_cents: int,
    today: date,
    horizon: Optional[date] = None,
    policy: PredictionPolicy = DEFAULT_POLICY,
) -> FundingProjection:
    """
    Project the envelope balance at its horizon and the remaining gap.

    projected = current balance + every allocated pay before the horizon
    gap       = target - projected (negative means surplus)
    """
    end_date = resolve_horizon(envelope, today, horizon, policy)
    target = resolve_target(envelope)
    future_income = collect_future_income(envelope, income_sources, end_date, policy)

    projected = current_balance_cents + sum(e.amount_cents for e in future_income)

    return FundingProjection(
        projected_balance_cents=projected,
        target_amount_cents=target,
        gap_cents=target - projected,
        horizon=end_date,
        future_income=future_income,
    )
