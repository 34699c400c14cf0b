"""Remediation suggestions for underfunded envelopes"""

from typing import List, Sequence

from envelope_gateway.domain.models import Envelope, RecurringIncomeSource, Suggestion, SuggestionType
from envelope_gateway.domain.policy import DEFAULT_POLICY, PredictionPolicy
from envelope_gateway.domain.schedule import pay_periods_remaining
from envelope_gateway.utils.money import ceil_dollars, format_dollars


def generate_suggestions(
    gap_cents: int,
    envelope: Envelope,
    income_sources: Sequence[RecurringIncomeSource],
    days_until_due: int,
    policy: PredictionPolicy = DEFAULT_POLICY,
) -> List[Suggestion]:
    """
    Ordered actions for closing a positive gap.

    The first income source is treated as the primary one; callers order
    sources by priority. Amounts are rounded up to whole dollars.
    """
    if gap_cents <= 0:
        return []

    suggestions: List[Suggestion] = []
    primary = income_sources[0] if income_sources else None

    if primary is not None and days_until_due > 0:
        periods = pay_periods_remaining(primary.frequency, days_until_due)
        if periods > 0:
            increase = ceil_dollars(gap_cents, periods)
            suggestions.append(
                Suggestion(
                    type=SuggestionType.INCREASE_ALLOCATION,
                    message=f"Increase allocation by {format_dollars(increase)} per pay to close gap",
                    amount_cents=increase,
                )
            )

    one_time = ceil_dollars(gap_cents)
    suggestions.append(
        Suggestion(
            type=SuggestionType.ONE_TIME_INCOME,
            message=f"Find one-time income of {format_dollars(one_time)} (sell items, extra shifts, etc.)",
            amount_cents=one_time,
        )
    )

    suggestions.append(
        Suggestion(
            type=SuggestionType.REDUCE_BILL,
            message="Reduce bill amount or find cheaper alternative",
        )
    )

    if days_until_due > policy.extend_due_date_min_days:
        suggestions.append(
            Suggestion(
                type=SuggestionType.EXTEND_DUE_DATE,
                message="Contact provider about payment plan or later due date",
            )
        )

    suggestions.append(
        Suggestion(
            type=SuggestionType.LIFESTYLE_CHANGE,
            message="Consider lifestyle changes to reduce this expense",
        )
    )

    return suggestions
