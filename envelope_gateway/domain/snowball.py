"""Debt snowball - distribute a payment across debts, smallest balance first"""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable, List, Optional

from envelope_gateway.domain.exceptions import DebtItemUpdateError, InvalidPaymentError
from envelope_gateway.domain.models import DebtItem, DebtSummary, PaymentResult, PayoffProjection
from envelope_gateway.utils.money import round_cents

logger = logging.getLogger(__name__)

# Storage callback: (item, new balance, paid-off timestamp or None)
PersistBalance = Callable[[DebtItem, int, Optional[datetime]], None]

MAX_PAYOFF_MONTHS = 360


def sort_by_snowball(items: Iterable[DebtItem]) -> List[DebtItem]:
    """Unpaid debts first, then smallest balance first (stable for ties)"""
    return sorted(items, key=lambda item: (item.is_paid_off, item.current_balance_cents))


def apply_snowball_payment(
    items: Iterable[DebtItem],
    payment_cents: int,
    persist: PersistBalance,
    now: datetime,
) -> PaymentResult:
    """
    Apply one payment to the unpaid debts of a single envelope.

    Debts are paid smallest balance first. A debt whose balance reaches zero
    is stamped paid off with `now` and the remainder rolls to the next one.
    Distribution stops as soon as the payment is used up; any excess over
    the total debt is reported as remaining.

    If `persist` raises DebtItemUpdateError for a debt, that debt keeps its
    balance, is reported in failed_items, and the payment moves on to the
    next debt.

    Debts already paid off are skipped and never written or reported.

    Not idempotent: callers must hold a per-envelope lock.
    """
    if payment_cents <= 0:
        raise InvalidPaymentError("Payment amount must be greater than 0")

    remaining = payment_cents
    paid_off: List[DebtItem] = []
    updated: List[DebtItem] = []
    failed: List[DebtItem] = []

    for item in sort_by_snowball(items):
        if remaining <= 0:
            break

        # Paid off earlier; nothing to apply or report
        if item.is_paid_off:
            continue

        amount_to_apply = min(remaining, item.current_balance_cents)
        new_balance = max(0, item.current_balance_cents - amount_to_apply)
        paid_off_at = now if new_balance <= 0 else None

        try:
            persist(item, new_balance, paid_off_at)
        except DebtItemUpdateError as e:
            logger.warning(
                "Debt item update failed",
                extra={"debt_id": item.debt_id, "envelope_id": item.envelope_id, "error": str(e)},
            )
            failed.append(item)
            continue

        item.current_balance_cents = new_balance
        item.paid_off_at = paid_off_at
        updated.append(item)

        if new_balance <= 0:
            paid_off.append(item)

        remaining -= amount_to_apply

    return PaymentResult(
        payment_applied_cents=payment_cents - remaining,
        remaining_payment_cents=remaining,
        paid_off_items=paid_off,
        updated_items=updated,
        failed_items=failed,
    )


def calculate_debt_summary(items: List[DebtItem]) -> DebtSummary:
    """Totals and progress for every debt in an envelope, paid off or not"""
    total_starting = sum(item.starting_balance_cents for item in items)
    total_current = sum(item.current_balance_cents for item in items)
    total_paid_off = total_starting - total_current
    progress = (total_paid_off / total_starting * 100) if total_starting > 0 else 0.0

    unpaid = [item for item in items if not item.is_paid_off and item.current_balance_cents > 0]
    next_to_payoff = min(unpaid, key=lambda item: item.current_balance_cents) if unpaid else None

    return DebtSummary(
        total_debt_cents=total_current,
        total_starting_cents=total_starting,
        total_paid_off_cents=total_paid_off,
        progress_percent=round(progress, 2),
        debt_count=len(items),
        paid_off_count=sum(1 for item in items if item.is_paid_off),
        next_to_payoff=next_to_payoff,
    )


def calculate_payoff_projection(
    balance_cents: int,
    interest_rate: Optional[float],
    monthly_payment_cents: int,
) -> Optional[PayoffProjection]:
    """
    Months to clear a debt with a fixed monthly payment and monthly-compounded APR.

    Returns None when the payment never covers the interest or the debt
    would take longer than 30 years.
    """
    if balance_cents <= 0 or monthly_payment_cents <= 0:
        return None

    monthly_rate = Decimal(str(interest_rate or 0)) / 100 / 12
    balance = balance_cents
    months = 0
    total_interest = 0

    while balance > 0 and months < MAX_PAYOFF_MONTHS:
        interest = round_cents(balance * monthly_rate)
        principal = min(monthly_payment_cents - interest, balance)

        if principal <= 0:
            return None

        total_interest += interest
        balance -= principal
        months += 1

    if balance > 0:
        return None

    return PayoffProjection(
        months_to_payoff=months,
        total_interest_cents=total_interest,
        total_payment_cents=balance_cents + total_interest,
        monthly_payment_cents=monthly_payment_cents,
    )
