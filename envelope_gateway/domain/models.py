"""Domain models - pure Python dataclasses representing budgeting entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional


class Frequency(str, Enum):
    """Recurrence of a bill or pay event"""

    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"


class EnvelopeStatus(str, Enum):
    """Funding status of an envelope at its horizon"""

    ON_TRACK = "on_track"
    BEHIND = "behind"
    CRITICAL = "critical"
    OVERFUNDED = "overfunded"


class SuggestionType(str, Enum):
    """Remediation actions, in the order they are suggested"""

    INCREASE_ALLOCATION = "increase_allocation"
    ONE_TIME_INCOME = "one_time_income"
    REDUCE_BILL = "reduce_bill"
    EXTEND_DUE_DATE = "extend_due_date"
    LIFESTYLE_CHANGE = "lifestyle_change"


class DebtType(str, Enum):
    """Kind of debt held in a debt envelope"""

    CREDIT_CARD = "credit_card"
    PERSONAL_LOAN = "personal_loan"
    CAR_LOAN = "car_loan"
    STUDENT_LOAN = "student_loan"
    AFTERPAY = "afterpay"
    HIRE_PURCHASE = "hp"
    OTHER = "other"


@dataclass
class Envelope:
    """Funding bucket with an optional bill and due date"""

    envelope_id: str
    name: str = ""
    target_amount_cents: int = 0
    bill_amount_cents: Optional[int] = None
    bill_frequency: Optional[Frequency] = None
    due_date: Optional[date] = None
    current_balance_cents: int = 0  # may be negative


@dataclass
class Allocation:
    """Fixed amount of each pay event routed to one envelope"""

    envelope_id: str
    amount_cents: int


@dataclass
class RecurringIncomeSource:
    """Pay stream with per-envelope allocations"""

    income_id: str
    name: str
    frequency: Frequency
    next_date: date
    allocations: List[Allocation] = field(default_factory=list)

    def allocation_for(self, envelope_id: str) -> Optional[Allocation]:
        """First allocation routed to the envelope, if any"""
        for allocation in self.allocations:
            if allocation.envelope_id == envelope_id:
                return allocation
        return None


@dataclass
class FutureIncomeEvent:
    """One future pay occurrence's contribution to one envelope (never stored)"""

    date: date
    income_id: str
    source: str
    amount_cents: int


@dataclass
class FundingProjection:
    """Balance projected to an envelope's horizon"""

    projected_balance_cents: int
    target_amount_cents: int
    gap_cents: int  # target - projected; negative is surplus
    horizon: date
    future_income: List[FutureIncomeEvent]


@dataclass
class Suggestion:
    """Action that would help close a funding gap"""

    type: SuggestionType
    message: str
    amount_cents: Optional[int] = None


@dataclass
class EnvelopePrediction:
    """Engine output for one envelope"""

    envelope_id: str
    current_balance_cents: int
    projected_balance_cents: int
    target_amount_cents: int
    gap_cents: int
    status: EnvelopeStatus
    days_until_due: int
    future_income: List[FutureIncomeEvent]
    suggestions: List[Suggestion]
    required_per_pay_cents: Optional[int] = None


@dataclass
class PredictionSummary:
    """Aggregate counts over a prediction run"""

    envelope_count: int
    on_track: int
    behind: int
    critical: int
    overfunded: int
    total_shortfall_cents: int


@dataclass
class DebtItem:
    """Outstanding debt within a debt envelope"""

    debt_id: str
    envelope_id: str
    current_balance_cents: int
    name: str = ""
    debt_type: DebtType = DebtType.OTHER
    starting_balance_cents: int = 0
    interest_rate: Optional[float] = None  # APR percent
    minimum_payment_cents: Optional[int] = None
    paid_off_at: Optional[datetime] = None  # set once, when balance first reaches zero

    @property
    def is_paid_off(self) -> bool:
        return self.paid_off_at is not None

    @property
    def progress_percent(self) -> float:
        """Share of the starting balance paid so far, capped at 100"""
        if self.starting_balance_cents <= 0:
            return 0.0
        paid = max(0, self.starting_balance_cents - self.current_balance_cents)
        return round(min(100.0, paid / self.starting_balance_cents * 100), 2)


@dataclass
class PaymentResult:
    """Outcome of distributing one payment across debts"""

    payment_applied_cents: int
    remaining_payment_cents: int
    paid_off_items: List[DebtItem]
    updated_items: List[DebtItem]
    failed_items: List[DebtItem]


@dataclass
class DebtSummary:
    """Progress across all debts in one envelope"""

    total_debt_cents: int
    total_starting_cents: int
    total_paid_off_cents: int
    progress_percent: float
    debt_count: int
    paid_off_count: int
    next_to_payoff: Optional[DebtItem]


@dataclass
class PayoffProjection:
    """Months and interest to clear one debt at a fixed monthly payment"""

    months_to_payoff: int
    total_interest_cents: int
    total_payment_cents: int
    monthly_payment_cents: int
