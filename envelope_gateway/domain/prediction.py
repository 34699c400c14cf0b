"""Envelope funding predictions - orchestrates projection, status and suggestions"""

from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence

from envelope_gateway.domain.contributions import per_pay_contribution
from envelope_gateway.domain.models import (
    DebtItem,
    Envelope,
    EnvelopePrediction,
    EnvelopeStatus,
    Frequency,
    FundingProjection,
    PaymentResult,
    PredictionSummary,
    RecurringIncomeSource,
    Suggestion,
)
from envelope_gateway.domain.policy import DEFAULT_POLICY, PredictionPolicy
from envelope_gateway.domain.projection import project_funding
from envelope_gateway.domain.schedule import generate_pay_dates
from envelope_gateway.domain.snowball import PersistBalance, apply_snowball_payment
from envelope_gateway.domain.status import classify_status
from envelope_gateway.domain.suggestions import generate_suggestions
from envelope_gateway.utils.date_utils import days_between


def days_until_due(envelope: Envelope, today: date, policy: PredictionPolicy = DEFAULT_POLICY) -> int:
    """Days from today to the due date; the policy stand-in when there is none"""
    if envelope.due_date is None:
        return policy.no_due_date_days
    return days_between(today, envelope.due_date)


def required_per_pay(
    envelope: Envelope,
    income_sources: Sequence[RecurringIncomeSource],
    today: date,
    policy: PredictionPolicy = DEFAULT_POLICY,
) -> Optional[int]:
    """Per-pay amount the primary income must set aside for the envelope's bill"""
    if not envelope.bill_amount_cents or envelope.bill_frequency is None or not income_sources:
        return None

    due_in = days_between(today, envelope.due_date) if envelope.due_date is not None else None
    return per_pay_contribution(
        envelope.bill_amount_cents,
        envelope.bill_frequency,
        income_sources[0].frequency,
        due_in,
        policy,
    )


def predict_envelope(
    envelope: Envelope,
    income_sources: Sequence[RecurringIncomeSource],
    today: date,
    horizon: Optional[date] = None,
    policy: PredictionPolicy = DEFAULT_POLICY,
) -> EnvelopePrediction:
    """
    Full prediction for one envelope.

    Flow:
    1. Project balance at the horizon from allocated future pays
    2. Classify the gap against days until due
    3. Suggest remediation for any shortfall
    """
    projection = project_funding(
        envelope, income_sources, envelope.current_balance_cents, today, horizon, policy
    )
    due_in = days_until_due(envelope, today, policy)

    return EnvelopePrediction(
        envelope_id=envelope.envelope_id,
        current_balance_cents=envelope.current_balance_cents,
        projected_balance_cents=projection.projected_balance_cents,
        target_amount_cents=projection.target_amount_cents,
        gap_cents=projection.gap_cents,
        status=classify_status(projection.gap_cents, due_in, policy),
        days_until_due=due_in,
        future_income=projection.future_income,
        suggestions=generate_suggestions(projection.gap_cents, envelope, income_sources, due_in, policy),
        required_per_pay_cents=required_per_pay(envelope, income_sources, today, policy),
    )


def predict_all(
    envelopes: Iterable[Envelope],
    income_sources: Sequence[RecurringIncomeSource],
    today: date,
    policy: PredictionPolicy = DEFAULT_POLICY,
) -> List[EnvelopePrediction]:
    """Predictions for every envelope, in input order"""
    return [predict_envelope(envelope, income_sources, today, policy=policy) for envelope in envelopes]


def summarize_predictions(predictions: Sequence[EnvelopePrediction]) -> PredictionSummary:
    """Status counts and total shortfall over a prediction run"""
    counts = {status: 0 for status in EnvelopeStatus}
    for prediction in predictions:
        counts[prediction.status] += 1

    return PredictionSummary(
        envelope_count=len(predictions),
        on_track=counts[EnvelopeStatus.ON_TRACK],
        behind=counts[EnvelopeStatus.BEHIND],
        critical=counts[EnvelopeStatus.CRITICAL],
        overfunded=counts[EnvelopeStatus.OVERFUNDED],
        total_shortfall_cents=sum(p.gap_cents for p in predictions if p.gap_cents > 0),
    )


class PredictionEngine:
    """
    Stateless facade over the funding and debt algorithms, bound to one policy.

    Holds no data between calls; inject a stub in tests to control results.
    """

    def __init__(self, policy: PredictionPolicy = DEFAULT_POLICY):
        self.policy = policy

    def pay_dates(self, frequency: Frequency, start_date: date, end_date: date) -> List[date]:
        return generate_pay_dates(frequency, start_date, end_date, self.policy.max_pay_dates)

    def per_pay_contribution(
        self,
        bill_amount_cents: int,
        bill_frequency: Frequency,
        income_frequency: Frequency,
        days_until_due: Optional[int] = None,
    ) -> int:
        return per_pay_contribution(
            bill_amount_cents, bill_frequency, income_frequency, days_until_due, self.policy
        )

    def project(
        self,
        envelope: Envelope,
        income_sources: Sequence[RecurringIncomeSource],
        current_balance_cents: int,
        today: date,
        horizon: Optional[date] = None,
    ) -> FundingProjection:
        return project_funding(envelope, income_sources, current_balance_cents, today, horizon, self.policy)

    def classify(self, gap_cents: int, days_until_due: int) -> EnvelopeStatus:
        return classify_status(gap_cents, days_until_due, self.policy)

    def suggest(
        self,
        gap_cents: int,
        envelope: Envelope,
        income_sources: Sequence[RecurringIncomeSource],
        days_until_due: int,
    ) -> List[Suggestion]:
        return generate_suggestions(gap_cents, envelope, income_sources, days_until_due, self.policy)

    def predict(
        self,
        envelope: Envelope,
        income_sources: Sequence[RecurringIncomeSource],
        today: date,
        horizon: Optional[date] = None,
    ) -> EnvelopePrediction:
        return predict_envelope(envelope, income_sources, today, horizon, self.policy)

    def predict_all(
        self,
        envelopes: Iterable[Envelope],
        income_sources: Sequence[RecurringIncomeSource],
        today: date,
    ) -> List[EnvelopePrediction]:
        return predict_all(envelopes, income_sources, today, self.policy)

    def apply_payment(
        self,
        items: Iterable[DebtItem],
        payment_cents: int,
        persist: PersistBalance,
        now: datetime,
    ) -> PaymentResult:
        return apply_snowball_payment(items, payment_cents, persist, now)
