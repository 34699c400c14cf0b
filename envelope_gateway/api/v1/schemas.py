"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import List, Optional

from envelope_gateway.domain.models import DebtType, EnvelopeStatus, Frequency, SuggestionType


class AllocationSchema(BaseModel):
    """Share of each pay routed to one envelope"""

    envelope_id: str = Field(..., min_length=1)
    amount_cents: int = Field(..., ge=0, description="Allocated amount per pay in cents")


class IncomeSourceSchema(BaseModel):
    """Recurring income stream; list order sets priority (first is primary)"""

    id: str = Field(..., min_length=1)
    name: str
    frequency: Frequency
    next_date: date
    allocations: List[AllocationSchema] = []


class EnvelopeSchema(BaseModel):
    """Envelope snapshot supplied by the storage layer"""

    id: str = Field(..., min_length=1)
    name: str = ""
    target_amount_cents: int = Field(0, ge=0)
    bill_amount_cents: Optional[int] = Field(None, ge=0)
    bill_frequency: Optional[Frequency] = None
    due_date: Optional[date] = None
    current_balance_cents: int = 0


class PredictionRequest(BaseModel):
    """Request body for POST /v1/predictions"""

    as_of: Optional[date] = Field(None, description="Date to predict from (default: today)")
    envelopes: List[EnvelopeSchema]
    income_sources: List[IncomeSourceSchema] = []


class FutureIncomeSchema(BaseModel):
    date: date
    income_id: str
    source: str
    amount_cents: int


class SuggestionSchema(BaseModel):
    type: SuggestionType
    message: str
    amount_cents: Optional[int] = None


class PredictionSchema(BaseModel):
    """Funding prediction for one envelope"""

    envelope_id: str
    current_balance_cents: int
    projected_balance_cents: int
    target_amount_cents: int
    gap_cents: int
    status: EnvelopeStatus
    days_until_due: int
    required_per_pay_cents: Optional[int] = None
    future_income: List[FutureIncomeSchema]
    suggestions: List[SuggestionSchema]


class PredictionSummarySchema(BaseModel):
    envelope_count: int
    on_track: int
    behind: int
    critical: int
    overfunded: int
    total_shortfall_cents: int


class PredictionResponse(BaseModel):
    """Response for POST /v1/predictions"""

    as_of: date
    predictions: List[PredictionSchema]
    summary: PredictionSummarySchema


class DebtItemSchema(BaseModel):
    """Single debt within a debt envelope"""

    id: str
    name: str
    debt_type: DebtType
    starting_balance_cents: int
    current_balance_cents: int
    interest_rate: Optional[float] = None
    minimum_payment_cents: Optional[int] = None
    progress_percent: float
    paid_off_at: Optional[datetime] = None
    months_to_payoff: Optional[int] = Field(None, description="Months to clear at the minimum payment")


class DebtSummarySchema(BaseModel):
    total_debt_cents: int
    total_starting_cents: int
    total_paid_off_cents: int
    progress_percent: float
    debt_count: int
    paid_off_count: int
    next_to_payoff_id: Optional[str] = None


class DebtItemsResponse(BaseModel):
    """Response for GET /v1/envelopes/{envelope_id}/debt-items"""

    envelope_id: str
    items: List[DebtItemSchema]
    summary: DebtSummarySchema


class ApplyPaymentRequest(BaseModel):
    """Request body for POST /v1/envelopes/{envelope_id}/debt-items/apply-payment"""

    amount_cents: int = Field(..., gt=0, description="Payment amount in cents")
    idempotency_key: Optional[str] = Field(
        None, min_length=1, max_length=200, description="Repeat requests with the same key apply once"
    )


class ApplyPaymentResponse(BaseModel):
    """Response for POST /v1/envelopes/{envelope_id}/debt-items/apply-payment"""

    envelope_id: str
    payment_applied_cents: int
    remaining_payment_cents: int
    paid_off_items: List[DebtItemSchema]
    failed_item_ids: List[str] = []
    items: List[DebtItemSchema]
    summary: Optional[DebtSummarySchema] = None
    replayed: bool = False
    message: Optional[str] = None
