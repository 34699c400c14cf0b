"""POST /v1/predictions - envelope funding predictions"""

import time
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, Request

from envelope_gateway.api.v1.schemas import (
    EnvelopeSchema,
    FutureIncomeSchema,
    IncomeSourceSchema,
    PredictionRequest,
    PredictionResponse,
    PredictionSchema,
    PredictionSummarySchema,
    SuggestionSchema,
)
from envelope_gateway.api.dependencies import get_prediction_engine, get_request_id
from envelope_gateway.domain.models import Allocation, Envelope, EnvelopePrediction, RecurringIncomeSource
from envelope_gateway.domain.prediction import PredictionEngine, summarize_predictions
from envelope_gateway.infrastructure.observability.logging import log_prediction_run
from envelope_gateway.infrastructure.observability.metrics import record_predictions

router = APIRouter()


def to_envelope(schema: EnvelopeSchema) -> Envelope:
    return Envelope(
        envelope_id=schema.id,
        name=schema.name,
        target_amount_cents=schema.target_amount_cents,
        bill_amount_cents=schema.bill_amount_cents,
        bill_frequency=schema.bill_frequency,
        due_date=schema.due_date,
        current_balance_cents=schema.current_balance_cents,
    )


def to_income_source(schema: IncomeSourceSchema) -> RecurringIncomeSource:
    return RecurringIncomeSource(
        income_id=schema.id,
        name=schema.name,
        frequency=schema.frequency,
        next_date=schema.next_date,
        allocations=[Allocation(envelope_id=a.envelope_id, amount_cents=a.amount_cents) for a in schema.allocations],
    )


def to_schema(prediction: EnvelopePrediction) -> PredictionSchema:
    return PredictionSchema(
        envelope_id=prediction.envelope_id,
        current_balance_cents=prediction.current_balance_cents,
        projected_balance_cents=prediction.projected_balance_cents,
        target_amount_cents=prediction.target_amount_cents,
        gap_cents=prediction.gap_cents,
        status=prediction.status,
        days_until_due=prediction.days_until_due,
        required_per_pay_cents=prediction.required_per_pay_cents,
        future_income=[
            FutureIncomeSchema(
                date=event.date,
                income_id=event.income_id,
                source=event.source,
                amount_cents=event.amount_cents,
            )
            for event in prediction.future_income
        ],
        suggestions=[
            SuggestionSchema(type=s.type, message=s.message, amount_cents=s.amount_cents)
            for s in prediction.suggestions
        ],
    )


@router.post("/predictions", response_model=PredictionResponse)
def create_predictions(
    request_body: PredictionRequest,
    request: Request,
    engine: PredictionEngine = Depends(get_prediction_engine),
):
    """
    Predict funding for every envelope in the snapshot.

    Pure computation over the supplied data: nothing is read from or
    written to storage. Income sources are used in the given order, so the
    first one is treated as primary for suggestions.
    """
    start_time = time.time()
    request_id = get_request_id(request)
    today = request_body.as_of or date.today()

    envelopes = [to_envelope(e) for e in request_body.envelopes]
    income_sources = [to_income_source(i) for i in request_body.income_sources]

    predictions: List[EnvelopePrediction] = engine.predict_all(envelopes, income_sources, today)
    summary = summarize_predictions(predictions)

    duration_ms = (time.time() - start_time) * 1000
    record_predictions(predictions)
    log_prediction_run(request_id, summary, duration_ms)

    return PredictionResponse(
        as_of=today,
        predictions=[to_schema(p) for p in predictions],
        summary=PredictionSummarySchema(
            envelope_count=summary.envelope_count,
            on_track=summary.on_track,
            behind=summary.behind,
            critical=summary.critical,
            overfunded=summary.overfunded,
            total_shortfall_cents=summary.total_shortfall_cents,
        ),
    )
