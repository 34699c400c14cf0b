"""Debt envelope endpoints - snowball payment distribution"""

import time
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from envelope_gateway.api.v1.schemas import (
    ApplyPaymentRequest,
    ApplyPaymentResponse,
    DebtItemSchema,
    DebtItemsResponse,
    DebtSummarySchema,
)
from envelope_gateway.api.dependencies import get_payoff_webhook_client, get_prediction_engine, get_request_id
from envelope_gateway.domain.exceptions import DuplicatePaymentError, EnvelopeNotFoundError, NotADebtEnvelopeError
from envelope_gateway.domain.models import DebtItem
from envelope_gateway.domain.prediction import PredictionEngine
from envelope_gateway.domain.snowball import calculate_debt_summary, calculate_payoff_projection, sort_by_snowball
from envelope_gateway.infrastructure.clients.payoff_webhook import PayoffWebhookClient
from envelope_gateway.infrastructure.database.models import DebtEnvelope
from envelope_gateway.infrastructure.database.repositories import (
    DebtItemRepository,
    DebtPaymentRepository,
    EnvelopeRepository,
    to_domain,
)
from envelope_gateway.infrastructure.database.session import get_db
from envelope_gateway.infrastructure.observability.logging import log_payment_applied
from envelope_gateway.infrastructure.observability.metrics import record_payment

router = APIRouter()


def months_to_payoff(item: DebtItem) -> Optional[int]:
    if item.is_paid_off or not item.minimum_payment_cents:
        return None
    projection = calculate_payoff_projection(
        item.current_balance_cents, item.interest_rate, item.minimum_payment_cents
    )
    return projection.months_to_payoff if projection else None


def item_schema(item: DebtItem) -> DebtItemSchema:
    return DebtItemSchema(
        id=item.debt_id,
        name=item.name,
        debt_type=item.debt_type,
        starting_balance_cents=item.starting_balance_cents,
        current_balance_cents=item.current_balance_cents,
        interest_rate=item.interest_rate,
        minimum_payment_cents=item.minimum_payment_cents,
        progress_percent=item.progress_percent,
        paid_off_at=item.paid_off_at,
        months_to_payoff=months_to_payoff(item),
    )


def summary_schema(items: List[DebtItem]) -> DebtSummarySchema:
    summary = calculate_debt_summary(items)
    return DebtSummarySchema(
        total_debt_cents=summary.total_debt_cents,
        total_starting_cents=summary.total_starting_cents,
        total_paid_off_cents=summary.total_paid_off_cents,
        progress_percent=summary.progress_percent,
        debt_count=summary.debt_count,
        paid_off_count=summary.paid_off_count,
        next_to_payoff_id=summary.next_to_payoff.debt_id if summary.next_to_payoff else None,
    )


def load_debt_envelope(db: Session, envelope_id: str) -> DebtEnvelope:
    envelope = EnvelopeRepository(db).get_envelope(envelope_id)
    if envelope is None:
        raise EnvelopeNotFoundError(f"Envelope not found: {envelope_id}")
    if not envelope.is_debt:
        raise NotADebtEnvelopeError(f"Envelope is not a debt envelope: {envelope_id}")
    return envelope


def all_items(db: Session, envelope_id: str) -> List[DebtItem]:
    return sort_by_snowball(to_domain(r) for r in DebtItemRepository(db).list_items(envelope_id))


@router.get("/envelopes/{envelope_id}/debt-items", response_model=DebtItemsResponse)
def list_debt_items(envelope_id: str, db: Session = Depends(get_db)):
    """Debts in snowball order (unpaid smallest first, paid off last) with progress summary"""
    try:
        load_debt_envelope(db, envelope_id)
    except EnvelopeNotFoundError:
        raise HTTPException(status_code=404, detail="Envelope not found")
    except NotADebtEnvelopeError:
        raise HTTPException(status_code=400, detail="Envelope is not a debt envelope")

    items = all_items(db, envelope_id)
    return DebtItemsResponse(
        envelope_id=envelope_id,
        items=[item_schema(i) for i in items],
        summary=summary_schema(items),
    )


@router.post("/envelopes/{envelope_id}/debt-items/apply-payment", response_model=ApplyPaymentResponse)
def apply_payment(
    envelope_id: str,
    request_body: ApplyPaymentRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
    engine: PredictionEngine = Depends(get_prediction_engine),
    webhook_client: PayoffWebhookClient = Depends(get_payoff_webhook_client),
):
    """
    Apply a payment to the envelope's debts, smallest balance first.

    Flow:
    1. Verify the envelope exists and holds debts
    2. Replay the stored result if the idempotency key was already used
    3. Lock unpaid debts so concurrent payments run one at a time
    4. Distribute the payment, one savepoint per balance update
    5. Record the payment and commit
    6. Schedule payoff webhooks for debts that reached zero
    """
    start_time = time.time()
    request_id = get_request_id(request)
    idempotency_key: Optional[str] = request_body.idempotency_key

    try:
        load_debt_envelope(db, envelope_id)

        payment_repo = DebtPaymentRepository(db)
        if idempotency_key:
            previous = payment_repo.get_by_key(envelope_id, idempotency_key)
            if previous is not None:
                items = all_items(db, envelope_id)
                by_id = {i.debt_id: i for i in items}
                # Stored ids keep payoff order
                paid_off = [by_id[d] for d in previous.paid_off_item_ids or [] if d in by_id]
                return ApplyPaymentResponse(
                    envelope_id=envelope_id,
                    payment_applied_cents=previous.payment_applied_cents,
                    remaining_payment_cents=previous.remaining_payment_cents,
                    paid_off_items=[item_schema(i) for i in paid_off],
                    failed_item_ids=list(previous.failed_item_ids or []),
                    items=[item_schema(i) for i in items],
                    summary=summary_schema(items),
                    replayed=True,
                )

        debt_repo = DebtItemRepository(db)
        unpaid = [to_domain(r) for r in debt_repo.lock_unpaid_items(envelope_id)]

        if not unpaid:
            db.rollback()
            return ApplyPaymentResponse(
                envelope_id=envelope_id,
                payment_applied_cents=0,
                remaining_payment_cents=request_body.amount_cents,
                paid_off_items=[],
                items=[],
                message="No unpaid debts to apply payment to",
            )

        result = engine.apply_payment(
            unpaid,
            request_body.amount_cents,
            persist=debt_repo.update_balance,
            now=datetime.now(timezone.utc),
        )

        try:
            payment_repo.record_payment(envelope_id, request_body.amount_cents, result, idempotency_key)
        except IntegrityError as e:
            raise DuplicatePaymentError(f"Payment already in progress for key {idempotency_key}") from e

        db.commit()

    except EnvelopeNotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Envelope not found")

    except NotADebtEnvelopeError:
        db.rollback()
        raise HTTPException(status_code=400, detail="Envelope is not a debt envelope")

    except DuplicatePaymentError as e:
        db.rollback()
        logging.warning(f"Duplicate payment: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail="Payment with this idempotency key already applied")

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error applying payment: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    if webhook_client.enabled:
        for item in result.paid_off_items:
            background_tasks.add_task(
                webhook_client.send_payoff_event,
                {
                    "event": "DEBT_PAID_OFF",
                    "envelope_id": envelope_id,
                    "debt_id": item.debt_id,
                    "name": item.name,
                    "paid_off_at": item.paid_off_at.isoformat(),
                },
            )

    duration_ms = (time.time() - start_time) * 1000
    record_payment(result)
    log_payment_applied(request_id, envelope_id, result, duration_ms)

    items = all_items(db, envelope_id)
    return ApplyPaymentResponse(
        envelope_id=envelope_id,
        payment_applied_cents=result.payment_applied_cents,
        remaining_payment_cents=result.remaining_payment_cents,
        paid_off_items=[item_schema(i) for i in result.paid_off_items],
        failed_item_ids=[i.debt_id for i in result.failed_items],
        items=[item_schema(i) for i in items],
        summary=summary_schema(items),
    )
