"""Data access layer for debt envelopes, debt items and payments"""

from datetime import datetime
from typing import List, Optional
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from envelope_gateway.infrastructure.database.models import DebtEnvelope, DebtItemRecord, DebtPayment
from envelope_gateway.domain.exceptions import DebtItemUpdateError
from envelope_gateway.domain.models import DebtItem, DebtType, PaymentResult


def to_domain(record: DebtItemRecord) -> DebtItem:
    """Map an ORM row to the domain dataclass"""
    return DebtItem(
        debt_id=record.id,
        envelope_id=record.envelope_id,
        current_balance_cents=record.current_balance_cents,
        name=record.name,
        debt_type=DebtType(record.debt_type),
        starting_balance_cents=record.starting_balance_cents,
        interest_rate=record.interest_rate,
        minimum_payment_cents=record.minimum_payment_cents,
        paid_off_at=record.paid_off_at,
    )


class EnvelopeRepository:
    """Repository for envelopes at the payment boundary"""

    def __init__(self, db: Session):
        self.db = db

    def get_envelope(self, envelope_id: str) -> Optional[DebtEnvelope]:
        return self.db.get(DebtEnvelope, envelope_id)


class DebtItemRepository:
    """Repository for debt items"""

    def __init__(self, db: Session):
        self.db = db

    def list_items(self, envelope_id: str) -> List[DebtItemRecord]:
        """All debts in the envelope, including paid off ones"""
        return (
            self.db.query(DebtItemRecord)
            .filter(DebtItemRecord.envelope_id == envelope_id)
            .all()
        )

    def lock_unpaid_items(self, envelope_id: str) -> List[DebtItemRecord]:
        """
        Unpaid debts for the envelope, row-locked until the transaction ends.

        Serialises concurrent payments against the same envelope: a second
        request blocks here until the first commits, then reads the new
        balances.
        """
        return (
            self.db.query(DebtItemRecord)
            .filter(
                DebtItemRecord.envelope_id == envelope_id,
                DebtItemRecord.paid_off_at.is_(None),
            )
            .order_by(DebtItemRecord.current_balance_cents.asc())
            .with_for_update()
            .all()
        )

    def update_balance(self, item: DebtItem, new_balance_cents: int, paid_off_at: Optional[datetime]) -> None:
        """
        Store a new balance inside a savepoint.

        Raises:
            DebtItemUpdateError: Row missing or the write failed; other
            updates in the transaction are unaffected
        """
        try:
            with self.db.begin_nested():
                record = self.db.get(DebtItemRecord, item.debt_id)
                if record is None:
                    raise DebtItemUpdateError(item.debt_id, "Debt item no longer exists")
                record.current_balance_cents = new_balance_cents
                record.paid_off_at = paid_off_at
                self.db.flush()
        except SQLAlchemyError as e:
            raise DebtItemUpdateError(item.debt_id) from e


class DebtPaymentRepository:
    """Repository for applied payments"""

    def __init__(self, db: Session):
        self.db = db

    def get_by_key(self, envelope_id: str, idempotency_key: str) -> Optional[DebtPayment]:
        return (
            self.db.query(DebtPayment)
            .filter(
                DebtPayment.envelope_id == envelope_id,
                DebtPayment.idempotency_key == idempotency_key,
            )
            .first()
        )

    def record_payment(
        self,
        envelope_id: str,
        amount_cents: int,
        result: PaymentResult,
        idempotency_key: Optional[str] = None,
    ) -> DebtPayment:
        """Persist the outcome alongside the balance updates"""
        db_payment = DebtPayment(
            envelope_id=envelope_id,
            idempotency_key=idempotency_key,
            amount_cents=amount_cents,
            payment_applied_cents=result.payment_applied_cents,
            remaining_payment_cents=result.remaining_payment_cents,
            paid_off_item_ids=[item.debt_id for item in result.paid_off_items],
            failed_item_ids=[item.debt_id for item in result.failed_items],
        )
        self.db.add(db_payment)
        self.db.flush()  # Surfaces a duplicate key before commit
        return db_payment
