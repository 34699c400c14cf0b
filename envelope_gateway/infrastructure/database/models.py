"""SQLAlchemy ORM models for debt envelopes, debt items and applied payments"""

import uuid
from sqlalchemy import Column, String, BigInteger, Boolean, Float, DateTime, ForeignKey, Text, JSON, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func

Base = declarative_base()


def generate_id() -> str:
    return str(uuid.uuid4())


class DebtEnvelope(Base):
    """Envelope as seen by the payment boundary (owned by the storage layer)"""

    __tablename__ = "debt_envelope"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(Text, nullable=False)
    is_debt = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    items = relationship("DebtItemRecord", back_populates="envelope", cascade="all, delete-orphan")


class DebtItemRecord(Base):
    """Individual debt within a debt envelope"""

    __tablename__ = "debt_item"

    id = Column(String(36), primary_key=True, default=generate_id)
    envelope_id = Column(String(36), ForeignKey("debt_envelope.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(Text, nullable=False, default="")
    debt_type = Column(Text, nullable=False, default="other")
    starting_balance_cents = Column(BigInteger, nullable=False, default=0)
    current_balance_cents = Column(BigInteger, nullable=False, default=0)
    interest_rate = Column(Float, nullable=True)
    minimum_payment_cents = Column(BigInteger, nullable=True)
    paid_off_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=func.now())

    envelope = relationship("DebtEnvelope", back_populates="items")


class DebtPayment(Base):
    """Applied payment; the idempotency key makes each request apply at most once"""

    __tablename__ = "debt_payment"
    __table_args__ = (UniqueConstraint("envelope_id", "idempotency_key", name="uq_debt_payment_key"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    envelope_id = Column(String(36), ForeignKey("debt_envelope.id", ondelete="CASCADE"), nullable=False, index=True)
    idempotency_key = Column(Text, nullable=True)
    amount_cents = Column(BigInteger, nullable=False)
    payment_applied_cents = Column(BigInteger, nullable=False)
    remaining_payment_cents = Column(BigInteger, nullable=False)
    paid_off_item_ids = Column(JSON, nullable=False, default=list)
    failed_item_ids = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
