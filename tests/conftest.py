"""Pytest fixtures for testing"""

import os

# Point the app's default engine at SQLite before anything imports the session module
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import date, datetime, timedelta, timezone
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from envelope_gateway.api.main import create_app
from envelope_gateway.infrastructure.database.models import Base, DebtEnvelope, DebtItemRecord
from envelope_gateway.infrastructure.database.session import configure_sqlite, get_db
from envelope_gateway.domain.models import Allocation, DebtItem, Envelope, Frequency, RecurringIncomeSource


# Test database
TEST_DATABASE_URL = "sqlite://"
engine = configure_sqlite(
    create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool)
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TODAY = date(2024, 3, 1)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def fortnightly_pay() -> RecurringIncomeSource:
    """Fortnightly salary starting today, $150 routed to the car envelope"""
    return RecurringIncomeSource(
        income_id="salary",
        name="Salary",
        frequency=Frequency.FORTNIGHTLY,
        next_date=TODAY,
        allocations=[Allocation(envelope_id="car", amount_cents=15000)],
    )


@pytest.fixture
def car_envelope() -> Envelope:
    """$1000 target due in 60 days with $200 saved"""
    return Envelope(
        envelope_id="car",
        name="Car registration",
        target_amount_cents=100000,
        due_date=TODAY + timedelta(days=60),
        current_balance_cents=20000,
    )


@pytest.fixture
def debt_items() -> list[DebtItem]:
    """Two unpaid debts, larger first to exercise snowball ordering"""
    return [
        DebtItem(debt_id="B", envelope_id="debts", current_balance_cents=20000, starting_balance_cents=20000),
        DebtItem(debt_id="A", envelope_id="debts", current_balance_cents=5000, starting_balance_cents=5000),
    ]


@pytest.fixture
def debt_envelope(db: Session) -> DebtEnvelope:
    """Debt envelope with a $50 store card and a $200 personal loan"""
    envelope = DebtEnvelope(id="debts", name="Debt payoff", is_debt=True)
    db.add(envelope)
    db.add_all(
        [
            DebtItemRecord(
                id="card",
                envelope_id="debts",
                name="Store card",
                debt_type="credit_card",
                starting_balance_cents=8000,
                current_balance_cents=5000,
            ),
            DebtItemRecord(
                id="loan",
                envelope_id="debts",
                name="Personal loan",
                debt_type="personal_loan",
                starting_balance_cents=20000,
                current_balance_cents=20000,
                interest_rate=12.0,
                minimum_payment_cents=2500,
            ),
            DebtItemRecord(
                id="afterpay",
                envelope_id="debts",
                name="Afterpay",
                debt_type="afterpay",
                starting_balance_cents=3000,
                current_balance_cents=0,
                paid_off_at=datetime(2024, 1, 10, tzinfo=timezone.utc),
            ),
        ]
    )
    db.add(DebtEnvelope(id="groceries", name="Groceries", is_debt=False))
    db.commit()
    return envelope
