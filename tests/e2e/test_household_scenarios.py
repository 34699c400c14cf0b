"""
E2E tests for household budgeting scenarios through the HTTP API.

Each scenario submits a full envelope snapshot or a sequence of debt
payments and checks the outcome a household would see.

Households:
- weekly_worker: weekly wage with rent due in four pays, phone with no due date
- last_minute: insurance due in 10 days with a large shortfall
- overdue: bill already past its due date with no income routed to it
- snowball: three debts paid down over several payments
"""

import pytest
from fastapi.testclient import TestClient


def predict(client: TestClient, envelopes: list, income_sources: list) -> dict:
    response = client.post(
        "/v1/predictions",
        json={"as_of": "2024-03-01", "envelopes": envelopes, "income_sources": income_sources},
    )
    assert response.status_code == 200
    return {p["envelope_id"]: p for p in response.json()["predictions"]}


def pay(client: TestClient, amount_cents: int) -> dict:
    response = client.post(
        "/v1/envelopes/debts/debt-items/apply-payment", json={"amount_cents": amount_cents}
    )
    assert response.status_code == 200
    return response.json()


@pytest.mark.integration
def test_weekly_worker_on_track(client: TestClient):
    """
    weekly_worker: $300 of each weekly pay routed to $1200 monthly rent
    Expected: rent exactly funded by the four pays before the due date
    """
    predictions = predict(
        client,
        envelopes=[
            {
                "id": "rent",
                "name": "Rent",
                "bill_amount_cents": 120000,
                "bill_frequency": "monthly",
                "due_date": "2024-03-29",
            },
            {
                "id": "phone",
                "name": "Phone",
                "bill_amount_cents": 5000,
                "bill_frequency": "monthly",
                "current_balance_cents": 1000,
            },
        ],
        income_sources=[
            {
                "id": "wage",
                "name": "Wage",
                "frequency": "weekly",
                "next_date": "2024-03-01",
                "allocations": [
                    {"envelope_id": "rent", "amount_cents": 30000},
                    {"envelope_id": "phone", "amount_cents": 2000},
                ],
            }
        ],
    )

    rent = predictions["rent"]
    # Pay on the due date itself lands too late to count
    assert [e["date"] for e in rent["future_income"]] == [
        "2024-03-01",
        "2024-03-08",
        "2024-03-15",
        "2024-03-22",
    ]
    assert rent["target_amount_cents"] == 120000
    assert rent["gap_cents"] == 0
    assert rent["status"] == "on_track"
    assert rent["required_per_pay_cents"] == 30000
    assert rent["suggestions"] == []

    phone = predictions["phone"]
    assert phone["projected_balance_cents"] == 11000
    assert phone["status"] == "overfunded"


@pytest.mark.integration
def test_last_minute_critical(client: TestClient):
    """
    last_minute: $600 insurance due in 10 days, next monthly pay adds $50
    Expected: critical, no per-pay increase since no full pay period remains
    """
    predictions = predict(
        client,
        envelopes=[
            {
                "id": "insurance",
                "name": "Car insurance",
                "target_amount_cents": 60000,
                "due_date": "2024-03-11",
                "current_balance_cents": 10000,
            }
        ],
        income_sources=[
            {
                "id": "salary",
                "name": "Salary",
                "frequency": "monthly",
                "next_date": "2024-03-05",
                "allocations": [{"envelope_id": "insurance", "amount_cents": 5000}],
            }
        ],
    )

    insurance = predictions["insurance"]
    assert insurance["projected_balance_cents"] == 15000
    assert insurance["gap_cents"] == 45000
    assert insurance["status"] == "critical"
    assert insurance["days_until_due"] == 10

    suggestions = insurance["suggestions"]
    assert [s["type"] for s in suggestions] == [
        "one_time_income",
        "reduce_bill",
        "extend_due_date",
        "lifestyle_change",
    ]
    assert suggestions[0]["message"] == "Find one-time income of $450 (sell items, extra shifts, etc.)"


@pytest.mark.integration
def test_overdue_bill(client: TestClient):
    """
    overdue: $300 bill due 10 days ago, nothing saved, no income
    Expected: critical with negative runway and no due date extension
    """
    predictions = predict(
        client,
        envelopes=[
            {
                "id": "water",
                "name": "Water bill",
                "target_amount_cents": 30000,
                "due_date": "2024-02-20",
            }
        ],
        income_sources=[],
    )

    water = predictions["water"]
    assert water["days_until_due"] == -10
    assert water["future_income"] == []
    assert water["gap_cents"] == 30000
    assert water["status"] == "critical"
    assert [s["type"] for s in water["suggestions"]] == [
        "one_time_income",
        "reduce_bill",
        "lifestyle_change",
    ]


@pytest.mark.integration
def test_snowball_payoff_journey(client: TestClient, debt_envelope):
    """
    snowball: $50 card and $200 loan cleared over three payments
    Expected: card first, then loan, overflow reported, nothing left to pay
    """
    first = pay(client, 3000)
    assert first["paid_off_items"] == []
    assert first["summary"]["next_to_payoff_id"] == "card"

    second = pay(client, 10000)
    assert [i["id"] for i in second["paid_off_items"]] == ["card"]
    balances = {i["id"]: i["current_balance_cents"] for i in second["items"]}
    assert balances["loan"] == 12000

    third = pay(client, 15000)
    assert [i["id"] for i in third["paid_off_items"]] == ["loan"]
    assert third["payment_applied_cents"] == 12000
    assert third["remaining_payment_cents"] == 3000

    listing = client.get("/v1/envelopes/debts/debt-items").json()
    assert listing["summary"]["total_debt_cents"] == 0
    assert listing["summary"]["paid_off_count"] == 3
    assert listing["summary"]["progress_percent"] == 100.0
    assert listing["summary"]["next_to_payoff_id"] is None

    final = pay(client, 1000)
    assert final["payment_applied_cents"] == 0
    assert final["message"] == "No unpaid debts to apply payment to"
