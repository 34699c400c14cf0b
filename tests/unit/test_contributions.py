"""Unit tests for per-pay contribution conversion"""

from decimal import Decimal
from envelope_gateway.domain.contributions import per_pay_contribution, target_by_due_date, weekly_equivalent
from envelope_gateway.domain.models import Frequency
from envelope_gateway.domain.policy import PredictionPolicy


def test_open_ended_monthly_bill_fortnightly_pay():
    """Test $433/month is $200 per fortnight using 4.33 weeks per month"""
    assert per_pay_contribution(43300, Frequency.MONTHLY, Frequency.FORTNIGHTLY) == 20000


def test_open_ended_weekly_bill_monthly_pay():
    """Test $100/week is $433 per month"""
    assert per_pay_contribution(10000, Frequency.WEEKLY, Frequency.MONTHLY) == 43300


def test_open_ended_annual_bill_weekly_pay():
    """Test $52/year is $1 per week"""
    assert per_pay_contribution(5200, Frequency.ANNUALLY, Frequency.WEEKLY) == 100


def test_open_ended_rounds_half_up_to_cent():
    """Test fractional cents are rounded"""
    # 10000 / 13 = 769.23 per week
    assert per_pay_contribution(10000, Frequency.QUARTERLY, Frequency.WEEKLY) == 769


def test_due_date_beyond_a_year_is_open_ended():
    """Test far-off due dates are smoothed like ongoing bills"""
    far = per_pay_contribution(43300, Frequency.MONTHLY, Frequency.FORTNIGHTLY, days_until_due=400)
    ongoing = per_pay_contribution(43300, Frequency.MONTHLY, Frequency.FORTNIGHTLY)

    assert far == ongoing == 20000


def test_due_date_mode_splits_over_remaining_periods():
    """Test $600 due in 60 days over 4 fortnights"""
    assert per_pay_contribution(60000, Frequency.MONTHLY, Frequency.FORTNIGHTLY, days_until_due=60) == 15000


def test_due_date_mode_rounds_to_cent():
    """Test $100 over 3 weekly periods"""
    assert per_pay_contribution(10000, Frequency.MONTHLY, Frequency.WEEKLY, days_until_due=21) == 3333


def test_due_date_mode_no_full_period_returns_full_bill():
    """Test full amount is due next pay when no period fits"""
    assert per_pay_contribution(60000, Frequency.MONTHLY, Frequency.FORTNIGHTLY, days_until_due=10) == 60000
    assert per_pay_contribution(60000, Frequency.MONTHLY, Frequency.FORTNIGHTLY, days_until_due=0) == 60000
    assert per_pay_contribution(60000, Frequency.MONTHLY, Frequency.FORTNIGHTLY, days_until_due=-5) == 60000


def test_custom_weeks_per_month():
    """Test the monthly approximation is read from the policy"""
    policy = PredictionPolicy(weeks_per_month=Decimal(4))

    assert weekly_equivalent(40000, Frequency.MONTHLY, policy) == Decimal(10000)
    assert per_pay_contribution(40000, Frequency.MONTHLY, Frequency.FORTNIGHTLY, policy=policy) == 20000


def test_target_by_due_date_is_full_bill():
    assert target_by_due_date(60000) == 60000
