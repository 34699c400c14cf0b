"""Policy constants for funding predictions, overridable per engine"""

from dataclasses import dataclass
from decimal import Decimal

# Safety bound on generated pay dates, not a business rule
MAX_PAY_DATES = 365

# Average weeks per month; an approximation, not calendar arithmetic
WEEKS_PER_MONTH = Decimal("4.33")

# Bills due further out than this are smoothed as open-ended
OPEN_ENDED_THRESHOLD_DAYS = 365

# Projection window when neither a horizon nor a due date is given
DEFAULT_HORIZON_DAYS = 30

# Surplus beyond $10 counts as overfunded
OVERFUNDED_THRESHOLD_CENTS = 1_000

# Shortfalls with this many days or fewer left are critical
CRITICAL_RUNWAY_DAYS = 14

# Stand-in days-until-due for envelopes without a due date
NO_DUE_DATE_DAYS = 999

# Suggest extending the due date only with more runway than this
EXTEND_DUE_DATE_MIN_DAYS = 7


@dataclass(frozen=True)
class PredictionPolicy:
    """Thresholds and approximations used by the prediction algorithms"""

    max_pay_dates: int = MAX_PAY_DATES
    weeks_per_month: Decimal = WEEKS_PER_MONTH
    open_ended_threshold_days: int = OPEN_ENDED_THRESHOLD_DAYS
    default_horizon_days: int = DEFAULT_HORIZON_DAYS
    overfunded_threshold_cents: int = OVERFUNDED_THRESHOLD_CENTS
    critical_runway_days: int = CRITICAL_RUNWAY_DAYS
    no_due_date_days: int = NO_DUE_DATE_DAYS
    extend_due_date_min_days: int = EXTEND_DUE_DATE_MIN_DAYS


DEFAULT_POLICY = PredictionPolicy()
