"""Integer-cents helpers for money arithmetic"""

from decimal import Decimal, ROUND_HALF_UP

CENTS_PER_DOLLAR = 100


def round_cents(amount: Decimal) -> int:
    """Round a fractional cents value half-up to a whole cent"""
    return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def ceil_dollars(amount_cents: int, divisor: int = 1) -> int:
    """
    Divide and round up to the next whole dollar, returned in cents.

    Example: ceil_dollars(4501) → 4600, ceil_dollars(10000, 3) → 3400
    """
    unit = divisor * CENTS_PER_DOLLAR
    return -(-amount_cents // unit) * CENTS_PER_DOLLAR


def format_dollars(amount_cents: int) -> str:
    """Render cents as a dollar string, dropping zero cents ($46, $12.50)"""
    dollars, cents = divmod(abs(amount_cents), CENTS_PER_DOLLAR)
    sign = "-" if amount_cents < 0 else ""
    if cents:
        return f"{sign}${dollars}.{cents:02d}"
    return f"{sign}${dollars}"
