"""Commission split — how an incoming bus-company payment divides between us and the customer.

Invariants:
    - commission + customer payout == amount (to the cent)
    - Both parts rounded half-up to 2 decimal places
    - Amounts leave the API as JSON numbers via to_float
"""

from decimal import Decimal, ROUND_HALF_UP

COMMISSION_RATE = Decimal("0.20")
CENT = Decimal("0.01")


def split_payment(amount: Decimal) -> tuple[Decimal, Decimal]:
    """Return (commission_amount, customer_payout) for an incoming payment."""
    amount = Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    commission = (amount * COMMISSION_RATE).quantize(CENT, rounding=ROUND_HALF_UP)
    return commission, amount - commission


def to_float(amount: Decimal | None) -> float | None:
    """JSON-friendly amount; None stays None."""
    return float(amount) if amount is not None else None
