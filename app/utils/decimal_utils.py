# app/utils/decimal_utils.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

CENTS = Decimal("0.01")
HUNDRED = Decimal("100")


def to_decimal(value) -> Decimal:
    """Price rounded half-up to cents; a missing price reads as zero."""
    amount = value if isinstance(value, Decimal) else Decimal(str(value or 0))
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_margin(client_price, supplier_price) -> Decimal:
    # negative when the client price undercuts the supplier; shown as-is
    return (to_decimal(client_price) - to_decimal(supplier_price)).quantize(
        CENTS, rounding=ROUND_HALF_UP
    )


def margin_percent(client_price, supplier_price) -> Optional[Decimal]:
    supplier = to_decimal(supplier_price)
    if supplier == 0:
        return None
    ratio = compute_margin(client_price, supplier) / supplier * HUNDRED
    return ratio.quantize(CENTS, rounding=ROUND_HALF_UP)
