"""
Cart validation - pure shape checks on a submitted cart.
Never touches the store, so a bad cart is rejected before a unit of work opens.
"""
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from app.exceptions import CartValidationError
from app.schemas.base import MAX_INT

_DIGITS = re.compile(r"[ \t]*[0-9]+[ \t]*", re.ASCII)

# Numeric(12, 2) upper bound for transaction totals
MAX_TOTAL = Decimal("9999999999.99")


@dataclass(frozen=True)
class CartLine:
    product_id: int
    quantity: int


def _positive_int(value: Any) -> int | None:
    """Return value as a positive int, or None if it is not one.

    Accepts ints and ASCII digit strings (the UI sends both) up to MAX_INT.
    Rejects bools and fractional numbers rather than truncating them.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and _DIGITS.fullmatch(value):
        number = int(value)
    else:
        return None
    return number if 0 < number <= MAX_INT else None


def validate_cart(cart: Any) -> list[CartLine]:
    """Normalize a submitted cart into CartLines, in submitted order.

    Raises:
        CartValidationError: naming the offending line (0-based) and the reason
    """
    if not isinstance(cart, list) or not cart:
        raise CartValidationError("Invalid or empty cart provided")

    lines = []
    for index, item in enumerate(cart):
        if not isinstance(item, dict):
            raise CartValidationError("line must be an object with productId and quantity", index)

        product_id = _positive_int(item.get("productId"))
        if product_id is None:
            raise CartValidationError(
                f"productId must be a positive integer, got {item.get('productId')!r}", index
            )

        quantity = _positive_int(item.get("quantity"))
        if quantity is None:
            raise CartValidationError(
                f"quantity must be a positive integer, got {item.get('quantity')!r}", index
            )

        lines.append(CartLine(product_id=product_id, quantity=quantity))
    return lines


def parse_total_amount(value: Any) -> Decimal:
    """Parse the client-submitted total exactly (no float round trip)."""
    if isinstance(value, bool) or not isinstance(value, (str, int, float, Decimal)):
        raise CartValidationError("Invalid totalAmount provided")
    try:
        # str() first so floats keep their shortest repr instead of binary noise
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise CartValidationError("Invalid totalAmount provided")
    if not amount.is_finite() or amount <= 0 or amount > MAX_TOTAL:
        raise CartValidationError("Invalid totalAmount provided")
    return amount
