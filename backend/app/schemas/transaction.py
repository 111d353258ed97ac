from datetime import datetime
from decimal import Decimal
from typing import Any

from app.schemas.base import CamelModel


class CheckoutRequest(CamelModel):
    # Shape is checked by the cart validator so that malformed carts are
    # reported per line instead of as a generic body error.
    cart: Any = None
    total_amount: Any = None


class ProductSummary(CamelModel):
    name: str
    barcode: str


class TransactionItemOut(CamelModel):
    id: int
    product_id: int
    quantity: int
    price_at_sale: Decimal
    product: ProductSummary


class TransactionOut(CamelModel):
    id: int
    total_amount: Decimal
    created_at: datetime
    items: list[TransactionItemOut]


class CheckoutResponse(CamelModel):
    message: str
    transaction: TransactionOut
    warning: str | None = None
