"""
Checkout orchestration.

Runs cart validation, stock reservation and sale recording as one unit of
work: either everything commits or nothing does.

    Started -> ValidatingCart -> ReservingStock -> Recording -> Committed

Any failure before Committed ends in RolledBack.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import AppException, StoreFailure
from app.models import Transaction
from app.services.cart_validator import validate_cart, parse_total_amount
from app.services.inventory_ledger import InventoryLedger
from app.services.sale_recorder import SaleLine, SaleRecorder
from app.services.transaction_service import get_transaction

logger = logging.getLogger(__name__)


class CheckoutState(Enum):
    STARTED = "started"
    VALIDATING_CART = "validating_cart"
    RESERVING_STOCK = "reserving_stock"
    RECORDING = "recording"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass
class CheckoutResult:
    transaction: Transaction
    warning: str | None = None
    state: CheckoutState = CheckoutState.COMMITTED


class CheckoutService:
    """Turns a cart into a committed Transaction.

    Holds no store handle of its own; the session for the unit of work is
    passed into every call. No retries: a failed checkout is reported and
    the caller decides whether to resubmit.
    """

    def __init__(self, ledger: InventoryLedger | None = None, recorder: SaleRecorder | None = None):
        self.ledger = ledger or InventoryLedger()
        self.recorder = recorder or SaleRecorder()

    async def checkout(
        self,
        session: AsyncSession,
        cart: Any,
        total_amount: Any,
        cashier: str | None = None,
    ) -> CheckoutResult:
        """Run one checkout.

        Raises:
            CartValidationError: malformed cart or total (no store access happened)
            ProductNotFound, InsufficientStock: unit of work rolled back
            StoreFailure: persistence error, unit of work rolled back
        """
        state = CheckoutState.STARTED
        try:
            state = CheckoutState.VALIDATING_CART
            lines = validate_cart(cart)
            client_total = parse_total_amount(total_amount)

            try:
                async with session.begin():
                    state = CheckoutState.RESERVING_STOCK
                    sale_lines = []
                    for line in lines:
                        reserved = await self.ledger.reserve_and_decrement(
                            session, line.product_id, line.quantity
                        )
                        sale_lines.append(SaleLine(
                            product_id=reserved.product_id,
                            quantity=line.quantity,
                            price_at_sale=reserved.price,
                            name=reserved.name,
                            barcode=reserved.barcode,
                        ))

                    state = CheckoutState.RECORDING
                    sale = await self.recorder.record(session, sale_lines, client_total)
            except SQLAlchemyError as e:
                logger.exception(f"Store failure during {state.value}: {e}")
                raise StoreFailure() from e
        except AppException as e:
            logger.warning(
                f"Checkout {CheckoutState.ROLLED_BACK.value} during {state.value}: {e.message}"
            )
            raise

        state = CheckoutState.COMMITTED
        logger.info(
            f"Transaction {sale.transaction_id} committed: {len(sale_lines)} line(s), "
            f"total {sale.total_amount}, cashier {cashier or 'unknown'}"
        )

        transaction = await get_transaction(session, sale.transaction_id)
        return CheckoutResult(
            transaction=transaction,
            warning=sale.warning,
            state=state,
        )


checkout_service = CheckoutService()
