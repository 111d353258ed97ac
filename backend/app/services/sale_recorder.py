import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Transaction, TransactionItem

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class SaleLine:
    """A validated, stock-confirmed line ready to be recorded."""
    product_id: int
    quantity: int
    price_at_sale: Decimal
    name: str = ""
    barcode: str = ""


@dataclass(frozen=True)
class RecordedSale:
    transaction_id: int
    total_amount: Decimal
    warning: str | None = None


def to_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_total(lines: list[SaleLine]) -> Decimal:
    """Authoritative total: sum of price_at_sale * quantity, in exact decimal."""
    total = sum((line.price_at_sale * line.quantity for line in lines), Decimal("0"))
    return to_cents(total)


class SaleRecorder:
    """Writes the immutable Transaction and its TransactionItems."""

    async def record(
        self, session: AsyncSession, lines: list[SaleLine], client_total: Decimal
    ) -> RecordedSale:
        """Persist a sale inside the caller's unit of work.

        The persisted total is always the server-computed one. A differing
        client total is logged and reported back as a warning.
        """
        server_total = compute_total(lines)

        warning = None
        if client_total != server_total:
            warning = (
                f"Submitted total {client_total} does not match calculated total "
                f"{server_total}; the calculated total was recorded"
            )
            logger.warning(f"Total mismatch: client={client_total}, server={server_total}")

        transaction = Transaction(total_amount=server_total)
        session.add(transaction)
        await session.flush()  # Get ID

        await session.execute(
            insert(TransactionItem),
            [
                {
                    "transaction_id": transaction.id,
                    "product_id": line.product_id,
                    "quantity": line.quantity,
                    "price_at_sale": line.price_at_sale,
                }
                for line in lines
            ]
        )

        return RecordedSale(
            transaction_id=transaction.id,
            total_amount=server_total,
            warning=warning,
        )
