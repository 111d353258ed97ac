import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import InsufficientStock, ProductNotFound
from app.models import Product

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReservedStock:
    """What the ledger knows about a product right after decrementing it."""
    product_id: int
    name: str
    barcode: str
    price: Decimal
    remaining_stock: int


class InventoryLedger:
    """Authoritative stock counts. All decrements are conditional."""

    async def reserve_and_decrement(
        self, session: AsyncSession, product_id: int, quantity: int
    ) -> ReservedStock:
        """Decrement stock by quantity if enough is available.

        Must run inside the caller's unit of work. The decrement is a single
        UPDATE guarded by ``stock >= quantity``: a concurrent checkout that
        already took the stock makes this match zero rows instead of
        overselling.

        Raises:
            ProductNotFound: no product with this id
            InsufficientStock: stock < quantity at write time
        """
        stmt = (
            update(Product)
            .where(Product.id == product_id, Product.stock >= quantity)
            .values(stock=Product.stock - quantity)
            .returning(Product.id, Product.name, Product.barcode, Product.price, Product.stock)
            .execution_options(synchronize_session=False)
        )
        row = (await session.execute(stmt)).one_or_none()

        if row is None:
            # Nothing updated: find out why
            current = (await session.execute(
                select(Product.name, Product.stock).where(Product.id == product_id)
            )).one_or_none()
            if current is None:
                raise ProductNotFound(product_id)
            raise InsufficientStock(product_id, current.name, current.stock, quantity)

        logger.debug(f"Reserved {quantity} x product {product_id}, {row.stock} left")
        return ReservedStock(
            product_id=row.id,
            name=row.name,
            barcode=row.barcode,
            price=row.price,
            remaining_stock=row.stock,
        )
