import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.errors import ErrorType
from app.exceptions import AppException
from app.models import Transaction, TransactionItem

logger = logging.getLogger(__name__)

# Public sort keys -> columns
SORT_FIELDS = {
    "id": Transaction.id,
    "date": Transaction.created_at,
    "total": Transaction.total_amount,
}
DEFAULT_SORT = "date"


def _with_items(stmt):
    return stmt.options(
        selectinload(Transaction.items).selectinload(TransactionItem.product)
    )


async def get_transaction(session: AsyncSession, transaction_id: int) -> Transaction:
    """Load one transaction with its items and their products.

    Always hits the database (populate_existing), so a transaction written
    earlier in the same session is returned exactly as stored.
    """
    stmt = _with_items(
        select(Transaction).where(Transaction.id == transaction_id)
    ).execution_options(populate_existing=True)
    transaction = (await session.execute(stmt)).scalar_one_or_none()
    if transaction is None:
        raise AppException(ErrorType.TRANSACTION_NOT_FOUND, f"Transaction {transaction_id} not found")
    return transaction


async def list_transactions(
    session: AsyncSession, sort_by: str | None = None, sort_order: str | None = None
) -> list[Transaction]:
    """List transactions with items; unknown sort keys fall back to date ascending."""
    column = SORT_FIELDS.get(sort_by or "", SORT_FIELDS[DEFAULT_SORT])
    descending = (sort_order or "").lower() == "desc"
    logger.info(f"Sorting transactions by: {column.key} {'desc' if descending else 'asc'}")

    order = column.desc() if descending else column.asc()
    stmt = _with_items(select(Transaction).order_by(order, Transaction.id))
    result = await session.execute(stmt)
    return list(result.scalars().all())
