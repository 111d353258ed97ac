import logging

from sqlalchemy import select, exists
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import ErrorType
from app.exceptions import AppException, ProductNotFound
from app.models import Product, TransactionItem
from app.schemas.product import ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

# Public sort keys -> columns
SORT_FIELDS = {
    "id": Product.id,
    "name": Product.name,
    "price": Product.price,
    "stock": Product.stock,
    "barcode": Product.barcode,
    "createdAt": Product.created_at,
    "updatedAt": Product.updated_at,
}
DEFAULT_SORT = "name"

# Columns that cannot be cleared with an explicit null
REQUIRED_FIELDS = ("name", "barcode", "price", "stock")


async def list_products(
    session: AsyncSession, sort_by: str | None = None, sort_order: str | None = None
) -> list[Product]:
    column = SORT_FIELDS.get(sort_by or "", SORT_FIELDS[DEFAULT_SORT])
    descending = (sort_order or "").lower() == "desc"
    logger.info(f"Sorting products by: {column.key} {'desc' if descending else 'asc'}")

    order = column.desc() if descending else column.asc()
    result = await session.execute(select(Product).order_by(order, Product.id))
    return list(result.scalars().all())


async def get_product(session: AsyncSession, product_id: int) -> Product:
    product = await session.get(Product, product_id)
    if product is None:
        raise ProductNotFound(product_id)
    return product


async def get_product_by_barcode(session: AsyncSession, barcode: str) -> Product:
    result = await session.execute(select(Product).where(Product.barcode == barcode))
    product = result.scalar_one_or_none()
    if product is None:
        raise AppException(ErrorType.PRODUCT_NOT_FOUND, f"Product with barcode {barcode} not found")
    return product


async def create_product(session: AsyncSession, data: ProductCreate) -> Product:
    product = Product(**data.model_dump())
    session.add(product)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise AppException(ErrorType.DUPLICATE_BARCODE, "Barcode already exists")
    await session.refresh(product)
    logger.info(f"Created product {product.id} ({product.barcode})")
    return product


async def update_product(session: AsyncSession, product_id: int, data: ProductUpdate) -> Product:
    changes = data.model_dump(exclude_unset=True)
    if not changes:
        raise AppException(ErrorType.VALIDATION_ERROR, "No update data provided")
    for field in REQUIRED_FIELDS:
        if field in changes and changes[field] is None:
            raise AppException(ErrorType.VALIDATION_ERROR, f"{field} cannot be null")

    product = await get_product(session, product_id)
    for field, value in changes.items():
        setattr(product, field, value)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise AppException(ErrorType.DUPLICATE_BARCODE, "Barcode already exists on another product")
    await session.refresh(product)
    return product


async def delete_product(session: AsyncSession, product_id: int) -> None:
    """Hard delete, refused once the product appears on any sale."""
    product = await get_product(session, product_id)

    has_history = await session.scalar(
        select(exists().where(TransactionItem.product_id == product_id))
    )
    if has_history:
        raise AppException(
            ErrorType.PRODUCT_IN_USE,
            f"Product {product_id} has sale history and cannot be deleted"
        )

    await session.delete(product)
    try:
        await session.commit()
    except IntegrityError:
        # A sale referencing it landed between the check and the delete
        await session.rollback()
        raise AppException(
            ErrorType.PRODUCT_IN_USE,
            f"Product {product_id} has sale history and cannot be deleted"
        )
    logger.info(f"Deleted product {product_id}")
