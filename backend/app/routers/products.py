from fastapi import APIRouter, Depends, Path, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_session
from app.schemas.base import MAX_INT
from app.schemas.product import ProductCreate, ProductUpdate, ProductOut
from app.security import verify_token
from app.services import product_service

router = APIRouter(prefix="/api/v1/products", tags=["products"])


@router.get("", response_model=list[ProductOut])
async def list_products(
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    session: AsyncSession = Depends(get_session),
):
    return await product_service.list_products(session, sort_by, sort_order)


@router.get("/barcode/{barcode}", response_model=ProductOut)
async def get_product_by_barcode(barcode: str, session: AsyncSession = Depends(get_session)):
    """Scanner lookup."""
    return await product_service.get_product_by_barcode(session, barcode)


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(
    product_id: int = Path(..., gt=0, le=MAX_INT),
    session: AsyncSession = Depends(get_session),
):
    return await product_service.get_product(session, product_id)


@router.post("", status_code=201, response_model=ProductOut)
async def create_product(
    data: ProductCreate,
    session: AsyncSession = Depends(get_session),
    _user: dict = Depends(verify_token),
):
    return await product_service.create_product(session, data)


@router.put("/{product_id}", response_model=ProductOut)
async def update_product(
    data: ProductUpdate,
    product_id: int = Path(..., gt=0, le=MAX_INT),
    session: AsyncSession = Depends(get_session),
    _user: dict = Depends(verify_token),
):
    return await product_service.update_product(session, product_id, data)


@router.delete("/{product_id}", status_code=204)
async def delete_product(
    product_id: int = Path(..., gt=0, le=MAX_INT),
    session: AsyncSession = Depends(get_session),
    _user: dict = Depends(verify_token),
):
    await product_service.delete_product(session, product_id)
    return Response(status_code=204)
