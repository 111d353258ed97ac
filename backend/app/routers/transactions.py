from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.database import get_session
from app.schemas.base import MAX_INT
from app.schemas.transaction import CheckoutRequest, CheckoutResponse, TransactionOut
from app.security import verify_token, verify_admin
from app.services.checkout_service import checkout_service
from app.services import transaction_service

router = APIRouter(prefix="/api/v1/transactions", tags=["transactions"])


@router.post("", status_code=201, response_model=CheckoutResponse)
async def create_transaction(
    request: CheckoutRequest,
    session: AsyncSession = Depends(get_session),
    user: dict = Depends(verify_token),
):
    result = await checkout_service.checkout(
        session,
        request.cart,
        request.total_amount,
        cashier=user.get("username"),
    )
    return CheckoutResponse(
        message="Transaction successful",
        transaction=TransactionOut.model_validate(result.transaction),
        warning=result.warning,
    )


@router.get("", response_model=list[TransactionOut])
async def list_transactions(
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str | None = Query(None, alias="sortOrder"),
    session: AsyncSession = Depends(get_session),
    _admin: dict = Depends(verify_admin),
):
    return await transaction_service.list_transactions(session, sort_by, sort_order)


@router.get("/{transaction_id}", response_model=TransactionOut)
async def get_transaction(
    transaction_id: int = Path(..., gt=0, le=MAX_INT),
    session: AsyncSession = Depends(get_session),
    _admin: dict = Depends(verify_admin),
):
    return await transaction_service.get_transaction(session, transaction_id)
