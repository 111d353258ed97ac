from datetime import datetime
from decimal import Decimal

from pydantic import Field

from app.schemas.base import CamelModel, MAX_INT


class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    barcode: str = Field(..., min_length=1, max_length=64)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    stock: int = Field(0, ge=0, le=MAX_INT)
    description: str | None = None


class ProductUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    barcode: str | None = Field(None, min_length=1, max_length=64)
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    stock: int | None = Field(None, ge=0, le=MAX_INT)
    description: str | None = None


class ProductOut(CamelModel):
    id: int
    barcode: str
    name: str
    description: str | None = None
    price: Decimal
    stock: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
