# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import List
from datetime import datetime


class ItemIn(BaseModel):
    """Schema dla dodawania wariantu do koszyka."""

    sku: str = Field(..., min_length=1, max_length=100, description="SKU wariantu")
    qty: int = Field(..., ge=1, description="Ilosc (musi byc >= 1)")


class ItemUpdateIn(BaseModel):
    """Schema dla zmiany ilosci, 0 usuwa pozycje z koszyka."""

    qty: int = Field(..., ge=0, description="Nowa ilosc (0 usuwa pozycje)")


class PromoIn(BaseModel):
    """Schema dla kodu promocyjnego."""

    code: str = Field(..., min_length=1, max_length=50, description="Kod promocyjny")

    @field_validator("code")
    @classmethod
    def strip_code(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Promo code is required")
        return v


class CartItemOut(BaseModel):
    """Schema dla pozycji w koszyku (response)."""

    sku: str
    title: str
    unit_price: int
    currency: str
    qty: int
    line_total: int


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    id: str
    token: str
    promo_code: str | None = None
    items: List[CartItemOut]
    subtotal: int
    discount: int
    grand_total: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderCreate(BaseModel):
    """Schema dla checkoutu."""

    cart_id: str = Field(..., min_length=1, description="Wewnetrzne ID koszyka")


class OrderStatusIn(BaseModel):
    status: str = Field(..., min_length=1, description="created | paid | cancelled")


class OrderItemOut(BaseModel):
    sku: str
    title: str
    unit_price: int
    currency: str
    qty: int
    line_total: int

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    id: str
    cart_id: str
    promo_code: str | None = None
    items: List[OrderItemOut]
    subtotal: int
    discount: int
    grand_total: int
    status: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class OrderPage(BaseModel):
    orders: List[OrderOut]
    pagination: Pagination


class VariantOut(BaseModel):
    sku: str
    options: dict
    price: int
    currency: str
    stock: int

    model_config = ConfigDict(from_attributes=True)


class ProductOut(BaseModel):
    """Schema dla produktu z wariantami (response)."""

    id: str
    title: str
    slug: str
    description: str | None = None
    images: List[str]
    status: str
    variants: List[VariantOut]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductPage(BaseModel):
    products: List[ProductOut]
    pagination: Pagination
