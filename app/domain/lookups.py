# app/domain/lookups.py
from datetime import datetime
from decimal import Decimal
from typing import Literal, Protocol

from pydantic import BaseModel


class CatalogEntry(BaseModel):
    sku: str
    title: str
    unit_price: int
    currency: str
    stock: int


class ResolvedPromo(BaseModel):
    code: str
    type: Literal["percent", "fixed"]
    value: Decimal
    starts_at: datetime
    ends_at: datetime


class CatalogLookup(Protocol):
    def find_by_sku(self, sku: str) -> CatalogEntry | None: ...


class PromoLookup(Protocol):
    def find_active_by_code(self, code: str, now: datetime) -> ResolvedPromo | None: ...
