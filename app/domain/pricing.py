# app/domain/pricing.py
from typing import Iterable

from pydantic import BaseModel

from app.domain import money
from app.domain.lookups import ResolvedPromo


class Totals(BaseModel):
    subtotal: int
    discount: int
    grand_total: int


def discount_for(subtotal: int, promo: ResolvedPromo | None) -> int:
    if promo is None:
        return 0

    if promo.type == "percent":
        return money.percent_of(subtotal, promo.value)

    # fixed - rabat nigdy wiekszy niz subtotal
    return money.capped(money.round_half_up(promo.value), subtotal)


def price(items: Iterable, promo: ResolvedPromo | None = None) -> Totals:
    """
    Czysta funkcja: pozycje (unit_price, qty) + opcjonalny promo -> sumy.

    Dziala zarowno na modelach ORM jak i na schematach, liczy sie tylko
    unit_price i qty.
    """
    subtotal = sum(money.line_total(i.unit_price, i.qty) for i in items)
    discount = discount_for(subtotal, promo)
    grand_total = max(subtotal - discount, 0)

    return Totals(subtotal=subtotal, discount=discount, grand_total=grand_total)
