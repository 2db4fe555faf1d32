# app/domain/money.py
"""
Arytmetyka pieniedzy na int (minor units, np. centy).

Wejscie procentowe moze byc ulamkowe (33.33), ale wynik zawsze jest int.
Zaokraglanie: half up na dokladnej wartosci dziesietnej, bez floatow.
"""
from decimal import Decimal, ROUND_HALF_UP

HUNDRED = Decimal("100")


def to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() zeby 33.33 nie zamienilo sie w 33.3299999...
    return Decimal(str(value))


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def line_total(unit_price: int, qty: int) -> int:
    return unit_price * qty


def percent_of(amount: int, percent) -> int:
    return round_half_up(Decimal(amount) * to_decimal(percent) / HUNDRED)


def capped(amount: int, cap: int) -> int:
    return min(amount, cap)
