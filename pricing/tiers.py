"""
pricing/tiers.py — kalkulator cennika progowego.

Przedziały liczby wnioskodawców (klucze PricingTierTable):
  1 → "1",  2 → "2",  3 → "3",  4..7 → "4-7",  8..9 → "8-9",
  10..15 → "10-15",  16+ → "16+"

Liczby < 1 są przycinane do przedziału "1".
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from data_model import TIER_KEYS

# (górna granica włącznie, klucz) w kolejności rosnącej; ostatni przedział otwarty.
_BRACKETS: tuple[tuple[int, str], ...] = (
    (1,  "1"),
    (2,  "2"),
    (3,  "3"),
    (7,  "4-7"),
    (9,  "8-9"),
    (15, "10-15"),
)
_OPEN_BRACKET = "16+"


def bracket_key_for(applicant_count: int) -> str:
    """Klucz przedziału dla liczby wnioskodawców (monotoniczny, totalny)."""
    for upper, key in _BRACKETS:
        if applicant_count <= upper:
            return key
    return _OPEN_BRACKET


def tier_index(key: str) -> int:
    """Pozycja przedziału w TIER_KEYS (0..6). ValueError dla nieznanego klucza."""
    return TIER_KEYS.index(key)


def unit_price(table: Mapping[str, float], applicant_count: int) -> float:
    return table.get(bracket_key_for(applicant_count), 0) or 0


def total_amount(price: float, applicant_count: int) -> float:
    return price * applicant_count


def discount_amount(total: float, discount_percentage: float) -> float:
    return total * discount_percentage / 100


def final_amount(total: float, discount: float) -> float:
    return total - discount


@dataclass(frozen=True, slots=True)
class PricingQuote:
    """Wynik wyceny dla jednej liczby wnioskodawców."""
    applicant_count: int
    tier_key: str
    unit_price: float
    total_amount: float
    discount_percentage: float
    discount_amount: float
    final_amount: float


def quote(
    table: Mapping[str, float],
    applicant_count: int,
    discount_percentage: float = 0,
) -> PricingQuote:
    """Pełna wycena: cena jednostkowa → suma → rabat → kwota końcowa."""
    price = unit_price(table, applicant_count)
    total = total_amount(price, applicant_count)
    discount = discount_amount(total, discount_percentage)
    return PricingQuote(
        applicant_count=applicant_count,
        tier_key=bracket_key_for(applicant_count),
        unit_price=price,
        total_amount=total,
        discount_percentage=discount_percentage,
        discount_amount=discount,
        final_amount=final_amount(total, discount),
    )


def format_amount(value: float | int) -> str:
    """
    Kwota do tekstu szablonu: bez separatorów tysięcy, liczby całkowite bez
    części dziesiętnej, pozostałe z co najwyżej 2 miejscami.

    1000 → "1000", 2250.0 → "2250", 22.5 → "22.5", 1/3 → "0.33"
    """
    if isinstance(value, bool):
        value = int(value)
    if isinstance(value, int):
        return str(value)
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}".rstrip("0").rstrip(".")
