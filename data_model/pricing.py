"""
data_model/pricing.py — cennik progowy i kontekst podglądu szablonu.

PricingTierTable — cena jednostkowa (za wnioskodawcę) dla 7 przedziałów
    liczby wnioskodawców: "1", "2", "3", "4-7", "8-9", "10-15", "16+".
PaymentRow       — jeden wiersz harmonogramu płatności (dostarczany z zewnątrz).
PreviewContext   — wartości podglądu: waluta, rabat, kraj, data, cennik.
    Tworzony na sesję podglądu, nigdy nie jest częścią dokumentu; zapisywany
    osobno jako domyślne wartości szablonu.
"""

from __future__ import annotations

import datetime as _dt
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

# Klucze przedziałów w kolejności rosnącej liczby wnioskodawców.
TIER_KEYS: tuple[str, ...] = ("1", "2", "3", "4-7", "8-9", "10-15", "16+")

# Domyślny cennik podglądu (wartości z pierwotnego edytora szablonów).
DEFAULT_TIER_PRICES: dict[str, float] = {
    "1":     2500,
    "2":     2400,
    "3":     2300,
    "4-7":   2200,
    "8-9":   2100,
    "10-15": 2000,
    "16+":   1900,
}


def _to_number(value: Any, what: str) -> float:
    if isinstance(value, bool):
        raise ValueError(f"{what}: wartość logiczna zamiast liczby.")
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.replace(",", "").strip())
        except ValueError:
            pass
    raise ValueError(f"{what}: nieprawidłowa liczba {value!r}.")


# ---------------------------------------------------------------------------
# PricingTierTable
# ---------------------------------------------------------------------------

class PricingTierTable(Mapping[str, float]):
    """
    Mapowanie klucz przedziału → nieujemna cena jednostkowa.

    Brakujący klucz czytany jest jako 0; nieznane klucze są odrzucane
    przy budowie (from_mapping je pomija). Iteracja zawsze po 7 kluczach
    w kolejności TIER_KEYS.
    """

    __slots__ = ("_prices",)

    def __init__(self, prices: Mapping[str, Any] | None = None) -> None:
        self._prices: dict[str, float] = {}
        for key, value in (prices or {}).items():
            if key not in TIER_KEYS:
                raise KeyError(f"Nieznany przedział cennika: {key!r}")
            price = _to_number(value, f"cena przedziału {key!r}")
            if price < 0:
                raise ValueError(f"Cena przedziału {key!r} nie może być ujemna: {price}")
            self._prices[key] = price

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> PricingTierTable:
        """Buduje tabelę z zapisu rekordu, pomijając nieznane klucze i puste wartości."""
        if not raw:
            return cls()
        return cls({k: v for k, v in raw.items() if k in TIER_KEYS and v is not None})

    @classmethod
    def default(cls) -> PricingTierTable:
        return cls(DEFAULT_TIER_PRICES)

    def __getitem__(self, key: str) -> float:
        if key not in TIER_KEYS:
            raise KeyError(key)
        return self._prices.get(key, 0)

    def __iter__(self) -> Iterator[str]:
        return iter(TIER_KEYS)

    def __len__(self) -> int:
        return len(TIER_KEYS)

    def __repr__(self) -> str:
        return f"PricingTierTable({self.to_dict()!r})"

    def replace(self, key: str, price: Any) -> PricingTierTable:
        """Zwraca nową tabelę ze zmienioną ceną jednego przedziału."""
        prices = self.to_dict()
        prices[key] = price
        return PricingTierTable(prices)

    def to_dict(self) -> dict[str, float]:
        return {k: self[k] for k in TIER_KEYS}


# ---------------------------------------------------------------------------
# PaymentRow
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class PaymentRow:
    """
    Wiersz harmonogramu płatności.

    - percent: udział procentowy raty, np. 50
    - value:   kwota raty; liczba lub zapis "wartość + VAT" (tekst)
    - due:     etykieta terminu, np. "On signing"
    """
    percent: float
    value: float | str = 0
    due: str = ""

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> PaymentRow:
        return cls(
            percent=_to_number(raw.get("percent", 0), "percent"),
            value=raw.get("value", 0) if raw.get("value") is not None else 0,
            due=str(raw.get("due") or raw.get("payment_order") or raw.get("label") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"percent": self.percent, "value": self.value, "due": self.due}


# ---------------------------------------------------------------------------
# PreviewContext
# ---------------------------------------------------------------------------

def _today() -> str:
    return _dt.date.today().isoformat()


@dataclass
class PreviewContext:
    """
    Wartości podglądu szablonu.

    - currency:               kod ISO lub symbol waluty
    - discount_percentage:    rabat 0–100
    - client_country:         kraj klienta (token {{client_country}})
    - date:                   data wstawiana dosłownie za {{date}}
    - pricing_tiers:          cennik progowy
    - applicant_count:        liczba wnioskodawców dla tokenów cenowych
    - payment_plan:           harmonogram płatności dla tokenów payment_*
    - suppress_zero_discount: przy rabacie 0 usuwa linie z tokenami rabatu
    """
    currency: str = "USD"
    discount_percentage: float = 10
    client_country: str = "US"
    date: str = field(default_factory=_today)
    pricing_tiers: PricingTierTable = field(default_factory=PricingTierTable.default)
    applicant_count: int = 1
    payment_plan: list[PaymentRow] = field(default_factory=list)
    suppress_zero_discount: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.pricing_tiers, PricingTierTable):
            self.pricing_tiers = PricingTierTable.from_mapping(self.pricing_tiers)
        self.discount_percentage = _to_number(self.discount_percentage, "discount_percentage")
        if not 0 <= self.discount_percentage <= 100:
            raise ValueError(
                f"Rabat musi mieścić się w przedziale 0–100, podano {self.discount_percentage}."
            )
        self.payment_plan = [
            r if isinstance(r, PaymentRow) else PaymentRow.from_dict(r)
            for r in self.payment_plan
        ]

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> PreviewContext:
        """Buduje kontekst z JSON (np. pliku --context w CLI); brakujące pola → domyślne."""
        kwargs: dict[str, Any] = {}
        for name in (
            "currency", "discount_percentage", "client_country", "date",
            "applicant_count", "suppress_zero_discount",
        ):
            if raw.get(name) is not None:
                kwargs[name] = raw[name]
        if raw.get("pricing_tiers") is not None:
            kwargs["pricing_tiers"] = PricingTierTable.from_mapping(raw["pricing_tiers"])
        if raw.get("payment_plan"):
            kwargs["payment_plan"] = [PaymentRow.from_dict(r) for r in raw["payment_plan"]]
        if "applicant_count" in kwargs:
            kwargs["applicant_count"] = int(kwargs["applicant_count"])
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return {
            "currency": self.currency,
            "discount_percentage": self.discount_percentage,
            "client_country": self.client_country,
            "date": self.date,
            "pricing_tiers": self.pricing_tiers.to_dict(),
            "applicant_count": self.applicant_count,
            "payment_plan": [r.to_dict() for r in self.payment_plan],
            "suppress_zero_discount": self.suppress_zero_discount,
        }
