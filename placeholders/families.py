"""
placeholders/families.py — zamknięte rodziny tokenów szablonu.

Rodzina to uporządkowana lista pól (etykieta → identyfikator). Rozszerzenie
zbioru to zmiana danych w FAMILIES, nie zachowania. Moduł niczego nie
podstawia — podstawianie należy do renderer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class TokenFamily(StrEnum):
    IDENTITY         = "identity"
    PRICING          = "pricing"
    PAYMENT_SCHEDULE = "payment_schedule"
    INTERACTIVE      = "interactive"


@dataclass(frozen=True, slots=True)
class PlaceholderField:
    """Pole do wstawienia: etykieta w menu edytora + identyfikator tokenu."""
    label: str
    identifier: str

    @property
    def tag(self) -> str:
        return make_tag(self.identifier)


def make_tag(identifier: str) -> str:
    """'client_name' → '{{client_name}}'."""
    return "{{" + identifier + "}}"


FAMILIES: dict[TokenFamily, tuple[PlaceholderField, ...]] = {
    TokenFamily.IDENTITY: (
        PlaceholderField("Client Name",  "client_name"),
        PlaceholderField("Client Phone", "client_phone"),
        PlaceholderField("Client Email", "client_email"),
        PlaceholderField("Signature",    "signature"),
        PlaceholderField("Date",         "date"),
    ),
    TokenFamily.PRICING: (
        PlaceholderField("Applicant Count",     "applicant_count"),
        PlaceholderField("Price Per Applicant", "price_per_applicant"),
        PlaceholderField("Total Amount",        "total_amount"),
        PlaceholderField("Discount Percentage", "discount_percentage"),
        PlaceholderField("Discount Amount",     "discount_amount"),
        PlaceholderField("Final Amount",        "final_amount"),
        PlaceholderField("Currency",            "currency"),
        PlaceholderField("Client Country",      "client_country"),
    ),
    TokenFamily.PAYMENT_SCHEDULE: (
        PlaceholderField("Payment Plan Row", "payment_plan_row"),
        PlaceholderField("Payment Percent",  "payment_percent"),
        PlaceholderField("Payment Due",      "payment_due"),
        PlaceholderField("Payment Amount",   "payment_amount"),
    ),
    TokenFamily.INTERACTIVE: (
        PlaceholderField("Text Field",      "text"),
        PlaceholderField("Signature Field", "signature"),
    ),
}

# Tokeny zastępowane polami do wypełnienia w podglądzie.
INTERACTIVE_IDENTIFIERS: tuple[str, ...] = tuple(
    f.identifier for f in FAMILIES[TokenFamily.INTERACTIVE]
)


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def list_families() -> dict[TokenFamily, tuple[PlaceholderField, ...]]:
    """Zwraca rodziny w stałej kolejności (kopia słownika; pola są niezmienne)."""
    return dict(FAMILIES)


def tag_for(family: TokenFamily | str, label: str) -> str:
    """
    Zwraca tag pola o danej etykiecie w rodzinie, np.
    tag_for("pricing", "Currency") → "{{currency}}".

    Raises:
        KeyError gdy rodzina lub etykieta nie istnieje.
    """
    try:
        fields = FAMILIES[TokenFamily(family)]
    except ValueError:
        raise KeyError(f"Nieznana rodzina tokenów: {family!r}") from None
    for f in fields:
        if f.label == label:
            return f.tag
    raise KeyError(f"Rodzina '{family}' nie ma pola o etykiecie {label!r}")


def families_of(identifier: str) -> list[TokenFamily]:
    """Rodziny zawierające identyfikator (np. 'signature' → IDENTITY i INTERACTIVE)."""
    return [
        family
        for family, fields in FAMILIES.items()
        if any(f.identifier == identifier for f in fields)
    ]


def is_recognized(identifier: str) -> bool:
    return bool(families_of(identifier))
