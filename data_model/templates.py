"""
data_model/templates.py — rekord szablonu umowy w magazynie rekordów.

TemplateRecord odpowiada wierszowi tabeli contract_templates. Pole `content`
ma dowolną postać historyczną (kanoniczny "doc", log operacji, znaczniki HTML,
tekst, None) — silnik czyta je wyłącznie przez normalizator
(html_parser.normalize_content).
"""

from __future__ import annotations

import copy
import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .pricing import PricingTierTable


@dataclass
class TemplateRecord:
    """
    Rekord szablonu.

    - id:                    identyfikator (uuid4 jako str)
    - name:                  nazwa wyświetlana
    - content:               treść w dowolnym (także starszym) formacie
    - language_id:           powiązany język (opcjonalnie)
    - category_id:           powiązana kategoria (opcjonalnie)
    - active:                czy szablon jest aktywny
    - default_pricing_tiers: domyślny cennik podglądu (None = brak)
    - default_currency:      domyślna waluta podglądu
    - default_country:       domyślny kraj klienta
    """
    id: str
    name: str
    content: Any = None
    language_id: str | None = None
    category_id: str | None = None
    active: bool = True
    default_pricing_tiers: PricingTierTable | None = None
    default_currency: str | None = None
    default_country: str | None = None

    @classmethod
    def new(cls, name: str, content: Any = None) -> TemplateRecord:
        return cls(id=str(uuid.uuid4()), name=name, content=content)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> TemplateRecord:
        """Buduje rekord ze słownika (wiersz bazy / JSON). Nieznane kolumny są pomijane."""
        tiers = row.get("default_pricing_tiers")
        return cls(
            id=str(row["id"]),
            name=row.get("name") or "",
            content=copy.deepcopy(row.get("content")),
            language_id=_opt_str(row.get("language_id")),
            category_id=_opt_str(row.get("category_id")),
            active=bool(row.get("active", True)),
            default_pricing_tiers=(
                PricingTierTable.from_mapping(tiers) if isinstance(tiers, Mapping) else None
            ),
            default_currency=row.get("default_currency") or None,
            default_country=row.get("default_country") or None,
        )

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "content": copy.deepcopy(self.content),
            "language_id": self.language_id,
            "category_id": self.category_id,
            "active": self.active,
            "default_pricing_tiers": (
                self.default_pricing_tiers.to_dict()
                if self.default_pricing_tiers is not None
                else None
            ),
            "default_currency": self.default_currency,
            "default_country": self.default_country,
        }


def _opt_str(value: Any) -> str | None:
    return None if value is None else str(value)


# ---------------------------------------------------------------------------
# Szablon przykładowy
# ---------------------------------------------------------------------------

SAMPLE_TEMPLATE_NAME = "Citizenship Service Contract"


def _p(*parts: tuple[str, list[str]]) -> dict[str, Any]:
    content = []
    for text, marks in parts:
        node: dict[str, Any] = {"type": "text", "text": text}
        if marks:
            node["marks"] = [{"type": m} for m in marks]
        content.append(node)
    return {"type": "paragraph", "content": content}


def sample_template_content() -> dict[str, Any]:
    """Treść szablonu startowego (kanoniczny "doc") z tokenami wszystkich głównych rodzin."""
    return {
        "type": "doc",
        "content": [
            {
                "type": "heading",
                "attrs": {"level": 2},
                "content": [{"type": "text", "text": "Citizenship Service Agreement"}],
            },
            _p(("This contract is made between ", []), ("{{client_name}}", ["bold"]),
               (" and the Service Provider.", [])),
            _p(("Client Contact: ", []), ("{{client_phone}}", ["italic"]), (" / ", []),
               ("{{client_email}}", ["italic"])),
            _p(("Number of Applicants: ", []), ("{{applicant_count}}", ["bold"])),
            _p(("Price per Applicant: ", []), ("{{currency}} {{price_per_applicant}}", ["bold"])),
            _p(("Total Amount: ", []), ("{{currency}} {{total_amount}}", ["bold"])),
            _p(("Discount: ", []),
               ("{{discount_percentage}}% ({{currency}} {{discount_amount}})", ["italic"])),
            _p(("Final Amount: ", []), ("{{currency}} {{final_amount}}", ["bold"])),
            _p(("Date: ", []), ("{{date}}", ["italic"])),
            _p(("Signature: ", []), ("{{signature}}", ["underline"])),
        ],
    }


def sample_template() -> TemplateRecord:
    return TemplateRecord.new(SAMPLE_TEMPLATE_NAME, sample_template_content())


@dataclass(slots=True)
class TemplateSummary:
    """Skrócony opis rekordu do list (CLI: ctpl templates)."""
    id: str
    name: str
    active: bool
    language_id: str | None = None
    category_id: str | None = None
    default_currency: str | None = None
