"""
renderer/substitution.py — podstawianie tokenów w tekście liścia (tryb podglądu).

Kolejność w obrębie jednego liścia:
  1. rabat zerowy + suppress_zero_discount → usunięcie linii z tokenami rabatu
  2. wzorce przedziałów cenowych (etykieta + token, kwota wpisana, {{price_4-7}})
  3. ogólny {{price_per_applicant}} — tylko gdy w kroku 2 nic nie trafiło
  4. pozostałe tokeny: tożsamość, ceny, harmonogram płatności

Tokeny nierozpoznane (oraz {{text}} / {{signature}}) zostają dosłownie.
Liczniki tokenów sekwencyjnych ({{payment_plan_row}}, {{payment_percent}}…)
są stanem jednego przebiegu — nowy PreviewSubstituter na każdy render.
"""

from __future__ import annotations

import re
from collections import Counter

from data_model import PaymentRow, PreviewContext
from placeholders import TOKEN_RE
from pricing import GENERIC_PRICE_TAG, apply_tier_prices, format_amount, quote

# Wartości demonstracyjne tożsamości klienta.
DEMO_IDENTITY: dict[str, str] = {
    "client_name":  "John Doe",
    "client_phone": "+1-555-0123",
    "client_email": "john.doe@example.com",
}

_DISCOUNT_TAGS = ("{{discount_percentage}}", "{{discount_amount}}")

# {{payment_<n>_percent|value|due|row}}, n liczone od 1
_NUMBERED_PAYMENT_RE = re.compile(r"^payment_(\d+)_(percent|value|due|row)$")

# Tokeny sekwencyjne: k-te wystąpienie bierze k-ty wiersz planu.
_SEQUENTIAL_PAYMENT = ("payment_plan_row", "payment_percent", "payment_due", "payment_amount")


def _payment_value(row: PaymentRow) -> str:
    """Kwota raty; zapis "wartość + VAT" zostaje bez zmian."""
    if isinstance(row.value, str):
        if "+" in row.value:
            return row.value.strip()
        try:
            return format_amount(float(row.value.replace(",", "")))
        except ValueError:
            return row.value.strip() or "0"
    return format_amount(row.value)


class PreviewSubstituter:
    """Podstawia wartości PreviewContext w tekstach liści jednego przebiegu."""

    def __init__(self, context: PreviewContext) -> None:
        self.context = context
        self.quote = quote(
            context.pricing_tiers,
            context.applicant_count,
            context.discount_percentage,
        )
        self._seen: Counter[str] = Counter()
        self._values: dict[str, str] = {
            **DEMO_IDENTITY,
            "date":                context.date,
            "applicant_count":     str(context.applicant_count),
            "total_amount":        format_amount(self.quote.total_amount),
            "discount_percentage": format_amount(self.quote.discount_percentage),
            "discount_amount":     format_amount(self.quote.discount_amount),
            "final_amount":        format_amount(self.quote.final_amount),
            "currency":            context.currency,
            "client_country":      context.client_country,
        }

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def substitute(self, text: str) -> str:
        ctx = self.context
        if ctx.suppress_zero_discount and not ctx.discount_percentage:
            text = self._drop_discount_lines(text)

        text, tier_matched = apply_tier_prices(text, ctx.pricing_tiers, ctx.currency)
        if not tier_matched and GENERIC_PRICE_TAG in text:
            text = text.replace(GENERIC_PRICE_TAG, format_amount(self.quote.unit_price))

        return TOKEN_RE.sub(self._resolve, text)

    # ------------------------------------------------------------------
    # Pomocnicze
    # ------------------------------------------------------------------

    @staticmethod
    def _drop_discount_lines(text: str) -> str:
        lines = text.split("\n")
        kept = [line for line in lines if not any(t in line for t in _DISCOUNT_TAGS)]
        return "\n".join(kept) if len(kept) != len(lines) else text

    def _resolve(self, m: re.Match[str]) -> str:
        identifier = m.group(1)
        if identifier in self._values:
            return self._values[identifier]

        plan = self.context.payment_plan
        if not plan:
            return m.group(0)

        if identifier in _SEQUENTIAL_PAYMENT:
            k = self._seen[identifier]
            self._seen[identifier] += 1
            if k >= len(plan):
                return ""
            return self._payment_field(plan[k], identifier.removeprefix("payment_"))

        numbered = _NUMBERED_PAYMENT_RE.match(identifier)
        if numbered:
            n = int(numbered.group(1))
            if 1 <= n <= len(plan):
                return self._payment_field(plan[n - 1], numbered.group(2))

        return m.group(0)

    def _payment_field(self, row: PaymentRow, part: str) -> str:
        currency = self.context.currency
        match part:
            case "percent":
                return format_amount(row.percent)
            case "due":
                return row.due
            case "value" | "amount":
                return f"{currency} {_payment_value(row)}"
            case _:  # "row" / "plan_row"
                return f"{format_amount(row.percent)}% = {currency} {_payment_value(row)}"
