"""
pricing/patterns.py — wzorce przedziałów cenowych w tekście szablonu.

Każdy TierPattern zawiera:
  - key           : klucz przedziału ("4-7")
  - label         : etykieta linii cennika ("For 4-7 applicants")
  - anchored_re   : etykieta + {{price_per_applicant}} w tej samej linii
  - baked_re      : etykieta + już wpisana kwota ("For 4-7 applicants- USD 2,200")
  - token_res     : tokeny przedziału: {{price_4-7}}, {{4-7_tier_price}}

Tryb zgodności: starsze treści mają kwoty wpisane na sztywno po etykiecie;
apply_tier_prices() podmienia kwotę w miejscu, zachowując etykietę i separator.
Kolejność: wzorce przedziałów przed ogólnym {{price_per_applicant}}; ogólny
zamiennik działa tylko wtedy, gdy w danym tekście nie trafił żaden wzorzec
przedziału.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from .tiers import format_amount

TIER_LABELS: dict[str, str] = {
    "1":     "For one applicant",
    "2":     "For 2 applicants",
    "3":     "For 3 applicants",
    "4-7":   "For 4-7 applicants",
    "8-9":   "For 8-9 applicants",
    "10-15": "For 10-15 applicants",
    "16+":   "For 16 applicants or more",
}

GENERIC_PRICE_TAG = "{{price_per_applicant}}"

# Waluta zapisana w starszej treści: kod (USD, NIS) albo symbol.
_CURRENCY = r"(?:[A-Z]{2,3}|[₪$€£])"
_AMOUNT   = r"\d[\d,]*(?:\.\d+)?"


@dataclass(frozen=True, slots=True)
class TierPattern:
    key: str
    label: str
    anchored_re: re.Pattern[str]
    baked_re: re.Pattern[str]
    token_res: tuple[re.Pattern[str], ...]


def _build(key: str, label: str) -> TierPattern:
    lab = re.escape(label)
    k = re.escape(key)
    return TierPattern(
        key=key,
        label=label,
        # (?![\w-]): "For 2 applicants" nie może trafić w dłuższą etykietę
        anchored_re=re.compile(
            rf"({lab}(?![\w-])[^\n]*?):?\s*\{{\{{price_per_applicant\}}\}}"
        ),
        baked_re=re.compile(rf"({lab})(\s*[-:]\s*){_CURRENCY}\s*{_AMOUNT}"),
        token_res=(
            re.compile(rf"\{{\{{price_{k}\}}\}}"),
            re.compile(rf"\{{\{{{k}_tier_price\}}\}}"),
        ),
    )


PATTERNS: list[TierPattern] = [_build(k, label) for k, label in TIER_LABELS.items()]


def _price_text(currency: str, price: float) -> str:
    return f"{currency} {format_amount(price)}"


def apply_tier_prices(
    text: str,
    table: Mapping[str, float],
    currency: str,
) -> tuple[str, bool]:
    """
    Podstawia ceny przedziałów w tekście jednego liścia.

    Returns:
        (nowy tekst, czy trafił jakikolwiek wzorzec przedziału)
    """
    matched = False
    for pattern in PATTERNS:
        price = _price_text(currency, table.get(pattern.key, 0) or 0)

        text, n = pattern.anchored_re.subn(lambda m: f"{m.group(1)}: {price}", text)
        matched = matched or n > 0

        for token_re in pattern.token_res:
            text, n = token_re.subn(lambda _m: price, text)
            matched = matched or n > 0

        text, n = pattern.baked_re.subn(lambda m: f"{m.group(1)}{m.group(2)}{price}", text)
        matched = matched or n > 0

    return text, matched
