"""
placeholders/tokens.py — składnia tokenów {{identyfikator}} w tekście liści.

Identyfikator: bez białych znaków i nawiasów klamrowych, wielkość liter ma
znaczenie. Dopuszczalne są znaki spoza [a-z_], bo tokeny przedziałów
cenowych mają postać {{price_4-7}}, {{16+_tier_price}}.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Wzorzec tokenu; grupa 1 = identyfikator.
TOKEN_RE = re.compile(r"\{\{([^{}\s]+)\}\}")


@dataclass(frozen=True, slots=True)
class TokenMatch:
    identifier: str
    start: int
    end: int

    @property
    def tag(self) -> str:
        return "{{" + self.identifier + "}}"


def find_tokens(text: str) -> list[TokenMatch]:
    """Wszystkie tokeny w tekście, w kolejności wystąpienia."""
    return [TokenMatch(m.group(1), m.start(), m.end()) for m in TOKEN_RE.finditer(text)]


def has_token(text: str, identifier: str) -> bool:
    return ("{{" + identifier + "}}") in text
