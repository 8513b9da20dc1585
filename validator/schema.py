"""
validator/schema.py — schemat JSON korzenia dokumentu (etap A walidacji).

Schemat celowo opisuje tylko korzeń: "type" == "doc" i "content" jako
tablicę. Strukturę węzłów sprawdza etap B (tree_validator), który zna
bloki-liście, nieznane typy i znaczniki. Dodatkowe klucze są dozwolone.
"""

from __future__ import annotations

from typing import Any

DOCUMENT_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": "contract-template-document",
    "title": "Contract template document",
    "type": "object",
    "required": ["type"],
    "properties": {
        "type": {"const": "doc"},
        "content": {
            "type": "array",
            "items": {"type": "object"},
        },
        "attrs": {"type": "object"},
    },
    "additionalProperties": True,
}
