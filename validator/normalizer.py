"""
validator/normalizer.py — wartości domyślne drzewa dokumentu.

normalize_tree():
  - Zwraca głęboką kopię drzewa z wypełnionymi polami domyślnymi.
  - Nie zmienia treści merytorycznej (tekst i znaczniki liści bez zmian).
  - Ustawia content=[] dla korzenia i znanych bloków nie-liści bez tego pola.
  - Zapisuje ścieżki uzupełnionych content (opcjonalnie, do diagnostyki).

Walidator nie korzysta z niej przy ocenie drzewa: brak content w znanym
bloku jest błędem. normalize_tree() służy do zbudowania Document z drzewa,
które przeszło walidację, oraz do tolerancyjnego odczytu.
"""

from __future__ import annotations

import copy
from typing import Any

from data_model import KNOWN_BLOCKS, LEAF_BLOCKS, TEXT_TYPE


def normalize_tree(
    tree: dict[str, Any],
    filled: list[str] | None = None,
) -> dict[str, Any]:
    """
    Zwraca głęboką kopię drzewa z wypełnionymi wartościami domyślnymi.

    Zmiany:
      - doc.content          → domyślnie []
      - <blok>.content       → domyślnie [] (znane bloki poza horizontalRule/hardBreak)

    Liście tekstowe nie są zmieniane: brak "marks" oznacza pusty zbiór
    znaczników, a obecność klucza jest zachowywana przy zapisie.

    Args:
        tree:   surowe drzewo (po json.loads), korzeń "doc"
        filled: opcjonalna lista, do której dopisywane są JSON Pointery
                węzłów z uzupełnionym content
    """
    tree = copy.deepcopy(tree)
    tree.setdefault("content", [])
    content = tree.get("content")
    if isinstance(content, list):
        tree["content"] = [
            _normalize_node(n, f"/content/{i}", filled) if isinstance(n, dict) else n
            for i, n in enumerate(content)
        ]
    return tree


def _normalize_node(
    node: dict[str, Any],
    path: str,
    filled: list[str] | None,
) -> dict[str, Any]:
    node_type = node.get("type")

    if node_type == TEXT_TYPE:
        return node

    if (
        isinstance(node_type, str)
        and node_type in KNOWN_BLOCKS
        and node_type not in LEAF_BLOCKS
        and node.get("content") is None
    ):
        node["content"] = []
        if filled is not None:
            filled.append(path)

    content = node.get("content")
    if isinstance(content, list):
        node["content"] = [
            _normalize_node(c, f"{path}/content/{i}", filled) if isinstance(c, dict) else c
            for i, c in enumerate(content)
        ]
    return node
