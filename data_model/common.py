"""
Wspólne typy pierwotne modelu dokumentu: rodzaje bloków i znaczników.

Mapowanie na zapis JSON edytora (format "doc"):
  node.type  → BlockType (znane) lub dowolny str (nieznane, przepuszczane)
  mark.type  → MarkType  (znane) lub dowolny str (ignorowane przy renderze)
"""

from __future__ import annotations

from enum import StrEnum

# ---------------------------------------------------------------------------
# Aliasy typów
# ---------------------------------------------------------------------------

# Surowe drzewo JSON (po json.loads): słownik z kluczem "type".
type RawNode = dict[str, object]

# Ścieżka do węzła: indeksy kolejnych list content od korzenia, np. (0, 2).
type NodePath = tuple[int, ...]


# ---------------------------------------------------------------------------
# Bloki
# ---------------------------------------------------------------------------

DOC_TYPE  = "doc"
TEXT_TYPE = "text"


class BlockType(StrEnum):
    """Znane rodzaje bloków. Inne wartości type są dopuszczalne (forward-compat)."""
    PARAGRAPH       = "paragraph"
    HEADING         = "heading"
    BULLET_LIST     = "bulletList"
    ORDERED_LIST    = "orderedList"
    LIST_ITEM       = "listItem"
    BLOCKQUOTE      = "blockquote"
    HORIZONTAL_RULE = "horizontalRule"
    HARD_BREAK      = "hardBreak"


# Bloki-liście: nie mają własnej sekwencji content.
LEAF_BLOCKS: frozenset[str] = frozenset({
    BlockType.HORIZONTAL_RULE,
    BlockType.HARD_BREAK,
})

# Bloki, do których edytor dopisuje tekst (wstawianie tokenów).
TEXT_BLOCKS: frozenset[str] = frozenset({
    BlockType.PARAGRAPH,
    BlockType.HEADING,
})

KNOWN_BLOCKS: frozenset[str] = frozenset(BlockType)


# ---------------------------------------------------------------------------
# Znaczniki
# ---------------------------------------------------------------------------

class MarkType(StrEnum):
    """Znane znaczniki formatowania tekstu."""
    BOLD      = "bold"
    ITALIC    = "italic"
    UNDERLINE = "underline"
    STRIKE    = "strike"


# Starsze zapisy tego samego znacznika.
MARK_ALIASES: dict[str, str] = {
    "strikethrough": MarkType.STRIKE,
    "strong":        MarkType.BOLD,
    "em":            MarkType.ITALIC,
}

KNOWN_MARKS: frozenset[str] = frozenset(MarkType)


def canonical_mark_type(name: str) -> str:
    """Zwraca kanoniczną nazwę znacznika (aliasy → MarkType), inne bez zmian."""
    return MARK_ALIASES.get(name, name)
