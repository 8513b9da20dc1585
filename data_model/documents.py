"""
data_model/documents.py — drzewo dokumentu szablonu umowy.

Węzły:
  Document — korzeń ("doc"), uporządkowana lista bloków
  Block    — paragraph / heading / listy / blockquote / horizontalRule / hardBreak
             (oraz nieznane typy, przepuszczane bez zmian)
  Text     — liść z dosłownym tekstem (może zawierać tokeny {{...}}) i znacznikami

Nieznane klucze węzła trafiają do `extra` i są zapisywane z powrotem przez
document_to_dict() bez zmian. `attrs` są nieprzezroczyste (wyrównanie, kolor,
styl) — model ich nie interpretuje.
"""

from __future__ import annotations

import copy
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from .common import (
    DOC_TYPE,
    KNOWN_BLOCKS,
    LEAF_BLOCKS,
    TEXT_TYPE,
    BlockType,
    NodePath,
    canonical_mark_type,
)


# ---------------------------------------------------------------------------
# Mark
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Mark:
    """Znacznik formatowania liścia tekstowego, np. Mark("bold")."""
    type: str
    attrs: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        if self.attrs:
            out["attrs"] = copy.deepcopy(self.attrs)
        return out


# ---------------------------------------------------------------------------
# Węzły
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class Text:
    """
    Liść tekstowy.

    - text:  dosłowny tekst; tokeny {{identyfikator}} są zwykłym podciągiem
    - marks: uporządkowany zbiór znaczników (bez duplikatów typu)
    - extra: nieznane klucze z zapisu JSON
    - keep_empty_marks: zapis zawierał klucz "marks"; pusta lista jest
      wtedy zapisywana z powrotem (nie wpływa na porównanie węzłów)
    """
    text: str
    marks: list[Mark] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)
    keep_empty_marks: bool = field(default=False, compare=False, repr=False)

    def has_mark(self, mark_type: str) -> bool:
        name = canonical_mark_type(mark_type)
        return any(m.type == name for m in self.marks)

    def add_mark(self, mark: Mark | str) -> None:
        """Dodaje znacznik; ponowne dodanie tego samego typu nic nie zmienia."""
        if isinstance(mark, str):
            mark = Mark(canonical_mark_type(mark))
        if not self.has_mark(mark.type):
            self.marks.append(mark)

    def remove_mark(self, mark_type: str) -> None:
        name = canonical_mark_type(mark_type)
        self.marks = [m for m in self.marks if m.type != name]


@dataclass(slots=True)
class Block:
    """
    Węzeł blokowy. `content` jest None dla bloków-liści (horizontalRule,
    hardBreak) oraz nieznanych typów zapisanych bez content; dla pozostałych
    znanych bloków — lista (może być pusta).
    """
    type: str
    content: list[Node] | None = None
    attrs: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.content is None and self.type in KNOWN_BLOCKS and not self.is_leaf:
            self.content = []

    @property
    def is_leaf(self) -> bool:
        return self.type in LEAF_BLOCKS

    @property
    def level(self) -> int:
        """Poziom nagłówka (1..6); poza zakresem → 1."""
        raw = self.attrs.get("level", 1)
        if isinstance(raw, int) and not isinstance(raw, bool) and 1 <= raw <= 6:
            return raw
        return 1


@dataclass(slots=True)
class Document:
    """Korzeń drzewa ("doc"). Pusta lista content = pusty szablon."""
    content: list[Node] = field(default_factory=list)
    attrs: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.content


type Node = Document | Block | Text


def empty_document() -> Document:
    return Document(content=[])


def paragraph(*children: Node, **attrs: Any) -> Block:
    """Skrót do budowy akapitu (używany przez normalizator i edytor)."""
    return Block(BlockType.PARAGRAPH, list(children), dict(attrs))


# ---------------------------------------------------------------------------
# Deserializacja (JSON → Node)
# ---------------------------------------------------------------------------

_NODE_KEYS = {"type", "content", "attrs", "text", "marks"}


def _extra(raw: dict[str, Any]) -> dict[str, Any]:
    return {k: copy.deepcopy(v) for k, v in raw.items() if k not in _NODE_KEYS}


def _attrs(raw: dict[str, Any]) -> dict[str, Any]:
    attrs = raw.get("attrs")
    return copy.deepcopy(attrs) if isinstance(attrs, dict) else {}


def _mark_from_dict(raw: Any) -> Mark | None:
    if isinstance(raw, str):
        return Mark(canonical_mark_type(raw))
    if isinstance(raw, dict) and isinstance(raw.get("type"), str):
        return Mark(canonical_mark_type(raw["type"]), _attrs(raw))
    return None


def node_from_dict(raw: dict[str, Any]) -> Block | Text | None:
    """
    Buduje węzeł z surowego słownika. Toleruje braki (content → [],
    marks → []) i naprawia to, czego nie da się zachować: węzeł bez typu
    → None (pomijany), tekst nie-string → str, content liścia tekstowego
    i błędny poziom nagłówka są odrzucane. Pełne raportowanie błędów
    należy do validator.validate_tree().
    """
    node_type = raw.get("type")
    if not isinstance(node_type, str) or not node_type:
        return None

    if node_type == TEXT_TYPE:
        text = raw.get("text", "")
        node = Text(text if isinstance(text, str) else str(text), extra=_extra(raw))
        marks = raw.get("marks")
        if isinstance(marks, list):
            node.keep_empty_marks = True
            for m in marks:
                mark = _mark_from_dict(m)
                if mark is not None:
                    node.add_mark(mark)
        return node

    block = Block(node_type, attrs=_attrs(raw), extra=_extra(raw))
    if node_type == BlockType.HEADING and "level" in block.attrs:
        level = block.attrs["level"]
        if isinstance(level, bool) or not isinstance(level, int) or not 1 <= level <= 6:
            del block.attrs["level"]
    children = raw.get("content")
    if isinstance(children, list):
        block.content = _children_from_list(children)
    return block


def _children_from_list(children: list[Any]) -> list[Node]:
    nodes = (node_from_dict(c) for c in children if isinstance(c, dict))
    return [n for n in nodes if n is not None]


def document_from_dict(tree: dict[str, Any]) -> Document:
    """Deserializuje kanoniczne drzewo {"type": "doc", "content": [...]}."""
    children = tree.get("content")
    doc = Document(attrs=_attrs(tree), extra=_extra(tree))
    if isinstance(children, list):
        doc.content = _children_from_list(children)
    return doc


# ---------------------------------------------------------------------------
# Serializacja (Node → JSON)
# ---------------------------------------------------------------------------

def node_to_dict(node: Node) -> dict[str, Any]:
    if isinstance(node, Document):
        return document_to_dict(node)

    if isinstance(node, Text):
        out: dict[str, Any] = {"type": TEXT_TYPE, "text": node.text}
        if node.marks or node.keep_empty_marks:
            out["marks"] = [m.to_dict() for m in node.marks]
        out.update(copy.deepcopy(node.extra))
        return out

    out = {"type": node.type}
    if node.attrs:
        out["attrs"] = copy.deepcopy(node.attrs)
    if node.content is not None:
        out["content"] = [node_to_dict(c) for c in node.content]
    out.update(copy.deepcopy(node.extra))
    return out


def document_to_dict(doc: Document) -> dict[str, Any]:
    out: dict[str, Any] = {"type": DOC_TYPE}
    if doc.attrs:
        out["attrs"] = copy.deepcopy(doc.attrs)
    out["content"] = [node_to_dict(c) for c in doc.content]
    out.update(copy.deepcopy(doc.extra))
    return out


# ---------------------------------------------------------------------------
# Przechodzenie drzewa
# ---------------------------------------------------------------------------

def iter_nodes(node: Node, path: NodePath = ()) -> Iterator[tuple[NodePath, Node]]:
    """Przechodzi drzewo w głąb, w kolejności dokumentu: (ścieżka, węzeł)."""
    yield path, node
    children = node.content if not isinstance(node, Text) else None
    for i, child in enumerate(children or []):
        yield from iter_nodes(child, path + (i,))


def iter_text_nodes(node: Node) -> Iterator[tuple[NodePath, Text]]:
    for path, n in iter_nodes(node):
        if isinstance(n, Text):
            yield path, n


def node_at(doc: Document, path: NodePath) -> Node:
    """
    Zwraca węzeł pod ścieżką.

    Raises:
        IndexError gdy ścieżka wychodzi poza drzewo.
    """
    node: Node = doc
    for i in path:
        children = node.content if not isinstance(node, Text) else None
        if not children or not 0 <= i < len(children):
            raise IndexError(f"Ścieżka {path} nie wskazuje węzła dokumentu.")
        node = children[i]
    return node


def plain_text(node: Node) -> str:
    """Sklejony tekst wszystkich liści (bez formatowania)."""
    return "".join(t.text for _, t in iter_text_nodes(node))
