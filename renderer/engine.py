"""
renderer/engine.py — silnik renderowania dokumentu szablonu.

render(document, context=None, mode=PREVIEW) -> RenderResult

Tryb AUTHOR:  tokeny zostają dosłownie, znaczniki formatowania widoczne.
Tryb PREVIEW: przejście w głąb w kolejności dokumentu:
  1. podstawienie tokenów w tekście liścia (PreviewSubstituter)
  2. {{text}} / {{signature}} → CaptureSlot z kluczem "<rodzaj>_<n>";
     liczniki osobne dla każdego rodzaju, zerowane na początku przebiegu
  3. znaczniki jako zagnieżdżone elementy: pierwszy w zbiorze = zewnętrzny
  4. bloki rekurencyjnie; hardBreak → <br>, horizontalRule → <hr>;
     nieznany typ bloku → fragment z dziećmi albo nic

Silnik nie rzuca dla zniekształconych drzew — degraduje per węzeł.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Mapping
from typing import Any

from data_model import (
    Block,
    BlockType,
    Document,
    MarkType,
    Node,
    PreviewContext,
    Text,
    canonical_mark_type,
    document_from_dict,
)
from placeholders import INTERACTIVE_IDENTIFIERS

from .substitution import PreviewSubstituter
from .types import (
    CaptureSlot,
    CaptureSlotMap,
    RenderedElement,
    RenderedNode,
    RenderedText,
    RenderMode,
    RenderResult,
)

logger = logging.getLogger(__name__)

_INTERACTIVE_RE = re.compile(
    r"\{\{(" + "|".join(map(re.escape, INTERACTIVE_IDENTIFIERS)) + r")\}\}"
)

_BLOCK_TAGS: dict[str, str] = {
    BlockType.PARAGRAPH:       "p",
    BlockType.BULLET_LIST:     "ul",
    BlockType.ORDERED_LIST:    "ol",
    BlockType.LIST_ITEM:       "li",
    BlockType.BLOCKQUOTE:      "blockquote",
    BlockType.HORIZONTAL_RULE: "hr",
    BlockType.HARD_BREAK:      "br",
}

_MARK_TAGS: dict[str, str] = {
    MarkType.BOLD:      "b",
    MarkType.ITALIC:    "i",
    MarkType.UNDERLINE: "u",
    MarkType.STRIKE:    "s",
}


def _output_attrs(attrs: Mapping[str, Any]) -> dict[str, Any]:
    """attrs bloku → atrybuty elementu: style (z textAlign) i dir."""
    out: dict[str, Any] = {}
    style = attrs.get("style")
    style = style.strip() if isinstance(style, str) else ""
    align = attrs.get("textAlign")
    if isinstance(align, str) and align and "text-align" not in style:
        style = f"{style.rstrip(';')}; text-align: {align}" if style else f"text-align: {align}"
    if style:
        out["style"] = style
    direction = attrs.get("dir")
    if isinstance(direction, str) and direction:
        out["dir"] = direction
    return out


class _RenderPass:
    """Stan jednego przebiegu: liczniki pól i przydzielone klucze."""

    def __init__(self, mode: RenderMode, context: PreviewContext) -> None:
        self.mode = mode
        self.substituter = PreviewSubstituter(context) if mode is RenderMode.PREVIEW else None
        self.counters: Counter[str] = Counter()
        self.keys: list[str] = []

    # ------------------------------------------------------------------
    # Węzły
    # ------------------------------------------------------------------

    def node(self, node: Node) -> list[RenderedNode]:
        match node:
            case Text():
                return self.text(node)
            case Block():
                return self.block(node)
            case Document():
                return [RenderedElement(None, self.children(node.content))]
            case _:
                logger.debug("Pominięto węzeł nieznanego rodzaju: %r", type(node).__name__)
                return []

    def children(self, nodes: list[Node] | None) -> list[RenderedNode]:
        out: list[RenderedNode] = []
        for child in nodes or []:
            out.extend(self.node(child))
        return out

    def block(self, block: Block) -> list[RenderedNode]:
        if block.type == BlockType.HEADING:
            tag: str | None = f"h{block.level}"
        else:
            tag = _BLOCK_TAGS.get(block.type)

        if tag is None:
            # nieznany typ bloku: dzieci bez opakowania albo nic
            if block.content is None:
                return []
            return [RenderedElement(None, self.children(block.content))]

        if block.is_leaf:
            return [RenderedElement(tag)]
        return [RenderedElement(tag, self.children(block.content), _output_attrs(block.attrs))]

    def text(self, leaf: Text) -> list[RenderedNode]:
        raw = leaf.text if isinstance(leaf.text, str) else str(leaf.text)
        if self.substituter is None:
            inner: list[RenderedNode] = [RenderedText(raw)] if raw else []
        else:
            inner = self.interactive(self.substituter.substitute(raw))
        if not inner:
            return []

        for mark in reversed(leaf.marks):
            tag = _MARK_TAGS.get(canonical_mark_type(mark.type))
            if tag is not None:
                inner = [RenderedElement(tag, inner)]
        return inner

    # ------------------------------------------------------------------
    # Pola interaktywne
    # ------------------------------------------------------------------

    def interactive(self, text: str) -> list[RenderedNode]:
        out: list[RenderedNode] = []
        pos = 0
        for m in _INTERACTIVE_RE.finditer(text):
            if m.start() > pos:
                out.append(RenderedText(text[pos:m.start()]))
            kind = m.group(1)
            key = f"{kind}_{self.counters[kind]}"
            self.counters[kind] += 1
            self.keys.append(key)
            out.append(CaptureSlot(kind, key))
            pos = m.end()
        if pos < len(text):
            out.append(RenderedText(text[pos:]))
        return out


def render(
    document: Document | Mapping[str, Any],
    context: PreviewContext | None = None,
    mode: RenderMode | str = RenderMode.PREVIEW,
) -> RenderResult:
    """
    Renderuje dokument. Kanoniczny słownik JSON jest najpierw deserializowany
    (tolerancyjnie). Brak kontekstu → PreviewContext() z wartościami domyślnymi.

    Każde wywołanie ma własne liczniki i własną CaptureSlotMap, więc dwa
    renderowania tego samego drzewa dają identyczne klucze.
    """
    if not isinstance(document, Document):
        document = document_from_dict(document) if isinstance(document, Mapping) else Document()

    run = _RenderPass(RenderMode(mode), context if context is not None else PreviewContext())
    root = RenderedElement(None, run.children(document.content))
    logger.debug("Render %s: %d pól interaktywnych.", run.mode, len(run.keys))
    return RenderResult(
        output=root,
        capture_slot_keys=list(run.keys),
        capture_slots=CaptureSlotMap(run.keys),
    )
