"""html_parser/parser.py — parsowanie znaczników HTML do drzewa dokumentu."""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from data_model import Block, BlockType, Document, Mark, MarkType, Node, Text

# Tagi blokowe (determinują granice bloków treści)
_HEADING_TAGS = {"h1", "h2", "h3", "h4", "h5", "h6"}
_HEADING_LEVEL: dict[str, int] = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}
_PARAGRAPH_TAGS = {"p", "div", "pre"}
_LIST_TAGS: dict[str, str] = {"ul": BlockType.BULLET_LIST, "ol": BlockType.ORDERED_LIST}
_BLOCK_TAGS: set[str] = (
    _HEADING_TAGS | _PARAGRAPH_TAGS | set(_LIST_TAGS) | {"li", "blockquote", "hr"}
)
_BLOCK_TAG_LIST = sorted(_BLOCK_TAGS)

# Tagi formatowania → znaczniki
_MARK_TAGS: dict[str, str] = {
    "b":      MarkType.BOLD,
    "strong": MarkType.BOLD,
    "i":      MarkType.ITALIC,
    "em":     MarkType.ITALIC,
    "u":      MarkType.UNDERLINE,
    "ins":    MarkType.UNDERLINE,
    "s":      MarkType.STRIKE,
    "strike": MarkType.STRIKE,
    "del":    MarkType.STRIKE,
}

# Tagi zawierające szum (nie treść)
_NOISE_TAGS = {"script", "style", "noscript", "head", "title", "meta", "link"}

_WS_RE = re.compile(r"\s+")
_TEXT_ALIGN_RE = re.compile(r"text-align\s*:\s*(left|center|right|justify)", re.IGNORECASE)


def _block_attrs(el: Tag) -> dict[str, object]:
    """Styl inline, wyrównanie i kierunek tekstu bloku → attrs węzła."""
    attrs: dict[str, object] = {}
    style = el.get("style")
    if isinstance(style, str) and style.strip():
        attrs["style"] = style.strip()
        m = _TEXT_ALIGN_RE.search(style)
        if m:
            attrs["textAlign"] = m.group(1).lower()
    direction = el.get("dir")
    if isinstance(direction, str) and direction.strip():
        attrs["dir"] = direction.strip().lower()
    return attrs


def _has_block_child(el: Tag) -> bool:
    return any(isinstance(c, Tag) and c.name in _BLOCK_TAGS for c in el.children)


def _has_block_descendant(el: Tag) -> bool:
    return el.find(_BLOCK_TAG_LIST) is not None


def _same_marks(a: Text, b: Text) -> bool:
    return [m.type for m in a.marks] == [m.type for m in b.marks]


def _tidy_inline(nodes: list[Node], preserve_ws: bool) -> list[Node]:
    """
    Scala sąsiednie liście o tych samych znacznikach, przycina białe znaki
    na krawędziach bloku i usuwa puste liście.
    """
    merged: list[Node] = []
    for node in nodes:
        prev = merged[-1] if merged else None
        if isinstance(node, Text) and isinstance(prev, Text) and _same_marks(prev, node):
            prev.text += node.text
        else:
            merged.append(node)

    if not preserve_ws:
        texts = [n for n in merged if isinstance(n, Text)]
        if texts and merged[0] is texts[0]:
            texts[0].text = texts[0].text.lstrip()
        if texts and merged[-1] is texts[-1]:
            texts[-1].text = texts[-1].text.rstrip()
        for prev, node in zip(merged, merged[1:]):
            # podwójna spacja na styku liści po zwinięciu białych znaków
            if isinstance(prev, Text) and isinstance(node, Text) and prev.text.endswith(" "):
                node.text = node.text.lstrip(" ")

    return [n for n in merged if not (isinstance(n, Text) and n.text == "")]


class _TreeBuilder:
    """
    Przechodzi drzewo DOM i buduje węzły dokumentu.

    Reguły:
    - Blok (p, div, hN, listy, blockquote, hr) → węzeł blokowy.
    - div z blokowymi dziećmi jest przezroczystym kontenerem.
    - Tekst i tagi liniowe między blokami → akapit.
    - Tagi formatowania dokładają znacznik; inne tagi liniowe są przezroczyste.
    """

    # ------------------------------------------------------------------
    # Bloki
    # ------------------------------------------------------------------

    def blocks(self, children: list) -> list[Node]:
        out: list[Node] = []
        run: list[Node] = []

        def flush() -> None:
            inline = _tidy_inline(run, preserve_ws=False)
            if any(isinstance(n, Text) and n.text.strip() for n in inline):
                out.append(Block(BlockType.PARAGRAPH, inline))
            run.clear()

        for child in children:
            if isinstance(child, PreformattedString):
                continue  # komentarze, doctype, CDATA
            if isinstance(child, NavigableString):
                run.extend(self.inline(child, [], pre=False))
                continue
            if not isinstance(child, Tag) or child.name in _NOISE_TAGS:
                continue
            if child.name in _BLOCK_TAGS:
                flush()
                out.extend(self.block(child))
            elif child.name not in _MARK_TAGS and _has_block_descendant(child):
                # nieblokowy kontener z blokami w środku (html, body, span, table…)
                flush()
                out.extend(self.blocks(list(child.children)))
            else:
                run.extend(self.inline(child, [], pre=False))

        flush()
        return out

    def block(self, el: Tag) -> list[Node]:
        name = el.name

        if name == "hr":
            return [Block(BlockType.HORIZONTAL_RULE)]

        if name in _HEADING_TAGS:
            attrs = {"level": _HEADING_LEVEL[name], **_block_attrs(el)}
            return [Block(BlockType.HEADING, self.inline_children(el, pre=False), attrs)]

        if name in _LIST_TAGS:
            items: list[Node] = []
            for child in el.children:
                if isinstance(child, Tag) and child.name == "li":
                    items.append(self.list_item(child))
                elif isinstance(child, Tag) and child.name not in _NOISE_TAGS:
                    items.append(Block(BlockType.LIST_ITEM, self.blocks([child]) or [Block(BlockType.PARAGRAPH)]))
                elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
                    if child.strip():
                        items.append(Block(BlockType.LIST_ITEM, self.blocks([child])))
            return [Block(_LIST_TAGS[name], items, _block_attrs(el))]

        if name == "li":
            return [self.list_item(el)]

        if name == "blockquote":
            return [Block(BlockType.BLOCKQUOTE, self.blocks(list(el.children)), _block_attrs(el))]

        # p / div / pre
        if _has_block_child(el):
            return self.blocks(list(el.children))
        return [Block(BlockType.PARAGRAPH, self.inline_children(el, pre=name == "pre"), _block_attrs(el))]

    def list_item(self, el: Tag) -> Block:
        content = self.blocks(list(el.children))
        return Block(BlockType.LIST_ITEM, content or [Block(BlockType.PARAGRAPH)], _block_attrs(el))

    # ------------------------------------------------------------------
    # Treść liniowa
    # ------------------------------------------------------------------

    def inline_children(self, el: Tag, pre: bool) -> list[Node]:
        nodes: list[Node] = []
        for child in el.children:
            nodes.extend(self.inline(child, [], pre))
        return _tidy_inline(nodes, preserve_ws=pre)

    def inline(self, node: object, marks: list[str], pre: bool) -> list[Node]:
        if isinstance(node, PreformattedString):
            return []
        if isinstance(node, NavigableString):
            text = str(node) if pre else _WS_RE.sub(" ", str(node))
            if not text:
                return []
            return [Text(text, [Mark(m) for m in marks])]
        if not isinstance(node, Tag) or node.name in _NOISE_TAGS:
            return []
        if node.name == "br":
            return [Block(BlockType.HARD_BREAK)]

        mark = _MARK_TAGS.get(node.name)
        inner_marks = marks + [mark] if mark and mark not in marks else marks
        inner_pre = pre or node.name == "pre"
        out: list[Node] = []
        for child in node.children:
            out.extend(self.inline(child, inner_marks, inner_pre))
        return out


def parse_markup(markup: str) -> Document:
    """
    Parsuje oczyszczone znaczniki HTML do Document (parser html.parser).

    Wywołujący odpowiada za wcześniejsze clean_markup() i ensure_block_root().
    """
    soup = BeautifulSoup(markup, "html.parser")

    for tag in soup.find_all(sorted(_NOISE_TAGS)):
        tag.decompose()

    return Document(content=_TreeBuilder().blocks(list(soup.children)))
