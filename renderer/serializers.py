"""renderer/serializers.py — drzewo wyjściowe → HTML / zwykły tekst."""

from __future__ import annotations

import base64
import html

from .types import CaptureSlot, CaptureSlotMap, RenderedElement, RenderedNode, RenderedText

_VOID_TAGS = {"br", "hr"}
_BLOCK_TAGS = {"p", "h1", "h2", "h3", "h4", "h5", "h6", "ul", "ol", "li", "blockquote"}


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------

def _attrs_html(attrs: dict[str, object]) -> str:
    return "".join(
        f' {name}="{html.escape(str(value), quote=True)}"'
        for name, value in attrs.items()
        if value is not None
    )


def _slot_html(slot: CaptureSlot, slots: CaptureSlotMap | None) -> str:
    value = slots.get(slot.key) if slots is not None else None
    key = html.escape(slot.key, quote=True)

    if slot.kind == "signature":
        if value is None:
            return f'<span class="signature-slot" data-slot="{key}"></span>'
        if isinstance(value, bytes):
            src = "data:image/png;base64," + base64.b64encode(value).decode("ascii")
        else:
            src = value
        return f'<img class="signature-slot" data-slot="{key}" src="{html.escape(src, quote=True)}" alt="signature">'

    filled = "" if value is None else f' value="{html.escape(str(value), quote=True)}"'
    return f'<input type="text" class="text-slot" data-slot="{key}"{filled}>'


def to_html(node: RenderedNode, slots: CaptureSlotMap | None = None) -> str:
    """
    Serializuje drzewo do HTML. Pola interaktywne niosą data-slot="<klucz>";
    z mapą `slots` wypełnione wartości są wstawiane w miejsce pól.
    """
    if isinstance(node, RenderedText):
        return html.escape(node.text, quote=False)
    if isinstance(node, CaptureSlot):
        return _slot_html(node, slots)

    inner = "".join(to_html(c, slots) for c in node.children)
    if node.tag is None:
        return inner
    if node.tag in _VOID_TAGS:
        return f"<{node.tag}{_attrs_html(node.attrs)}>"
    return f"<{node.tag}{_attrs_html(node.attrs)}>{inner}</{node.tag}>"


# ---------------------------------------------------------------------------
# Tekst
# ---------------------------------------------------------------------------

def _text_parts(node: RenderedNode, parts: list[str]) -> None:
    if isinstance(node, RenderedText):
        parts.append(node.text)
        return
    if isinstance(node, CaptureSlot):
        parts.append(f"[{node.key}]")
        return

    tag = node.tag
    if tag == "br":
        parts.append("\n")
        return
    if tag == "hr":
        _newline(parts)
        parts.append("---\n")
        return

    is_block = tag in _BLOCK_TAGS
    if is_block:
        _newline(parts)
    if tag == "li":
        parts.append("• ")
    for child in node.children:
        _text_parts(child, parts)
    if is_block:
        _newline(parts)


def _newline(parts: list[str]) -> None:
    if parts and not parts[-1].endswith(("\n", "• ")):
        parts.append("\n")


def to_text(node: RenderedNode) -> str:
    """Zwykły tekst: bloki w osobnych liniach, pola jako [text_0], [signature_0]."""
    parts: list[str] = []
    _text_parts(node, parts)
    return "".join(parts).strip("\n")
