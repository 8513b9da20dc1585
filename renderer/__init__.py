"""
renderer — silnik renderowania szablonów umów (tryb autora / podglądu).

Interfejs publiczny:
    render(document, context=None, mode="preview") -> RenderResult
    to_html(node, slots=None)                      -> str
    to_text(node)                                  -> str
    PreviewSubstituter                             — podstawienia w tekście liścia
    RenderMode, RenderResult, RenderedElement, RenderedText, CaptureSlot,
    CaptureSlotMap                                 — typy wyniku

Typowe użycie:
    from renderer import render, to_text

    result = render(doc, PreviewContext(currency="USD"))
    print(to_text(result.output))
    result.capture_slots.write(result.capture_slot_keys[0], "Jan Kowalski")
"""

from .types import (
    CaptureSlot,
    CaptureSlotMap,
    RenderedElement,
    RenderedNode,
    RenderedText,
    RenderMode,
    RenderResult,
)
from .substitution import DEMO_IDENTITY, PreviewSubstituter
from .engine import render
from .serializers import to_html, to_text

__all__ = [
    "CaptureSlot",
    "CaptureSlotMap",
    "RenderedElement",
    "RenderedNode",
    "RenderedText",
    "RenderMode",
    "RenderResult",
    "DEMO_IDENTITY",
    "PreviewSubstituter",
    "render",
    "to_html",
    "to_text",
]
