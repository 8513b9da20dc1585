"""
renderer/types.py — typy wyniku renderowania.

Drzewo wyjściowe:
  RenderedElement — element z tagiem HTML (tag=None → fragment bez opakowania)
  RenderedText    — tekst po podstawieniu tokenów
  CaptureSlot     — pole interaktywne ({{text}} / {{signature}}) z kluczem
                    "<rodzaj>_<n>", np. "text_0", "signature_1"

CaptureSlotMap — wartości wpisane przez wywołującego do pól jednego
przebiegu renderowania. Silnik jedynie przydziela klucze.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

type SlotValue = str | bytes


class RenderMode(StrEnum):
    AUTHOR  = "author"    # tokeny widoczne dosłownie, bez podstawień
    PREVIEW = "preview"   # podstawienia + pola interaktywne


@dataclass(slots=True)
class RenderedText:
    text: str


@dataclass(frozen=True, slots=True)
class CaptureSlot:
    kind: str   # "text" | "signature"
    key: str


@dataclass(slots=True)
class RenderedElement:
    tag: str | None
    children: list[RenderedNode] = field(default_factory=list)
    attrs: dict[str, Any] = field(default_factory=dict)


type RenderedNode = RenderedElement | RenderedText | CaptureSlot


class CaptureSlotMap:
    """
    Klucz pola → wpisana wartość (tekst albo podpis jako bajty / data URL).

    Zapis dozwolony tylko dla kluczy przydzielonych w tym przebiegu.
    """

    __slots__ = ("_keys", "_values")

    def __init__(self, keys: Iterable[str] = ()) -> None:
        self._keys: tuple[str, ...] = tuple(keys)
        self._values: dict[str, SlotValue] = {}

    @property
    def keys(self) -> tuple[str, ...]:
        """Klucze przydzielone w przebiegu, w kolejności dokumentu."""
        return self._keys

    def write(self, key: str, value: SlotValue) -> None:
        if key not in self._keys:
            raise KeyError(f"Pole {key!r} nie występuje w tym podglądzie.")
        self._values[key] = value

    def get(self, key: str, default: SlotValue | None = None) -> SlotValue | None:
        return self._values.get(key, default)

    def items(self) -> list[tuple[str, SlotValue]]:
        """Wypełnione pola w kolejności dokumentu."""
        return [(k, self._values[k]) for k in self._keys if k in self._values]

    def carry_over(self, previous: CaptureSlotMap) -> None:
        """Przenosi wartości z poprzedniego przebiegu dla kluczy, które przetrwały."""
        for key, value in previous.items():
            if key in self._keys:
                self._values[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __iter__(self) -> Iterator[str]:
        return (k for k in self._keys if k in self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"CaptureSlotMap(keys={list(self._keys)!r}, filled={len(self._values)})"


@dataclass(slots=True)
class RenderResult:
    """
    Wynik renderowania.

    - output:            korzeń drzewa wyjściowego (fragment)
    - capture_slot_keys: klucze pól interaktywnych w kolejności dokumentu
    - capture_slots:     pusta mapa z tymi kluczami, do wypełnienia przez UI
    """
    output: RenderedElement
    capture_slot_keys: list[str] = field(default_factory=list)
    capture_slots: CaptureSlotMap = field(default_factory=CaptureSlotMap)

    def count(self, kind: str) -> int:
        """Liczba pól danego rodzaju (ile kontrolek utworzyć)."""
        return sum(1 for k in self.capture_slot_keys if k.rsplit("_", 1)[0] == kind)
