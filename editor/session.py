"""
editor/session.py — sesja edycji szablonu umowy.

TemplateEditor trzyma jeden Document i jeden PreviewContext na czas sesji:

  rekord → normalize_content() → Document → insert()/apply_mark()
        → preview() (render + przeniesienie wpisanych wartości) → to_record()

Wstawianie tokenów jest przezroczyste: tag nie musi należeć do żadnej
rodziny (nieznane tagi są dozwolone, w podglądzie zostają dosłownie).
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass

from data_model import (
    TEXT_BLOCKS,
    Block,
    Document,
    NodePath,
    PreviewContext,
    TemplateRecord,
    Text,
    document_to_dict,
    empty_document,
    iter_nodes,
    node_at,
    paragraph,
    sample_template,
)
from html_parser import DEFAULT_NAMESPACE, normalize_content
from renderer import RenderMode, RenderResult, render
from renderer.types import SlotValue

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Position:
    """Miejsce w dokumencie: ścieżka do liścia tekstowego + przesunięcie w jego tekście."""
    path: NodePath
    offset: int


def _context_from_record(record: TemplateRecord, defaults: PreviewContext) -> PreviewContext:
    ctx = copy.deepcopy(defaults)
    if record.default_currency:
        ctx.currency = record.default_currency
    if record.default_country:
        ctx.client_country = record.default_country
    if record.default_pricing_tiers is not None:
        ctx.pricing_tiers = record.default_pricing_tiers
    return ctx


class TemplateEditor:
    """
    Sesja edycji jednego szablonu.

    Użycie:
        editor = TemplateEditor.from_record(record)
        editor.insert("{{client_name}}")
        result = editor.preview()
        editor.write_capture(result.capture_slot_keys[0], "Jan Kowalski")
        store.upsert_template(conn, editor.to_record())
    """

    def __init__(
        self,
        document: Document | None = None,
        context: PreviewContext | None = None,
        record: TemplateRecord | None = None,
    ) -> None:
        self.document = document if document is not None else empty_document()
        self.context = context if context is not None else PreviewContext()
        self.record = record
        self._last_preview: RenderResult | None = None

    # ------------------------------------------------------------------
    # Tworzenie sesji
    # ------------------------------------------------------------------

    @classmethod
    def new(cls, sample: bool = False, context: PreviewContext | None = None) -> TemplateEditor:
        """Nowy szablon: pusty dokument albo szablon przykładowy."""
        if sample:
            return cls.from_record(sample_template(), context)
        return cls(empty_document(), context)

    @classmethod
    def from_record(
        cls,
        record: TemplateRecord,
        defaults: PreviewContext | None = None,
        namespace: str = DEFAULT_NAMESPACE,
    ) -> TemplateEditor:
        """
        Wczytuje rekord: treść przez normalizator, domyślne wartości rekordu
        (cennik, waluta, kraj) nadpisują `defaults` w kontekście podglądu.
        """
        document = normalize_content(record.content, namespace)
        context = _context_from_record(record, defaults or PreviewContext())
        logger.debug("Wczytano szablon %s (%d bloków).", record.id, len(document.content))
        return cls(document, context, record)

    # ------------------------------------------------------------------
    # Edycja
    # ------------------------------------------------------------------

    def insert(self, tag: str) -> Position:
        """
        Dopisuje tag na końcu ostatniego bloku tekstowego (akapit/nagłówek);
        gdy dokument go nie ma, tworzy nowy akapit.
        """
        target: tuple[NodePath, Block] | None = None
        for path, node in iter_nodes(self.document):
            if isinstance(node, Block) and node.type in TEXT_BLOCKS:
                target = (path, node)

        if target is None:
            self.document.content.append(paragraph(Text(tag)))
            return Position((len(self.document.content) - 1, 0), len(tag))

        path, block = target
        if block.content is None:
            block.content = []
        last = block.content[-1] if block.content else None
        if isinstance(last, Text) and not last.marks:
            last.text += tag
            return Position(path + (len(block.content) - 1,), len(last.text))

        block.content.append(Text(tag))
        return Position(path + (len(block.content) - 1,), len(tag))

    def insert_at(self, position: Position, tag: str) -> Position:
        """
        Wstawia tag w tekst liścia pod `position`.

        Raises:
            IndexError gdy ścieżka nie wskazuje węzła.
            ValueError gdy węzeł nie jest liściem tekstowym lub offset wychodzi poza tekst.
        """
        node = node_at(self.document, position.path)
        if not isinstance(node, Text):
            raise ValueError(f"Ścieżka {position.path} nie wskazuje liścia tekstowego.")
        if not 0 <= position.offset <= len(node.text):
            raise ValueError(
                f"Offset {position.offset} poza tekstem liścia (długość {len(node.text)})."
            )
        node.text = node.text[:position.offset] + tag + node.text[position.offset:]
        return Position(position.path, position.offset + len(tag))

    def apply_mark(self, path: NodePath, mark: str) -> None:
        """Nakłada znacznik na liść (idempotentnie). ValueError dla węzła innego niż tekst."""
        node = node_at(self.document, path)
        if not isinstance(node, Text):
            raise ValueError(f"Ścieżka {path} nie wskazuje liścia tekstowego.")
        node.add_mark(mark)

    def remove_mark(self, path: NodePath, mark: str) -> None:
        node = node_at(self.document, path)
        if not isinstance(node, Text):
            raise ValueError(f"Ścieżka {path} nie wskazuje liścia tekstowego.")
        node.remove_mark(mark)

    # ------------------------------------------------------------------
    # Renderowanie
    # ------------------------------------------------------------------

    def author_view(self) -> RenderResult:
        return render(self.document, self.context, RenderMode.AUTHOR)

    def preview(self) -> RenderResult:
        """Podgląd klienta; wartości wpisane w poprzednim podglądzie przechodzą dalej."""
        result = render(self.document, self.context, RenderMode.PREVIEW)
        if self._last_preview is not None:
            result.capture_slots.carry_over(self._last_preview.capture_slots)
        self._last_preview = result
        return result

    def write_capture(self, key: str, value: SlotValue) -> None:
        """
        Zapisuje wartość pola interaktywnego ostatniego podglądu.

        Raises:
            KeyError gdy nie było podglądu albo klucz w nim nie występuje.
        """
        if self._last_preview is None:
            raise KeyError(f"Pole {key!r}: brak podglądu — najpierw wywołaj preview().")
        self._last_preview.capture_slots.write(key, value)

    # ------------------------------------------------------------------
    # Zapis
    # ------------------------------------------------------------------

    def to_record(self, name: str | None = None) -> TemplateRecord:
        """Rekord do zapisu: kanoniczny dokument + bieżące wartości domyślne podglądu."""
        if self.record is not None:
            record = copy.deepcopy(self.record)
        else:
            record = TemplateRecord.new(name or "Untitled template")
        if name is not None:
            record.name = name
        record.content = document_to_dict(self.document)
        record.default_pricing_tiers = self.context.pricing_tiers
        record.default_currency = self.context.currency
        record.default_country = self.context.client_country
        return record
