"""
html_parser/legacy.py — normalizacja zapisanej treści szablonu do Document.

Kaskada (każdy krok tylko gdy poprzedni nie dał dokumentu):
  1. None / pusty lub biały string            → pusty Document
  2. Obiekt {"type": "doc", "content": [...]}  → tolerancyjna deserializacja
  3. Dziennik operacji (delta / ops / lista {insert}):
       - jest pole "html" (string)            → krok 4 na tym stringu
       - brak html                            → sklejone inserty → krok 6
  4. String ze znacznikami HTML → clean_markup() + ensure_block_root()
  5. parse_markup() + validate_tree(); wyjątek lub błąd walidacji
                                                → krok 6 z ORYGINALNYM stringiem
  6. Ostatnia deska ratunku: jeden akapit z jednym liściem tekstowym

String będący poprawnym JSON-em (obiekt, tablica, string) jest dekodowany
i przepuszczany przez kaskadę jeszcze raz (treść podwójnie zakodowana),
o ile zdekodowana wartość ma rozpoznany kształt (string, dokument, dziennik
operacji). Inny JSON trafia do kroku 6 jako oryginalny, niezmieniony string.

Funkcja jest totalna: nigdy nie rzuca, zawsze zwraca poprawny Document.
Utrata struktury jest lepsza niż utrata treści.
"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from data_model import (
    DOC_TYPE,
    Document,
    Text,
    document_from_dict,
    document_to_dict,
    empty_document,
    paragraph,
)
from validator import validate_tree

from .cleaner import DEFAULT_NAMESPACE, clean_markup, ensure_block_root, looks_like_markup
from .parser import parse_markup

logger = logging.getLogger(__name__)

# Ile razy wolno rozpakować string z JSON-em (podwójne kodowanie).
_MAX_JSON_DEPTH = 1

_JSON_START = ("{", "[", '"')


class ContentSource(StrEnum):
    """Ścieżka kaskady, która wyprodukowała dokument."""
    EMPTY      = "empty"
    CANONICAL  = "canonical"
    MARKUP     = "markup"
    PLAIN_TEXT = "plain_text"


@dataclass(slots=True)
class NormalizedContent:
    document: Document
    source: ContentSource
    detail: str = ""


# ---------------------------------------------------------------------------
# Rozpoznawanie kształtów
# ---------------------------------------------------------------------------

def _is_canonical(raw: Any) -> bool:
    return (
        isinstance(raw, dict)
        and raw.get("type") == DOC_TYPE
        and isinstance(raw.get("content", []), list)
    )


def _is_op(item: Any) -> bool:
    return isinstance(item, dict) and "insert" in item


def _extract_ops(raw: Any) -> list[dict[str, Any]] | None:
    """delta.ops / delta (lista) / ops / gołą lista operacji → lista operacji."""
    if isinstance(raw, list):
        return raw if raw and all(_is_op(i) for i in raw) else None
    if not isinstance(raw, dict):
        return None
    delta = raw.get("delta")
    if isinstance(delta, dict) and isinstance(delta.get("ops"), list):
        return delta["ops"]
    if isinstance(delta, list):
        return delta
    if isinstance(raw.get("ops"), list):
        return raw["ops"]
    return None


def _html_field(raw: Any) -> str | None:
    if not isinstance(raw, dict):
        return None
    html = raw.get("html")
    if isinstance(html, str) and html.strip():
        return html
    delta = raw.get("delta")
    if isinstance(delta, dict) and isinstance(delta.get("html"), str) and delta["html"].strip():
        return delta["html"]
    return None


def _has_known_shape(decoded: Any) -> bool:
    """Czy zdekodowany JSON ze stringu to treść, którą kaskada rozumie."""
    return (
        isinstance(decoded, str)
        or _is_canonical(decoded)
        or _html_field(decoded) is not None
        or _extract_ops(decoded) is not None
    )


def _join_inserts(ops: list[Any]) -> str:
    return "".join(op["insert"] for op in ops if _is_op(op) and isinstance(op["insert"], str))


def _garbage_text(raw: Any) -> str:
    if isinstance(raw, (dict, list)):
        try:
            return json.dumps(raw, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            return str(raw)
    return str(raw)


# ---------------------------------------------------------------------------
# Kroki kaskady
# ---------------------------------------------------------------------------

def _wrap_plain(text: str, detail: str) -> NormalizedContent:
    """Krok 6 — tekst dosłownie jako jeden akapit."""
    if not text.strip():
        return NormalizedContent(empty_document(), ContentSource.EMPTY, detail)
    doc = Document(content=[paragraph(Text(text))])
    return NormalizedContent(doc, ContentSource.PLAIN_TEXT, detail)


def _from_markup(markup: str, namespace: str) -> NormalizedContent:
    """Kroki 4–5; przy niepowodzeniu krok 6 z oryginalnym stringiem."""
    try:
        cleaned = ensure_block_root(clean_markup(markup, namespace))
        doc = parse_markup(cleaned)
    except Exception as e:  # dowolny błąd parsowania degraduje do tekstu
        logger.debug("Parsowanie HTML nieudane (%s) — zapis jako zwykły tekst.", e)
        return _wrap_plain(markup, f"markup parse failed: {e}")

    report = validate_tree(document_to_dict(doc))
    if not report.is_valid:
        codes = ", ".join(i.code for i in report.errors)
        logger.debug("Drzewo z HTML nie przeszło walidacji (%s) — zapis jako tekst.", codes)
        return _wrap_plain(markup, f"markup tree invalid: {codes}")

    logger.debug("HTML → %d bloków.", len(doc.content))
    return NormalizedContent(doc, ContentSource.MARKUP)


def _from_string(text: str, namespace: str, depth: int) -> NormalizedContent:
    stripped = text.strip()
    if not stripped:
        return NormalizedContent(empty_document(), ContentSource.EMPTY, "blank string")

    if depth < _MAX_JSON_DEPTH and stripped.startswith(_JSON_START):
        try:
            decoded = json.loads(stripped)
        except ValueError:
            decoded = None
        else:
            if not _has_known_shape(decoded):
                logger.debug("JSON bez rozpoznanego kształtu — zapis oryginalnego stringu.")
                return _wrap_plain(text, "json without known shape")
            logger.debug("String zawiera JSON (%s) — dekodowanie.", type(decoded).__name__)
            return _cascade(decoded, namespace, depth + 1)

    if looks_like_markup(text):
        return _from_markup(text, namespace)

    return _wrap_plain(text, "plain string")


def _cascade(raw: Any, namespace: str, depth: int) -> NormalizedContent:
    if raw is None:
        return NormalizedContent(empty_document(), ContentSource.EMPTY, "null")

    if isinstance(raw, Document):
        return NormalizedContent(copy.deepcopy(raw), ContentSource.CANONICAL)

    if isinstance(raw, (bytes, bytearray)):
        raw = bytes(raw).decode("utf-8", errors="replace")

    if isinstance(raw, str):
        return _from_string(raw, namespace, depth)

    if _is_canonical(raw):
        return NormalizedContent(document_from_dict(raw), ContentSource.CANONICAL)

    html = _html_field(raw)
    if html is not None:
        logger.debug("Dziennik operacji z polem html — ścieżka HTML.")
        return _from_markup(html, namespace)

    ops = _extract_ops(raw)
    if ops is not None:
        logger.debug("Dziennik operacji bez html (%d operacji) — sklejone inserty.", len(ops))
        return _wrap_plain(_join_inserts(ops), "operation log without html")

    logger.debug("Nierozpoznana treść (%s) — zapis jako tekst.", type(raw).__name__)
    return _wrap_plain(_garbage_text(raw), "unrecognized content")


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def normalize_content_traced(raw: Any, namespace: str = DEFAULT_NAMESPACE) -> NormalizedContent:
    """
    Jak normalize_content(), ale zwraca też ścieżkę kaskady (ContentSource)
    i krótki opis powodu — dla CLI i diagnostyki.
    """
    try:
        result = _cascade(raw, namespace, 0)
    except Exception as e:
        logger.debug("Nieoczekiwany błąd normalizacji (%s) — zapis jako tekst.", e)
        result = _wrap_plain(_garbage_text(raw), f"unexpected error: {e}")
    logger.debug("Normalizacja: ścieżka=%s %s", result.source, result.detail)
    return result


def normalize_content(raw: Any, namespace: str = DEFAULT_NAMESPACE) -> Document:
    """
    Zapisana treść szablonu (dowolna) → kanoniczny Document. Nigdy nie rzuca.

    Przykład:
        >>> doc = normalize_content('<p class="ql-align-center">Hello</p>')
        >>> doc.content[0].attrs
        {'style': 'text-align: center', 'textAlign': 'center'}
    """
    return normalize_content_traced(raw, namespace).document
