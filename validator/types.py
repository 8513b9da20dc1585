"""
validator/types.py — kody błędów i struktury raportu walidacji drzewa dokumentu.

StructureIssue   — pojedynczy błąd z kodem, ścieżką JSON Pointer,
    komunikatem i mechaniczną instrukcją naprawy.
ValidationReport — wynik walidacji: is_valid, errors, warnings,
    opcjonalnie zdeserializowany Document.
StructureError   — wyjątek rzucany przez ensure_valid() (tryb ścisły).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from data_model import Document


class IssueCode(StrEnum):
    """Stałe kody błędów walidatora (etapy A i B)."""

    # A: JSON Schema korzenia
    SCHEMA_VIOLATION   = "E_SCHEMA_VIOLATION"
    ROOT_NOT_OBJECT    = "E_ROOT_NOT_OBJECT"
    ROOT_TYPE          = "E_ROOT_TYPE"

    # B: struktura węzłów
    CONTENT_MISSING    = "E_CONTENT_MISSING"
    CONTENT_NOT_LIST   = "E_CONTENT_NOT_LIST"
    NODE_NOT_OBJECT    = "E_NODE_NOT_OBJECT"
    NODE_TYPE_MISSING  = "E_NODE_TYPE_MISSING"
    TEXT_NOT_STRING    = "E_TEXT_NOT_STRING"
    TEXT_HAS_CONTENT   = "E_TEXT_HAS_CONTENT"


@dataclass(slots=True)
class StructureIssue:
    """
    Pojedynczy błąd walidacji.

    - code:         stały identyfikator klasy błędu (IssueCode)
    - path:         JSON Pointer do miejsca błędu, np. "/content/0/content/1"
    - message:      czytelny opis błędu
    - expected_fix: krótka mechaniczna instrukcja naprawy
    - details:      opcjonalny słownik z dodatkowymi danymi
    """

    code: IssueCode
    path: str
    message: str
    expected_fix: str
    details: dict[str, Any] | None = None


@dataclass(slots=True)
class ValidationReport:
    """
    Wynik pełnej walidacji drzewa.

    - is_valid: True gdy brak błędów (warnings nie wpływają)
    - errors:   lista błędów (StructureIssue)
    - warnings: lista komunikatów ostrzegawczych (str)
    - document: zdeserializowany Document (None gdy walidacja nie przeszła)
    """

    is_valid: bool
    errors: list[StructureIssue] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    document: Document | None = None


class StructureError(ValueError):
    """Drzewo nie spełnia niezmienników modelu dokumentu."""

    def __init__(self, issues: list[StructureIssue]) -> None:
        self.issues = issues
        first = issues[0] if issues else None
        summary = f"{first.path}: {first.message}" if first else "nieprawidłowe drzewo"
        more = f" (+{len(issues) - 1} kolejnych)" if len(issues) > 1 else ""
        super().__init__(f"Nieprawidłowa struktura dokumentu — {summary}{more}")
