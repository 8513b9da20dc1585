"""
validator/tree_validator.py — walidator struktury drzewa dokumentu.

TreeValidator.validate(tree) -> ValidationReport
ensure_valid(tree)           -> Document   (StructureError przy błędach)

Etapy:
  A — JSON Schema korzenia (type == "doc", content jako tablica)
  B — struktura węzłów (typ węzła, tekst liścia, obecność i kształt content)
  C — normalizacja do wartości domyślnych, tylko do zbudowania report.document

Błędem jest wyłącznie naruszenie niezmienników modelu. Kształt marks,
poziom nagłówka i nieznane typy dają ostrzeżenia.

Walidacja jest opcjonalna: ścieżka główna (normalizator treści) z niej nie
korzysta jako warunku; służy wywołującym, którzy chcą trybu ścisłego.
"""

from __future__ import annotations

from typing import Any

import jsonschema

from data_model import (
    DOC_TYPE,
    KNOWN_BLOCKS,
    KNOWN_MARKS,
    LEAF_BLOCKS,
    TEXT_TYPE,
    BlockType,
    Document,
    document_from_dict,
    canonical_mark_type,
)

from .normalizer import normalize_tree
from .schema import DOCUMENT_SCHEMA
from .types import IssueCode, StructureError, StructureIssue, ValidationReport

# Limit błędów; po przekroczeniu przerywamy przechodzenie drzewa
MAX_ERRORS = 50


class TreeValidator:
    """
    Walidator drzewa dokumentu względem niezmienników modelu.

    Użycie:
        validator = TreeValidator()
        report    = validator.validate(json.loads(raw))
        if report.is_valid:
            doc = report.document
    """

    def __init__(self, schema: dict[str, Any] | None = None) -> None:
        self._schema = schema if schema is not None else DOCUMENT_SCHEMA
        self._schema_validator = jsonschema.Draft202012Validator(self._schema)

    # ------------------------------------------------------------------
    # Publiczny interfejs
    # ------------------------------------------------------------------

    def validate(self, tree: Any) -> ValidationReport:
        errors: list[StructureIssue] = []
        warnings: list[str] = []

        # A: JSON Schema (fail-fast)
        self._stage_schema(tree, errors)
        if errors:
            return ValidationReport(is_valid=False, errors=errors, warnings=warnings)

        # B: struktura
        for i, node in enumerate(tree.get("content", [])):
            if len(errors) >= MAX_ERRORS:
                break
            self._check_node(node, f"/content/{i}", errors, warnings)

        if errors:
            return ValidationReport(is_valid=False, errors=errors, warnings=warnings)

        # C: wartości domyślne dla zwracanego dokumentu
        return ValidationReport(
            is_valid=True,
            errors=errors,
            warnings=warnings,
            document=document_from_dict(normalize_tree(tree)),
        )

    # ------------------------------------------------------------------
    # Stage A: JSON Schema
    # ------------------------------------------------------------------

    def _stage_schema(self, tree: Any, errors: list[StructureIssue]) -> None:
        if not isinstance(tree, dict):
            errors.append(StructureIssue(
                code=IssueCode.ROOT_NOT_OBJECT,
                path="/",
                message=f"Korzeń musi być obiektem, otrzymano {type(tree).__name__}.",
                expected_fix='Przekaż obiekt {"type": "doc", "content": [...]}.',
            ))
            return

        if tree.get("type") != DOC_TYPE:
            errors.append(StructureIssue(
                code=IssueCode.ROOT_TYPE,
                path="/type",
                message=f"Korzeń musi mieć type 'doc', otrzymano {tree.get('type')!r}.",
                expected_fix="Ustaw type korzenia na 'doc' lub przepuść treść przez normalizator.",
                details={"type": tree.get("type")},
            ))
            return

        for e in self._schema_validator.iter_errors(tree):
            path = (
                "/" + "/".join(str(p) for p in e.absolute_path)
                if e.absolute_path
                else "/"
            )
            errors.append(StructureIssue(
                code=IssueCode.SCHEMA_VIOLATION,
                path=path,
                message=e.message,
                expected_fix=f"Popraw naruszenie schematu JSON na ścieżce {path}.",
            ))

    # ------------------------------------------------------------------
    # Stage B: struktura węzłów
    # ------------------------------------------------------------------

    def _check_node(
        self,
        node: Any,
        path: str,
        errors: list[StructureIssue],
        warnings: list[str],
    ) -> None:
        if not isinstance(node, dict):
            errors.append(StructureIssue(
                code=IssueCode.NODE_NOT_OBJECT,
                path=path,
                message=f"Węzeł musi być obiektem, otrzymano {type(node).__name__}.",
                expected_fix="Zastąp element obiektem węzła z kluczem 'type'.",
            ))
            return

        node_type = node.get("type")
        if not isinstance(node_type, str) or not node_type:
            errors.append(StructureIssue(
                code=IssueCode.NODE_TYPE_MISSING,
                path=f"{path}/type",
                message="Węzeł nie ma tekstowego pola 'type'.",
                expected_fix="Dodaj 'type' (np. 'paragraph' lub 'text').",
            ))
            return

        if node_type == TEXT_TYPE:
            self._check_text(node, path, errors, warnings)
            return

        if node_type not in KNOWN_BLOCKS:
            warnings.append(f"{path}: nieznany typ węzła '{node_type}' — przepuszczony bez zmian.")

        if node_type == BlockType.HEADING:
            self._check_heading(node, path, warnings)

        content = node.get("content")
        if content is None:
            if node_type in KNOWN_BLOCKS and node_type not in LEAF_BLOCKS:
                errors.append(StructureIssue(
                    code=IssueCode.CONTENT_MISSING,
                    path=f"{path}/content",
                    message=f"Blok '{node_type}' musi mieć pole content.",
                    expected_fix="Dodaj content jako listę węzłów (może być pusta).",
                    details={"type": node_type},
                ))
            return

        if not isinstance(content, list):
            errors.append(StructureIssue(
                code=IssueCode.CONTENT_NOT_LIST,
                path=f"{path}/content",
                message=f"Pole content węzła '{node_type}' musi być listą.",
                expected_fix="Zamień content na listę węzłów (może być pusta).",
                details={"type": node_type},
            ))
            return
        if node_type in LEAF_BLOCKS and content:
            warnings.append(f"{path}: blok '{node_type}' nie powinien mieć content — zostanie pominięty.")

        for i, child in enumerate(content):
            if len(errors) >= MAX_ERRORS:
                return
            self._check_node(child, f"{path}/content/{i}", errors, warnings)

    def _check_text(
        self,
        node: dict[str, Any],
        path: str,
        errors: list[StructureIssue],
        warnings: list[str],
    ) -> None:
        if not isinstance(node.get("text"), str):
            errors.append(StructureIssue(
                code=IssueCode.TEXT_NOT_STRING,
                path=f"{path}/text",
                message="Liść tekstowy musi mieć pole 'text' typu string.",
                expected_fix="Ustaw 'text' na łańcuch znaków.",
                details={"actual": type(node.get("text")).__name__},
            ))

        if "content" in node:
            errors.append(StructureIssue(
                code=IssueCode.TEXT_HAS_CONTENT,
                path=f"{path}/content",
                message="Liść tekstowy nie może mieć własnego content.",
                expected_fix="Usuń 'content' z węzła 'text'.",
            ))

        # znaczniki nie są niezmiennikiem modelu: wadliwe są pomijane przy odczycie
        marks = node.get("marks", [])
        if not isinstance(marks, list):
            warnings.append(f"{path}/marks: pole marks nie jest listą — znaczniki zostaną pominięte.")
            return

        for i, mark in enumerate(marks):
            if isinstance(mark, str):
                mark_type = mark
            elif isinstance(mark, dict):
                mark_type = mark.get("type")
            else:
                mark_type = None
            if not isinstance(mark_type, str):
                warnings.append(f"{path}/marks/{i}: znacznik bez tekstowego typu — pominięty.")
            elif canonical_mark_type(mark_type) not in KNOWN_MARKS:
                warnings.append(
                    f"{path}/marks/{i}: nieznany znacznik '{mark_type}' — ignorowany przy renderowaniu."
                )

    def _check_heading(
        self,
        node: dict[str, Any],
        path: str,
        warnings: list[str],
    ) -> None:
        attrs = node.get("attrs")
        if not isinstance(attrs, dict) or "level" not in attrs:
            return
        level = attrs["level"]
        if isinstance(level, bool) or not isinstance(level, int) or not 1 <= level <= 6:
            warnings.append(
                f"{path}/attrs/level: poziom nagłówka {level!r} poza zakresem 1-6 — przyjęto 1."
            )


# ---------------------------------------------------------------------------
# Funkcje modułowe
# ---------------------------------------------------------------------------

_DEFAULT = TreeValidator()


def validate_tree(tree: Any) -> ValidationReport:
    """Waliduje drzewo domyślnym walidatorem. Nigdy nie rzuca."""
    return _DEFAULT.validate(tree)


def ensure_valid(tree: Any) -> Document:
    """
    Tryb ścisły: zwraca Document albo rzuca StructureError.

    Raises:
        StructureError z listą wszystkich wykrytych błędów.
    """
    report = _DEFAULT.validate(tree)
    if not report.is_valid or report.document is None:
        raise StructureError(report.errors)
    return report.document
