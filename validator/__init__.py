"""
validator — walidacja struktury drzewa dokumentu szablonu.

Interfejs publiczny:
    validate_tree(tree) -> ValidationReport   (nigdy nie rzuca)
    ensure_valid(tree)  -> Document           (StructureError przy błędach)
    normalize_tree(tree)                      — kopia z wartościami domyślnymi
    TreeValidator                             — walidator (etapy A–C)
    ValidationReport, StructureIssue, IssueCode, StructureError — typy raportu

Typowe użycie:
    from validator import validate_tree

    report = validate_tree(json.loads(Path("szablon.json").read_text()))
    if not report.is_valid:
        for e in report.errors:
            print(e.code, e.path, e.message)
"""

from .types import IssueCode, StructureIssue, ValidationReport, StructureError
from .normalizer import normalize_tree
from .schema import DOCUMENT_SCHEMA
from .tree_validator import TreeValidator, validate_tree, ensure_valid

__all__ = [
    "IssueCode",
    "StructureIssue",
    "ValidationReport",
    "StructureError",
    "normalize_tree",
    "DOCUMENT_SCHEMA",
    "TreeValidator",
    "validate_tree",
    "ensure_valid",
]
