"""Komenda: ctpl normalize — starsza treść szablonu → kanoniczny JSON dokumentu."""

from __future__ import annotations

import argparse

from rich.console import Console

from ctpl._config import load_settings
from ctpl._io import dump_json, read_source, write_output
from data_model import document_to_dict
from html_parser import ContentSource, normalize_content_traced

console = Console(stderr=True)

SOURCE_STYLE: dict[str, str] = {
    ContentSource.EMPTY:      "dim",
    ContentSource.CANONICAL:  "green",
    ContentSource.MARKUP:     "cyan",
    ContentSource.PLAIN_TEXT: "yellow",
}


def run(args: argparse.Namespace) -> None:
    namespace = args.namespace or load_settings().class_namespace
    raw = read_source(args.input)

    result = normalize_content_traced(raw, namespace)

    write_output(dump_json(document_to_dict(result.document)), args.output)
    style = SOURCE_STYLE.get(result.source, "")
    detail = f" [dim]({result.detail})[/dim]" if result.detail else ""
    console.print(f"Ścieżka: [{style}]{result.source}[/{style}]{detail}")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "normalize",
        help="Normalizuje starszą treść (HTML, delta, JSON, tekst) do kanonicznego JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Czyta zapisaną treść szablonu w dowolnym formacie historycznym i wypisuje
kanoniczny dokument {"type": "doc", "content": [...]}.

Ścieżki (wypisywane na stderr):
  empty       – brak treści
  canonical   – już kanoniczny dokument
  markup      – HTML po oczyszczeniu klas i parsowaniu
  plain_text  – tekst jako jeden akapit (także gdy parsowanie HTML zawiodło)

Przykłady:
  ctpl normalize stary_szablon.html
  ctpl normalize - < tresc.json --output doc.json
        """,
    )
    p.add_argument("input", help="Plik z treścią albo - dla stdin.")
    p.add_argument("--output", "-o", metavar="PLIK", help="Zapis do pliku (domyślnie stdout).")
    p.add_argument("--namespace", metavar="NS", help="Prefiks klas edytora (domyślnie z konfiguracji).")
    p.set_defaults(func=run)
