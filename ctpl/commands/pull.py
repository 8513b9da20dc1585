"""Komenda: ctpl pull — pobranie rekordu i zapis kanonicznego dokumentu JSON."""

from __future__ import annotations

import argparse

from rich.console import Console

from ctpl._config import load_settings
from ctpl._db import get_connection
from ctpl._io import dump_json, write_output
from data_model import document_to_dict
from html_parser import normalize_content_traced
from store import fetch_template

console = Console(stderr=True)


def run(args: argparse.Namespace) -> None:
    settings = load_settings()

    try:
        conn = get_connection(settings)
    except Exception as e:
        console.print(f"[red]Błąd połączenia z bazą:[/red] {e}")
        raise SystemExit(1)

    with conn:
        record = fetch_template(conn, args.id)
    conn.close()

    if record is None:
        console.print(f"[red]Brak szablonu:[/red] {args.id}")
        raise SystemExit(1)

    result = normalize_content_traced(record.content, settings.class_namespace)
    if args.record:
        row = record.to_row()
        row["content"] = document_to_dict(result.document)
        write_output(dump_json(row), args.output)
    else:
        write_output(dump_json(document_to_dict(result.document)), args.output)

    console.print(f"[dim]{record.name} — ścieżka normalizacji: {result.source}[/dim]")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "pull",
        help="Pobiera szablon z bazy i zapisuje kanoniczny dokument JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Pobiera rekord z contract_templates, normalizuje jego treść i wypisuje
kanoniczny dokument. Z --record wypisuje cały rekord (z wartościami
domyślnymi podglądu).

Przykład:
  ctpl pull 7d1c… --output szablon.json
        """,
    )
    p.add_argument("id", help="Id szablonu.")
    p.add_argument("--record", "-r", action="store_true", help="Wypisz cały rekord, nie tylko dokument.")
    p.add_argument("--output", "-o", metavar="PLIK", help="Zapis do pliku (domyślnie stdout).")
    p.set_defaults(func=run)
