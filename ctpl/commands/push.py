"""Komenda: ctpl push — normalizacja pliku i zapis jako rekord szablonu."""

from __future__ import annotations

import argparse

from rich.console import Console

from ctpl._config import load_settings
from ctpl._db import get_connection
from ctpl._io import read_source
from data_model import TemplateRecord, sample_template
from editor import TemplateEditor
from store import fetch_template, upsert_template

console = Console()


def _record(args: argparse.Namespace, conn) -> TemplateRecord:
    if args.sample:
        return sample_template()
    if not args.input:
        console.print("[red]Podaj plik z treścią albo --sample.[/red]")
        raise SystemExit(1)

    existing = fetch_template(conn, args.id) if args.id else None
    record = existing or TemplateRecord.new(args.name or "Untitled template")
    if args.id:
        record.id = args.id
    record.content = read_source(args.input)
    return record


def run(args: argparse.Namespace) -> None:
    settings = load_settings()

    try:
        conn = get_connection(settings)
    except Exception as e:
        console.print(f"[red]Błąd połączenia z bazą:[/red] {e}")
        raise SystemExit(1)

    try:
        record = _record(args, conn)
        editor = TemplateEditor.from_record(record, settings.preview_defaults(), settings.class_namespace)
        if args.currency:
            editor.context.currency = args.currency
        if args.country:
            editor.context.client_country = args.country
        saved = editor.to_record(args.name)
        if args.inactive:
            saved.active = False
        template_id = upsert_template(conn, saved)
        conn.commit()
    except Exception as e:
        conn.rollback()
        conn.close()
        console.print(f"[red]Błąd zapisu szablonu:[/red] {e}")
        raise SystemExit(1)

    conn.close()
    console.print(
        f"[green]Zapisano szablon:[/green] {saved.name} "
        f"[dim]({template_id}, {len(editor.document.content)} bloków)[/dim]"
    )


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "push",
        help="Normalizuje plik z treścią i zapisuje go jako szablon w bazie.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Czyta treść szablonu (HTML, delta, JSON lub tekst), normalizuje ją do
kanonicznego dokumentu i zapisuje (upsert) w tabeli contract_templates.
Z --id aktualizuje istniejący rekord, zachowując jego wartości domyślne.

Przykłady:
  ctpl push umowa.html --name "Umowa obywatelstwo"
  ctpl push umowa.json --id 7d1c… --currency EUR
  ctpl push --sample
        """,
    )
    p.add_argument("input", nargs="?", help="Plik z treścią albo - dla stdin.")
    p.add_argument("--id", help="Id rekordu do aktualizacji (domyślnie nowy).")
    p.add_argument("--name", help="Nazwa szablonu.")
    p.add_argument("--currency", "-c", help="Domyślna waluta podglądu.")
    p.add_argument("--country", help="Domyślny kraj klienta.")
    p.add_argument("--inactive", action="store_true", help="Zapisz jako nieaktywny.")
    p.add_argument("--sample", action="store_true", help="Zapisz wbudowany szablon przykładowy.")
    p.set_defaults(func=run)
