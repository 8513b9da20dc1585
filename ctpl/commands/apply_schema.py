"""Komenda: ctpl apply-schema — tworzy tabelę contract_templates (db/schema.sql)."""

from __future__ import annotations

import argparse
import pathlib

import psycopg2
from rich import box
from rich.console import Console
from rich.table import Table

from ctpl._db import get_connection
from ctpl._io import read_source
from store import SCHEMA_PATH, apply_schema, split_statements

console = Console()


def _print_plan(stmts: list[str]) -> None:
    table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold white")
    table.add_column("#", justify="right", style="dim")
    table.add_column("INSTRUKCJA", no_wrap=True)
    table.add_column("LINIE", justify="right")
    for i, stmt in enumerate(stmts, 1):
        lines = stmt.splitlines()
        table.add_row(str(i), lines[0], str(len(lines)))
    console.print(table)


def run(args: argparse.Namespace) -> None:
    schema_path = pathlib.Path(args.schema) if args.schema else SCHEMA_PATH
    sql = read_source(str(schema_path))

    if args.dry_run:
        _print_plan(split_statements(sql))
        return

    try:
        conn = get_connection()
    except psycopg2.Error as e:
        console.print(f"[red]Błąd połączenia z bazą:[/red] {e}")
        raise SystemExit(1)

    try:
        count = apply_schema(conn, sql)
    except psycopg2.Error as e:
        console.print(f"[red]Schemat wycofany:[/red] {e}")
        raise SystemExit(1)
    finally:
        conn.close()

    console.print(f"[green]Schemat zastosowany[/green] w jednej transakcji: {count} instrukcji ({schema_path.name}).")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "apply-schema",
        help="Tworzy tabelę szablonów i trigger updated_at (idempotentne).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wykonuje db/schema.sql w jednej transakcji: błąd dowolnej instrukcji
wycofuje cały plik. Ponowne uruchomienie niczego nie psuje
(IF NOT EXISTS / OR REPLACE).

--dry-run pokazuje instrukcje bez łączenia z bazą.

Przykłady:
  ctpl apply-schema
  ctpl apply-schema --dry-run
  ctpl apply-schema --schema inny.sql
        """,
    )
    p.add_argument("--schema", metavar="PLIK", help="Inny plik schematu (domyślnie db/schema.sql).")
    p.add_argument("--dry-run", action="store_true", help="Tylko wypisz instrukcje.")
    p.set_defaults(func=run)
