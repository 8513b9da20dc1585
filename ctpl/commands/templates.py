"""Komenda: ctpl templates — listowanie szablonów z magazynu rekordów."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ctpl._db import get_connection
from store import list_templates

console = Console(width=220)


def run(args: argparse.Namespace) -> None:
    try:
        conn = get_connection()
    except Exception as e:
        console.print(f"[red]Błąd połączenia:[/red] {e}")
        raise SystemExit(1)

    with conn:
        summaries = list_templates(conn, active_only=args.active)
    conn.close()

    if not summaries:
        console.print("[yellow]Brak szablonów.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("ID",       no_wrap=True)
    table.add_column("NAME",     style="bold", max_width=48)
    table.add_column("ACTIVE",   justify="center", no_wrap=True)
    table.add_column("CURRENCY", no_wrap=True)
    table.add_column("LANGUAGE", no_wrap=True)
    table.add_column("CATEGORY", no_wrap=True)

    for s in summaries:
        active = Text("✓", style="green") if s.active else Text("-", style="dim")
        table.add_row(
            s.id, s.name, active,
            s.default_currency or "", s.language_id or "", s.category_id or "",
        )

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(summaries)} szablonów[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "templates",
        help="Listuje szablony umów z bazy danych.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Listuje rekordy tabeli contract_templates.

Przykład:
  ctpl templates --active
        """,
    )
    p.add_argument("--active", "-a", action="store_true", help="Tylko aktywne szablony.")
    p.set_defaults(func=run)
