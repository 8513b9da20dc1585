"""Komenda: ctpl validate — walidacja struktury drzewa dokumentu (JSON)."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.table import Table

from ctpl._io import read_json
from validator import validate_tree

console = Console()


def run(args: argparse.Namespace) -> None:
    tree = read_json(args.input)
    report = validate_tree(tree)

    if report.errors:
        table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold white")
        table.add_column("CODE", style="red", no_wrap=True)
        table.add_column("PATH", no_wrap=True)
        table.add_column("MESSAGE", max_width=60)
        table.add_column("FIX", max_width=40, style="dim")
        for issue in report.errors:
            table.add_row(issue.code, issue.path or "/", issue.message, issue.expected_fix)
        console.print(table)

    if args.warnings:
        for w in report.warnings:
            console.print(f"  [yellow]⚠[/yellow] {w}")

    if not report.is_valid:
        console.print(f"[red]Niepoprawne drzewo:[/red] {len(report.errors)} błędów.")
        raise SystemExit(1)

    console.print(
        f"[green]OK[/green] — {len(report.document.content)} bloków, "
        f"{len(report.warnings)} ostrzeżeń."
    )


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "validate",
        help="Waliduje strukturę drzewa dokumentu (JSON).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Sprawdza kanoniczne drzewo dokumentu: korzeń "doc", content jako lista,
typy węzłów, content w każdym znanym bloku poza horizontalRule/hardBreak,
tekst liści. Wadliwe znaczniki i poziomy nagłówków to tylko ostrzeżenia.

Kod wyjścia 1 gdy drzewo jest niepoprawne.

Przykład:
  ctpl validate doc.json --warnings
        """,
    )
    p.add_argument("input", help="Plik JSON albo - dla stdin.")
    p.add_argument("--warnings", "-w", action="store_true", help="Pokaż także ostrzeżenia.")
    p.set_defaults(func=run)
