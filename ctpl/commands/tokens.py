"""Komenda: ctpl tokens — rodziny tokenów szablonu i ich tagi."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from placeholders import TokenFamily, list_families

console = Console()

FAMILY_STYLE: dict[str, str] = {
    TokenFamily.IDENTITY:         "cyan",
    TokenFamily.PRICING:          "green",
    TokenFamily.PAYMENT_SCHEDULE: "yellow",
    TokenFamily.INTERACTIVE:      "magenta",
}


def run(args: argparse.Namespace) -> None:
    families = list_families()
    if args.family:
        families = {f: fields for f, fields in families.items() if f in args.family}

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("FAMILY", no_wrap=True)
    table.add_column("LABEL",  no_wrap=True)
    table.add_column("TAG",    style="bold", no_wrap=True)

    total = 0
    for family, fields in families.items():
        for f in fields:
            table.add_row(Text(family, style=FAMILY_STYLE.get(family, "")), f.label, f.tag)
            total += 1

    console.print()
    console.print(table)
    console.print(f"  [dim]{total} tokenów[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "tokens",
        help="Listuje rodziny tokenów i tagi do wstawienia.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Listuje zamknięte rodziny tokenów szablonu umowy.

Rodziny:
  identity          – dane klienta, podpis, data
  pricing           – liczba wnioskodawców, ceny, rabat, waluta, kraj
  payment_schedule  – wiersze harmonogramu płatności
  interactive       – pola do wypełnienia w podglądzie ({{text}}, {{signature}})
        """,
    )
    p.add_argument(
        "--family", "-f",
        nargs="+",
        metavar="FAMILY",
        choices=[f.value for f in TokenFamily],
        help="Filtruj po rodzinie (można podać kilka).",
    )
    p.set_defaults(func=run)
