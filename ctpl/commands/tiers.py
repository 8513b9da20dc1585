"""Komenda: ctpl tiers — cennik progowy i wycena dla liczby wnioskodawców."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.table import Table

from ctpl._config import load_settings
from ctpl._io import read_json
from data_model import TIER_KEYS, PricingTierTable
from pricing import TIER_LABELS, bracket_key_for, format_amount, quote

console = Console()


def _load_table(path: str | None) -> PricingTierTable:
    if not path:
        return PricingTierTable.default()
    raw = read_json(path)
    if not isinstance(raw, dict):
        console.print("[red]Plik cennika musi zawierać obiekt JSON {klucz: cena}.[/red]")
        raise SystemExit(1)
    try:
        return PricingTierTable.from_mapping(raw)
    except ValueError as e:
        console.print(f"[red]Błędny cennik:[/red] {e}")
        raise SystemExit(1)


def run(args: argparse.Namespace) -> None:
    try:
        settings = load_settings()
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)

    table_prices = _load_table(args.tiers)
    currency = args.currency or settings.default_currency
    discount = settings.default_discount if args.discount is None else args.discount
    if not 0 <= discount <= 100:
        console.print(f"[red]Rabat musi mieścić się w przedziale 0–100:[/red] {discount}")
        raise SystemExit(1)

    selected = bracket_key_for(args.count)

    table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold white")
    table.add_column("KEY",   no_wrap=True)
    table.add_column("LABEL", no_wrap=True)
    table.add_column("UNIT PRICE", justify="right", no_wrap=True)
    for key in TIER_KEYS:
        style = "bold green" if key == selected else ""
        table.add_row(key, TIER_LABELS[key], f"{currency} {format_amount(table_prices[key])}", style=style)

    q = quote(table_prices, args.count, discount)
    console.print()
    console.print(table)
    console.print(f"  Wnioskodawcy:   [bold]{q.applicant_count}[/bold]  (przedział [green]{q.tier_key}[/green])")
    console.print(f"  Cena jedn.:     {currency} {format_amount(q.unit_price)}")
    console.print(f"  Suma:           {currency} {format_amount(q.total_amount)}")
    console.print(f"  Rabat:          {format_amount(q.discount_percentage)}% = {currency} {format_amount(q.discount_amount)}")
    console.print(f"  Do zapłaty:     [bold]{currency} {format_amount(q.final_amount)}[/bold]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "tiers",
        help="Pokazuje cennik progowy i wycenę dla liczby wnioskodawców.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Pokazuje 7 przedziałów cennika i pełną wycenę (cena jednostkowa, suma,
rabat, kwota końcowa) dla podanej liczby wnioskodawców.

Przykłady:
  ctpl tiers --count 5
  ctpl tiers --count 12 --tiers cennik.json --discount 0 --currency EUR
        """,
    )
    p.add_argument("--count", "-n", type=int, default=1, help="Liczba wnioskodawców (domyślnie 1).")
    p.add_argument("--tiers", metavar="PLIK", help="Cennik JSON {\"1\": 2500, ...} (domyślnie wbudowany).")
    p.add_argument("--discount", "-d", type=float, help="Rabat w procentach (domyślnie z konfiguracji).")
    p.add_argument("--currency", "-c", help="Waluta (domyślnie z konfiguracji).")
    p.set_defaults(func=run)
