"""Komenda: ctpl preview — renderowanie szablonu (tryb autora lub podglądu klienta)."""

from __future__ import annotations

import argparse

from rich.console import Console

from ctpl._config import load_settings
from ctpl._io import dump_json, read_json, read_source, write_output
from data_model import PreviewContext
from html_parser import normalize_content
from renderer import RenderMode, render, to_html, to_text

console = Console(stderr=True)


def _context(args: argparse.Namespace) -> PreviewContext:
    settings = load_settings()
    base = settings.preview_defaults().to_dict()
    if args.context:
        raw = read_json(args.context)
        if not isinstance(raw, dict):
            console.print("[red]Plik kontekstu musi zawierać obiekt JSON.[/red]")
            raise SystemExit(1)
        base.update(raw)
    if args.count is not None:
        base["applicant_count"] = args.count
    if args.currency:
        base["currency"] = args.currency
    return PreviewContext.from_dict(base)


def run(args: argparse.Namespace) -> None:
    try:
        context = _context(args)
    except (ValueError, KeyError) as e:
        console.print(f"[red]Błędny kontekst podglądu:[/red] {e}")
        raise SystemExit(1)

    document = normalize_content(read_source(args.input), args.namespace or load_settings().class_namespace)
    result = render(document, context, RenderMode(args.mode))

    if args.format == "html":
        out = to_html(result.output)
    elif args.format == "json":
        out = dump_json({
            "mode": args.mode,
            "html": to_html(result.output),
            "text": to_text(result.output),
            "capture_slot_keys": result.capture_slot_keys,
        })
    else:
        out = to_text(result.output)

    write_output(out, args.output)
    if result.capture_slot_keys and args.format != "json":
        console.print(f"[dim]Pola interaktywne:[/dim] {', '.join(result.capture_slot_keys)}")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "preview",
        help="Renderuje szablon: tryb autora albo podgląd z podstawionymi wartościami.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Renderuje szablon z pliku (dowolny format treści — najpierw normalizacja).

Tryby:
  author   – tokeny widoczne dosłownie
  preview  – tokeny podstawione, pola {{text}}/{{signature}} jako [text_0]…

Kontekst (--context) to JSON PreviewContext, np.:
  {"currency": "EUR", "discount_percentage": 5, "applicant_count": 3,
   "pricing_tiers": {"1": 2500, "2": 2400},
   "payment_plan": [{"percent": 50, "value": 1250, "due": "On signing"}]}

Przykłady:
  ctpl preview szablon.json
  ctpl preview szablon.html --format html --count 4 --currency EUR
        """,
    )
    p.add_argument("input", help="Plik z treścią szablonu albo - dla stdin.")
    p.add_argument("--mode", "-m", choices=[m.value for m in RenderMode], default=RenderMode.PREVIEW.value)
    p.add_argument("--format", "-f", choices=["text", "html", "json"], default="text")
    p.add_argument("--context", metavar="PLIK", help="PreviewContext jako JSON.")
    p.add_argument("--count", "-n", type=int, help="Liczba wnioskodawców.")
    p.add_argument("--currency", "-c", help="Waluta.")
    p.add_argument("--namespace", metavar="NS", help="Prefiks klas edytora (domyślnie z konfiguracji).")
    p.add_argument("--output", "-o", metavar="PLIK", help="Zapis do pliku (domyślnie stdout).")
    p.set_defaults(func=run)
