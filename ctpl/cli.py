"""
ctpl — narzędzie CLI silnika szablonów umów.

Użycie:
  ctpl [--verbose] <komenda> [opcje]

Komendy:
  tokens        Listuje rodziny tokenów i tagi do wstawienia.
  tiers         Pokazuje cennik progowy i wycenę dla liczby wnioskodawców.
  normalize     Normalizuje starszą treść (HTML, delta, JSON, tekst) do kanonicznego JSON.
  validate      Waliduje strukturę drzewa dokumentu (JSON).
  preview       Renderuje szablon w trybie autora albo podglądu klienta.
  templates     Listuje szablony umów z bazy danych.
  push          Normalizuje plik i zapisuje go jako szablon w bazie.
  pull          Pobiera szablon z bazy i zapisuje kanoniczny dokument JSON.
  apply-schema  Aplikuje db/schema.sql do bazy danych (idempotentne).
"""

from __future__ import annotations

import argparse
import logging
import sys

# Windows: terminal może używać cp1252; wymuszamy UTF-8 dla polskich znaków
if hasattr(sys.stdout, "reconfigure"):
    sys.stdout.reconfigure(encoding="utf-8", errors="replace")
if hasattr(sys.stderr, "reconfigure"):
    sys.stderr.reconfigure(encoding="utf-8", errors="replace")

from rich.console import Console
from rich.logging import RichHandler

from ctpl.commands import apply_schema as cmd_apply_schema
from ctpl.commands import normalize as cmd_normalize
from ctpl.commands import preview as cmd_preview
from ctpl.commands import pull as cmd_pull
from ctpl.commands import push as cmd_push
from ctpl.commands import templates as cmd_templates
from ctpl.commands import tiers as cmd_tiers
from ctpl.commands import tokens as cmd_tokens
from ctpl.commands import validate as cmd_validate

__version__ = "0.1.0"


def configure_logging(verbose: bool) -> None:
    """Jednorazowa konfiguracja logowania: --verbose → DEBUG, inaczej WARNING."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ctpl",
        description="Silnik szablonów umów — narzędzie CLI.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"ctpl {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Logi diagnostyczne (DEBUG) na stderr."
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_tokens.add_parser(subparsers)
    cmd_tiers.add_parser(subparsers)
    cmd_normalize.add_parser(subparsers)
    cmd_validate.add_parser(subparsers)
    cmd_preview.add_parser(subparsers)
    cmd_templates.add_parser(subparsers)
    cmd_push.add_parser(subparsers)
    cmd_pull.add_parser(subparsers)
    cmd_apply_schema.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
