#!/usr/bin/env python3
"""
Inicjalizacja tabeli szablonów umów w PostgreSQL.

Wykonuje:
  1. Tworzy schemat (schema.sql) — idempotentny
  2. Wstawia / aktualizuje szablon przykładowy ("Citizenship Service Contract")
  3. Opcjonalnie wstawia szablony z plików JSON/HTML podanych jako argumenty
     (treść normalizowana do kanonicznego dokumentu)

Użycie:
  python db/seed_templates.py [plik ...]

Zmienne środowiskowe (opcjonalne, także z pliku .env):
  PGHOST      localhost
  PGPORT      5433
  PGDATABASE  contracts
  PGUSER      contracts
  PGPASSWORD  contracts
"""

from __future__ import annotations

import pathlib
import sys

import psycopg2

ROOT = pathlib.Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from ctpl._config import load_settings  # noqa: E402
from data_model import TemplateRecord, document_to_dict, sample_template  # noqa: E402
from html_parser import normalize_content  # noqa: E402
from store import apply_schema, list_templates, upsert_template  # noqa: E402

# Stałe id szablonu przykładowego; ponowne uruchomienie aktualizuje ten sam wiersz.
SAMPLE_ID = "00000000-0000-4000-8000-000000000001"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def build_record(path: pathlib.Path, namespace: str) -> TemplateRecord:
    """Plik z treścią → rekord z kanonicznym dokumentem; nazwa = nazwa pliku."""
    doc = normalize_content(path.read_text(encoding="utf-8"), namespace)
    return TemplateRecord.new(path.stem.replace("_", " "), document_to_dict(doc))


# ---------------------------------------------------------------------------
# Główna procedura
# ---------------------------------------------------------------------------

def run(paths: list[str]) -> None:
    settings = load_settings()
    dsn = settings.dsn()

    sample = sample_template()
    sample.id = SAMPLE_ID
    sample.default_pricing_tiers = settings.preview_defaults().pricing_tiers
    sample.default_currency = settings.default_currency
    sample.default_country = settings.default_country

    records = [sample]
    for p in paths:
        path = pathlib.Path(p)
        if not path.exists():
            print(f"Nie znaleziono pliku: {path}", file=sys.stderr)
            sys.exit(1)
        records.append(build_record(path, settings.class_namespace))

    print(f"Szablony: {len(records)}")
    print(f"Baza:     {dsn['user']}@{dsn['host']}:{dsn['port']}/{dsn['dbname']}")

    with psycopg2.connect(**dsn) as conn:
        print("Applying schema...", end=" ")
        print(f"OK ({apply_schema(conn)} statements)")

        print(f"Upserting {len(records)} templates...", end=" ")
        for record in records:
            upsert_template(conn, record)
        print("OK")

        conn.commit()

    with psycopg2.connect(**dsn) as conn:
        summaries = list_templates(conn)

    print("\n--- Weryfikacja ---")
    for s in summaries:
        print(f"  {'✓' if s.active else '-'} {s.id}  {s.name}")
    print("\nGotowe.")


if __name__ == "__main__":
    run(sys.argv[1:])
