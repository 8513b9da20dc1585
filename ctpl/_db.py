"""Połączenie z bazą PostgreSQL — konfiguracja przez zmienne środowiskowe."""

from __future__ import annotations

import psycopg2
import psycopg2.extensions

from ctpl._config import Settings, load_settings


def get_connection(settings: Settings | None = None) -> psycopg2.extensions.connection:
    settings = settings or load_settings()
    return psycopg2.connect(**settings.dsn())
