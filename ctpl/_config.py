"""
Konfiguracja ctpl — zmienne środowiskowe, opcjonalnie z pliku .env
w katalogu głównym projektu.

  PGHOST, PGPORT, PGDATABASE, PGUSER, PGPASSWORD   magazyn rekordów
  CTPL_CLASS_NAMESPACE    prefiks klas edytora usuwanych z HTML   (ql)
  CTPL_DEFAULT_CURRENCY   domyślna waluta podglądu                 (USD)
  CTPL_DEFAULT_COUNTRY    domyślny kraj klienta                    (US)
  CTPL_DEFAULT_DISCOUNT   domyślny rabat w procentach              (10)

Pakiety silnika nie czytają środowiska — wartości dostają jako argumenty.
"""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass

from dotenv import load_dotenv

from data_model import PreviewContext

ROOT     = pathlib.Path(__file__).resolve().parent.parent
ENV_PATH = ROOT / ".env"


@dataclass(frozen=True)
class Settings:
    pg_host: str = "localhost"
    pg_port: int = 5433
    pg_database: str = "contracts"
    pg_user: str = "contracts"
    pg_password: str = "contracts"
    class_namespace: str = "ql"
    default_currency: str = "USD"
    default_country: str = "US"
    default_discount: float = 10

    def dsn(self) -> dict[str, object]:
        return dict(
            host     = self.pg_host,
            port     = self.pg_port,
            dbname   = self.pg_database,
            user     = self.pg_user,
            password = self.pg_password,
        )

    def preview_defaults(self) -> PreviewContext:
        """Świeży kontekst podglądu z domyślnymi wartościami konfiguracji."""
        return PreviewContext(
            currency=self.default_currency,
            discount_percentage=self.default_discount,
            client_country=self.default_country,
        )


def _number(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name}: oczekiwano liczby, podano {raw!r}") from None


def load_settings(env_file: pathlib.Path | None = ENV_PATH) -> Settings:
    """
    Czyta konfigurację ze środowiska. Plik .env (jeśli istnieje) nie
    nadpisuje zmiennych już ustawionych w środowisku.

    Raises:
        ValueError dla nieliczbowego PGPORT / CTPL_DEFAULT_DISCOUNT.
    """
    if env_file is not None and env_file.exists():
        load_dotenv(env_file, override=False)

    return Settings(
        pg_host          = os.getenv("PGHOST",     "localhost"),
        pg_port          = int(_number("PGPORT", "5433")),
        pg_database      = os.getenv("PGDATABASE", "contracts"),
        pg_user          = os.getenv("PGUSER",     "contracts"),
        pg_password      = os.getenv("PGPASSWORD", "contracts"),
        class_namespace  = os.getenv("CTPL_CLASS_NAMESPACE",  "ql"),
        default_currency = os.getenv("CTPL_DEFAULT_CURRENCY", "USD"),
        default_country  = os.getenv("CTPL_DEFAULT_COUNTRY",  "US"),
        default_discount = _number("CTPL_DEFAULT_DISCOUNT", "10"),
    )
