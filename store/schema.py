"""
store/schema.py — schemat tabeli contract_templates (db/schema.sql).

Cały plik wykonywany jest w jednej transakcji: błąd dowolnej instrukcji
wycofuje wszystkie poprzednie, baza nie zostaje z połową schematu.

Publiczne API:
  SCHEMA_PATH                    — domyślny plik schematu
  split_statements(sql)          -> list[str]
  apply_schema(conn, sql=None)   -> int   (liczba wykonanych instrukcji)
"""

from __future__ import annotations

import logging
import pathlib
import re

logger = logging.getLogger(__name__)

SCHEMA_PATH = pathlib.Path(__file__).resolve().parent.parent / "db" / "schema.sql"

# $$ albo $tag$ otwierający ciało funkcji / blok DO.
_DOLLAR_TAG_RE = re.compile(r"\$(?:[A-Za-z_][A-Za-z0-9_]*)?\$")


# ---------------------------------------------------------------------------
# Dzielenie na instrukcje
# ---------------------------------------------------------------------------

def _quoted_end(sql: str, start: int, quote: str) -> int:
    """Indeks za zamykającym cudzysłowem; podwojony cudzysłów to znak w środku."""
    pos = start
    while True:
        pos = sql.find(quote, pos + 1)
        if pos == -1:
            return len(sql)
        if sql.startswith(quote, pos + 1):
            pos += 1
            continue
        return pos + 1


def _flush(buf: list[str], stmts: list[str]) -> None:
    stmt = "".join(buf).strip()
    if stmt and stmt != ";":
        stmts.append(stmt)
    buf.clear()


def split_statements(sql: str) -> list[str]:
    """
    Dzieli skrypt SQL na instrukcje zakończone średnikiem.

    Średnik nie kończy instrukcji wewnątrz literału '...', identyfikatora
    "..." ani bloku $$...$$ / $tag$...$tag$. Komentarze -- i /* */ poza
    nimi są usuwane. Ostatnia instrukcja może nie mieć średnika.
    """
    stmts: list[str] = []
    buf: list[str] = []
    i, n = 0, len(sql)

    while i < n:
        if sql.startswith("--", i):
            end = sql.find("\n", i)
            i = n if end == -1 else end
            continue
        if sql.startswith("/*", i):
            end = sql.find("*/", i + 2)
            i = n if end == -1 else end + 2
            continue

        ch = sql[i]
        if ch in ("'", '"'):
            end = _quoted_end(sql, i, ch)
            buf.append(sql[i:end])
            i = end
            continue
        if ch == "$":
            m = _DOLLAR_TAG_RE.match(sql, i)
            if m:
                close = sql.find(m.group(0), m.end())
                end = n if close == -1 else close + len(m.group(0))
                buf.append(sql[i:end])
                i = end
                continue

        buf.append(ch)
        i += 1
        if ch == ";":
            _flush(buf, stmts)

    _flush(buf, stmts)
    return stmts


# ---------------------------------------------------------------------------
# Wykonanie
# ---------------------------------------------------------------------------

def apply_schema(conn, sql: str | None = None) -> int:
    """
    Wykonuje schemat w jednej transakcji i zatwierdza ją.

    Args:
        conn: połączenie psycopg2 (bez autocommit)
        sql:  treść skryptu; domyślnie SCHEMA_PATH

    Returns:
        Liczba wykonanych instrukcji.

    Raises:
        Wyjątek psycopg2 z pierwszej nieudanej instrukcji (po rollback).
    """
    if sql is None:
        sql = SCHEMA_PATH.read_text(encoding="utf-8")
    stmts = split_statements(sql)

    try:
        with conn.cursor() as cur:
            for stmt in stmts:
                logger.debug("Schemat: %s", stmt.splitlines()[0])
                cur.execute(stmt)
    except Exception:
        conn.rollback()
        raise
    conn.commit()
    return len(stmts)
