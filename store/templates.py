"""
store/templates.py — rekordy szablonów umów w PostgreSQL (tabela contract_templates).

Silnik nie wie, jak rekordy są przechowywane; ten moduł jest cienkim
adapterem dla CLI i skryptów. `content` i `default_pricing_tiers` są
kolumnami jsonb — `content` trzyma dowolny zapis historyczny (także string
HTML jako string JSON), odczyt zawsze przez normalizator.

Publiczne API:
  fetch_template(conn, template_id)          -> TemplateRecord | None
  list_templates(conn, active_only=False)    -> list[TemplateSummary]
  upsert_template(conn, record)              -> str
  delete_template(conn, template_id)         -> bool
"""

from __future__ import annotations

import json
import logging
from typing import Any

from data_model import TemplateRecord, TemplateSummary

logger = logging.getLogger(__name__)

_COLUMNS: tuple[str, ...] = (
    "id", "name", "content", "language_id", "category_id", "active",
    "default_pricing_tiers", "default_currency", "default_country",
)

_SUMMARY_COLUMNS: tuple[str, ...] = (
    "id", "name", "active", "language_id", "category_id", "default_currency",
)


def _json_param(value: Any) -> str | None:
    return None if value is None else json.dumps(value, ensure_ascii=False)


def _decode_json(value: Any) -> Any:
    """jsonb wraca z psycopg2 już zdekodowany; kolumna tekstowa — jako str."""
    if isinstance(value, (bytes, bytearray)):
        value = bytes(value).decode("utf-8")
    if isinstance(value, str):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


def fetch_template(conn, template_id: str) -> TemplateRecord | None:
    """
    Ładuje jeden rekord po id.

    Returns:
        TemplateRecord albo None gdy rekordu nie ma.
    """
    with conn.cursor() as cur:
        cur.execute(
            f"SELECT {', '.join(_COLUMNS)} FROM contract_templates WHERE id = %s",
            (template_id,),
        )
        row = cur.fetchone()

    if row is None:
        logger.debug("Brak szablonu %s.", template_id)
        return None

    data = dict(zip(_COLUMNS, row))
    data["content"] = _decode_json(data["content"])
    data["default_pricing_tiers"] = _decode_json(data["default_pricing_tiers"])
    return TemplateRecord.from_row(data)


def list_templates(conn, active_only: bool = False) -> list[TemplateSummary]:
    where = "WHERE active" if active_only else ""
    with conn.cursor() as cur:
        cur.execute(
            f"SELECT {', '.join(_SUMMARY_COLUMNS)} FROM contract_templates {where} ORDER BY name, id"
        )
        rows = cur.fetchall()

    return [
        TemplateSummary(
            id=str(r[0]),
            name=r[1] or "",
            active=bool(r[2]),
            language_id=None if r[3] is None else str(r[3]),
            category_id=None if r[4] is None else str(r[4]),
            default_currency=r[5],
        )
        for r in rows
    ]


def upsert_template(conn, record: TemplateRecord) -> str:
    """
    Wstawia lub aktualizuje rekord (PRIMARY KEY na id).

    Logika konfliktu: wszystkie pola nadpisywane, updated_at = now().
    Transakcja należy do wywołującego (commit po stronie CLI).

    Returns:
        id zapisanego rekordu.
    """
    row = record.to_row()
    with conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO contract_templates (
                id, name, content, language_id, category_id, active,
                default_pricing_tiers, default_currency, default_country
            )
            VALUES (%s, %s, %s::jsonb, %s, %s, %s, %s::jsonb, %s, %s)
            ON CONFLICT (id) DO UPDATE SET
                name                  = EXCLUDED.name,
                content               = EXCLUDED.content,
                language_id           = EXCLUDED.language_id,
                category_id           = EXCLUDED.category_id,
                active                = EXCLUDED.active,
                default_pricing_tiers = EXCLUDED.default_pricing_tiers,
                default_currency      = EXCLUDED.default_currency,
                default_country       = EXCLUDED.default_country,
                updated_at            = now()
            """,
            (
                row["id"], row["name"], _json_param(row["content"]),
                row["language_id"], row["category_id"], row["active"],
                _json_param(row["default_pricing_tiers"]),
                row["default_currency"], row["default_country"],
            ),
        )
    logger.debug("Zapisano szablon %s (%s).", record.id, record.name)
    return record.id


def delete_template(conn, template_id: str) -> bool:
    """Usuwa rekord. Zwraca True gdy coś usunięto."""
    with conn.cursor() as cur:
        cur.execute("DELETE FROM contract_templates WHERE id = %s", (template_id,))
        return cur.rowcount > 0
