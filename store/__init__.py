"""
store — adapter magazynu rekordów szablonów (PostgreSQL, psycopg2).

Interfejs publiczny:
    fetch_template(conn, template_id)       -> TemplateRecord | None
    list_templates(conn, active_only=False) -> list[TemplateSummary]
    upsert_template(conn, record)           -> str
    delete_template(conn, template_id)      -> bool
    apply_schema(conn, sql=None)            -> int   (jedna transakcja)
    split_statements(sql)                   -> list[str]
"""

from .schema import SCHEMA_PATH, apply_schema, split_statements
from .templates import delete_template, fetch_template, list_templates, upsert_template

__all__ = [
    "SCHEMA_PATH",
    "apply_schema",
    "delete_template",
    "fetch_template",
    "list_templates",
    "split_statements",
    "upsert_template",
]
