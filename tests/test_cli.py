"""Komendy ctpl uruchamiane przez lokalny parser (bez bazy danych)."""

from __future__ import annotations

import argparse
import json

import pytest

from ctpl import _config
from ctpl.commands import apply_schema, normalize, preview, tiers, tokens, validate

_ENV_VARS = (
    "PGHOST", "PGPORT", "PGDATABASE", "PGUSER", "PGPASSWORD",
    "CTPL_CLASS_NAMESPACE", "CTPL_DEFAULT_CURRENCY", "CTPL_DEFAULT_COUNTRY", "CTPL_DEFAULT_DISCOUNT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv + delenv: zmienne ustawione przez load_dotenv też zostaną wycofane
    for name in _ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def _run(*argv: str) -> None:
    parser = argparse.ArgumentParser(prog="ctpl")
    sub = parser.add_subparsers(dest="command", required=True)
    for module in (tokens, tiers, normalize, validate, preview, apply_schema):
        module.add_parser(sub)
    args = parser.parse_args(list(argv))
    args.func(args)


class TestTokensAndTiers:
    def test_tokens_table(self, capsys):
        _run("tokens", "--family", "interactive")
        out = capsys.readouterr().out
        assert "{{text}}" in out
        assert "{{client_name}}" not in out

    def test_tiers_quote(self, capsys):
        _run("tiers", "--count", "5")
        out = capsys.readouterr().out
        assert "4-7" in out
        assert "USD 9900" in out

    def test_tiers_bad_discount(self):
        with pytest.raises(SystemExit):
            _run("tiers", "--discount", "150")


class TestNormalize:
    def test_markup_to_canonical_json(self, tmp_path, capsys):
        src = tmp_path / "old.html"
        src.write_text('<p class="ql-align-center">Hi <b>there</b></p>', encoding="utf-8")
        _run("normalize", str(src))
        captured = capsys.readouterr()
        tree = json.loads(captured.out)
        assert tree["type"] == "doc"
        assert tree["content"][0]["attrs"]["textAlign"] == "center"
        assert "markup" in captured.err

    def test_missing_file(self, tmp_path):
        with pytest.raises(SystemExit):
            _run("normalize", str(tmp_path / "missing.html"))


class TestValidate:
    def test_valid_tree(self, tmp_path, canonical_tree, capsys):
        src = tmp_path / "doc.json"
        src.write_text(json.dumps(canonical_tree), encoding="utf-8")
        _run("validate", str(src))
        assert "OK" in capsys.readouterr().out

    def test_invalid_tree_exits(self, tmp_path):
        src = tmp_path / "doc.json"
        src.write_text(json.dumps({"type": "page", "content": []}), encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            _run("validate", str(src))
        assert exc.value.code == 1


class TestPreview:
    def test_text_preview(self, tmp_path, capsys):
        src = tmp_path / "tpl.txt"
        src.write_text("Total: {{currency}} {{total_amount}}", encoding="utf-8")
        _run("preview", str(src), "--count", "2")
        assert capsys.readouterr().out.strip() == "Total: USD 4800"

    def test_context_file_and_json_format(self, tmp_path, capsys):
        src = tmp_path / "tpl.html"
        src.write_text("<p>{{currency}} {{final_amount}} {{text}}</p>", encoding="utf-8")
        ctx = tmp_path / "ctx.json"
        ctx.write_text(json.dumps({"currency": "EUR", "discount_percentage": 0}), encoding="utf-8")
        _run("preview", str(src), "--context", str(ctx), "--format", "json")
        data = json.loads(capsys.readouterr().out)
        assert data["text"] == "EUR 2500 [text_0]"
        assert data["capture_slot_keys"] == ["text_0"]
        assert 'data-slot="text_0"' in data["html"]

    def test_author_mode(self, tmp_path, capsys):
        src = tmp_path / "tpl.txt"
        src.write_text("{{client_name}}", encoding="utf-8")
        _run("preview", str(src), "--mode", "author")
        assert capsys.readouterr().out.strip() == "{{client_name}}"

    def test_bad_context(self, tmp_path):
        src = tmp_path / "tpl.txt"
        src.write_text("x", encoding="utf-8")
        ctx = tmp_path / "ctx.json"
        ctx.write_text(json.dumps({"discount_percentage": 300}), encoding="utf-8")
        with pytest.raises(SystemExit):
            _run("preview", str(src), "--context", str(ctx))


class TestApplySchema:
    def test_dry_run_lists_statements_without_database(self, capsys):
        _run("apply-schema", "--dry-run")
        out = capsys.readouterr().out
        assert "CREATE INDEX" in out
        assert "DROP TRIGGER" in out

    def test_dry_run_with_other_file(self, tmp_path, capsys):
        sql = tmp_path / "extra.sql"
        sql.write_text("-- tylko jedna\nSELECT 'a;b';\n", encoding="utf-8")
        _run("apply-schema", "--dry-run", "--schema", str(sql))
        assert "SELECT 'a;b';" in capsys.readouterr().out

    def test_missing_schema_file(self, tmp_path):
        with pytest.raises(SystemExit):
            _run("apply-schema", "--dry-run", "--schema", str(tmp_path / "none.sql"))


class TestSettings:
    def test_defaults(self):
        settings = _config.load_settings(env_file=None)
        assert settings.pg_port == 5433
        assert settings.dsn()["dbname"] == "contracts"
        assert settings.preview_defaults().currency == "USD"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("PGPORT", "6000")
        monkeypatch.setenv("CTPL_DEFAULT_DISCOUNT", "5")
        settings = _config.load_settings(env_file=None)
        assert settings.pg_port == 6000
        assert settings.preview_defaults().discount_percentage == 5

    def test_env_file_does_not_override_environment(self, tmp_path, monkeypatch):
        env = tmp_path / ".env"
        env.write_text("CTPL_DEFAULT_CURRENCY=EUR\nCTPL_DEFAULT_COUNTRY=PL\n", encoding="utf-8")
        monkeypatch.setenv("CTPL_DEFAULT_COUNTRY", "DE")
        settings = _config.load_settings(env_file=env)
        assert settings.default_currency == "EUR"
        assert settings.default_country == "DE"

    def test_non_numeric_discount(self, monkeypatch):
        monkeypatch.setenv("CTPL_DEFAULT_DISCOUNT", "ten")
        with pytest.raises(ValueError):
            _config.load_settings(env_file=None)
