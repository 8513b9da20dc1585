"""Wspólne wejście/wyjście komend: odczyt treści z pliku lub stdin, zapis JSON."""

from __future__ import annotations

import json
import pathlib
import sys
from typing import Any

from rich.console import Console

console = Console()


def read_source(path: str) -> str:
    """Treść pliku (UTF-8) albo stdin dla "-". Błąd odczytu → SystemExit(1)."""
    if path == "-":
        return sys.stdin.read()
    p = pathlib.Path(path)
    if not p.exists():
        console.print(f"[red]Plik nie istnieje:[/red] {p}")
        raise SystemExit(1)
    return p.read_text(encoding="utf-8")


def read_json(path: str) -> Any:
    text = read_source(path)
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        console.print(f"[red]Niepoprawny JSON w {path}:[/red] {e}")
        raise SystemExit(1)


def dump_json(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, indent=2)


def write_output(text: str, output: str | None) -> None:
    """Zapis do pliku albo na stdout (bez znaczników rich)."""
    if output:
        out = pathlib.Path(output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text + "\n", encoding="utf-8")
        console.print(f"[green]Zapisano:[/green] {out}")
    else:
        sys.stdout.write(text + "\n")
