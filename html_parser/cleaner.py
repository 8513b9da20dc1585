"""
html_parser/cleaner.py — oczyszczanie starszych znaczników HTML przed parsowaniem.

Co usuwamy:
  - Klasy dostawcy edytora z przestrzeni nazw (domyślnie "ql-*") z atrybutu
    class każdego tagu; pusty atrybut class znika

Co zachowujemy (przed usunięciem klas):
  - Wyrównanie: klasa *-align-(left|center|right|justify) → styl inline
    "text-align: X" (scalany z istniejącym atrybutem style)
  - Kierunek: klasa *-direction-rtl → atrybut dir="rtl"

Dwa przebiegi: pierwszy przepisuje tagi otwierające, drugi wyłapuje klasy
pominięte przez pierwszy (np. w tagach z ">" w cudzysłowie).
"""

from __future__ import annotations

import re

DEFAULT_NAMESPACE = "ql"

# Tag otwierający: grupa 1 = nazwa, 2 = atrybuty, 3 = końcowy "/" (self-closing).
_OPEN_TAG_RE = re.compile(r"<([a-zA-Z][a-zA-Z0-9-]*)(\s[^<>]*?)?(\s*/?)>")

# Atrybut w postaci "…", '…' lub bez cudzysłowu; grupa 1..3 = wartość.
_ATTR_VALUE = r"""\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'>]+))"""
_CLASS_ATTR_RE = re.compile(r"\sclass" + _ATTR_VALUE, re.IGNORECASE)
_STYLE_ATTR_RE = re.compile(r"\sstyle" + _ATTR_VALUE, re.IGNORECASE)
_DIR_ATTR_RE   = re.compile(r"\sdir" + _ATTR_VALUE, re.IGNORECASE)

_ALIGN_CLASS_RE = re.compile(r"^[\w-]+-align-(left|center|right|justify)$", re.IGNORECASE)
_RTL_CLASS_RE   = re.compile(r"^[\w-]+-direction-rtl$", re.IGNORECASE)
_TEXT_ALIGN_DECL_RE = re.compile(r"^\s*text-align\s*:", re.IGNORECASE)

# Znacznik zaczyna się od tagu blokowego → parser ma do czego się zakotwiczyć.
_BLOCK_START_RE = re.compile(r"^<(p|div|h[1-6]|ul|ol|blockquote|pre)(\s|>|/)", re.IGNORECASE)

# Czy tekst w ogóle zawiera znaczniki HTML; grupa 1 = nazwa tagu.
_ANY_TAG_RE = re.compile(r"</?([a-zA-Z][a-zA-Z0-9-]*)(\s[^<>]*)?/?>")

# Nazwy tagów HTML spotykane w zapisanych szablonach. Słowo w nawiasach
# ostrych spoza tej listy (np. "<client>") jest zwykłym tekstem.
HTML_TAG_NAMES: frozenset[str] = frozenset({
    "a", "abbr", "b", "big", "blockquote", "body", "br", "caption", "center",
    "code", "col", "colgroup", "del", "div", "em", "font", "h1", "h2", "h3",
    "h4", "h5", "h6", "head", "hr", "html", "i", "img", "ins", "li", "mark",
    "ol", "p", "pre", "s", "small", "span", "strike", "strong", "style", "sub",
    "sup", "table", "tbody", "td", "tfoot", "th", "thead", "title", "tr", "u",
    "ul", "script", "meta", "link", "section", "article", "header", "footer",
})


# ---------------------------------------------------------------------------
# Pomocnicze
# ---------------------------------------------------------------------------

def _attr_value(m: re.Match[str]) -> str:
    return next((g for g in m.groups() if g is not None), "")


def _quote(value: str) -> str:
    return '"' + value.replace('"', "&quot;") + '"'


def _is_vendor_class(token: str, namespace: str) -> bool:
    return token.lower().startswith(namespace.lower() + "-")


def _merge_text_align(style: str, align: str) -> str:
    decls = [d.strip() for d in style.split(";") if d.strip()]
    decls = [d for d in decls if not _TEXT_ALIGN_DECL_RE.match(d)]
    decls.append(f"text-align: {align}")
    return "; ".join(decls)


def _rewrite_tag(m: re.Match[str], namespace: str) -> str:
    name, attrs, tail = m.group(1), m.group(2) or "", m.group(3) or ""
    class_m = _CLASS_ATTR_RE.search(attrs)
    if class_m is None:
        return m.group(0)

    classes = _attr_value(class_m).split()
    align = next(
        (a.group(1).lower() for a in map(_ALIGN_CLASS_RE.match, classes) if a),
        None,
    )
    rtl = any(_RTL_CLASS_RE.match(c) for c in classes)
    kept = [c for c in classes if not _is_vendor_class(c, namespace)]

    attrs = attrs[:class_m.start()] + attrs[class_m.end():]
    if kept:
        attrs += f" class={_quote(' '.join(kept))}"

    if align:
        style_m = _STYLE_ATTR_RE.search(attrs)
        if style_m:
            style = _merge_text_align(_attr_value(style_m), align)
            attrs = attrs[:style_m.start()] + attrs[style_m.end():]
        else:
            style = f"text-align: {align}"
        attrs += f" style={_quote(style)}"

    if rtl and not _DIR_ATTR_RE.search(attrs):
        attrs += ' dir="rtl"'

    return f"<{name}{attrs}{tail}>"


def _strip_leftover_classes(markup: str, namespace: str) -> str:
    def repl(m: re.Match[str]) -> str:
        classes = _attr_value(m).split()
        if not any(_is_vendor_class(c, namespace) for c in classes):
            return m.group(0)
        kept = [c for c in classes if not _is_vendor_class(c, namespace)]
        return f" class={_quote(' '.join(kept))}" if kept else ""

    return _CLASS_ATTR_RE.sub(repl, markup)


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def looks_like_markup(text: str) -> bool:
    """True gdy tekst zawiera co najmniej jeden tag o znanej nazwie HTML."""
    return any(m.group(1).lower() in HTML_TAG_NAMES for m in _ANY_TAG_RE.finditer(text))


def clean_markup(markup: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    """
    Usuwa klasy dostawcy z przestrzeni nazw `namespace`, zachowując
    wyrównanie (styl inline) i kierunek RTL (atrybut dir).
    """
    cleaned = _OPEN_TAG_RE.sub(lambda m: _rewrite_tag(m, namespace), markup)
    return _strip_leftover_classes(cleaned, namespace)


def ensure_block_root(markup: str) -> str:
    """Owija znaczniki w <div>, jeśli nie zaczynają się od tagu blokowego."""
    trimmed = markup.strip()
    if _BLOCK_START_RE.match(trimmed):
        return trimmed
    return f"<div>{trimmed}</div>"
