"""
html_parser — normalizacja starszej treści szablonów (HTML, dziennik operacji).

Interfejs publiczny:
    normalize_content(raw, namespace="ql")        -> Document   (nigdy nie rzuca)
    normalize_content_traced(raw, namespace="ql") -> NormalizedContent
    clean_markup(markup, namespace="ql")          -> str
    ensure_block_root(markup)                     -> str
    parse_markup(markup)                          -> Document
"""

from .cleaner import DEFAULT_NAMESPACE, clean_markup, ensure_block_root, looks_like_markup
from .parser import parse_markup
from .legacy import ContentSource, NormalizedContent, normalize_content, normalize_content_traced

__all__ = [
    "DEFAULT_NAMESPACE",
    "clean_markup",
    "ensure_block_root",
    "looks_like_markup",
    "parse_markup",
    "ContentSource",
    "NormalizedContent",
    "normalize_content",
    "normalize_content_traced",
]
