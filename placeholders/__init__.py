"""
placeholders — gramatyka tokenów szablonu ({{identyfikator}}).

Publiczne API:
  list_families()            -> dict[TokenFamily, tuple[PlaceholderField, ...]]
  tag_for(family, label)     -> str
  families_of(identifier)    -> list[TokenFamily]
  is_recognized(identifier)  -> bool
  make_tag(identifier)       -> str
  find_tokens(text)          -> list[TokenMatch]
  TokenFamily, PlaceholderField, TokenMatch, TOKEN_RE, INTERACTIVE_IDENTIFIERS
"""

from .families import (
    FAMILIES,
    INTERACTIVE_IDENTIFIERS,
    PlaceholderField,
    TokenFamily,
    families_of,
    is_recognized,
    list_families,
    make_tag,
    tag_for,
)
from .tokens import TOKEN_RE, TokenMatch, find_tokens, has_token

__all__ = [
    "FAMILIES",
    "INTERACTIVE_IDENTIFIERS",
    "PlaceholderField",
    "TokenFamily",
    "families_of",
    "is_recognized",
    "list_families",
    "make_tag",
    "tag_for",
    "TOKEN_RE",
    "TokenMatch",
    "find_tokens",
    "has_token",
]
