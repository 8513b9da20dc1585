"""
pricing — kalkulator cennika progowego szablonów umów.

Publiczne API:
  bracket_key_for(applicant_count)                  -> str
  tier_index(key)                                   -> int
  unit_price(table, applicant_count)                -> float
  total_amount(unit_price, applicant_count)         -> float
  discount_amount(total, discount_percentage)       -> float
  final_amount(total, discount_amount)              -> float
  quote(table, applicant_count, discount_percentage) -> PricingQuote
  format_amount(value)                              -> str
  apply_tier_prices(text, table, currency)          -> (str, bool)
  TIER_LABELS, PATTERNS, TierPattern, GENERIC_PRICE_TAG
"""

from .tiers import (
    PricingQuote,
    bracket_key_for,
    discount_amount,
    final_amount,
    format_amount,
    quote,
    tier_index,
    total_amount,
    unit_price,
)
from .patterns import (
    GENERIC_PRICE_TAG,
    PATTERNS,
    TIER_LABELS,
    TierPattern,
    apply_tier_prices,
)

__all__ = [
    "PricingQuote",
    "bracket_key_for",
    "discount_amount",
    "final_amount",
    "format_amount",
    "quote",
    "tier_index",
    "total_amount",
    "unit_price",
    "GENERIC_PRICE_TAG",
    "PATTERNS",
    "TIER_LABELS",
    "TierPattern",
    "apply_tier_prices",
]
