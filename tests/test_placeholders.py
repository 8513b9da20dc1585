"""Rodziny tokenów i wyszukiwanie {{identyfikatorów}} w tekście."""

from __future__ import annotations

import pytest

from placeholders import (
    INTERACTIVE_IDENTIFIERS,
    TokenFamily,
    families_of,
    find_tokens,
    has_token,
    is_recognized,
    list_families,
    make_tag,
    tag_for,
)


class TestFamilies:
    def test_four_families_in_fixed_order(self):
        assert list(list_families()) == [
            TokenFamily.IDENTITY,
            TokenFamily.PRICING,
            TokenFamily.PAYMENT_SCHEDULE,
            TokenFamily.INTERACTIVE,
        ]

    def test_identity_labels(self):
        labels = [f.label for f in list_families()[TokenFamily.IDENTITY]]
        assert labels == ["Client Name", "Client Phone", "Client Email", "Signature", "Date"]

    def test_tag_for(self):
        assert tag_for("pricing", "Currency") == "{{currency}}"
        assert tag_for(TokenFamily.INTERACTIVE, "Text Field") == "{{text}}"

    def test_tag_for_unknown(self):
        with pytest.raises(KeyError):
            tag_for("pricing", "Nope")
        with pytest.raises(KeyError):
            tag_for("weather", "Currency")

    def test_signature_is_in_two_families(self):
        assert families_of("signature") == [TokenFamily.IDENTITY, TokenFamily.INTERACTIVE]
        assert families_of("price_4-7") == []

    def test_recognized(self):
        assert is_recognized("final_amount")
        assert not is_recognized("Final_Amount")

    def test_interactive_identifiers(self):
        assert set(INTERACTIVE_IDENTIFIERS) == {"text", "signature"}

    def test_make_tag(self):
        assert make_tag("client_name") == "{{client_name}}"


class TestFindTokens:
    def test_positions_and_order(self):
        text = "Dear {{client_name}}, pay {{price_4-7}} by {{date}}."
        found = find_tokens(text)
        assert [t.identifier for t in found] == ["client_name", "price_4-7", "date"]
        assert text[found[0].start:found[0].end] == "{{client_name}}"
        assert found[1].tag == "{{price_4-7}}"

    def test_whitespace_and_braces_are_not_tokens(self):
        assert find_tokens("{{ client_name }} {{a{b}} {{}}") == []

    def test_tier_token_with_plus(self):
        assert [t.identifier for t in find_tokens("{{16+_tier_price}}")] == ["16+_tier_price"]

    def test_has_token(self):
        assert has_token("x {{text}} y", "text")
        assert not has_token("x {{texts}} y", "text")
