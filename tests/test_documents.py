"""Model dokumentu: deserializacja, serializacja, znaczniki, przechodzenie drzewa."""

from __future__ import annotations

import pytest

from data_model import (
    Block,
    BlockType,
    Document,
    Mark,
    PaymentRow,
    PreviewContext,
    PricingTierTable,
    TemplateRecord,
    Text,
    document_from_dict,
    document_to_dict,
    iter_text_nodes,
    node_at,
    plain_text,
    sample_template,
)


class TestRoundTrip:
    """Kanoniczne drzewo przechodzi przez model bez zmian."""

    def test_canonical_tree_is_preserved(self, canonical_tree):
        assert document_to_dict(document_from_dict(canonical_tree)) == canonical_tree

    def test_unknown_keys_and_attrs_pass_through(self):
        tree = {
            "type": "doc",
            "content": [
                {
                    "type": "paragraph",
                    "attrs": {"color": "#f00"},
                    "uid": "p-1",
                    "content": [{"type": "text", "text": "x", "origin": "import"}],
                },
                {"type": "customWidget", "attrs": {"src": "a.png"}},
            ],
        }
        assert document_to_dict(document_from_dict(tree)) == tree

    def test_empty_marks_key_is_preserved(self):
        tree = {"type": "doc", "content": [{"type": "paragraph", "content": [
            {"type": "text", "text": "a", "marks": []},
            {"type": "text", "text": "b"},
        ]}]}
        doc = document_from_dict(tree)
        assert document_to_dict(doc) == tree
        assert doc.content[0].content[0] == Text("a")

    def test_leaf_blocks_have_no_content(self, canonical_tree):
        doc = document_from_dict(canonical_tree)
        assert doc.content[-1].type == BlockType.HORIZONTAL_RULE
        assert doc.content[-1].content is None

    def test_missing_content_becomes_empty_list(self):
        doc = document_from_dict({"type": "doc", "content": [{"type": "paragraph"}]})
        assert doc.content[0].content == []

    def test_typeless_nodes_are_dropped(self):
        doc = document_from_dict({"type": "doc", "content": [{"text": "orphan"}, "junk", {"type": "paragraph"}]})
        assert [n.type for n in doc.content] == ["paragraph"]

    def test_invalid_heading_level_is_dropped(self):
        doc = document_from_dict({"type": "doc", "content": [{"type": "heading", "attrs": {"level": 9}}]})
        assert "level" not in doc.content[0].attrs
        assert doc.content[0].level == 1


class TestMarks:
    """Znaczniki są uporządkowanym zbiorem — dodanie jest idempotentne."""

    def test_add_mark_is_idempotent(self):
        t = Text("x")
        t.add_mark("bold")
        t.add_mark("bold")
        t.add_mark(Mark("italic"))
        assert [m.type for m in t.marks] == ["bold", "italic"]

    def test_strikethrough_alias(self):
        t = Text("x")
        t.add_mark("strikethrough")
        assert t.has_mark("strike")

    def test_duplicate_marks_in_json_are_merged(self):
        doc = document_from_dict({
            "type": "doc",
            "content": [{"type": "paragraph", "content": [
                {"type": "text", "text": "x", "marks": [{"type": "bold"}, {"type": "bold"}]},
            ]}],
        })
        assert len(doc.content[0].content[0].marks) == 1

    def test_remove_mark(self):
        t = Text("x", [Mark("bold"), Mark("italic")])
        t.remove_mark("bold")
        assert [m.type for m in t.marks] == ["italic"]


class TestTraversal:
    def test_iter_text_nodes_in_document_order(self, canonical_tree):
        doc = document_from_dict(canonical_tree)
        assert [t.text for _, t in iter_text_nodes(doc)] == ["Agreement", "Client: ", "{{client_name}}", "One"]

    def test_node_at(self, canonical_tree):
        doc = document_from_dict(canonical_tree)
        assert node_at(doc, (1, 1)).text == "{{client_name}}"
        with pytest.raises(IndexError):
            node_at(doc, (7,))

    def test_plain_text(self, canonical_tree):
        assert plain_text(document_from_dict(canonical_tree)) == "AgreementClient: {{client_name}}One"

    def test_empty_document(self):
        assert Document().is_empty
        assert document_to_dict(Document()) == {"type": "doc", "content": []}


class TestPricingTierTable:
    """7 kluczy, brak → 0, ceny nieujemne."""

    def test_absent_keys_read_as_zero(self):
        table = PricingTierTable({"1": 1000})
        assert table["4-7"] == 0
        assert list(table) == ["1", "2", "3", "4-7", "8-9", "10-15", "16+"]
        assert len(table.to_dict()) == 7

    def test_negative_price_rejected(self):
        with pytest.raises(ValueError):
            PricingTierTable({"1": -5})

    def test_unknown_key_rejected(self):
        with pytest.raises(KeyError):
            PricingTierTable({"17": 10})

    def test_from_mapping_skips_unknown_keys(self):
        table = PricingTierTable.from_mapping({"1": "2,500", "bogus": 3})
        assert table["1"] == 2500

    def test_replace_returns_new_table(self):
        table = PricingTierTable.default()
        changed = table.replace("2", 3000)
        assert changed["2"] == 3000
        assert table["2"] == 2400


class TestPreviewContext:
    def test_defaults(self):
        ctx = PreviewContext()
        assert ctx.currency == "USD"
        assert ctx.discount_percentage == 10
        assert ctx.pricing_tiers["1"] == 2500

    def test_discount_out_of_range(self):
        with pytest.raises(ValueError):
            PreviewContext(discount_percentage=120)

    def test_from_dict_builds_plan_and_tiers(self):
        ctx = PreviewContext.from_dict({
            "currency": "EUR",
            "applicant_count": "3",
            "pricing_tiers": {"3": 1800},
            "payment_plan": [{"percent": 50, "value": 900, "payment_order": "First"}],
        })
        assert ctx.applicant_count == 3
        assert ctx.pricing_tiers["3"] == 1800
        assert ctx.payment_plan == [PaymentRow(50, 900, "First")]

    def test_to_dict_round_trip(self):
        ctx = PreviewContext(currency="EUR", date="2024-01-01", applicant_count=4)
        assert PreviewContext.from_dict(ctx.to_dict()) == ctx


class TestTemplateRecord:
    def test_row_round_trip(self):
        record = TemplateRecord(
            id="t-1",
            name="Contract",
            content={"type": "doc", "content": []},
            default_pricing_tiers=PricingTierTable({"1": 1000}),
            default_currency="EUR",
        )
        again = TemplateRecord.from_row(record.to_row())
        assert again == record

    def test_sample_template_is_valid_canonical(self):
        record = sample_template()
        assert record.content["type"] == "doc"
        assert record.name == "Citizenship Service Contract"
        assert any(t.text == "{{signature}}" for _, t in iter_text_nodes(document_from_dict(record.content)))
