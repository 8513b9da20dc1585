"""Renderowanie dokumentu: podstawienia, pola interaktywne, znaczniki, serializacja."""

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
    Text,
    paragraph,
)
from renderer import (
    CaptureSlot,
    CaptureSlotMap,
    RenderedElement,
    RenderedText,
    RenderMode,
    render,
    to_html,
    to_text,
)
from conftest import doc_of


def _text(doc: Document, context: PreviewContext | None = None, mode: RenderMode = RenderMode.PREVIEW) -> str:
    return to_text(render(doc, context, mode).output)


def _html(doc: Document, context: PreviewContext | None = None) -> str:
    return to_html(render(doc, context).output)


class TestCaptureSlots:
    """Klucze pól: osobny licznik na rodzaj, kolejność dokumentu, stabilne."""

    def test_keys_in_document_order(self, interactive_doc, context):
        result = render(interactive_doc, context)
        assert result.capture_slot_keys == ["signature_0", "text_0", "text_1", "signature_1"]
        assert result.count("signature") == 2
        assert result.count("text") == 2

    def test_rerender_gives_same_keys(self, interactive_doc, context):
        first = render(interactive_doc, context)
        second = render(interactive_doc, context)
        assert first.capture_slot_keys == second.capture_slot_keys
        assert list(second.capture_slots.keys) == second.capture_slot_keys

    def test_slot_nodes_in_output(self, context):
        result = render(doc_of("Sign: {{signature}}"), context)
        para = result.output.children[0]
        assert para.children == [RenderedText("Sign: "), CaptureSlot("signature", "signature_0")]

    def test_marks_wrap_slots(self, interactive_doc, context):
        html = to_html(render(interactive_doc, context).output)
        assert '<u><span class="signature-slot" data-slot="signature_0"></span></u>' in html

    def test_plain_text_output(self, interactive_doc, context):
        assert _text(interactive_doc, context) == (
            "Client signature: [signature_0]\n"
            "Name: [text_0], passport: [text_1]\n"
            "• Witness: [signature_1]"
        )

    def test_author_mode_has_no_slots(self, interactive_doc, context):
        result = render(interactive_doc, context, RenderMode.AUTHOR)
        assert result.capture_slot_keys == []
        assert "{{signature}}" in to_text(result.output)


class TestCaptureSlotMap:
    def test_write_unknown_key(self):
        slots = CaptureSlotMap(["text_0"])
        with pytest.raises(KeyError):
            slots.write("text_5", "x")

    def test_write_and_read(self):
        slots = CaptureSlotMap(["signature_0", "text_0"])
        slots.write("text_0", "Jan")
        assert slots.get("text_0") == "Jan"
        assert "text_0" in slots
        assert "signature_0" not in slots
        assert len(slots) == 1
        assert slots.items() == [("text_0", "Jan")]

    def test_carry_over_keeps_surviving_keys(self):
        old = CaptureSlotMap(["text_0", "text_1"])
        old.write("text_0", "a")
        old.write("text_1", "b")
        new = CaptureSlotMap(["text_0"])
        new.carry_over(old)
        assert new.items() == [("text_0", "a")]

    def test_filled_slots_in_html(self, context):
        result = render(doc_of("{{text}} {{signature}}"), context)
        result.capture_slots.write("text_0", 'Jan "JD" Doe')
        result.capture_slots.write("signature_0", b"\x89PNG")
        html = to_html(result.output, result.capture_slots)
        assert 'value="Jan &quot;JD&quot; Doe"' in html
        assert 'src="data:image/png;base64,iVBORw=="' in html


class TestSubstitution:
    def test_unknown_token_passes_through(self, context):
        assert _text(doc_of("Hi {{nickname}} {{ client_name }}"), context) == "Hi {{nickname}} {{ client_name }}"

    def test_identity_demo_values(self, context):
        out = _text(doc_of("{{client_name}}|{{client_phone}}|{{client_email}}|{{date}}"), context)
        assert out == "John Doe|+1-555-0123|john.doe@example.com|2024-05-01"

    def test_total_amount(self, context):
        context.pricing_tiers = PricingTierTable({"1": 1000})
        assert _text(doc_of("Total: {{currency}} {{total_amount}}"), context) == "Total: USD 1000"

    def test_pricing_for_five_applicants(self, context):
        context.applicant_count = 5
        out = _text(doc_of(
            "{{applicant_count}} x {{price_per_applicant}} = {{total_amount}}",
            "-{{discount_percentage}}% = -{{discount_amount}} → {{final_amount}} ({{client_country}})",
        ), context)
        assert out == "5 x 2200 = 11000\n-10% = -1100 → 9900 (US)"

    def test_tier_label_wins_over_generic_price(self, context):
        context.applicant_count = 5
        out = _text(doc_of("For 2 applicants: {{price_per_applicant}}"), context)
        assert out == "For 2 applicants: USD 2400"

    def test_generic_price_in_other_leaf_still_substituted(self, context):
        doc = doc_of("For 3 applicants: {{price_per_applicant}}", "Your price: {{price_per_applicant}}")
        assert _text(doc, context) == "For 3 applicants: USD 2300\nYour price: 2500"

    def test_author_mode_keeps_tokens(self, context):
        doc = Document(content=[paragraph(Text("{{client_name}}", [Mark("bold")]))])
        result = render(doc, context, RenderMode.AUTHOR)
        assert to_html(result.output) == "<p><b>{{client_name}}</b></p>"

    def test_zero_discount_lines_suppressed(self, context):
        context.discount_percentage = 0
        context.suppress_zero_discount = True
        out = _text(doc_of("Total: {{total_amount}}\nDiscount: {{discount_amount}}\nFinal: {{final_amount}}"), context)
        assert out == "Total: 2500\nFinal: 2500"

    def test_zero_discount_kept_without_flag(self, context):
        context.discount_percentage = 0
        assert _text(doc_of("Discount: {{discount_amount}}"), context) == "Discount: 0"


class TestPaymentPlan:
    @pytest.fixture
    def planned(self, context):
        context.payment_plan = [
            PaymentRow(50, 1250, "On signing"),
            PaymentRow(50, "1250 + VAT", "On approval"),
        ]
        return context

    def test_sequential_rows(self, planned):
        out = _text(doc_of("{{payment_plan_row}}", "{{payment_plan_row}}", "[{{payment_plan_row}}]"), planned)
        assert out == "50% = USD 1250\n50% = USD 1250 + VAT\n[]"

    def test_sequential_fields_have_own_counters(self, planned):
        out = _text(doc_of("{{payment_percent}} {{payment_due}} {{payment_percent}} {{payment_amount}}"), planned)
        assert out == "50 On signing 50 USD 1250"

    def test_numbered_tokens(self, planned):
        out = _text(doc_of("{{payment_2_due}}: {{payment_2_value}} / {{payment_1_row}} / {{payment_3_due}}"), planned)
        assert out == "On approval: USD 1250 + VAT / 50% = USD 1250 / {{payment_3_due}}"

    def test_no_plan_keeps_tokens(self, context):
        assert _text(doc_of("{{payment_plan_row}} {{payment_1_due}}"), context) == "{{payment_plan_row}} {{payment_1_due}}"


class TestStructure:
    def test_mark_nesting_first_is_outermost(self, context):
        doc = Document(content=[paragraph(Text("x", [Mark("bold"), Mark("italic")]))])
        assert _html(doc, context) == "<p><b><i>x</i></b></p>"

    def test_unknown_mark_is_skipped(self, context):
        doc = Document(content=[paragraph(Text("x", [Mark("sparkle"), Mark("strike")]))])
        assert _html(doc, context) == "<p><s>x</s></p>"

    def test_blocks(self, canonical_tree, context):
        html = _html(canonical_tree, context)
        assert html == (
            "<h2>Agreement</h2>"
            '<p style="text-align: center">Client: <b>John Doe</b></p>'
            "<ul><li><p>One</p></li></ul>"
            "<hr>"
        )

    def test_attrs_style_and_dir(self, context):
        doc = Document(content=[paragraph(Text("x"), textAlign="center", dir="rtl")])
        assert _html(doc, context) == '<p style="text-align: center" dir="rtl">x</p>'

    def test_hard_break(self, context):
        doc = Document(content=[paragraph(Text("a"), Block(BlockType.HARD_BREAK), Text("b"))])
        assert _html(doc, context) == "<p>a<br>b</p>"
        assert _text(doc, context) == "a\nb"

    def test_unknown_block_degrades(self, context):
        doc = Document(content=[
            Block("callout", [paragraph(Text("inside"))]),
            Block("embed", None),
        ])
        assert _html(doc, context) == "<p>inside</p>"

    def test_text_is_escaped(self, context):
        assert _html(doc_of("a < b & c"), context) == "<p>a &lt; b &amp; c</p>"

    def test_malformed_input_does_not_raise(self, context):
        result = render({"type": "doc", "content": [{"type": "paragraph", "content": "junk"}, 7]}, context)
        assert isinstance(result.output, RenderedElement)
        assert render("not a document", context).capture_slot_keys == []

    def test_default_context(self):
        assert _text(doc_of("{{currency}}")) == "USD"
