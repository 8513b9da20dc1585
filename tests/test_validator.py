"""Walidacja struktury drzewa: etapy schematu, wartości domyślnych i węzłów."""

from __future__ import annotations

import pytest

from validator import IssueCode, StructureError, ensure_valid, normalize_tree, validate_tree


def _codes(report) -> list[str]:
    return [e.code for e in report.errors]


class TestRoot:
    def test_valid_tree(self, canonical_tree):
        report = validate_tree(canonical_tree)
        assert report.is_valid
        assert report.errors == []
        assert len(report.document.content) == 4

    def test_root_not_object(self):
        assert _codes(validate_tree(["doc"])) == [IssueCode.ROOT_NOT_OBJECT]

    def test_root_type(self):
        assert _codes(validate_tree({"type": "page", "content": []})) == [IssueCode.ROOT_TYPE]

    def test_content_not_array(self):
        report = validate_tree({"type": "doc", "content": "text"})
        assert not report.is_valid
        assert _codes(report) == [IssueCode.SCHEMA_VIOLATION]

    def test_missing_content_is_allowed(self):
        report = validate_tree({"type": "doc"})
        assert report.is_valid
        assert report.document.content == []


class TestNodes:
    def test_block_without_content_is_error(self):
        report = validate_tree({"type": "doc", "content": [{"type": "paragraph"}]})
        assert not report.is_valid
        assert report.document is None
        assert _codes(report) == [IssueCode.CONTENT_MISSING]
        assert report.errors[0].path == "/content/0/content"

    def test_nested_block_without_content_is_error(self):
        tree = {"type": "doc", "content": [{"type": "bulletList", "content": [{"type": "listItem"}]}]}
        report = validate_tree(tree)
        assert _codes(report) == [IssueCode.CONTENT_MISSING]
        assert report.errors[0].path == "/content/0/content/0/content"

    def test_leaf_and_unknown_blocks_need_no_content(self):
        tree = {"type": "doc", "content": [
            {"type": "horizontalRule"},
            {"type": "paragraph", "content": [{"type": "hardBreak"}]},
            {"type": "callout"},
        ]}
        report = validate_tree(tree)
        assert report.is_valid
        assert report.document.content[0].content is None

    def test_text_payload_must_be_string(self):
        tree = {"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": 5}]}]}
        report = validate_tree(tree)
        assert _codes(report) == [IssueCode.TEXT_NOT_STRING]
        assert report.errors[0].path == "/content/0/content/0/text"

    def test_text_has_no_content(self):
        tree = {"type": "doc", "content": [{"type": "paragraph", "content": [
            {"type": "text", "text": "x", "content": []},
        ]}]}
        assert _codes(validate_tree(tree)) == [IssueCode.TEXT_HAS_CONTENT]

    def test_block_content_must_be_list(self):
        tree = {"type": "doc", "content": [{"type": "paragraph", "content": {"type": "text"}}]}
        assert _codes(validate_tree(tree)) == [IssueCode.CONTENT_NOT_LIST]

    def test_node_type_missing(self):
        tree = {"type": "doc", "content": [{"content": []}]}
        assert _codes(validate_tree(tree)) == [IssueCode.NODE_TYPE_MISSING]

    def test_malformed_marks_are_warnings(self):
        base = {"type": "doc", "content": [{"type": "paragraph", "content": [None]}]}
        base["content"][0]["content"][0] = {"type": "text", "text": "x", "marks": "bold"}
        report = validate_tree(base)
        assert report.is_valid
        assert any("/content/0/content/0/marks" in w for w in report.warnings)

        base["content"][0]["content"][0] = {"type": "text", "text": "x", "marks": [{"attrs": {}}]}
        report = validate_tree(base)
        assert report.is_valid
        assert any("/marks/0" in w for w in report.warnings)
        assert report.document.content[0].content[0].marks == []

    def test_heading_level_out_of_range_is_warning(self):
        tree = {"type": "doc", "content": [{"type": "heading", "attrs": {"level": 7}, "content": []}]}
        report = validate_tree(tree)
        assert report.is_valid
        assert any("/attrs/level" in w for w in report.warnings)
        assert report.document.content[0].level == 1

    def test_unknown_types_are_warnings(self):
        tree = {"type": "doc", "content": [
            {"type": "callout", "content": [
                {"type": "text", "text": "x", "marks": [{"type": "sparkle"}]},
            ]},
        ]}
        report = validate_tree(tree)
        assert report.is_valid
        assert len(report.warnings) == 2


class TestStrictMode:
    def test_ensure_valid_returns_document(self, canonical_tree):
        assert ensure_valid(canonical_tree).content[0].level == 2

    def test_ensure_valid_raises(self):
        with pytest.raises(StructureError) as exc:
            ensure_valid({"type": "doc", "content": [{"type": "heading", "attrs": {"level": 2}}]})
        assert exc.value.issues[0].code == IssueCode.CONTENT_MISSING
        assert isinstance(exc.value, ValueError)


class TestNormalizeTree:
    def test_fills_defaults_on_copy(self):
        tree = {"type": "doc", "content": [{"type": "paragraph", "content": [{"type": "text", "text": "x"}]}, {"type": "blockquote"}]}
        filled: list[str] = []
        out = normalize_tree(tree, filled)
        assert "marks" not in out["content"][0]["content"][0]
        assert out["content"][1]["content"] == []
        assert filled == ["/content/1"]
        assert "content" not in tree["content"][1]
