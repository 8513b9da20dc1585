"""Kaskada normalizacji zapisanej treści: totalność, idempotencja, ścieżki awaryjne."""

from __future__ import annotations

import json

import pytest

from data_model import (
    Block,
    BlockType,
    Document,
    Mark,
    Text,
    document_from_dict,
    document_to_dict,
    paragraph,
)
from html_parser import ContentSource, normalize_content, normalize_content_traced
from validator import validate_tree


class TestCanonical:
    def test_idempotent_on_canonical_tree(self, canonical_tree):
        doc = normalize_content(canonical_tree)
        assert doc == document_from_dict(canonical_tree)
        assert document_to_dict(doc) == canonical_tree

    def test_second_pass_changes_nothing(self):
        first = normalize_content('<p class="ql-align-center">Hi <b>there</b></p><ul><li>x</li></ul>')
        again = normalize_content(document_to_dict(first))
        assert again == first

    def test_document_instance_is_copied(self):
        doc = Document(content=[Block(BlockType.PARAGRAPH, [Text("x")])])
        result = normalize_content_traced(doc)
        assert result.source == ContentSource.CANONICAL
        assert result.document == doc
        assert result.document is not doc

    def test_json_encoded_canonical_string(self, canonical_tree):
        result = normalize_content_traced(json.dumps(canonical_tree))
        assert result.source == ContentSource.CANONICAL
        assert document_to_dict(result.document) == canonical_tree


class TestTotality:
    """Dla dowolnego wejścia wynik jest poprawnym dokumentem, bez wyjątków."""

    @pytest.mark.parametrize("raw", [
        None,
        "",
        "   \n ",
        {"foo": 1},
        {"type": "doc", "content": "broken"},
        "arbitrary string",
        "<p>unclosed <b>bold",
        "<<<>>>",
        "<p class=\"ql-align-center\">x</p>",
        {"ops": [{"insert": "Hello "}, {"insert": "world\n"}]},
        {"delta": {"ops": [{"insert": "x"}]}, "html": "<h1>Title</h1><p>Body</p>"},
        [{"insert": "bare ops"}],
        [1, 2, 3],
        42,
        3.5,
        True,
        b"<p>bytes</p>",
        '"double encoded"',
        '{"ops": [{"insert": "json ops"}]}',
        "{not json",
    ])
    def test_always_valid(self, raw):
        doc = normalize_content(raw)
        assert isinstance(doc, Document)
        assert validate_tree(document_to_dict(doc)).is_valid


class TestCascade:
    def test_null_is_empty(self):
        result = normalize_content_traced(None)
        assert result.source == ContentSource.EMPTY
        assert result.document.content == []

    def test_blank_string_is_empty(self):
        assert normalize_content("  \n").content == []

    def test_rtl_centered_paragraph(self):
        doc = normalize_content('<p class="ql-align-center ql-direction-rtl">Hello</p>')
        para = doc.content[0]
        assert para.type == "paragraph"
        assert para.content == [Text("Hello")]
        assert "text-align: center" in para.attrs["style"]
        assert para.attrs["dir"] == "rtl"
        assert "ql-" not in json.dumps(document_to_dict(doc))

    def test_inline_markup_is_wrapped(self):
        result = normalize_content_traced("Hello <b>World</b>")
        assert result.source == ContentSource.MARKUP
        assert result.document.content == [
            Block(BlockType.PARAGRAPH, [Text("Hello "), Text("World", [Mark("bold")])]),
        ]

    def test_angle_bracketed_word_stays_text(self):
        raw = "Dear <client>, welcome"
        result = normalize_content_traced(raw)
        assert result.source == ContentSource.PLAIN_TEXT
        assert result.document.content[0].content == [Text(raw)]

    def test_plain_string_is_one_paragraph(self):
        result = normalize_content_traced("Line one\nLine two")
        assert result.source == ContentSource.PLAIN_TEXT
        assert result.document.content == [Block(BlockType.PARAGRAPH, [Text("Line one\nLine two")])]

    def test_operation_log_with_html(self):
        raw = {"delta": {"ops": [{"insert": "ignored"}]}, "html": "<p><b>Hi</b></p>"}
        result = normalize_content_traced(raw)
        assert result.source == ContentSource.MARKUP
        assert result.document.content[0].content == [Text("Hi", [Mark("bold")])]

    def test_operation_log_without_html_keeps_text(self):
        raw = {"delta": {"ops": [{"insert": "Hello "}, {"insert": {"image": "x.png"}}, {"insert": "world"}]}}
        result = normalize_content_traced(raw)
        assert result.source == ContentSource.PLAIN_TEXT
        assert result.document.content[0].content == [Text("Hello world")]

    def test_bare_operation_list(self):
        assert normalize_content([{"insert": "a"}, {"insert": "b"}]).content[0].content == [Text("ab")]

    def test_empty_operation_log_is_empty(self):
        assert normalize_content({"ops": [{"insert": "\n"}]}).content == []

    def test_garbage_is_kept_as_text(self):
        assert normalize_content(42).content[0].content == [Text("42")]
        assert normalize_content({"foo": 1}).content[0].content == [Text('{"foo": 1}')]

    def test_bytes_are_decoded(self):
        doc = normalize_content("<p>Zażółć</p>".encode("utf-8"))
        assert doc.content[0].content == [Text("Zażółć")]

    def test_json_string_decoded_once(self):
        twice = json.dumps(json.dumps("hello"))
        result = normalize_content_traced(twice)
        # drugi poziom kodowania zostaje tekstem
        assert result.source == ContentSource.PLAIN_TEXT
        assert result.document.content[0].content == [Text('"hello"')]

    @pytest.mark.parametrize("raw", ["[1,   2]", '{"note":   "call client"}'])
    def test_unrecognized_json_string_kept_verbatim(self, raw):
        result = normalize_content_traced(raw)
        assert result.source == ContentSource.PLAIN_TEXT
        assert result.document.content == [Block(BlockType.PARAGRAPH, [Text(raw)])]

    def test_json_encoded_markup(self):
        result = normalize_content_traced(json.dumps("<p><i>x</i></p>"))
        assert result.source == ContentSource.MARKUP
        assert result.document.content[0].content == [Text("x", [Mark("italic")])]


class TestFallback:
    """Błąd parsowania albo niepoprawne drzewo → oryginalny string jako tekst."""

    def test_parser_exception_falls_back_to_original(self, monkeypatch):
        def boom(markup):
            raise RuntimeError("parser down")

        monkeypatch.setattr("html_parser.legacy.parse_markup", boom)
        raw = '<p class="ql-align-center">Hello</p>'
        result = normalize_content_traced(raw)
        assert result.source == ContentSource.PLAIN_TEXT
        assert result.document.content == [Block(BlockType.PARAGRAPH, [Text(raw)])]
        assert "parser down" in result.detail

    def test_invalid_tree_falls_back_to_original(self, monkeypatch):
        bad = Document(content=[paragraph(Text(5))])
        monkeypatch.setattr("html_parser.legacy.parse_markup", lambda markup: bad)
        raw = "<p>x</p>"
        result = normalize_content_traced(raw)
        assert result.source == ContentSource.PLAIN_TEXT
        assert result.document.content[0].content == [Text(raw)]
