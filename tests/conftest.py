"""Wspólne fikstury: dokumenty przykładowe i konteksty podglądu."""

from __future__ import annotations

import pytest

from data_model import (
    Block,
    BlockType,
    Document,
    Mark,
    PreviewContext,
    Text,
    paragraph,
)


def doc_of(*texts: str) -> Document:
    """Dokument z jednym akapitem na każdy tekst."""
    return Document(content=[paragraph(Text(t)) for t in texts])


@pytest.fixture
def canonical_tree() -> dict:
    return {
        "type": "doc",
        "content": [
            {
                "type": "heading",
                "attrs": {"level": 2},
                "content": [{"type": "text", "text": "Agreement"}],
            },
            {
                "type": "paragraph",
                "attrs": {"textAlign": "center"},
                "content": [
                    {"type": "text", "text": "Client: "},
                    {"type": "text", "text": "{{client_name}}", "marks": [{"type": "bold"}]},
                ],
            },
            {
                "type": "bulletList",
                "content": [
                    {
                        "type": "listItem",
                        "content": [
                            {"type": "paragraph", "content": [{"type": "text", "text": "One"}]},
                        ],
                    },
                ],
            },
            {"type": "horizontalRule"},
        ],
    }


@pytest.fixture
def interactive_doc() -> Document:
    """{{signature}}, dwa {{text}}, {{signature}} — w tej kolejności."""
    return Document(content=[
        paragraph(Text("Client signature: "), Text("{{signature}}", [Mark("underline")])),
        paragraph(Text("Name: {{text}}, passport: {{text}}")),
        Block(BlockType.BULLET_LIST, [
            Block(BlockType.LIST_ITEM, [paragraph(Text("Witness: {{signature}}"))]),
        ]),
    ])


@pytest.fixture
def context() -> PreviewContext:
    return PreviewContext(
        currency="USD",
        discount_percentage=10,
        client_country="US",
        date="2024-05-01",
        applicant_count=1,
    )
