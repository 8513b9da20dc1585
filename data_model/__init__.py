"""
data_model — struktury danych silnika szablonów umów.

Użycie:
  from data_model import Document, Block, Text, Mark, PreviewContext, ...

Moduły:
  common     — BlockType, MarkType, LEAF_BLOCKS, aliasy typów (RawNode, NodePath)
  documents  — Document, Block, Text, Mark, (de)serializacja, przechodzenie drzewa
  pricing    — PricingTierTable, PaymentRow, PreviewContext, TIER_KEYS
  templates  — TemplateRecord, TemplateSummary, szablon przykładowy

Mapowanie na zapis JSON edytora:
  {"type": "doc", "content": [...]}             → Document
  {"type": "<blok>", "attrs": {...}, "content"} → Block
  {"type": "text", "text": "...", "marks": []}  → Text
"""

from .common import (
    DOC_TYPE,
    TEXT_TYPE,
    BlockType,
    MarkType,
    LEAF_BLOCKS,
    TEXT_BLOCKS,
    KNOWN_BLOCKS,
    KNOWN_MARKS,
    RawNode,
    NodePath,
    canonical_mark_type,
)
from .documents import (
    Mark,
    Text,
    Block,
    Document,
    Node,
    empty_document,
    paragraph,
    node_from_dict,
    node_to_dict,
    document_from_dict,
    document_to_dict,
    iter_nodes,
    iter_text_nodes,
    node_at,
    plain_text,
)
from .pricing import (
    TIER_KEYS,
    DEFAULT_TIER_PRICES,
    PricingTierTable,
    PaymentRow,
    PreviewContext,
)
from .templates import (
    TemplateRecord,
    TemplateSummary,
    SAMPLE_TEMPLATE_NAME,
    sample_template,
    sample_template_content,
)

__all__ = [
    # common
    "DOC_TYPE",
    "TEXT_TYPE",
    "BlockType",
    "MarkType",
    "LEAF_BLOCKS",
    "TEXT_BLOCKS",
    "KNOWN_BLOCKS",
    "KNOWN_MARKS",
    "RawNode",
    "NodePath",
    "canonical_mark_type",
    # documents
    "Mark",
    "Text",
    "Block",
    "Document",
    "Node",
    "empty_document",
    "paragraph",
    "node_from_dict",
    "node_to_dict",
    "document_from_dict",
    "document_to_dict",
    "iter_nodes",
    "iter_text_nodes",
    "node_at",
    "plain_text",
    # pricing
    "TIER_KEYS",
    "DEFAULT_TIER_PRICES",
    "PricingTierTable",
    "PaymentRow",
    "PreviewContext",
    # templates
    "TemplateRecord",
    "TemplateSummary",
    "SAMPLE_TEMPLATE_NAME",
    "sample_template",
    "sample_template_content",
]
