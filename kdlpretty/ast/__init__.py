"""Typed KDL document tree."""

from kdlpretty.ast.model import (
    BooleanValue,
    Document,
    Entry,
    Identifier,
    KdlValue,
    Node,
    NullValue,
    NumberValue,
    StringValue,
    Tag,
)
from kdlpretty.ast.scalar import (
    BARE_KEYWORDS,
    decode_quoted_string,
    decode_raw_string,
    parse_keyword,
    parse_number,
)

__all__ = [
    "BARE_KEYWORDS",
    "BooleanValue",
    "Document",
    "Entry",
    "Identifier",
    "KdlValue",
    "Node",
    "NullValue",
    "NumberValue",
    "StringValue",
    "Tag",
    "decode_quoted_string",
    "decode_raw_string",
    "parse_keyword",
    "parse_number",
]
