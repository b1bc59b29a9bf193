"""Parser infrastructure (token cursor + grammar + trivia re-tokenizer)."""

from kdlpretty.parser.grammar import parse_entry, parse_node, parse_nodes, parse_source_file
from kdlpretty.parser.kdl import KdlParseError, ParsedDocument, parse, parse_document, parse_result
from kdlpretty.parser.options import ParseMode, ParserOptions
from kdlpretty.parser.parser import Parser, ParserCheckpoint, ParserProgress
from kdlpretty.parser.trivia import (
    TriviaKind,
    TriviaToken,
    terminator_ends_line,
    tokenize_line_space,
    tokenize_node_space,
)

__all__ = [
    "KdlParseError",
    "ParseMode",
    "ParsedDocument",
    "Parser",
    "ParserCheckpoint",
    "ParserOptions",
    "ParserProgress",
    "TriviaKind",
    "TriviaToken",
    "parse",
    "parse_document",
    "parse_entry",
    "parse_node",
    "parse_nodes",
    "parse_result",
    "parse_source_file",
    "terminator_ends_line",
    "tokenize_line_space",
    "tokenize_node_space",
]
