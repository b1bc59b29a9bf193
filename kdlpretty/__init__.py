"""Canonicalizing pretty-printer for KDL documents."""

from kdlpretty.ast import Document, Entry, Identifier, Node, Tag
from kdlpretty.format import FormatOptions, KdlPrinter, KdlSyntax, render
from kdlpretty.parser import KdlParseError, ParseMode, ParserOptions, parse, parse_document, parse_result
from kdlpretty.pipeline import run_check, run_format


def format_text(text: str, options: FormatOptions | None = None) -> str:
    """Parse `text` and return its canonical form; raises `KdlParseError` on invalid input."""
    return render(parse_document(text), options)


__all__ = [
    "Document",
    "Entry",
    "FormatOptions",
    "Identifier",
    "KdlParseError",
    "KdlPrinter",
    "KdlSyntax",
    "Node",
    "ParseMode",
    "ParserOptions",
    "Tag",
    "format_text",
    "parse",
    "parse_document",
    "parse_result",
    "render",
    "run_check",
    "run_format",
]
