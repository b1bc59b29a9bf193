"""High-level parse entrypoints for KDL source text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from kdlpretty.ast import Document
from kdlpretty.diagnostics import Diagnostic, collect_diagnostics, has_errors
from kdlpretty.parser.grammar import parse_source_file
from kdlpretty.parser.options import ParseMode, ParserOptions
from kdlpretty.parser.parser import Parser

if TYPE_CHECKING:
    from kdlpretty.pipeline import KdlParseResult


@dataclass(frozen=True, slots=True)
class ParsedDocument:
    """Parsed AST plus every lexer/parser diagnostic, sorted by position."""

    document: Document
    diagnostics: list[Diagnostic]

    @property
    def has_errors(self) -> bool:
        return has_errors(self.diagnostics)


class KdlParseError(ValueError):
    """Raised by `parse_document` when the source does not parse cleanly."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        errors = [d for d in diagnostics if d.is_error]
        first = errors[0] if errors else diagnostics[0]
        more = f" (and {len(errors) - 1} more)" if len(errors) > 1 else ""
        super().__init__(f"{first.message} at offset {first.range.start}{more}")


def _resolve_options(
    options: ParserOptions | None,
    mode: ParseMode | None,
) -> ParserOptions:
    if mode is not None and options is not None:
        raise ValueError("Pass either options or mode, not both")

    if options is not None:
        return options

    if mode is not None:
        return ParserOptions.for_mode(mode)

    return ParserOptions()


def parse(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> ParsedDocument:
    resolved_options = _resolve_options(options=options, mode=mode)

    parser = Parser(text, options=resolved_options)
    document = parse_source_file(parser)
    lexer_diagnostics, parser_diagnostics = parser.finish()

    return ParsedDocument(
        document=document,
        diagnostics=collect_diagnostics(lexer_diagnostics, parser_diagnostics),
    )


def parse_document(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> Document:
    """Parse and return the document, raising `KdlParseError` on any error."""
    parsed = parse(text, options=options, mode=mode)
    if parsed.has_errors:
        raise KdlParseError(parsed.diagnostics)
    return parsed.document


def parse_result(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
) -> KdlParseResult:
    from kdlpretty.pipeline import KdlParseResult

    resolved_options = _resolve_options(options=options, mode=mode)
    parsed = parse(text, options=resolved_options)
    return KdlParseResult(
        source_text=text,
        parsed=parsed,
        options=resolved_options,
    )
