"""Parse carriers shared by the format and check entrypoints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from kdlpretty.diagnostics import has_errors
from kdlpretty.parser.kdl import ParsedDocument
from kdlpretty.parser.options import ParserOptions
from kdlpretty.text import LineColumn, LineIndex

if TYPE_CHECKING:
    from kdlpretty.ast import Document, Entry, Node
    from kdlpretty.diagnostics import Diagnostic


@dataclass(slots=True)
class ParseResultBase:
    """Shared parse carrier for parse-once/consume-many workflows."""

    source_text: str
    parsed: ParsedDocument

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.parsed.diagnostics

    @property
    def has_errors(self) -> bool:
        return has_errors(self.parsed.diagnostics)

    @property
    def document(self) -> Document:
        return self.parsed.document


@dataclass(slots=True)
class KdlParseResult(ParseResultBase):
    """KDL parse result with source position lookups."""

    options: ParserOptions
    _line_index: LineIndex | None = field(default=None, init=False, repr=False)

    def line_index(self) -> LineIndex:
        if self._line_index is None:
            self._line_index = LineIndex(self.source_text)
        return self._line_index

    def location_of(self, element: Document | Node | Entry) -> tuple[LineColumn, LineColumn] | None:
        """Start/end positions of a parsed element, or None for synthesized ones."""
        if element.location is None:
            return None
        index = self.line_index()
        return index.line_column(element.location.start), index.line_column(element.location.end)
