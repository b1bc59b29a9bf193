"""Pipeline run result carriers for tool entrypoints."""

from __future__ import annotations

from dataclasses import dataclass

from kdlpretty.diagnostics import Diagnostic
from kdlpretty.pipeline.result import KdlParseResult


@dataclass(frozen=True, slots=True)
class FormatRunResult:
    """Result of formatting from a shared parse result."""

    parse: KdlParseResult
    formatted_text: str
    diagnostics: list[Diagnostic]
    changed: bool


@dataclass(frozen=True, slots=True)
class CheckRunResult:
    """Result of checking a file: parse diagnostics and formatting drift."""

    parse: KdlParseResult
    diagnostics: list[Diagnostic]
    has_errors: bool
    needs_formatting: bool
