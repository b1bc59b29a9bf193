"""Shared parse carriers and lazy pipeline entrypoint exports."""

from __future__ import annotations

from typing import TYPE_CHECKING

from kdlpretty.parser.options import ParseMode, ParserOptions
from kdlpretty.pipeline.result import KdlParseResult, ParseResultBase
from kdlpretty.pipeline.results import CheckRunResult, FormatRunResult

if TYPE_CHECKING:
    from kdlpretty.format.options import FormatOptions


def run_format(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    parse: KdlParseResult | None = None,
    format_options: FormatOptions | None = None,
) -> FormatRunResult:
    from kdlpretty.pipeline.entrypoints import run_format as _run_format

    return _run_format(text, options=options, mode=mode, parse=parse, format_options=format_options)


def run_check(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    parse: KdlParseResult | None = None,
    format_options: FormatOptions | None = None,
) -> CheckRunResult:
    from kdlpretty.pipeline.entrypoints import run_check as _run_check

    return _run_check(text, options=options, mode=mode, parse=parse, format_options=format_options)


__all__ = [
    "CheckRunResult",
    "FormatRunResult",
    "KdlParseResult",
    "ParseResultBase",
    "run_check",
    "run_format",
]
