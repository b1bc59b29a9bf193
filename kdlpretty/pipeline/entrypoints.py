"""Unified entrypoints that orchestrate parse/format/check with one parse lifecycle."""

from __future__ import annotations

import logging

from kdlpretty.diagnostics import has_errors
from kdlpretty.format import FormatOptions
from kdlpretty.format import run_format as _run_format
from kdlpretty.parser import ParseMode, ParserOptions, parse_result
from kdlpretty.pipeline.result import KdlParseResult
from kdlpretty.pipeline.results import CheckRunResult, FormatRunResult

logger = logging.getLogger(__name__)


def run_format(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    parse: KdlParseResult | None = None,
    format_options: FormatOptions | None = None,
) -> FormatRunResult:
    """Run formatting over one KDL parse lifecycle."""
    resolved_parse = _resolve_parse(text, options=options, mode=mode, parse=parse)
    result = _run_format(resolved_parse.source_text, parse=resolved_parse, format_options=format_options)
    if resolved_parse.has_errors:
        logger.debug("Skipped formatting: %d diagnostics", len(result.diagnostics))
    else:
        logger.debug("Formatted %d characters (changed=%s)", len(text), result.changed)
    return result


def run_check(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    parse: KdlParseResult | None = None,
    format_options: FormatOptions | None = None,
) -> CheckRunResult:
    """Report parse diagnostics and whether the text is already canonical."""
    resolved_parse = _resolve_parse(text, options=options, mode=mode, parse=parse)
    format_result = _run_format(resolved_parse.source_text, parse=resolved_parse, format_options=format_options)
    diagnostics = format_result.diagnostics
    errors = has_errors(diagnostics)
    needs_formatting = not errors and format_result.changed
    logger.debug("Checked %d characters: errors=%s needs_formatting=%s", len(text), errors, needs_formatting)
    return CheckRunResult(
        parse=resolved_parse,
        diagnostics=diagnostics,
        has_errors=errors,
        needs_formatting=needs_formatting,
    )


def _resolve_parse(
    text: str,
    *,
    options: ParserOptions | None,
    mode: ParseMode | None,
    parse: KdlParseResult | None,
) -> KdlParseResult:
    if parse is not None:
        if options is not None or mode is not None:
            raise ValueError("Pass either parse or options/mode, not both")
        return parse
    return parse_result(text, options=options, mode=mode)

