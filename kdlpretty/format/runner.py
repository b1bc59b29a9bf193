"""Format runner over a shared KDL parse result."""

from __future__ import annotations

from kdlpretty.format.options import FormatOptions
from kdlpretty.format.printer import KdlPrinter
from kdlpretty.parser import ParseMode, ParserOptions, parse_result
from kdlpretty.pipeline.result import KdlParseResult
from kdlpretty.pipeline.results import FormatRunResult


def run_format(
    text: str,
    options: ParserOptions | None = None,
    *,
    mode: ParseMode | None = None,
    parse: KdlParseResult | None = None,
    format_options: FormatOptions | None = None,
) -> FormatRunResult:
    """Run formatting from a single parse lifecycle.

    Sources with parse errors are returned unchanged together with their
    diagnostics; the printer only runs on clean trees.
    """
    resolved_parse = _resolve_parse(text, options=options, mode=mode, parse=parse)
    diagnostics = list(resolved_parse.diagnostics)

    if resolved_parse.has_errors:
        return FormatRunResult(
            parse=resolved_parse,
            formatted_text=resolved_parse.source_text,
            diagnostics=diagnostics,
            changed=False,
        )

    printer = KdlPrinter(format_options)
    formatted_text = printer.render(resolved_parse.document)

    return FormatRunResult(
        parse=resolved_parse,
        formatted_text=formatted_text,
        diagnostics=diagnostics,
        changed=formatted_text != resolved_parse.source_text,
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
