import logging

import pytest

from kdlpretty.format import FormatOptions
from kdlpretty.parser import ParseMode, parse_result
from kdlpretty.pipeline import run_check, run_format
from kdlpretty.text import LineColumn


def test_run_format_reuses_provided_parse_result() -> None:
    source = "a   1\n"
    parsed = parse_result(source)

    result = run_format("ignored", parse=parsed)

    assert result.parse is parsed
    assert result.formatted_text == "a 1\n"
    assert result.changed is True
    assert result.diagnostics == []


def test_run_format_rejects_parse_with_mode_or_options() -> None:
    parsed = parse_result("a\n")

    try:
        run_format("a\n", parse=parsed, mode=ParseMode.PERMISSIVE)
    except ValueError as exc:
        assert "Pass either parse or options/mode, not both" in str(exc)
    else:
        raise AssertionError("Expected ValueError when passing parse and mode together")


def test_run_format_leaves_canonical_source_unchanged() -> None:
    source = "a 1\n"

    result = run_format(source)

    assert result.formatted_text == source
    assert result.changed is False


def test_run_format_returns_source_on_parse_errors() -> None:
    source = "a {\n"

    result = run_format(source)

    assert result.formatted_text == source
    assert result.changed is False
    assert [d.code for d in result.diagnostics] == ["PARSER_EXPECTED_TOKEN"]


def test_run_format_permissive_mode_normalizes_bare_keywords() -> None:
    result = run_format("a true\n", mode=ParseMode.PERMISSIVE)

    assert result.formatted_text == "a #true\n"
    assert [d.severity for d in result.diagnostics] == ["warning"]


def test_run_format_with_format_options() -> None:
    result = run_format("a 1 2\n", format_options=FormatOptions(print_width=4))

    assert result.formatted_text == "a \\\n  1 \\\n  2\n"


def test_run_check_reports_parse_errors() -> None:
    source = "a 1 {\n} 2\n"

    result = run_check(source)

    assert result.parse.source_text == source
    assert result.has_errors is True
    assert result.needs_formatting is False
    assert [d.code for d in result.diagnostics] == ["PARSER_ENTRY_AFTER_CHILDREN"]


def test_run_check_reports_formatting_drift() -> None:
    assert run_check("a   1\n").needs_formatting is True
    assert run_check("a 1\n").needs_formatting is False
    assert run_check("a 1\n").has_errors is False


def test_run_check_logs_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="kdlpretty.pipeline.entrypoints"):
        run_check("a\n")

    assert any("needs_formatting=False" in record.getMessage() for record in caplog.records)


def test_parse_result_location_of() -> None:
    source = "a\n  b 1\n"
    parsed = parse_result(source)
    node = parsed.document.nodes[1]

    assert parsed.location_of(node) == (LineColumn(1, 2), LineColumn(1, 5))
    assert parsed.location_of(node.entries[0]) == (LineColumn(1, 4), LineColumn(1, 5))
    assert parsed.line_index() is parsed.line_index()


def test_run_check_returns_parse_diagnostics() -> None:
    parsed = parse_result("a true\nb false\n", mode=ParseMode.PERMISSIVE)

    result = run_check("ignored", parse=parsed)

    assert result.diagnostics == list(parsed.diagnostics)
    assert [d.severity for d in result.diagnostics] == ["warning", "warning"]
    assert result.has_errors is False
    assert result.needs_formatting is True
