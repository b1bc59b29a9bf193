"""Diagnostics."""

from kdlpretty.diagnostics.codes import (
    LEXER_BARE_KEYWORD,
    LEXER_DISALLOWED_CHARACTER,
    LEXER_INVALID_ESCAPE,
    LEXER_INVALID_KEYWORD,
    LEXER_INVALID_MULTILINE_STRING,
    LEXER_INVALID_NUMBER,
    LEXER_UNTERMINATED_COMMENT,
    LEXER_UNTERMINATED_STRING,
    PARSER_DANGLING_SLASHDASH,
    PARSER_ENTRY_AFTER_CHILDREN,
    PARSER_EXPECTED_NODE,
    PARSER_EXPECTED_TOKEN,
    PARSER_EXPECTED_VALUE,
    PARSER_MISSING_SPACE,
    PARSER_MISSING_TERMINATOR,
    PARSER_MULTIPLE_CHILDREN,
    DiagnosticSpec,
)
from kdlpretty.diagnostics.diagnostic import Diagnostic, Severity
from kdlpretty.diagnostics.report import collect_diagnostics, format_diagnostic, has_errors

__all__ = [
    "LEXER_BARE_KEYWORD",
    "LEXER_DISALLOWED_CHARACTER",
    "LEXER_INVALID_ESCAPE",
    "LEXER_INVALID_KEYWORD",
    "LEXER_INVALID_MULTILINE_STRING",
    "LEXER_INVALID_NUMBER",
    "LEXER_UNTERMINATED_COMMENT",
    "LEXER_UNTERMINATED_STRING",
    "PARSER_DANGLING_SLASHDASH",
    "PARSER_ENTRY_AFTER_CHILDREN",
    "PARSER_EXPECTED_NODE",
    "PARSER_EXPECTED_TOKEN",
    "PARSER_EXPECTED_VALUE",
    "PARSER_MISSING_SPACE",
    "PARSER_MISSING_TERMINATOR",
    "PARSER_MULTIPLE_CHILDREN",
    "Diagnostic",
    "DiagnosticSpec",
    "Severity",
    "collect_diagnostics",
    "format_diagnostic",
    "has_errors",
]
