"""Diagnostic codes and messages."""

from dataclasses import dataclass
from typing import Final, Literal

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class DiagnosticSpec:
    code: str
    message: str
    hint: str | None = None
    severity: Severity = "error"
    category: str | None = None


LEXER_UNTERMINATED_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_STRING",
    message="Unterminated string literal.",
    hint="Close the string with a double quote, or with the same number of `#` for raw strings.",
    category="lexer",
)

LEXER_UNTERMINATED_COMMENT: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_UNTERMINATED_COMMENT",
    message="Unterminated multi-line comment.",
    hint="Close every `/*` with a matching `*/`.",
    category="lexer",
)

LEXER_INVALID_ESCAPE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_INVALID_ESCAPE",
    message="Invalid escape sequence in string.",
    hint="Valid escapes are \\n \\r \\t \\\\ \\\" \\b \\f \\s, \\u{...} and escaped whitespace.",
    category="lexer",
)

LEXER_INVALID_NUMBER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_INVALID_NUMBER",
    message="Invalid number literal.",
    category="lexer",
)

LEXER_INVALID_KEYWORD: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_INVALID_KEYWORD",
    message="Unknown keyword.",
    hint="Keywords are #true, #false, #null, #inf, #-inf and #nan.",
    category="lexer",
)

LEXER_BARE_KEYWORD: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_BARE_KEYWORD",
    message="Reserved word used as a bare identifier.",
    hint="Quote it, or prefix keywords with `#` (e.g. `#true`).",
    category="lexer",
)

LEXER_DISALLOWED_CHARACTER: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_DISALLOWED_CHARACTER",
    message="Character is not allowed in a KDL document.",
    category="lexer",
)

LEXER_INVALID_MULTILINE_STRING: Final[DiagnosticSpec] = DiagnosticSpec(
    code="LEXER_INVALID_MULTILINE_STRING",
    message="Invalid multi-line string indentation.",
    hint="Every line must start with the same whitespace as the closing line.",
    category="lexer",
)

PARSER_EXPECTED_NODE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_NODE",
    message="Expected a node",
    category="parser",
)

PARSER_EXPECTED_VALUE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_VALUE",
    message="Expected a value",
    category="parser",
)

PARSER_EXPECTED_TOKEN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_EXPECTED_TOKEN",
    message="Expected token",
    category="parser",
)

PARSER_MISSING_SPACE: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_MISSING_SPACE",
    message="Expected whitespace between entries",
    category="parser",
)

PARSER_ENTRY_AFTER_CHILDREN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_ENTRY_AFTER_CHILDREN",
    message="Entries cannot follow a children block",
    hint="Move the entry before `{`, or disable it with `/-`.",
    category="parser",
)

PARSER_MULTIPLE_CHILDREN: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_MULTIPLE_CHILDREN",
    message="A node can only have one children block",
    hint="Disable the extra blocks with `/-`.",
    category="parser",
)

PARSER_MISSING_TERMINATOR: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_MISSING_TERMINATOR",
    message="Expected a newline, `;` or `}` after the node",
    category="parser",
)

PARSER_DANGLING_SLASHDASH: Final[DiagnosticSpec] = DiagnosticSpec(
    code="PARSER_DANGLING_SLASHDASH",
    message="Slashdash `/-` is not followed by a node, entry or children block",
    category="parser",
)
