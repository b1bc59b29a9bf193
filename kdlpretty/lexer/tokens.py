"""Lexer tokens."""

from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Final

from kdlpretty.text import TextRange


class TokenKind(IntEnum):
    # -------------------------
    # Special / sentinels
    # -------------------------
    EOF = 1

    # -------------------------
    # Trivia tokens (emitted by the lexer)
    # -------------------------
    WHITESPACE = 10
    NEWLINE = 11
    SINGLE_LINE_COMMENT = 12  # `// ...`, newline excluded
    MULTI_LINE_COMMENT = 13  # `/* ... */`, nestable
    BOM = 14
    SKIPPED = 15  # disallowed bytes preserved for recovery

    # -------------------------
    # Trivia-like structure (handled by the parser)
    # -------------------------
    ESCLINE = 20  # \
    SLASHDASH = 21  # /-

    # -------------------------
    # Strings / literals
    # -------------------------
    IDENTIFIER = 30
    QUOTED_STRING = 31
    RAW_STRING = 32
    NUMBER = 33
    KEYWORD = 34  # #true, #null, #-inf ...

    # -------------------------
    # Punctuation
    # -------------------------
    EQUALS = 40  # =
    SEMICOLON = 41  # ;
    LPAREN = 42  # (
    RPAREN = 43  # )
    LBRACE = 44  # {
    RBRACE = 45  # }

    @property
    def is_trivia(self) -> bool:
        return self in (
            TokenKind.WHITESPACE,
            TokenKind.NEWLINE,
            TokenKind.SINGLE_LINE_COMMENT,
            TokenKind.MULTI_LINE_COMMENT,
            TokenKind.BOM,
            TokenKind.SKIPPED,
        )

    @property
    def is_string(self) -> bool:
        return self in (TokenKind.IDENTIFIER, TokenKind.QUOTED_STRING, TokenKind.RAW_STRING)

    @property
    def is_value(self) -> bool:
        return self.is_string or self in (TokenKind.NUMBER, TokenKind.KEYWORD)


class TokenFlags(IntFlag):
    """Token metadata flags."""

    NONE = 0
    PRECEDING_LINE_BREAK = 1 << 0  # NEWLINE before
    HAS_ESCAPE = 1 << 1
    MULTILINE = 1 << 2  # """ strings
    UNTERMINATED = 1 << 3


@dataclass(frozen=True, slots=True)
class Token:
    """A single lexed token (trivia or non-trivia)."""

    kind: TokenKind
    range: TextRange
    flags: TokenFlags = TokenFlags.NONE

    def has_preceding_line_break(self) -> bool:
        return bool(self.flags & TokenFlags.PRECEDING_LINE_BREAK)

    @property
    def is_multiline(self) -> bool:
        return bool(self.flags & TokenFlags.MULTILINE)


EOF_TOKEN: Final[Token] = Token(TokenKind.EOF, TextRange.empty(0))
