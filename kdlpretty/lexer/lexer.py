"""Lexer."""

from dataclasses import dataclass

from kdlpretty.diagnostics import Diagnostic, DiagnosticSpec
from kdlpretty.diagnostics.codes import (
    LEXER_DISALLOWED_CHARACTER,
    LEXER_INVALID_KEYWORD,
    LEXER_UNTERMINATED_COMMENT,
    LEXER_UNTERMINATED_STRING,
)
from kdlpretty.lexer.chars import (
    RESERVED_IDENTIFIERS,
    is_digit,
    is_disallowed,
    is_identifier_char,
    is_newline,
    is_unicode_space,
)
from kdlpretty.lexer.tokens import Token, TokenFlags, TokenKind
from kdlpretty.text import TextRange, slice_text_range


@dataclass(frozen=True, slots=True)
class LexerCheckpoint:
    """Lexer checkpoint."""

    position: int
    after_newline: bool
    eof_emitted: bool
    diagnostics_position: int


class Lexer:
    """Lossless lexer that emits trivia and non-trivia tokens."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._after_newline = False
        self._current_start = 0
        self._current_flags = TokenFlags.NONE
        self._eof_emitted = False
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> str:
        """Original source text."""
        return self._source

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """List of diagnostics emitted during lexing."""
        return self._diagnostics

    @property
    def position(self) -> int:
        return self._position

    @property
    def is_eof(self) -> bool:
        return self._position >= len(self._source)

    @property
    def current_range(self) -> TextRange:
        return TextRange(self._current_start, self._position)

    def next_token(self) -> Token:
        self._current_start = self._position
        self._current_flags = TokenFlags.NONE

        if self.is_eof:
            self._eof_emitted = True
            return Token(TokenKind.EOF, TextRange.empty(self._position), self._current_flags)

        kind = self._lex_token()
        if self._after_newline:
            self._current_flags |= TokenFlags.PRECEDING_LINE_BREAK
        if kind == TokenKind.NEWLINE:
            self._after_newline = True
        elif not kind.is_trivia:
            self._after_newline = False

        return Token(kind, self.current_range, self._current_flags)

    @property
    def checkpoint(self) -> LexerCheckpoint:
        return LexerCheckpoint(
            position=self._position,
            after_newline=self._after_newline,
            eof_emitted=self._eof_emitted,
            diagnostics_position=len(self._diagnostics),
        )

    def rewind(self, checkpoint: LexerCheckpoint) -> None:
        self._position = checkpoint.position
        self._after_newline = checkpoint.after_newline
        self._eof_emitted = checkpoint.eof_emitted
        del self._diagnostics[checkpoint.diagnostics_position :]

    def lex(self) -> list[Token]:
        tokens: list[Token] = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.kind == TokenKind.EOF:
                break
        return tokens

    def _lex_token(self) -> TokenKind:
        ch = self._current_char()

        if ch == "\ufeff" and self._position == 0:
            self._advance(1)
            return TokenKind.BOM

        if self._consume_newline():
            return TokenKind.NEWLINE

        if is_unicode_space(ch):
            while not self.is_eof and is_unicode_space(self._current_char()):
                self._advance(1)
            return TokenKind.WHITESPACE

        if ch == "/":
            next_ch = self._peek_char()
            if next_ch == "/":
                return self._lex_single_line_comment()
            if next_ch == "*":
                return self._lex_multi_line_comment()
            if next_ch == "-":
                self._advance(2)
                return TokenKind.SLASHDASH

        if ch == "\\":
            self._advance(1)
            return TokenKind.ESCLINE

        if ch == '"':
            return self._lex_quoted_string()

        if ch == "#":
            hashes = self._count_hashes()
            if self._peek_char(hashes) == '"':
                return self._lex_raw_string(hashes)
            return self._lex_keyword()

        punctuation = _PUNCTUATION.get(ch)
        if punctuation is not None:
            self._advance(1)
            return punctuation

        if self._at_number_start():
            self._consume_identifier_chars()
            return TokenKind.NUMBER

        if is_identifier_char(ch):
            self._consume_identifier_chars()
            return TokenKind.IDENTIFIER

        # Fallback: preserve bytes as SKIPPED for recovery.
        self._advance(1)
        if is_disallowed(ch):
            self._error(
                LEXER_DISALLOWED_CHARACTER,
                message=f"Character U+{ord(ch):04X} is not allowed in a KDL document.",
            )
        else:
            self._error(LEXER_DISALLOWED_CHARACTER, message=f"Unexpected character {ch!r}.")
        return TokenKind.SKIPPED

    def _lex_single_line_comment(self) -> TokenKind:
        # Consume until end of line, do not consume the newline itself.
        self._advance(2)
        while not self.is_eof and not is_newline(self._current_char()):
            self._advance(1)
        return TokenKind.SINGLE_LINE_COMMENT

    def _lex_multi_line_comment(self) -> TokenKind:
        self._advance(2)
        depth = 1
        while not self.is_eof:
            if self._current_char() == "/" and self._peek_char() == "*":
                depth += 1
                self._advance(2)
                continue
            if self._current_char() == "*" and self._peek_char() == "/":
                depth -= 1
                self._advance(2)
                if depth == 0:
                    return TokenKind.MULTI_LINE_COMMENT
                continue
            self._advance(1)

        self._error(LEXER_UNTERMINATED_COMMENT)
        self._current_flags |= TokenFlags.UNTERMINATED
        return TokenKind.MULTI_LINE_COMMENT

    def _lex_quoted_string(self) -> TokenKind:
        multiline = self._source.startswith('"""', self._position)
        if multiline:
            self._current_flags |= TokenFlags.MULTILINE
            self._advance(3)
        else:
            self._advance(1)

        while not self.is_eof:
            ch = self._current_char()
            if ch == "\\":
                self._current_flags |= TokenFlags.HAS_ESCAPE
                self._advance(1)
                if self._at_whitespace_escape():
                    while not self.is_eof:
                        if is_unicode_space(self._current_char()):
                            self._advance(1)
                        elif not self._consume_newline():
                            break
                elif not self.is_eof:
                    self._advance(1)
                continue
            if multiline:
                if self._source.startswith('"""', self._position):
                    self._advance(3)
                    return TokenKind.QUOTED_STRING
            elif ch == '"':
                self._advance(1)
                return TokenKind.QUOTED_STRING
            elif is_newline(ch):
                break
            self._advance(1)

        self._error(LEXER_UNTERMINATED_STRING)
        self._current_flags |= TokenFlags.UNTERMINATED
        return TokenKind.QUOTED_STRING

    def _lex_raw_string(self, hashes: int) -> TokenKind:
        self._advance(hashes)
        multiline = self._source.startswith('"""', self._position)
        if multiline:
            self._current_flags |= TokenFlags.MULTILINE
            closer = '"""' + "#" * hashes
            self._advance(3)
        else:
            closer = '"' + "#" * hashes
            self._advance(1)

        while not self.is_eof:
            if self._source.startswith(closer, self._position):
                self._advance(len(closer))
                return TokenKind.RAW_STRING
            if not multiline and is_newline(self._current_char()):
                break
            self._advance(1)

        self._error(LEXER_UNTERMINATED_STRING)
        self._current_flags |= TokenFlags.UNTERMINATED
        return TokenKind.RAW_STRING

    def _lex_keyword(self) -> TokenKind:
        self._advance(1)
        self._consume_identifier_chars()
        name = self._source[self._current_start + 1 : self._position]
        if name not in RESERVED_IDENTIFIERS:
            self._error(LEXER_INVALID_KEYWORD, message=f"Unknown keyword #{name}.")
        return TokenKind.KEYWORD

    def _at_number_start(self) -> bool:
        ch = self._current_char()
        if is_digit(ch):
            return True
        if ch == "+" or ch == "-":
            next_ch = self._peek_char()
            return is_digit(next_ch) or (next_ch == "." and is_digit(self._peek_char(2)))
        return ch == "." and is_digit(self._peek_char())

    def _at_whitespace_escape(self) -> bool:
        ch = self._current_char()
        return not self.is_eof and (is_unicode_space(ch) or is_newline(ch))

    def _count_hashes(self) -> int:
        count = 0
        while self._peek_char(count) == "#":
            count += 1
        return count

    def _consume_identifier_chars(self) -> None:
        while not self.is_eof and is_identifier_char(self._current_char()):
            self._advance(1)

    def _consume_newline(self) -> bool:
        ch = self._current_char()
        if ch == "\r" and self._peek_char() == "\n":
            self._advance(2)
            return True
        if is_newline(ch):
            self._advance(1)
            return True
        return False

    def _error(
        self,
        spec: DiagnosticSpec,
        *,
        message: str | None = None,
    ) -> None:
        self._diagnostics.append(
            Diagnostic(
                code=spec.code,
                message=message or spec.message,
                range=TextRange(self._current_start, self._position),
                severity=spec.severity,
                hint=spec.hint,
                category=spec.category,
            )
        )

    def _current_char(self) -> str:
        if self.is_eof:
            return "\0"
        return self._source[self._position]

    def _peek_char(self, ahead: int = 1) -> str:
        index = self._position + ahead
        if index >= len(self._source):
            return "\0"
        return self._source[index]

    def _advance(self, steps: int) -> None:
        self._position += steps


_PUNCTUATION: dict[str, TokenKind] = {
    "=": TokenKind.EQUALS,
    ";": TokenKind.SEMICOLON,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
}


def token_text(source: str, token: Token) -> str:
    """Get the text of a token from the source string based on its range."""
    if token.kind == TokenKind.EOF:
        return ""
    return slice_text_range(source, token.range)


def lex(source: str) -> tuple[list[Token], list[Diagnostic]]:
    """Lex a whole source text."""
    lexer = Lexer(source)
    tokens = lexer.lex()
    return tokens, lexer.diagnostics


def dump_tokens(tokens: list[Token], source: str, diagnostics: list[Diagnostic] | None = None) -> None:
    """Print token list with kind, range, flags, and text for debugging."""
    for i, tok in enumerate(tokens):
        text = token_text(source, tok)
        print(f"{i:03d} {tok.kind.name:<20} range={tok.range.as_tuple()} flags={tok.flags!r} text={text!r}")

    if diagnostics is not None:
        print("\nDiagnostics:")
        for d in diagnostics:
            print(f"- {d.severity.upper()} {d.code} range={d.range.as_tuple()} message={d.message}")
