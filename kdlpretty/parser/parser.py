"""Token cursor shared by the grammar routines."""

from dataclasses import dataclass

from kdlpretty.diagnostics import Diagnostic, DiagnosticSpec, Severity
from kdlpretty.lexer import EOF_TOKEN, Lexer, Token, TokenKind, token_text
from kdlpretty.parser.options import ParserOptions
from kdlpretty.text import TextRange


@dataclass(frozen=True, slots=True)
class ParserCheckpoint:
    index: int
    diagnostics_len: int


@dataclass(slots=True)
class ParserProgress:
    """Detect parser stalls inside list-style loops."""

    _position: int | None = None

    def has_progressed(self, parser: "Parser") -> bool:
        has_progressed = self._position is None or self._position < parser.offset
        self._position = parser.offset
        return has_progressed

    def assert_progressing(self, parser: "Parser") -> None:
        if not self.has_progressed(parser):
            raise RuntimeError(f"Parser stopped making progress at {parser.current.name} {parser.current_range}")


class Parser:
    """Cursor over the full (trivia-included) token stream of one source text.

    KDL trivia is significant (newlines terminate nodes), so the grammar
    walks trivia tokens explicitly and slices the source text to keep them.
    """

    def __init__(self, source: str, options: ParserOptions | None = None) -> None:
        lexer = Lexer(source)
        self._source = source
        self._options = options or ParserOptions()
        self._tokens = lexer.lex()
        self._lexer_diagnostics = list(lexer.diagnostics)
        self._index = 0
        self._diagnostics: list[Diagnostic] = []

    @property
    def source(self) -> str:
        return self._source

    @property
    def options(self) -> ParserOptions:
        return self._options

    @property
    def current_token(self) -> Token:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return EOF_TOKEN

    @property
    def current(self) -> TokenKind:
        return self.current_token.kind

    @property
    def current_range(self) -> TextRange:
        return self.current_token.range

    @property
    def current_text(self) -> str:
        return token_text(self._source, self.current_token)

    @property
    def offset(self) -> int:
        """Start offset of the current token."""
        return self.current_token.range.start

    def at(self, kind: TokenKind) -> bool:
        return self.current == kind

    def at_set(self, kinds: frozenset[TokenKind] | set[TokenKind]) -> bool:
        return self.current in kinds

    def bump(self) -> Token:
        token = self.current_token
        if token.kind != TokenKind.EOF:
            self._index += 1
        return token

    def eat(self, kind: TokenKind) -> bool:
        if self.current == kind:
            self.bump()
            return True
        return False

    def text_from(self, start: int) -> str:
        """Source text from `start` up to the current token."""
        return self._source[start : self.offset]

    def checkpoint(self) -> ParserCheckpoint:
        return ParserCheckpoint(index=self._index, diagnostics_len=len(self._diagnostics))

    def rewind(self, checkpoint: ParserCheckpoint) -> None:
        self._index = checkpoint.index
        del self._diagnostics[checkpoint.diagnostics_len :]

    def error(
        self,
        spec: DiagnosticSpec,
        *,
        message: str | None = None,
        range: TextRange | None = None,
        severity: Severity | None = None,
    ) -> None:
        diagnostic = Diagnostic(
            code=spec.code,
            message=message or spec.message,
            range=range or self.current_range,
            severity=severity or spec.severity,
            hint=spec.hint,
            category=spec.category,
        )
        if self._diagnostics:
            previous = self._diagnostics[-1]
            if previous.range.start == diagnostic.range.start and previous.code == diagnostic.code:
                return
        self._diagnostics.append(diagnostic)

    def finish(self) -> tuple[list[Diagnostic], list[Diagnostic]]:
        return self._lexer_diagnostics, self._diagnostics
