"""Re-tokenize preserved trivia text for the formatter.

Trivia spans are stored verbatim on the AST. The formatter reads them back
through this module in one of two modes: document level (between nodes) and
node level (inside a node header). Slashdashed elements are parsed again so
they can be printed like live ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from kdlpretty.ast import Document, Entry, Node
from kdlpretty.diagnostics import collect_diagnostics, has_errors
from kdlpretty.lexer import TokenKind, lex
from kdlpretty.parser.grammar import (
    at_entry_start,
    at_node_start,
    parse_children,
    parse_entry,
    parse_node,
    skip_line_space,
)
from kdlpretty.parser.parser import Parser


class TriviaKind(StrEnum):
    NEWLINE = "newline"
    SPACE = "space"
    SINGLE_LINE_COMMENT = "single_line_comment"
    MULTI_LINE_COMMENT = "multi_line_comment"
    ESCLINE = "escline"
    SLASHDASH = "slashdash"


@dataclass(frozen=True, slots=True)
class TriviaToken:
    """One piece of trivia.

    - `text` is the verbatim source; single-line comments include their newline.
    - `payload` is the re-parsed element of a `SLASHDASH` token.
    - `nested` holds the comments inside an `ESCLINE` token.
    - `ends_line` is set on a slashdashed node whose terminator was a line end.
    """

    kind: TriviaKind
    text: str
    payload: Node | Entry | Document | None = None
    nested: tuple[TriviaToken, ...] = ()
    ends_line: bool = False


def tokenize_line_space(text: str) -> tuple[TriviaToken, ...]:
    """Tokenize document-level trivia (between, before and after nodes)."""
    parser = Parser(text)
    tokens: list[TriviaToken] = []

    while not parser.at(TokenKind.EOF):
        start = parser.offset
        match parser.current:
            case TokenKind.NEWLINE:
                parser.bump()
                tokens.append(TriviaToken(TriviaKind.NEWLINE, parser.text_from(start)))
            case TokenKind.WHITESPACE | TokenKind.BOM:
                parser.bump()
                tokens.append(TriviaToken(TriviaKind.SPACE, parser.text_from(start)))
            case TokenKind.SINGLE_LINE_COMMENT:
                parser.bump()
                parser.eat(TokenKind.NEWLINE)
                tokens.append(TriviaToken(TriviaKind.SINGLE_LINE_COMMENT, parser.text_from(start)))
            case TokenKind.MULTI_LINE_COMMENT:
                parser.bump()
                tokens.append(TriviaToken(TriviaKind.MULTI_LINE_COMMENT, parser.text_from(start)))
            case TokenKind.ESCLINE:
                tokens.append(_escline(parser))
            case TokenKind.SLASHDASH:
                parser.bump()
                skip_line_space(parser, allow_slashdash=False)
                if not at_node_start(parser):
                    raise ValueError(f"Slashdash without a node in trivia {text!r}")
                node = parse_node(parser)
                tokens.append(
                    TriviaToken(
                        TriviaKind.SLASHDASH,
                        parser.text_from(start),
                        payload=node,
                        ends_line=terminator_ends_line(node.trailing),
                    )
                )
            case kind:
                raise ValueError(f"Unexpected {kind.name} in document trivia {text!r}")

    _ensure_clean(parser, text)
    return tuple(tokens)


def tokenize_node_space(text: str) -> tuple[TriviaToken, ...]:
    """Tokenize trivia found inside a node header (before entries or `{`)."""
    parser = Parser(text)
    tokens: list[TriviaToken] = []

    while not parser.at(TokenKind.EOF):
        start = parser.offset
        match parser.current:
            case TokenKind.WHITESPACE | TokenKind.NEWLINE | TokenKind.BOM:
                parser.bump()
                tokens.append(TriviaToken(TriviaKind.SPACE, parser.text_from(start)))
            case TokenKind.MULTI_LINE_COMMENT:
                parser.bump()
                tokens.append(TriviaToken(TriviaKind.MULTI_LINE_COMMENT, parser.text_from(start)))
            case TokenKind.ESCLINE:
                tokens.append(_escline(parser))
            case TokenKind.SLASHDASH:
                parser.bump()
                skip_line_space(parser, allow_slashdash=False)
                payload: Entry | Document
                if parser.at(TokenKind.LBRACE):
                    payload = parse_children(parser)
                elif at_entry_start(parser):
                    payload = parse_entry(parser)
                else:
                    raise ValueError(f"Slashdash without an entry or block in trivia {text!r}")
                tokens.append(TriviaToken(TriviaKind.SLASHDASH, parser.text_from(start), payload=payload))
            case kind:
                raise ValueError(f"Unexpected {kind.name} in node trivia {text!r}")

    _ensure_clean(parser, text)
    return tuple(tokens)


def _escline(parser: Parser) -> TriviaToken:
    start = parser.offset
    parser.bump()  # \
    nested: list[TriviaToken] = []

    while True:
        if parser.at(TokenKind.WHITESPACE):
            parser.bump()
        elif parser.at(TokenKind.MULTI_LINE_COMMENT):
            nested.append(TriviaToken(TriviaKind.MULTI_LINE_COMMENT, parser.current_text))
            parser.bump()
        else:
            break

    if parser.at(TokenKind.SINGLE_LINE_COMMENT):
        comment_start = parser.offset
        parser.bump()
        parser.eat(TokenKind.NEWLINE)
        nested.append(TriviaToken(TriviaKind.SINGLE_LINE_COMMENT, parser.text_from(comment_start)))
    else:
        parser.eat(TokenKind.NEWLINE)

    return TriviaToken(TriviaKind.ESCLINE, parser.text_from(start), nested=tuple(nested))


def terminator_ends_line(trailing: str) -> bool:
    """Whether a node terminator ends its line (newline or line comment, not `;` alone)."""
    tokens, _ = lex(trailing)
    kinds = [token.kind for token in tokens if token.kind not in (TokenKind.EOF, TokenKind.WHITESPACE)]
    return bool(kinds) and kinds[-1] in (TokenKind.NEWLINE, TokenKind.SINGLE_LINE_COMMENT)


def _ensure_clean(parser: Parser, text: str) -> None:
    lexer_diagnostics, parser_diagnostics = parser.finish()
    diagnostics = collect_diagnostics(lexer_diagnostics, parser_diagnostics)
    if has_errors(diagnostics):
        messages = "; ".join(diagnostic.message for diagnostic in diagnostics)
        raise ValueError(f"Malformed trivia {text!r}: {messages}")


__all__ = [
    "TriviaKind",
    "TriviaToken",
    "terminator_ends_line",
    "tokenize_line_space",
    "tokenize_node_space",
]
