"""Lexer."""

from kdlpretty.lexer.lexer import Lexer, LexerCheckpoint, dump_tokens, lex, token_text
from kdlpretty.lexer.tokens import EOF_TOKEN, Token, TokenFlags, TokenKind

__all__ = [
    "EOF_TOKEN",
    "Lexer",
    "LexerCheckpoint",
    "Token",
    "TokenFlags",
    "TokenKind",
    "dump_tokens",
    "lex",
    "token_text",
]
