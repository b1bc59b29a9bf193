"""Character classes of the KDL v2 grammar."""

from typing import Final

UNICODE_SPACES: Final[frozenset[str]] = frozenset(
    "\t \u00a0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a\u202f\u205f\u3000"
)

# "\r\n" is a single newline; handled by the lexer before consulting this set.
NEWLINES: Final[frozenset[str]] = frozenset("\r\n\x0b\x0c\x85\u2028\u2029")

NON_IDENTIFIER_CHARS: Final[frozenset[str]] = frozenset('\\/(){};[]"#=')

RESERVED_IDENTIFIERS: Final[frozenset[str]] = frozenset({"true", "false", "null", "inf", "-inf", "nan"})


def is_newline(ch: str) -> bool:
    return ch in NEWLINES


def is_unicode_space(ch: str) -> bool:
    return ch in UNICODE_SPACES


def is_disallowed(ch: str) -> bool:
    """Code points that may never appear literally in a document."""
    code = ord(ch)
    return (
        code <= 0x08
        or 0x0E <= code <= 0x1F
        or code == 0x7F
        or 0xD800 <= code <= 0xDFFF
        or code in (0x200E, 0x200F, 0xFEFF)
        or 0x202A <= code <= 0x202E
        or 0x2066 <= code <= 0x2069
    )


def is_identifier_char(ch: str) -> bool:
    return not (
        ch in NON_IDENTIFIER_CHARS
        or ch in UNICODE_SPACES
        or ch in NEWLINES
        or is_disallowed(ch)
    )


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"
