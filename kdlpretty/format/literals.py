"""Canonical spellings of KDL scalars and identifiers."""

import math
import re
from decimal import Decimal
from typing import assert_never

from kdlpretty.ast import BooleanValue, Identifier, KdlValue, NullValue, NumberValue, StringValue
from kdlpretty.format.options import KdlSyntax
from kdlpretty.lexer.chars import (
    NEWLINES,
    RESERVED_IDENTIFIERS,
    UNICODE_SPACES,
    is_disallowed,
    is_identifier_char,
    is_newline,
)

# Text that would lex as a number if written bare.
_NUMBER_LIKE_RE = re.compile(r"[+-]?\.?[0-9]")

_V1_NON_IDENTIFIER_CHARS = frozenset('\\/(){}<>;[]=,"')
_V1_RESERVED_IDENTIFIERS = frozenset({"true", "false", "null"})

_QUOTED_ESCAPES: dict[str, str] = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}


def print_value(value: KdlValue, syntax: KdlSyntax = KdlSyntax.V2) -> str:
    match value:
        case StringValue(text):
            return print_string(text, syntax)
        case BooleanValue(flag):
            keyword = "true" if flag else "false"
            return keyword if syntax == KdlSyntax.V1 else f"#{keyword}"
        case NullValue():
            return "null" if syntax == KdlSyntax.V1 else "#null"
        case NumberValue(number):
            return print_number(number, syntax)
        case _:
            assert_never(value)


def print_identifier(identifier: Identifier, syntax: KdlSyntax = KdlSyntax.V2) -> str:
    """Bare when the name is a valid plain identifier, otherwise a string."""
    name = identifier.name
    if syntax == KdlSyntax.V1:
        if _is_v1_plain_identifier(name):
            return name
    elif _is_plain_identifier(name):
        return name
    return print_string(name, syntax)


def print_string(text: str, syntax: KdlSyntax = KdlSyntax.V2) -> str:
    """Quoted string, or raw string with the fewest hashes that delimit `text`."""
    hashes = 0
    while f'"{"#" * hashes}' in text:
        hashes += 1

    if hashes == 0 or not _can_be_raw(text):
        return _quote(text)

    delimiter = "#" * hashes
    prefix = "r" if syntax == KdlSyntax.V1 else ""
    return f'{prefix}{delimiter}"{text}"{delimiter}'


def print_number(number: int | float, syntax: KdlSyntax = KdlSyntax.V2) -> str:
    if isinstance(number, int):
        return str(number)

    if math.isnan(number) or math.isinf(number):
        if syntax == KdlSyntax.V1:
            raise ValueError(f"{number} cannot be written in KDL v1")
        if math.isnan(number):
            return "#nan"
        return "#-inf" if number < 0 else "#inf"

    return format_float(number)


def format_float(number: float) -> str:
    """Shortest round-trip decimal text, laid out like ECMAScript `Number#toString`."""
    if number == 0:
        return "0"

    sign = "-" if number < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(number))).normalize().as_tuple()
    digits = "".join(str(digit) for digit in digit_tuple)
    k = len(digits)
    n = int(exponent) + k

    if k <= n <= 21:
        return sign + digits + "0" * (n - k)
    if 0 < n <= 21:
        return f"{sign}{digits[:n]}.{digits[n:]}"
    if -6 < n <= 0:
        return f"{sign}0.{'0' * -n}{digits}"

    power = n - 1
    exponent_text = f"e+{power}" if power >= 0 else f"e-{-power}"
    if k == 1:
        return sign + digits + exponent_text
    return f"{sign}{digits[0]}.{digits[1:]}{exponent_text}"


def _quote(text: str) -> str:
    out: list[str] = ['"']
    for ch in text:
        escaped = _QUOTED_ESCAPES.get(ch)
        if escaped is not None:
            out.append(escaped)
        elif is_newline(ch) or is_disallowed(ch):
            out.append("\\" + f"u{{{ord(ch):x}}}")
        else:
            out.append(ch)
    out.append('"')
    return "".join(out)


def _can_be_raw(text: str) -> bool:
    # `#""...` would open a multi-line raw string.
    if f'"{text}"'.startswith('"""'):
        return False
    return not any(is_newline(ch) or is_disallowed(ch) for ch in text)


def _is_plain_identifier(name: str) -> bool:
    if not name or name in RESERVED_IDENTIFIERS or _NUMBER_LIKE_RE.match(name):
        return False
    return all(is_identifier_char(ch) for ch in name)


def _is_v1_plain_identifier(name: str) -> bool:
    if not name or name in _V1_RESERVED_IDENTIFIERS or _NUMBER_LIKE_RE.match(name):
        return False
    if name.startswith(('r"', "r#")):
        return False
    return all(
        ch not in _V1_NON_IDENTIFIER_CHARS
        and ch not in UNICODE_SPACES
        and ch not in NEWLINES
        and ch != "#"
        and not is_disallowed(ch)
        for ch in name
    )


__all__ = [
    "format_float",
    "print_identifier",
    "print_number",
    "print_string",
    "print_value",
]
