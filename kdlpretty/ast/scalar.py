"""Scalar interpretation helpers for string, number and keyword tokens."""

from __future__ import annotations

import re

from kdlpretty.ast.model import BooleanValue, KdlValue, NullValue, NumberValue
from kdlpretty.lexer.chars import NEWLINES, is_newline, is_unicode_space

_HEX_RE = re.compile(r"([+-]?)0x([0-9a-fA-F][0-9a-fA-F_]*)")
_OCTAL_RE = re.compile(r"([+-]?)0o([0-7][0-7_]*)")
_BINARY_RE = re.compile(r"([+-]?)0b([01][01_]*)")
_DECIMAL_RE = re.compile(r"[+-]?[0-9][0-9_]*(\.[0-9][0-9_]*)?([eE][+-]?[0-9][0-9_]*)?")
_UNICODE_ESCAPE_RE = re.compile(r"u\{([0-9a-fA-F]{1,6})\}")
_NEWLINE_RE = re.compile("\r\n|[" + re.escape("".join(sorted(NEWLINES))) + "]")

_SIMPLE_ESCAPES: dict[str, str] = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    '"': '"',
    "b": "\b",
    "f": "\f",
    "s": " ",
}

_KEYWORDS: dict[str, KdlValue] = {
    "#true": BooleanValue(True),
    "#false": BooleanValue(False),
    "#null": NullValue(),
    "#inf": NumberValue(float("inf")),
    "#-inf": NumberValue(float("-inf")),
    "#nan": NumberValue(float("nan")),
}

# v1 spellings, accepted as values in permissive mode
BARE_KEYWORDS: dict[str, KdlValue] = {
    "true": BooleanValue(True),
    "false": BooleanValue(False),
    "null": NullValue(),
}


def parse_number(text: str) -> int | float | None:
    for regex, base in ((_HEX_RE, 16), (_OCTAL_RE, 8), (_BINARY_RE, 2)):
        match = regex.fullmatch(text)
        if match is not None:
            sign, digits = match.groups()
            value = int(digits.replace("_", ""), base)
            return -value if sign == "-" else value

    match = _DECIMAL_RE.fullmatch(text)
    if match is None:
        return None

    cleaned = text.replace("_", "")
    if match.group(1) is None and match.group(2) is None:
        return int(cleaned)
    return float(cleaned)


def parse_keyword(text: str) -> KdlValue | None:
    return _KEYWORDS.get(text)


def decode_quoted_string(text: str, *, multiline: bool = False) -> str | None:
    """Decode a `"..."` or `\"\"\"...\"\"\"` token, or return None if it is malformed."""
    if multiline:
        body = _strip_whitespace_escapes(text[3:-3])
        if body is None:
            return None
        dedented = _dedent(body)
        if dedented is None:
            return None
        return _unescape(dedented)
    return _unescape(text[1:-1])


def decode_raw_string(text: str, *, multiline: bool = False) -> str | None:
    """Decode a `#"..."#` or `#\"\"\"...\"\"\"#` token, or return None if it is malformed."""
    hashes = len(text) - len(text.lstrip("#"))
    quotes = 3 if multiline else 1
    body = text[hashes + quotes : len(text) - hashes - quotes]
    if multiline:
        return _dedent(body)
    return body


def _unescape(body: str) -> str | None:
    out: list[str] = []
    index = 0
    while index < len(body):
        ch = body[index]
        if ch != "\\":
            out.append(ch)
            index += 1
            continue

        index += 1
        if index >= len(body):
            return None
        escape = body[index]
        if escape in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[escape])
            index += 1
        elif escape == "u":
            match = _UNICODE_ESCAPE_RE.match(body, index)
            if match is None:
                return None
            code = int(match.group(1), 16)
            if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
                return None
            out.append(chr(code))
            index = match.end()
        elif is_unicode_space(escape) or is_newline(escape):
            while index < len(body) and (is_unicode_space(body[index]) or is_newline(body[index])):
                index += 1
        else:
            return None
    return "".join(out)


def _strip_whitespace_escapes(body: str) -> str | None:
    """Resolve `\\` + whitespace escapes, leaving every other escape untouched."""
    out: list[str] = []
    index = 0
    while index < len(body):
        ch = body[index]
        if ch != "\\":
            out.append(ch)
            index += 1
            continue
        if index + 1 >= len(body):
            return None
        escape = body[index + 1]
        if is_unicode_space(escape) or is_newline(escape):
            index += 1
            while index < len(body) and (is_unicode_space(body[index]) or is_newline(body[index])):
                index += 1
            continue
        out.append(body[index : index + 2])
        index += 2
    return "".join(out)


def _dedent(body: str) -> str | None:
    lines = _NEWLINE_RE.split(body)
    if len(lines) < 2 or not _is_blank(lines[0]):
        return None

    prefix = lines[-1]
    if not _is_blank(prefix):
        return None

    dedented: list[str] = []
    for line in lines[1:-1]:
        if _is_blank(line):
            dedented.append("")
        elif line.startswith(prefix):
            dedented.append(line[len(prefix) :])
        else:
            return None
    return "\n".join(dedented)


def _is_blank(line: str) -> bool:
    return all(is_unicode_space(ch) for ch in line)


__all__ = [
    "BARE_KEYWORDS",
    "decode_quoted_string",
    "decode_raw_string",
    "parse_keyword",
    "parse_number",
]
