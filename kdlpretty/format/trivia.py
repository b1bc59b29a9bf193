"""Re-emit preserved trivia: blank-line collapsing, comment alignment, slashdash.

Document-level trivia is reduced to a list of parts that the caller joins
with hard lines. `BLANK_LINE` marks a single blank line in that list.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Final, Protocol

from kdlpretty.ast import Node
from kdlpretty.format.doc import Doc, LayoutBackend
from kdlpretty.lexer.chars import NEWLINES, UNICODE_SPACES
from kdlpretty.parser.trivia import TriviaKind, TriviaToken

BLANK_LINE: Final[str] = ""

_TRIM_CHARS: Final[str] = "".join(sorted(UNICODE_SPACES)) + chr(0xFEFF)
_NEWLINE_CHARS: Final[str] = "".join(sorted(NEWLINES))
_NEWLINE_RE = re.compile("\r\n|[" + re.escape(_NEWLINE_CHARS) + "]")


class NodePrinter(Protocol):
    """Printer entry point used to re-print slashdashed nodes."""

    def print_node(self, node: Node, is_first: bool = False) -> Doc: ...


@dataclass(frozen=True, slots=True)
class TriviaState:
    """Scan state threaded through `reconcile_line_space`.

    - `just_saw_newline`: the previous token ended a line.
    - `emitted_content`: a comment or node was already printed before this
      point, so a blank line here separates two things.
    - `emitted_blank`: a blank line was already emitted for the current run.
    """

    just_saw_newline: bool = False
    emitted_content: bool = False
    emitted_blank: bool = False

    @classmethod
    def initial(cls, *, is_first: bool, after_newline: bool = True) -> TriviaState:
        """State before the leading trivia of a node.

        The first node of a document never gets a blank line before it.
        `after_newline` tells whether the previous node's terminator ended
        its line (`;` does not).
        """
        if is_first:
            return cls()
        return cls(just_saw_newline=after_newline, emitted_content=True)


def reconcile_line_space(
    tokens: tuple[TriviaToken, ...] | list[TriviaToken],
    state: TriviaState,
    printer: NodePrinter,
    layout: LayoutBackend,
) -> tuple[list[Doc], TriviaState]:
    """Fold document-level trivia tokens into printable parts."""
    parts: list[Doc] = []

    for token in tokens:
        match token.kind:
            case TriviaKind.NEWLINE:
                if state.just_saw_newline and state.emitted_content and not state.emitted_blank:
                    parts.append(BLANK_LINE)
                    state = replace(state, emitted_blank=True)
                state = replace(state, just_saw_newline=True)
            case TriviaKind.SPACE:
                pass
            case TriviaKind.SINGLE_LINE_COMMENT:
                parts.append(print_line_comment(token.text))
                state = TriviaState(just_saw_newline=True, emitted_content=True)
            case TriviaKind.MULTI_LINE_COMMENT:
                parts.append(print_block_comment(token.text, layout))
                state = TriviaState(just_saw_newline=False, emitted_content=True)
            case TriviaKind.ESCLINE:
                nested, state = reconcile_line_space(token.nested, state, printer, layout)
                parts.extend(nested)
            case TriviaKind.SLASHDASH:
                if not isinstance(token.payload, Node):
                    raise ValueError(f"Document-level slashdash must wrap a node, got {token.payload!r}")
                parts.append(["/-", printer.print_node(token.payload)])
                state = TriviaState(just_saw_newline=token.ends_line, emitted_content=True)

    return parts, state


def strip_trailing_blank_lines(parts: list[Doc]) -> list[Doc]:
    end = len(parts)
    while end > 0 and parts[end - 1] == BLANK_LINE:
        end -= 1
    return parts[:end]


def print_line_comment(text: str) -> str:
    """`// comment` without its newline and surrounding whitespace."""
    return trim(text.rstrip(_NEWLINE_CHARS))


def print_block_comment(text: str, layout: LayoutBackend) -> Doc:
    """Print a `/* */` comment.

    When every continuation line starts with `*`, the lines are re-indented
    to one space before the `*`. Any other comment is kept verbatim.
    """
    lines = split_lines(text)
    if len(lines) == 1:
        return text

    if all(trim_start(line).startswith("*") for line in lines[1:]):
        aligned = [trim(lines[0]), *(f" {trim(line)}" for line in lines[1:])]
        return layout.join(layout.hardline(), aligned)

    return layout.join(layout.literal_line(), lines)


def split_lines(text: str) -> list[str]:
    return _NEWLINE_RE.split(text)


def trim_start(text: str) -> str:
    return text.lstrip(_TRIM_CHARS)


def trim(text: str) -> str:
    return text.strip(_TRIM_CHARS)


__all__ = [
    "BLANK_LINE",
    "NodePrinter",
    "TriviaState",
    "print_block_comment",
    "print_line_comment",
    "reconcile_line_space",
    "split_lines",
    "strip_trailing_blank_lines",
    "trim",
    "trim_start",
]
