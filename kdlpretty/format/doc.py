"""Width-aware layout documents: group / indent / align / line.

A `Doc` is a tree of strings, concatenations (lists) and layout commands. A
`Group` is printed flat (every soft `line` becomes a space) when its contents
fit in the remaining width and contain no forced break; otherwise it is
printed broken (every `line` becomes a newline at the current indentation).
"""

from __future__ import annotations

import unicodedata
from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import Final, Protocol


@dataclass(frozen=True, slots=True)
class Group:
    contents: Doc
    should_break: bool = False


@dataclass(frozen=True, slots=True)
class Indent:
    contents: Doc


@dataclass(frozen=True, slots=True)
class Align:
    width: int
    contents: Doc


@dataclass(frozen=True, slots=True)
class Line:
    """Space (or nothing when soft) in flat mode, newline in break mode.

    Hard lines are newlines in both modes. Literal lines reset the column to
    zero instead of re-indenting.
    """

    hard: bool = False
    soft: bool = False
    literal: bool = False


@dataclass(frozen=True, slots=True)
class IfBreak:
    break_contents: Doc
    flat_contents: Doc = ""


@dataclass(frozen=True, slots=True)
class LineSuffix:
    """Contents deferred to just before the next newline; never affects fitting."""

    contents: Doc


@dataclass(frozen=True, slots=True)
class BreakParent:
    pass


type Doc = str | list[Doc] | Group | Indent | Align | Line | IfBreak | LineSuffix | BreakParent


BREAK_PARENT: Final[BreakParent] = BreakParent()
LINE: Final[Line] = Line()
SOFT_LINE: Final[Line] = Line(soft=True)
HARD_LINE_WITHOUT_BREAK_PARENT: Final[Line] = Line(hard=True)
LITERAL_LINE_WITHOUT_BREAK_PARENT: Final[Line] = Line(hard=True, literal=True)

line: Final[Doc] = LINE
softline: Final[Doc] = SOFT_LINE
hardline: Final[Doc] = [HARD_LINE_WITHOUT_BREAK_PARENT, BREAK_PARENT]
hardline_without_break_parent: Final[Doc] = HARD_LINE_WITHOUT_BREAK_PARENT
literal_line: Final[Doc] = [LITERAL_LINE_WITHOUT_BREAK_PARENT, BREAK_PARENT]
break_parent: Final[Doc] = BREAK_PARENT


def group(contents: Doc, *, should_break: bool = False) -> Group:
    return Group(contents, should_break=should_break)


def indent(contents: Doc) -> Indent:
    return Indent(contents)


def align(width: int, contents: Doc) -> Align:
    return Align(width, contents)


def if_break(break_contents: Doc, flat_contents: Doc = "") -> IfBreak:
    return IfBreak(break_contents, flat_contents)


def line_suffix(contents: Doc) -> LineSuffix:
    return LineSuffix(contents)


def join(separator: Doc, parts: Iterable[Doc]) -> list[Doc]:
    joined: list[Doc] = []
    for index, part in enumerate(parts):
        if index > 0:
            joined.append(separator)
        joined.append(part)
    return joined


def string_width(text: str) -> int:
    """Display width: wide East Asian characters count 2, combining marks 0."""
    if text.isascii():
        return len(text)

    width = 0
    for ch in text:
        if unicodedata.combining(ch) or unicodedata.category(ch) in ("Cc", "Cf", "Me", "Mn"):
            continue
        width += 2 if unicodedata.east_asian_width(ch) in ("F", "W") else 1
    return width


class _Mode(IntEnum):
    BREAK = 1
    FLAT = 2


@dataclass(frozen=True, slots=True)
class _Indentation:
    value: str = ""

    @property
    def length(self) -> int:
        return len(self.value)

    def add(self, width: int) -> _Indentation:
        return _Indentation(self.value + " " * width)


type _Command = tuple[_Indentation, _Mode, Doc]


def propagate_breaks(doc: Doc) -> set[int]:
    """Return the ids of every group that must print broken.

    A group breaks when it was built with `should_break` or when anything
    inside it (a nested broken group included) carries a `BreakParent`.
    """
    broken: set[int] = set()

    def visit(current: Doc) -> bool:
        match current:
            case str() | Line():
                return False
            case BreakParent():
                return True
            case list():
                found = False
                for part in current:
                    found = visit(part) or found
                return found
            case Group():
                found = visit(current.contents) or current.should_break
                if found:
                    broken.add(id(current))
                return found
            case Indent() | Align() | LineSuffix():
                return visit(current.contents)
            case IfBreak():
                in_break = visit(current.break_contents)
                in_flat = visit(current.flat_contents)
                return in_break or in_flat
        raise TypeError(f"Unexpected doc part: {current!r}")

    visit(doc)
    return broken


def print_doc_to_string(doc: Doc, width: int, *, indent_width: int = 2) -> str:
    broken = propagate_breaks(doc)
    commands: list[_Command] = [(_Indentation(), _Mode.BREAK, doc)]
    out: list[str] = []
    line_suffixes: list[_Command] = []
    position = 0
    should_remeasure = False

    while commands or line_suffixes:
        if not commands:
            commands.extend(reversed(line_suffixes))
            line_suffixes.clear()

        indentation, mode, current = commands.pop()
        match current:
            case str():
                out.append(current)
                position += string_width(current)
            case list():
                for part in reversed(current):
                    commands.append((indentation, mode, part))
            case Indent():
                commands.append((indentation.add(indent_width), mode, current.contents))
            case Align():
                commands.append((indentation.add(current.width), mode, current.contents))
            case Group():
                is_broken = id(current) in broken
                if mode == _Mode.FLAT and not should_remeasure:
                    commands.append((indentation, _Mode.BREAK if is_broken else _Mode.FLAT, current.contents))
                    continue
                should_remeasure = False
                flat: _Command = (indentation, _Mode.FLAT, current.contents)
                if not is_broken and _fits(flat, commands, width - position, broken):
                    commands.append(flat)
                else:
                    commands.append((indentation, _Mode.BREAK, current.contents))
            case IfBreak():
                contents = current.break_contents if mode == _Mode.BREAK else current.flat_contents
                commands.append((indentation, mode, contents))
            case LineSuffix():
                line_suffixes.append((indentation, mode, current.contents))
            case Line():
                if mode == _Mode.FLAT and not current.hard:
                    if not current.soft:
                        out.append(" ")
                        position += 1
                    continue
                if mode == _Mode.FLAT:
                    should_remeasure = True
                if line_suffixes:
                    commands.append((indentation, mode, current))
                    commands.extend(reversed(line_suffixes))
                    line_suffixes.clear()
                    continue
                if current.literal:
                    out.append("\n")
                    position = 0
                else:
                    _trim_trailing_whitespace(out)
                    out.append("\n" + indentation.value)
                    position = indentation.length
            case BreakParent():
                pass
            case _:
                raise TypeError(f"Unexpected doc part: {current!r}")

    return "".join(out)


def _fits(next_command: _Command, rest: list[_Command], width: int, broken: set[int]) -> bool:
    rest_index = len(rest)
    commands: list[tuple[_Mode, Doc]] = [(next_command[1], next_command[2])]

    while width >= 0:
        if not commands:
            if rest_index == 0:
                return True
            rest_index -= 1
            commands.append((rest[rest_index][1], rest[rest_index][2]))
            continue

        mode, current = commands.pop()
        match current:
            case str():
                width -= string_width(current)
            case list():
                for part in reversed(current):
                    commands.append((mode, part))
            case Indent() | Align():
                commands.append((mode, current.contents))
            case Group():
                commands.append((_Mode.BREAK if id(current) in broken else mode, current.contents))
            case IfBreak():
                commands.append((mode, current.break_contents if mode == _Mode.BREAK else current.flat_contents))
            case Line():
                if mode == _Mode.BREAK or current.hard:
                    return True
                if not current.soft:
                    width -= 1
            case LineSuffix() | BreakParent():
                pass

    return False


def _trim_trailing_whitespace(out: list[str]) -> None:
    while out:
        stripped = out[-1].rstrip(" \t")
        if stripped:
            out[-1] = stripped
            return
        out.pop()


class LayoutBackend(Protocol):
    """Layout primitives the KDL printer is written against."""

    def line(self) -> Doc: ...

    def hardline(self) -> Doc: ...

    def hardline_without_break_parent(self) -> Doc: ...

    def literal_line(self) -> Doc: ...

    def break_parent(self) -> Doc: ...

    def group(self, contents: Doc) -> Doc: ...

    def indent(self, contents: Doc) -> Doc: ...

    def align(self, width: int, contents: Doc) -> Doc: ...

    def if_break(self, break_contents: Doc, flat_contents: Doc = "") -> Doc: ...

    def line_suffix(self, contents: Doc) -> Doc: ...

    def join(self, separator: Doc, parts: Iterable[Doc]) -> Doc: ...

    def width(self, text: str) -> int: ...

    def render(self, doc: Doc, width: int) -> str: ...


@dataclass(frozen=True, slots=True)
class DocLayout:
    """Default `LayoutBackend` over the `Doc` tree in this module."""

    indent_width: int = 2

    def line(self) -> Doc:
        return line

    def hardline(self) -> Doc:
        return hardline

    def hardline_without_break_parent(self) -> Doc:
        return hardline_without_break_parent

    def literal_line(self) -> Doc:
        return literal_line

    def break_parent(self) -> Doc:
        return break_parent

    def group(self, contents: Doc) -> Doc:
        return group(contents)

    def indent(self, contents: Doc) -> Doc:
        return indent(contents)

    def align(self, width: int, contents: Doc) -> Doc:
        return align(width, contents)

    def if_break(self, break_contents: Doc, flat_contents: Doc = "") -> Doc:
        return if_break(break_contents, flat_contents)

    def line_suffix(self, contents: Doc) -> Doc:
        return line_suffix(contents)

    def join(self, separator: Doc, parts: Iterable[Doc]) -> Doc:
        return join(separator, parts)

    def width(self, text: str) -> int:
        return string_width(text)

    def render(self, doc: Doc, width: int) -> str:
        return print_doc_to_string(doc, width, indent_width=self.indent_width)


__all__ = [
    "Align",
    "BreakParent",
    "Doc",
    "DocLayout",
    "Group",
    "IfBreak",
    "Indent",
    "LayoutBackend",
    "Line",
    "LineSuffix",
    "align",
    "break_parent",
    "group",
    "hardline",
    "hardline_without_break_parent",
    "if_break",
    "indent",
    "join",
    "line",
    "line_suffix",
    "literal_line",
    "print_doc_to_string",
    "propagate_breaks",
    "softline",
    "string_width",
]
