"""Canonical KDL printer.

Every node header (type tag, name, entries, `{`) is one group. Flat, it is a
single line. Broken, each entry goes on its own line ending in a `\\`
continuation, aligned one column past the node name:

    node \\
         prop=#true \\
         "arg"
"""

from __future__ import annotations

from dataclasses import dataclass

from kdlpretty.ast import Document, Entry, Node, Tag
from kdlpretty.format.doc import Doc, DocLayout, LayoutBackend
from kdlpretty.format.literals import print_identifier, print_value
from kdlpretty.format.options import FormatOptions
from kdlpretty.format.trivia import (
    TriviaState,
    print_block_comment,
    print_line_comment,
    reconcile_line_space,
    strip_trailing_blank_lines,
    trim,
)
from kdlpretty.parser.trivia import (
    TriviaKind,
    TriviaToken,
    terminator_ends_line,
    tokenize_line_space,
    tokenize_node_space,
)


@dataclass(frozen=True, slots=True)
class _HeaderItem:
    doc: Doc
    # An escaped-line comment already ends its line with `\`.
    continues: bool = True
    line_comment: str | None = None


class KdlPrinter:
    """Builds layout documents for KDL trees through a `LayoutBackend`."""

    def __init__(self, options: FormatOptions | None = None, layout: LayoutBackend | None = None) -> None:
        self._options = options or FormatOptions()
        self._layout = layout or DocLayout(indent_width=self._options.indent_width)

    @property
    def options(self) -> FormatOptions:
        return self._options

    @property
    def layout(self) -> LayoutBackend:
        return self._layout

    def render(self, document: Document) -> str:
        layout = self._layout
        doc = [self.print_document(document), layout.hardline()]
        return layout.render(doc, self._options.print_width)

    def print_document(self, document: Document) -> Doc:
        layout = self._layout
        parts: list[Doc] = []

        after_newline = True
        if document.nodes:
            printed: list[Doc] = []
            for index, node in enumerate(document.nodes):
                printed.append(self.print_node(node, index == 0, after_newline=after_newline))
                after_newline = terminator_ends_line(node.trailing)
            parts.append(layout.join(layout.hardline(), printed))

        if document.trailing:
            state = TriviaState.initial(is_first=not document.nodes, after_newline=after_newline)
            trailing, _ = reconcile_line_space(tokenize_line_space(document.trailing), state, self, layout)
            parts.extend(strip_trailing_blank_lines(trailing))

        return layout.join(layout.hardline(), parts)

    def print_node(self, node: Node, is_first: bool = False, *, after_newline: bool = True) -> Doc:
        layout = self._layout
        syntax = self._options.syntax

        name = print_identifier(node.name, syntax)
        if node.tag is not None:
            name = f"{self._print_tag(node.tag)}{trim(node.between_tag_and_name)}{name}"
        name_align = layout.width(name) + 1

        entries = list(node.entries)
        fused = _fused_argument(entries)
        if fused is not None:
            name = f"{name} {self.print_entry(fused)}"
            entries = entries[1:]

        items: list[_HeaderItem] = []
        for entry in entries:
            items.extend(self._header_trivia(entry.leading))
            items.append(_HeaderItem(self.print_entry(entry)))
        items.extend(self._header_trivia(node.before_children))

        opens_block = False
        if node.children is not None:
            opens_block = bool(node.children.nodes) or bool(self._empty_block_trivia(node.children))
            items.append(_HeaderItem("{" if opens_block else "{}"))

        tail_comments: list[Doc] = []
        while items and items[-1].line_comment is not None:
            tail_comments.insert(0, items.pop().line_comment)

        suffix, after_comments = self._after_children(node)
        tail_comments.extend(after_comments)

        body: list[Doc] = [self._print_header(name, name_align, items)]
        if opens_block:
            assert node.children is not None
            body.extend(
                [
                    layout.indent([layout.hardline(), self.print_document(node.children)]),
                    layout.hardline(),
                    "}",
                ]
            )
        body.extend(suffix)

        terminator_comment, trailing = self._print_trailing(node.trailing)
        if terminator_comment is not None:
            body.append(layout.line_suffix([" ", terminator_comment]))

        parts: list[Doc] = []
        if node.leading:
            state = TriviaState.initial(is_first=is_first, after_newline=after_newline)
            leading, _ = reconcile_line_space(tokenize_line_space(node.leading), state, self, layout)
            parts.extend(leading)
        parts.append(body)
        parts.extend(tail_comments)
        parts.extend(trailing)
        return layout.join(layout.hardline(), parts)

    def print_entry(self, entry: Entry) -> str:
        """One entry as an atomic string: `[name=][(tag)]value`."""
        syntax = self._options.syntax
        parts: list[str] = []

        if entry.name is not None:
            equals = trim(entry.equals) or "="
            if "=" not in equals:
                raise ValueError(f"Property {entry.name.name!r} has no `=` (got {entry.equals!r})")
            parts.append(print_identifier(entry.name, syntax))
            parts.append(equals)
        elif trim(entry.equals) not in ("", "="):
            raise ValueError(f"Argument entry carries a property separator {entry.equals!r}")

        if entry.tag is not None:
            parts.append(self._print_tag(entry.tag))
            parts.append(trim(entry.between_tag_and_value))

        parts.append(print_value(entry.value, syntax))
        return "".join(parts)

    def _print_tag(self, tag: Tag) -> str:
        name = print_identifier(tag.name, self._options.syntax)
        return f"({trim(tag.leading)}{name}{trim(tag.trailing)})"

    def _print_header(self, name: str, name_align: int, items: list[_HeaderItem]) -> Doc:
        if not items:
            return name

        layout = self._layout
        continuation = layout.if_break(" \\")
        body: list[Doc] = []
        previous_continues = True
        previous_comment = False
        for item in items:
            if item.line_comment is not None:
                # Rides on the line of the previous item, unless that line already ends in a comment.
                body.extend([layout.line() if previous_comment else " ", item.doc])
            else:
                if previous_continues:
                    body.append(continuation)
                body.extend([layout.line(), item.doc])
            previous_continues = item.continues
            previous_comment = item.line_comment is not None

        return layout.group([name, layout.align(name_align, body)])

    def _header_trivia(self, text: str) -> list[_HeaderItem]:
        """Comments and slashdashed entries found between header entries."""
        if not text:
            return []

        layout = self._layout
        items: list[_HeaderItem] = []
        for token in tokenize_node_space(text):
            match token.kind:
                case TriviaKind.MULTI_LINE_COMMENT:
                    items.append(self._header_block_comment(token))
                case TriviaKind.ESCLINE:
                    for nested in token.nested:
                        if nested.kind == TriviaKind.MULTI_LINE_COMMENT:
                            items.append(self._header_block_comment(nested))
                        else:
                            comment = print_line_comment(nested.text)
                            items.append(
                                _HeaderItem(
                                    [layout.break_parent(), f"\\ {comment}"],
                                    continues=False,
                                    line_comment=comment,
                                )
                            )
                case TriviaKind.SLASHDASH:
                    items.append(_HeaderItem(["/-", self._print_slashdash_payload(token)]))
                case _:
                    pass
        return items

    def _header_block_comment(self, token: TriviaToken) -> _HeaderItem:
        return _HeaderItem(print_block_comment(token.text, self._layout))

    def _print_slashdash_payload(self, token: TriviaToken) -> Doc:
        payload = token.payload
        if isinstance(payload, Entry):
            return self.print_entry(payload)
        if isinstance(payload, Document):
            if not payload.nodes and not self._empty_block_trivia(payload):
                return "{}"
            layout = self._layout
            return ["{", layout.indent([layout.hardline(), self.print_document(payload)]), layout.hardline(), "}"]
        raise ValueError(f"Slashdash in a node header must wrap an entry or a block, got {payload!r}")

    def _after_children(self, node: Node) -> tuple[list[Doc], list[Doc]]:
        """Trivia after `}`: inline parts, and line comments for after the node."""
        if not node.after_children:
            return [], []
        if node.children is None:
            raise ValueError(f"Node {node.name.name!r} has trivia after a children block it does not have")

        inline: list[Doc] = []
        comments: list[Doc] = []
        for item in self._header_trivia(node.after_children):
            if item.line_comment is not None:
                comments.append(item.line_comment)
            else:
                inline.extend([" ", item.doc])
        return inline, comments

    def _print_trailing(self, trailing: str) -> tuple[str | None, list[Doc]]:
        """Split node trailing trivia into an end-of-line comment and the rest."""
        text = trailing[1:] if trailing.startswith(";") else trailing
        if not text:
            return None, []

        tokens = list(tokenize_line_space(text))
        while tokens and tokens[0].kind == TriviaKind.SPACE:
            tokens.pop(0)

        comment: str | None = None
        state = TriviaState(emitted_content=True)
        if tokens and tokens[0].kind == TriviaKind.SINGLE_LINE_COMMENT:
            comment = print_line_comment(tokens.pop(0).text)
            state = TriviaState(just_saw_newline=True, emitted_content=True)

        rest, _ = reconcile_line_space(tokens, state, self, self._layout)
        return comment, strip_trailing_blank_lines(rest)

    def _empty_block_trivia(self, children: Document) -> list[Doc]:
        if not children.trailing:
            return []
        parts, _ = reconcile_line_space(
            tokenize_line_space(children.trailing),
            TriviaState.initial(is_first=True),
            self,
            self._layout,
        )
        return strip_trailing_blank_lines(parts)


def _fused_argument(entries: list[Entry]) -> Entry | None:
    """The sole argument, printed on the name, when it leads and has no comments."""
    arguments = [entry for entry in entries if entry.is_argument]
    if len(arguments) != 1 or entries[0] is not arguments[0]:
        return None

    argument = arguments[0]
    for token in tokenize_node_space(argument.leading):
        if token.kind != TriviaKind.SPACE and (token.kind != TriviaKind.ESCLINE or token.nested):
            return None
    return argument


def render(document: Document, options: FormatOptions | None = None) -> str:
    """Canonical text of `document`, ending with exactly one newline."""
    return KdlPrinter(options).render(document)


__all__ = [
    "KdlPrinter",
    "render",
]
