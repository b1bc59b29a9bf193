"""AST data model for KDL documents.

Every whitespace/comment span between structural elements is kept verbatim on
the element that owns it, so the tree can be printed back without losing
comments or slashdashed (disabled) elements.
"""

from __future__ import annotations

from dataclasses import dataclass

from kdlpretty.text import TextRange


@dataclass(frozen=True, slots=True)
class Identifier:
    """A name: node name, property name or type annotation."""

    name: str
    representation: str | None = None


@dataclass(frozen=True, slots=True)
class Tag:
    """Type annotation, e.g. `(u8)`, with the trivia inside the parentheses."""

    name: Identifier
    leading: str = ""
    trailing: str = ""


@dataclass(frozen=True, slots=True)
class StringValue:
    value: str


@dataclass(frozen=True, slots=True)
class BooleanValue:
    value: bool


@dataclass(frozen=True, slots=True)
class NullValue:
    pass


@dataclass(frozen=True, slots=True)
class NumberValue:
    """Numeric value; the source spelling (radix, exponent) is not kept."""

    value: int | float


type KdlValue = StringValue | BooleanValue | NullValue | NumberValue


@dataclass(frozen=True, slots=True)
class Entry:
    """Argument (`value`) or property (`name=value`) of a node."""

    value: KdlValue
    name: Identifier | None = None
    equals: str = "="
    tag: Tag | None = None
    between_tag_and_value: str = ""
    leading: str = ""
    location: TextRange | None = None

    @property
    def is_argument(self) -> bool:
        return self.name is None

    @property
    def is_property(self) -> bool:
        return self.name is not None


@dataclass(frozen=True, slots=True)
class Node:
    """A node with its entries, optional children block and trivia.

    `children is None` means the node has no block at all; an empty
    `Document` means an explicit `{}` block.
    """

    name: Identifier
    entries: tuple[Entry, ...] = ()
    children: Document | None = None
    tag: Tag | None = None
    between_tag_and_name: str = ""
    leading: str = ""
    before_children: str = ""
    after_children: str = ""
    trailing: str = ""
    location: TextRange | None = None

    @property
    def arguments(self) -> tuple[Entry, ...]:
        return tuple(entry for entry in self.entries if entry.is_argument)

    @property
    def properties(self) -> tuple[Entry, ...]:
        return tuple(entry for entry in self.entries if entry.is_property)

    def has_children(self) -> bool:
        return self.children is not None and len(self.children.nodes) > 0


@dataclass(frozen=True, slots=True)
class Document:
    """Ordered nodes plus the trivia after the last node."""

    nodes: tuple[Node, ...] = ()
    trailing: str = ""
    location: TextRange | None = None


__all__ = [
    "BooleanValue",
    "Document",
    "Entry",
    "Identifier",
    "KdlValue",
    "Node",
    "NullValue",
    "NumberValue",
    "StringValue",
    "Tag",
]
