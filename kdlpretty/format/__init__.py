"""Canonical KDL formatter (layout algebra, literals, trivia, printer)."""

from kdlpretty.format.doc import Doc, DocLayout, LayoutBackend, print_doc_to_string
from kdlpretty.format.literals import print_identifier, print_number, print_string, print_value
from kdlpretty.format.options import FormatOptions, KdlSyntax
from kdlpretty.format.printer import KdlPrinter, render
from kdlpretty.format.runner import run_format
from kdlpretty.format.trivia import TriviaState, print_block_comment, print_line_comment, reconcile_line_space

__all__ = [
    "Doc",
    "DocLayout",
    "FormatOptions",
    "KdlPrinter",
    "KdlSyntax",
    "LayoutBackend",
    "TriviaState",
    "print_block_comment",
    "print_doc_to_string",
    "print_identifier",
    "print_line_comment",
    "print_number",
    "print_string",
    "print_value",
    "reconcile_line_space",
    "render",
    "run_format",
]
