"""Source text offsets and ranges."""

from kdlpretty.text.text import LineColumn, LineIndex, TextRange, slice_text_range

__all__ = [
    "LineColumn",
    "LineIndex",
    "TextRange",
    "slice_text_range",
]
