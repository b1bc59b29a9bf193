from bisect import bisect_right
from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class TextRange:
    """
    Half-open range [start, end) in text, as python string indices.

    Invariant:
    - 0 <= start <= end
    """

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < 0:
            raise ValueError("TextRange positions cannot be negative")
        if self.start > self.end:
            raise ValueError("TextRange invariant violated: start > end")

    @staticmethod
    def empty(offset: int) -> "TextRange":
        """Create an empty TextRange at the given offset."""
        return TextRange(offset, offset)

    def as_tuple(self) -> tuple[int, int]:
        """Get the range as a tuple of (start, end) integers."""
        return (self.start, self.end)

    def __repr__(self) -> str:
        return f"TextRange({self.start}, {self.end})"


@dataclass(frozen=True, slots=True)
class LineColumn:
    """Zero-based line and column of an offset."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line + 1}:{self.column + 1}"


class LineIndex:
    """Offset to line/column lookup for one source text."""

    def __init__(self, source: str) -> None:
        starts = [0]
        index = 0
        while index < len(source):
            ch = source[index]
            if ch == "\r" and source.startswith("\r\n", index):
                index += 2
                starts.append(index)
                continue
            index += 1
            if ch in "\n\r\x0b\x0c\x85\u2028\u2029":
                starts.append(index)
        self._line_starts = starts

    def line_column(self, offset: int) -> LineColumn:
        line = bisect_right(self._line_starts, offset) - 1
        return LineColumn(line=line, column=offset - self._line_starts[line])


def slice_text_range(source: str, range: TextRange) -> str:
    """Get the substring of the source text covered by the given TextRange.

    Coord system matches python string indices so we can just do this.
    """
    return source[range.start : range.end]
