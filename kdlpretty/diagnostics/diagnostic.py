"""Diagnostic record shared by the lexer, parser and pipeline."""

from dataclasses import dataclass
from typing import Literal

from kdlpretty.text import TextRange

Severity = Literal["error", "warning"]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A problem found in KDL source.

    Errors stop formatting; warnings (permissive-mode v1 keywords) do not.
    """

    code: str
    message: str
    range: TextRange
    severity: Severity = "error"
    hint: str | None = None
    category: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity == "error"
