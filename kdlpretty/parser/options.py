"""Parser modes and configuration options."""

from dataclasses import dataclass
from enum import StrEnum


class ParseMode(StrEnum):
    """Top-level parser behavior profile."""

    STRICT = "strict"
    PERMISSIVE = "permissive"


@dataclass(frozen=True, slots=True)
class ParserOptions:
    """Feature flags controlling grammar compatibility."""

    mode: ParseMode = ParseMode.STRICT
    # Accept v1 `true`/`false`/`null` values with a warning instead of an error.
    allow_bare_keywords: bool = False

    @staticmethod
    def for_mode(mode: ParseMode) -> "ParserOptions":
        if mode == ParseMode.PERMISSIVE:
            return ParserOptions(mode=mode, allow_bare_keywords=True)

        return ParserOptions(mode=mode, allow_bare_keywords=False)
