"""Formatter configuration."""

from dataclasses import dataclass
from enum import StrEnum


class KdlSyntax(StrEnum):
    """Output dialect of the printer."""

    # `#true`, `#null`, `#"raw"#`, `#inf`
    V2 = "v2"
    # `true`, `null`, `r#"raw"#`; cannot express NaN or infinity
    V1 = "v1"


@dataclass(frozen=True, slots=True)
class FormatOptions:
    print_width: int = 80
    syntax: KdlSyntax = KdlSyntax.V2
    indent_width: int = 2

    def __post_init__(self) -> None:
        if self.print_width < 1:
            raise ValueError(f"print_width must be positive, got {self.print_width}")
        if self.indent_width < 0:
            raise ValueError(f"indent_width cannot be negative, got {self.indent_width}")
