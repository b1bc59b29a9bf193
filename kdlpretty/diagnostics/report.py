"""Diagnostics helpers."""

from __future__ import annotations

from collections.abc import Iterable

from kdlpretty.diagnostics.diagnostic import Diagnostic
from kdlpretty.text import LineIndex


def collect_diagnostics(*groups: Iterable[Diagnostic]) -> list[Diagnostic]:
    diagnostics: list[Diagnostic] = []
    for group in groups:
        diagnostics.extend(group)
    return sorted(diagnostics, key=lambda d: (d.range.start, d.range.end, d.code))


def has_errors(diagnostics: Iterable[Diagnostic]) -> bool:
    return any(d.is_error for d in diagnostics)


def format_diagnostic(diagnostic: Diagnostic, source: str, *, path: str | None = None) -> str:
    """Render a diagnostic as a single `path:line:col: severity[code] message` line."""
    position = LineIndex(source).line_column(diagnostic.range.start)
    prefix = f"{path}:{position}" if path else str(position)
    text = f"{prefix}: {diagnostic.severity}[{diagnostic.code}] {diagnostic.message}"
    if diagnostic.hint:
        text += f" ({diagnostic.hint})"
    return text
