#!/usr/bin/env python3
"""Format (or check) KDL files in place."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from tqdm import tqdm

from kdlpretty.diagnostics import format_diagnostic
from kdlpretty.format import FormatOptions, KdlSyntax
from kdlpretty.pipeline import run_check, run_format

logger = logging.getLogger("format_kdl")


def _collect_kdl_files(paths: list[Path]) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(path.rglob("*.kdl")))
        elif path.is_file():
            files.append(path)
        else:
            raise SystemExit(f"No such file or directory: {path}")
    return files


def main() -> int:
    parser = argparse.ArgumentParser(description="Canonically format KDL documents")
    parser.add_argument("paths", nargs="+", type=Path, help="KDL files or directories to scan for *.kdl")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--check", action="store_true", help="Exit 1 if any file is not formatted")
    mode.add_argument("--write", action="store_true", help="Rewrite files in place")
    parser.add_argument("--width", type=int, default=80, help="Maximum line width (default: 80)")
    parser.add_argument(
        "--syntax",
        choices=[syntax.value for syntax in KdlSyntax],
        default=KdlSyntax.V2.value,
        help="Output dialect (default: v2)",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable tqdm progress bars",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    files = _collect_kdl_files(args.paths)
    options = FormatOptions(print_width=args.width, syntax=KdlSyntax(args.syntax))
    print_to_stdout = not args.check and not args.write
    iterator = tqdm(files, desc="kdl", unit="file") if len(files) > 1 and not args.no_progress else files

    failed = 0
    reformatted = 0
    for path in iterator:
        text = path.read_text(encoding="utf-8")

        if args.check:
            check = run_check(text, format_options=options)
            for diagnostic in check.diagnostics:
                print(format_diagnostic(diagnostic, text, path=str(path)))
            if check.has_errors or check.needs_formatting:
                failed += 1
                if check.needs_formatting:
                    print(f"would reformat {path}")
            continue

        result = run_format(text, format_options=options)
        for diagnostic in result.diagnostics:
            print(format_diagnostic(diagnostic, text, path=str(path)))
        if result.parse.has_errors:
            failed += 1
            continue

        if print_to_stdout:
            print(result.formatted_text, end="")
        elif result.changed:
            path.write_text(result.formatted_text, encoding="utf-8")
            reformatted += 1
            logger.debug("Reformatted %s", path)

    if args.write:
        print(f"{reformatted} reformatted, {len(files) - reformatted - failed} unchanged, {failed} failed")
    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
