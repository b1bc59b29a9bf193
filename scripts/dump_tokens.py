#!/usr/bin/env python
import argparse
from pathlib import Path

from kdlpretty.lexer import dump_tokens, lex
from kdlpretty.parser import tokenize_line_space


def main() -> None:
    parser = argparse.ArgumentParser(description="Dump KDL lexer tokens for debugging")
    parser.add_argument("path", type=Path, help="KDL file to lex")
    parser.add_argument(
        "--trivia",
        action="store_true",
        help="Treat the whole file as document-level trivia and dump trivia tokens instead",
    )
    args = parser.parse_args()

    text = args.path.read_text(encoding="utf-8")

    if args.trivia:
        for idx, token in enumerate(tokenize_line_space(text)):
            print(f"[{idx}] {token.kind.name:<20} text={token.text!r} ends_line={token.ends_line}")
        return

    tokens, diagnostics = lex(text)
    dump_tokens(tokens, text, diagnostics)


if __name__ == "__main__":
    main()
