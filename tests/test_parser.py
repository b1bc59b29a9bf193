import textwrap

import pytest

from kdlpretty.ast import BooleanValue, Document, Identifier, NullValue, NumberValue, StringValue
from kdlpretty.diagnostics import PARSER_EXPECTED_TOKEN, Diagnostic
from kdlpretty.lexer import TokenKind
from kdlpretty.parser import (
    KdlParseError,
    ParseMode,
    Parser,
    ParserOptions,
    ParserProgress,
    parse,
    parse_document,
)
from tests._debug import debug_dump_ast, debug_dump_diagnostics


def _parse_ok(name: str, source: str) -> Document:
    parsed = parse(source)
    debug_dump_ast(name, parsed.document, source)
    debug_dump_diagnostics(name, parsed.diagnostics)
    assert parsed.diagnostics == []
    return parsed.document


def _codes(diagnostics: list[Diagnostic]) -> list[str]:
    return [diagnostic.code for diagnostic in diagnostics]


def _parse_codes(source: str, mode: ParseMode | None = None) -> list[str]:
    parsed = parse(source, mode=mode)
    debug_dump_diagnostics("parse_codes", parsed.diagnostics, source)
    return _codes(parsed.diagnostics)


def test_simple_document() -> None:
    src = textwrap.dedent(
        """
        // config
        package name="kdl" version=2 {
            author "someone"
            dev #true
        }
        """
    ).lstrip()
    document = _parse_ok("simple_document", src)

    assert [node.name.name for node in document.nodes] == ["package"]
    package = document.nodes[0]
    assert package.leading == "// config\n"
    assert [entry.name.name for entry in package.properties if entry.name is not None] == ["name", "version"]
    assert package.properties[0].value == StringValue("kdl")
    assert package.properties[1].value == NumberValue(2)

    assert package.children is not None
    children = package.children.nodes
    assert [child.name.name for child in children] == ["author", "dev"]
    assert children[0].arguments[0].value == StringValue("someone")
    assert children[1].arguments[0].value == BooleanValue(True)


def test_identifier_keeps_source_representation() -> None:
    document = _parse_ok("identifier_representation", '"node" ##"raw"## bare\n')
    node = document.nodes[0]
    assert node.name == Identifier("node", representation='"node"')
    assert node.entries[0].value == StringValue("raw")
    assert node.entries[1].value == StringValue("bare")


def test_values() -> None:
    document = _parse_ok("values", "n 1 2.5 0x10 #null #false #inf\n")
    values = [entry.value for entry in document.nodes[0].entries]
    assert values[:5] == [
        NumberValue(1),
        NumberValue(2.5),
        NumberValue(16),
        NullValue(),
        BooleanValue(False),
    ]
    assert values[5] == NumberValue(float("inf"))


def test_type_annotations() -> None:
    document = _parse_ok("type_annotations", "(t)node (u8)1 key=(date)\"2024\"\n")
    node = document.nodes[0]
    assert node.tag is not None and node.tag.name.name == "t"
    assert node.entries[0].tag is not None and node.entries[0].tag.name.name == "u8"
    assert node.entries[1].tag is not None and node.entries[1].tag.name.name == "date"
    assert node.entries[1].value == StringValue("2024")


def test_entry_trivia_spans_are_verbatim() -> None:
    document = _parse_ok("entry_trivia", "node  /* c */ 1 \\\n   key = 2\n")
    first, second = document.nodes[0].entries
    assert first.leading == "  /* c */ "
    assert second.leading == " \\\n   "
    assert second.equals == " = "


def test_node_trailing_spans() -> None:
    document = _parse_ok("node_trailing", "a; b // c\nd\n")
    assert [node.trailing for node in document.nodes] == [";", "// c\n", "\n"]
    assert document.nodes[1].leading == " "
    assert document.nodes[1].before_children == " "


def test_semicolon_keeps_following_line_comment() -> None:
    document = _parse_ok("semicolon_comment", "a; // c\nb\n")
    assert document.nodes[0].trailing == "; // c\n"


def test_document_trailing_trivia() -> None:
    document = _parse_ok("document_trailing", "a\n\n// end\n")
    assert document.trailing == "\n// end\n"


def test_slashdash_node_is_kept_as_trivia() -> None:
    document = _parse_ok("slashdash_node", "/-a 1\nb\n")
    assert [node.name.name for node in document.nodes] == ["b"]
    assert document.nodes[0].leading == "/-a 1\n"


def test_slashdash_entries_and_children() -> None:
    document = _parse_ok("slashdash_entries", "node /-1 2 /-{ a } {\n  b\n} /-{ c }\n")
    node = document.nodes[0]
    assert [entry.value for entry in node.entries] == [NumberValue(2)]
    assert node.before_children == " /-{ a } "
    assert node.after_children == " /-{ c }"
    assert node.children is not None
    assert [child.name.name for child in node.children.nodes] == ["b"]


def test_empty_children_block_is_not_none() -> None:
    nodes = _parse_ok("empty_children", "a {}\nb\n").nodes
    assert nodes[0].children is not None and nodes[0].children.nodes == ()
    assert nodes[1].children is None
    assert not nodes[0].has_children()


def test_children_on_one_line() -> None:
    document = _parse_ok("one_line_children", "a { b; c }\n")
    children = document.nodes[0].children
    assert children is not None
    assert [child.name.name for child in children.nodes] == ["b", "c"]
    assert children.nodes[1].before_children == " "
    assert children.trailing == ""


def test_locations() -> None:
    source = "a 1\nbb {\n  c\n}\n"
    document = _parse_ok("locations", source)
    first, second = document.nodes
    assert first.location is not None and source[first.location.start : first.location.end] == "a 1"
    assert second.location is not None and source[second.location.start : second.location.end] == "bb {\n  c\n}"
    entry = first.entries[0]
    assert entry.location is not None and source[entry.location.start : entry.location.end] == "1"


@pytest.mark.parametrize(
    ("source", "code"),
    [
        ("a 1 {\n} 2\n", "PARSER_ENTRY_AFTER_CHILDREN"),
        ("a {\n} {\n}\n", "PARSER_MULTIPLE_CHILDREN"),
        ("a 1\"x\"\n", "PARSER_MISSING_SPACE"),
        ("a /-\n", "PARSER_DANGLING_SLASHDASH"),
        ("a {\n", "PARSER_EXPECTED_TOKEN"),
        ("= 1\n", "PARSER_EXPECTED_NODE"),
        ("a key=\n", "PARSER_EXPECTED_VALUE"),
        ("a 1_x\n", "LEXER_INVALID_NUMBER"),
        ('a "\\q"\n', "LEXER_INVALID_ESCAPE"),
        ('a """\n  x\n y\n  """\n', "LEXER_INVALID_MULTILINE_STRING"),
        ("a #yes\n", "LEXER_INVALID_KEYWORD"),
        ("a \"open\n", "LEXER_UNTERMINATED_STRING"),
        ("a (t\n", "PARSER_EXPECTED_TOKEN"),
        ("a }\n", "PARSER_MISSING_TERMINATOR"),
    ],
    ids=[
        "entry_after_children",
        "multiple_children",
        "missing_space",
        "dangling_slashdash",
        "unclosed_children",
        "expected_node",
        "expected_value",
        "invalid_number",
        "invalid_escape",
        "invalid_multiline",
        "invalid_keyword",
        "unterminated_string",
        "unclosed_tag",
        "missing_terminator",
    ],
)
def test_parse_errors(source: str, code: str) -> None:
    assert code in _parse_codes(source)


def test_bare_keyword_is_an_error_in_strict_mode() -> None:
    parsed = parse("a true\n")
    assert _codes(parsed.diagnostics) == ["LEXER_BARE_KEYWORD"]
    assert parsed.has_errors
    assert parsed.document.nodes[0].entries[0].value == StringValue("true")


def test_bare_keyword_is_a_warning_in_permissive_mode() -> None:
    parsed = parse("a true null\n", mode=ParseMode.PERMISSIVE)
    assert _codes(parsed.diagnostics) == ["LEXER_BARE_KEYWORD", "LEXER_BARE_KEYWORD"]
    assert all(diagnostic.severity == "warning" for diagnostic in parsed.diagnostics)
    assert not parsed.has_errors
    values = [entry.value for entry in parsed.document.nodes[0].entries]
    assert values == [BooleanValue(True), NullValue()]


def test_reserved_node_name_is_an_error() -> None:
    assert _parse_codes("null\n") == ["LEXER_BARE_KEYWORD"]
    assert _parse_codes("null\n", mode=ParseMode.PERMISSIVE) == ["LEXER_BARE_KEYWORD"]


def test_options_and_mode_are_exclusive() -> None:
    with pytest.raises(ValueError, match="Pass either options or mode, not both"):
        parse("a\n", options=ParserOptions(), mode=ParseMode.STRICT)


def test_parser_options_for_mode() -> None:
    assert ParserOptions.for_mode(ParseMode.STRICT).allow_bare_keywords is False
    assert ParserOptions.for_mode(ParseMode.PERMISSIVE).allow_bare_keywords is True


def test_parse_document_raises_with_diagnostics() -> None:
    with pytest.raises(KdlParseError) as excinfo:
        parse_document("a {\n")
    assert _codes(excinfo.value.diagnostics) == ["PARSER_EXPECTED_TOKEN"]
    assert "Expected `}`" in str(excinfo.value)


def test_parse_document_returns_tree() -> None:
    document = parse_document("a\n")
    assert [node.name.name for node in document.nodes] == ["a"]


def test_empty_source() -> None:
    document = _parse_ok("empty", "")
    assert document.nodes == ()
    assert document.trailing == ""


def test_parser_recovers_after_unexpected_token() -> None:
    parsed = parse("a\n} b\nc\n")
    assert "PARSER_EXPECTED_NODE" in _codes(parsed.diagnostics)
    assert [node.name.name for node in parsed.document.nodes] == ["a", "b", "c"]


def test_parser_checkpoint_rewind_drops_diagnostics() -> None:
    parser = Parser("a b")
    checkpoint = parser.checkpoint()
    parser.bump()
    parser.error(PARSER_EXPECTED_TOKEN)
    parser.rewind(checkpoint)
    assert parser.at(TokenKind.IDENTIFIER)
    assert parser.finish() == ([], [])


def test_parser_progress_detects_stall() -> None:
    parser = Parser("a")
    progress = ParserProgress()
    progress.assert_progressing(parser)
    with pytest.raises(RuntimeError, match="stopped making progress"):
        progress.assert_progressing(parser)
