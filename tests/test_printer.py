import textwrap

import pytest

from kdlpretty import format_text
from kdlpretty.ast import Document, Entry, Identifier, Node, NumberValue, StringValue
from kdlpretty.format import FormatOptions, KdlPrinter, KdlSyntax, render
from kdlpretty.format.doc import DocLayout
from kdlpretty.parser import parse_document
from tests._debug import debug_print_formatted
from tests._shared_cases import FORMAT_CASES, KdlCase, format_case_ids


def _format(source: str, options: FormatOptions | None = None) -> str:
    return render(parse_document(source), options)


@pytest.mark.parametrize("case", FORMAT_CASES, ids=format_case_ids())
def test_format_cases(case: KdlCase) -> None:
    formatted = _format(case.source)
    debug_print_formatted(case.name, case.source, formatted)
    assert formatted == case.expected


@pytest.mark.parametrize("case", FORMAT_CASES, ids=format_case_ids())
def test_format_is_idempotent(case: KdlCase) -> None:
    assert _format(case.expected) == case.expected


def test_empty_document() -> None:
    assert _format("") == "\n"
    assert _format("\n\n") == "\n"


def test_comment_only_document() -> None:
    assert _format("\n// only\n\n") == "// only\n"


def test_tagged_node_aligns_past_tag() -> None:
    source = "(type)node " + " ".join(f"arg{index}=#true" for index in range(10)) + "\n"
    formatted = _format(source)
    lines = formatted.splitlines()
    assert lines[0] == "(type)node \\"
    assert lines[1] == " " * 11 + "arg0=#true \\"
    assert lines[-1] == " " * 11 + "arg9=#true"


def test_print_width_option() -> None:
    source = "node 1 2 3\n"
    assert _format(source, FormatOptions(print_width=10)) == "node 1 2 3\n"
    assert _format(source, FormatOptions(print_width=9)) == "node \\\n     1 \\\n     2 \\\n     3\n"


def test_indent_width_option() -> None:
    assert _format("a {\nb\n}\n", FormatOptions(indent_width=4)) == "a {\n    b\n}\n"


def test_children_do_not_count_against_header_width() -> None:
    source = "node 1 2 {\n  " + "x" * 100 + "\n}\n"
    assert _format(source).startswith("node 1 2 {\n")


def test_v1_syntax() -> None:
    source = 'node #true #null "say \\"hi\\"" key=#false\n'
    expected = 'node true null r#"say "hi""# key=false\n'
    assert _format(source, FormatOptions(syntax=KdlSyntax.V1)) == expected


def test_v1_syntax_rejects_infinity() -> None:
    with pytest.raises(ValueError, match="KDL v1"):
        _format("node #inf\n", FormatOptions(syntax=KdlSyntax.V1))


def test_invalid_options() -> None:
    with pytest.raises(ValueError, match="print_width"):
        FormatOptions(print_width=0)
    with pytest.raises(ValueError, match="indent_width"):
        FormatOptions(indent_width=-1)


def test_block_comment_in_children_is_reindented() -> None:
    source = textwrap.dedent(
        """
        a {
        /*
              * x
           */
          b
        }
        """
    ).lstrip()
    assert _format(source) == "a {\n  /*\n   * x\n   */\n  b\n}\n"


def test_multiline_block_comment_in_header_breaks() -> None:
    source = "node 1 /*\n * c\n */ 2\n"
    assert _format(source) == "node \\\n     1 \\\n     /*\n      * c\n      */ \\\n     2\n"


def test_trailing_escline_comment_moves_after_node() -> None:
    assert _format("node 1 \\ // c\n") == "node 1\n// c\n"


def test_slashdash_after_children_stays_inline() -> None:
    source = "node {\n  a\n} /-{\n  b\n}\n"
    assert _format(source) == "node {\n  a\n} /-{\n  b\n}\n"


def test_slashdash_children_in_header() -> None:
    assert _format("node /-{} {\n  a\n}\n") == "node /-{} {\n  a\n}\n"


def test_non_empty_slashdash_children_in_header_breaks() -> None:
    formatted = _format("node /-{\n  a\n}\n")
    assert formatted == "node \\\n     /-{\n       a\n     }\n"
    assert _format(formatted) == formatted


def test_render_synthesized_document() -> None:
    document = Document(
        nodes=(
            Node(
                name=Identifier("built node"),
                entries=(
                    Entry(value=NumberValue(1.0)),
                    Entry(value=StringValue("v"), name=Identifier("key")),
                ),
                children=Document(nodes=(Node(name=Identifier("child")),)),
            ),
        )
    )
    assert render(document) == '"built node" 1 key="v" {\n  child\n}\n'


def test_property_without_equals_is_rejected() -> None:
    entry = Entry(value=NumberValue(1), name=Identifier("key"), equals=":")
    with pytest.raises(ValueError, match="has no `=`"):
        KdlPrinter().print_entry(entry)


def test_after_children_without_children_is_rejected() -> None:
    node = Node(name=Identifier("a"), after_children=" /-{}")
    with pytest.raises(ValueError, match="children block"):
        render(Document(nodes=(node,)))


def test_printer_with_custom_layout() -> None:
    printer = KdlPrinter(FormatOptions(print_width=40), layout=DocLayout(indent_width=3))
    assert printer.render(parse_document("a {\nb\n}\n")) == "a {\n   b\n}\n"
    assert printer.options.print_width == 40


def test_format_text() -> None:
    assert format_text('"a"   1\n') == "a 1\n"
