from kdlpretty.ast import Node
from kdlpretty.format.doc import Doc, DocLayout
from kdlpretty.format.trivia import (
    BLANK_LINE,
    TriviaState,
    print_block_comment,
    print_line_comment,
    reconcile_line_space,
    strip_trailing_blank_lines,
    trim,
)
from kdlpretty.parser import tokenize_line_space

LAYOUT = DocLayout()


class _NamePrinter:
    def print_node(self, node: Node, is_first: bool = False) -> Doc:
        return node.name.name


def _reconcile(text: str, state: TriviaState) -> tuple[list[Doc], TriviaState]:
    return reconcile_line_space(tokenize_line_space(text), state, _NamePrinter(), LAYOUT)


def _render(doc: Doc) -> str:
    return LAYOUT.render(doc, 80)


def test_initial_state() -> None:
    assert TriviaState.initial(is_first=True) == TriviaState()
    assert TriviaState.initial(is_first=False) == TriviaState(just_saw_newline=True, emitted_content=True)
    assert TriviaState.initial(is_first=False, after_newline=False) == TriviaState(emitted_content=True)


def test_blank_lines_collapse_to_one() -> None:
    parts, state = _reconcile("\n\n\n\n", TriviaState.initial(is_first=False))
    assert parts == [BLANK_LINE]
    assert state.emitted_blank


def test_no_blank_line_before_first_content() -> None:
    parts, _ = _reconcile("\n\n\n", TriviaState.initial(is_first=True))
    assert parts == []


def test_comment_resets_blank_line_tracking() -> None:
    parts, state = _reconcile("\n\n// a\n\n\n// b\n", TriviaState.initial(is_first=False))
    assert parts == [BLANK_LINE, "// a", BLANK_LINE, "// b"]
    assert state == TriviaState(just_saw_newline=True, emitted_content=True)


def test_comments_are_trimmed() -> None:
    parts, _ = _reconcile("   // a   \n", TriviaState.initial(is_first=True))
    assert parts == ["// a"]


def test_block_comment_does_not_end_line() -> None:
    parts, state = _reconcile("/* a */\n\n", TriviaState.initial(is_first=True))
    assert parts == ["/* a */", BLANK_LINE]
    assert state.just_saw_newline


def test_slashdash_node_is_printed() -> None:
    parts, state = _reconcile("/-disabled 1\n", TriviaState.initial(is_first=True))
    assert parts == [["/-", "disabled"]]
    assert state == TriviaState(just_saw_newline=True, emitted_content=True)


def test_escline_comments_are_reconciled() -> None:
    parts, _ = _reconcile("\\ // c\n", TriviaState.initial(is_first=True))
    assert parts == ["// c"]


def test_strip_trailing_blank_lines() -> None:
    assert strip_trailing_blank_lines(["a", BLANK_LINE, "b", BLANK_LINE, BLANK_LINE]) == ["a", BLANK_LINE, "b"]
    assert strip_trailing_blank_lines([BLANK_LINE]) == []


def test_print_line_comment() -> None:
    assert print_line_comment("// hi  \r\n") == "// hi"


def test_single_line_block_comment_is_verbatim() -> None:
    assert print_block_comment("/*  a  */", LAYOUT) == "/*  a  */"


def test_star_block_comment_is_realigned() -> None:
    doc = print_block_comment("/*\n        * one\n    * two\n        */", LAYOUT)
    assert _render(doc) == "/*\n * one\n * two\n */"


def test_other_block_comment_is_verbatim() -> None:
    text = "/*\n  free\n    form\n*/"
    doc = print_block_comment(text, LAYOUT)
    assert _render(LAYOUT.indent([LAYOUT.hardline(), doc])) == "\n  " + text


def test_trim_strips_unicode_spaces_and_bom() -> None:
    assert trim(chr(0x3000) + " x\t" + chr(0xFEFF)) == "x"
