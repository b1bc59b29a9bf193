"""KDL grammar routines that build the AST with its trivia spans."""

from kdlpretty.ast import (
    BARE_KEYWORDS,
    Document,
    Entry,
    Identifier,
    KdlValue,
    Node,
    NullValue,
    NumberValue,
    StringValue,
    Tag,
    decode_quoted_string,
    decode_raw_string,
    parse_keyword,
    parse_number,
)
from kdlpretty.diagnostics.codes import (
    LEXER_BARE_KEYWORD,
    LEXER_INVALID_ESCAPE,
    LEXER_INVALID_MULTILINE_STRING,
    LEXER_INVALID_NUMBER,
    PARSER_DANGLING_SLASHDASH,
    PARSER_ENTRY_AFTER_CHILDREN,
    PARSER_EXPECTED_NODE,
    PARSER_EXPECTED_TOKEN,
    PARSER_EXPECTED_VALUE,
    PARSER_MISSING_SPACE,
    PARSER_MISSING_TERMINATOR,
    PARSER_MULTIPLE_CHILDREN,
)
from kdlpretty.lexer import TokenFlags, TokenKind
from kdlpretty.lexer.chars import RESERVED_IDENTIFIERS
from kdlpretty.parser.parser import Parser, ParserProgress
from kdlpretty.text import TextRange

NODE_SPACE: frozenset[TokenKind] = frozenset({TokenKind.WHITESPACE, TokenKind.MULTI_LINE_COMMENT})

LINE_SPACE: frozenset[TokenKind] = NODE_SPACE | frozenset(
    {
        TokenKind.NEWLINE,
        TokenKind.SINGLE_LINE_COMMENT,
        TokenKind.BOM,
    }
)

STRING_TOKENS: frozenset[TokenKind] = frozenset(
    {
        TokenKind.IDENTIFIER,
        TokenKind.QUOTED_STRING,
        TokenKind.RAW_STRING,
    }
)


def parse_source_file(parser: Parser) -> Document:
    return parse_nodes(parser, in_children=False)


def parse_nodes(parser: Parser, *, in_children: bool) -> Document:
    """Parse nodes up to EOF (or `}` inside a children block)."""
    start = parser.offset
    nodes: list[Node] = []
    trivia_start = parser.offset
    progress = ParserProgress()

    while True:
        progress.assert_progressing(parser)
        skip_line_space(parser, in_children=in_children)

        if parser.at(TokenKind.EOF) or (in_children and parser.at(TokenKind.RBRACE)):
            break

        if at_node_start(parser):
            leading = parser.text_from(trivia_start)
            nodes.append(parse_node(parser, leading=leading, in_children=in_children))
            trivia_start = parser.offset
            continue

        parser.error(PARSER_EXPECTED_NODE, message=f"Expected a node, found {parser.current.name}")
        parser.bump()

    return Document(
        nodes=tuple(nodes),
        trailing=parser.text_from(trivia_start),
        location=TextRange(start, parser.offset),
    )


def parse_node(parser: Parser, *, leading: str = "", in_children: bool = False) -> Node:
    start = parser.offset

    tag: Tag | None = None
    between_tag_and_name = ""
    if parser.at(TokenKind.LPAREN):
        tag = parse_tag(parser)
        between_start = parser.offset
        skip_node_space(parser)
        between_tag_and_name = parser.text_from(between_start)

    name = parse_identifier(parser)
    if name is None:
        parser.error(PARSER_EXPECTED_NODE)
        name = Identifier("")

    entries: list[Entry] = []
    trivia_start = parser.offset
    while True:
        had_space = skip_node_space(parser, in_children=in_children, allow_slashdash=True)
        if not at_entry_start(parser):
            break
        if not had_space:
            parser.error(PARSER_MISSING_SPACE)
        entries.append(parse_entry(parser, leading=parser.text_from(trivia_start)))
        trivia_start = parser.offset

    before_children = parser.text_from(trivia_start)
    children: Document | None = None
    after_children = ""
    if parser.at(TokenKind.LBRACE):
        children = parse_children(parser)
        after_start = parser.offset
        _parse_after_children(parser, in_children=in_children)
        after_children = parser.text_from(after_start)

    end = parser.offset
    trailing_start = parser.offset
    parse_node_terminator(parser, in_children=in_children)

    return Node(
        name=name,
        entries=tuple(entries),
        children=children,
        tag=tag,
        between_tag_and_name=between_tag_and_name,
        leading=leading,
        before_children=before_children,
        after_children=after_children,
        trailing=parser.text_from(trailing_start),
        location=TextRange(start, end),
    )


def _parse_after_children(parser: Parser, *, in_children: bool) -> None:
    # Only disabled entries/blocks may follow the children block.
    progress = ParserProgress()
    while True:
        progress.assert_progressing(parser)
        skip_node_space(parser, in_children=in_children, allow_slashdash=True)
        if parser.at(TokenKind.LBRACE):
            parser.error(PARSER_MULTIPLE_CHILDREN)
            parse_children(parser)
        elif at_entry_start(parser):
            parser.error(PARSER_ENTRY_AFTER_CHILDREN)
            parse_entry(parser)
        else:
            return


def parse_node_terminator(parser: Parser, *, in_children: bool) -> None:
    """Consume `;`, a newline or a line comment (`; // ...` keeps the comment too)."""
    if parser.at(TokenKind.NEWLINE):
        parser.bump()
        return

    if parser.at(TokenKind.SEMICOLON):
        parser.bump()
        checkpoint = parser.checkpoint()
        parser.eat(TokenKind.WHITESPACE)
        if parser.at(TokenKind.SINGLE_LINE_COMMENT):
            parser.bump()
            parser.eat(TokenKind.NEWLINE)
        else:
            parser.rewind(checkpoint)
        return

    if parser.at(TokenKind.SINGLE_LINE_COMMENT):
        parser.bump()
        parser.eat(TokenKind.NEWLINE)
        return

    if parser.at(TokenKind.EOF) or (in_children and parser.at(TokenKind.RBRACE)):
        return

    parser.error(PARSER_MISSING_TERMINATOR)


def parse_entry(parser: Parser, *, leading: str = "") -> Entry:
    """Parse `value`, `(tag)value` or `name=(tag)value`."""
    start = parser.offset

    if parser.at_set(STRING_TOKENS):
        checkpoint = parser.checkpoint()
        name = parse_identifier(parser)
        equals_start = parser.offset
        skip_node_space(parser)
        if name is not None and parser.at(TokenKind.EQUALS):
            parser.bump()
            skip_node_space(parser)
            equals = parser.text_from(equals_start)
            tag, between, value = parse_tagged_value(parser)
            return Entry(
                value=value,
                name=name,
                equals=equals,
                tag=tag,
                between_tag_and_value=between,
                leading=leading,
                location=TextRange(start, parser.offset),
            )
        parser.rewind(checkpoint)

    tag, between, value = parse_tagged_value(parser)
    return Entry(
        value=value,
        tag=tag,
        between_tag_and_value=between,
        leading=leading,
        location=TextRange(start, parser.offset),
    )


def parse_tagged_value(parser: Parser) -> tuple[Tag | None, str, KdlValue]:
    tag: Tag | None = None
    between = ""
    if parser.at(TokenKind.LPAREN):
        tag = parse_tag(parser)
        between_start = parser.offset
        skip_node_space(parser)
        between = parser.text_from(between_start)

    value = parse_value(parser)
    if value is None:
        parser.error(PARSER_EXPECTED_VALUE)
        value = NullValue()
    return tag, between, value


def parse_value(parser: Parser) -> KdlValue | None:
    kind = parser.current
    text = parser.current_text

    if kind == TokenKind.IDENTIFIER and text in RESERVED_IDENTIFIERS:
        if parser.options.allow_bare_keywords and text in BARE_KEYWORDS:
            parser.error(
                LEXER_BARE_KEYWORD,
                message=f"Bare keyword `{text}`; use `#{text}`",
                severity="warning",
            )
            parser.bump()
            return BARE_KEYWORDS[text]
        parser.error(LEXER_BARE_KEYWORD, message=f"`{text}` must be written as `#{text}` or quoted")
        parser.bump()
        return StringValue(text)

    if kind in STRING_TOKENS:
        return StringValue(_parse_string(parser))

    if kind == TokenKind.NUMBER:
        number = parse_number(text)
        if number is None:
            parser.error(LEXER_INVALID_NUMBER, message=f"Invalid number literal `{text}`")
            number = 0
        parser.bump()
        return NumberValue(number)

    if kind == TokenKind.KEYWORD:
        parser.bump()
        # Unknown keywords were already reported by the lexer.
        return parse_keyword(text) or NullValue()

    return None


def parse_identifier(parser: Parser) -> Identifier | None:
    kind = parser.current
    if kind not in STRING_TOKENS:
        return None

    text = parser.current_text
    if kind == TokenKind.IDENTIFIER and text in RESERVED_IDENTIFIERS:
        parser.error(LEXER_BARE_KEYWORD, message=f"`{text}` is reserved and must be quoted")

    return Identifier(_parse_string(parser), representation=text)


def _parse_string(parser: Parser) -> str:
    token = parser.current_token
    text = parser.current_text
    parser.bump()

    if token.flags & TokenFlags.UNTERMINATED:
        return ""

    match token.kind:
        case TokenKind.IDENTIFIER:
            return text
        case TokenKind.QUOTED_STRING:
            decoded = decode_quoted_string(text, multiline=token.is_multiline)
        case TokenKind.RAW_STRING:
            decoded = decode_raw_string(text, multiline=token.is_multiline)
        case _:
            raise ValueError(f"Not a string token: {token.kind.name}")

    if decoded is None:
        spec = LEXER_INVALID_MULTILINE_STRING if token.is_multiline else LEXER_INVALID_ESCAPE
        parser.error(spec, range=token.range)
        return ""
    return decoded


def parse_tag(parser: Parser) -> Tag:
    parser.bump()  # (

    leading_start = parser.offset
    skip_node_space(parser)
    leading = parser.text_from(leading_start)

    name = parse_identifier(parser)
    if name is None:
        parser.error(PARSER_EXPECTED_TOKEN, message="Expected a type annotation name")
        name = Identifier("")

    trailing_start = parser.offset
    skip_node_space(parser)
    trailing = parser.text_from(trailing_start)

    if not parser.eat(TokenKind.RPAREN):
        parser.error(PARSER_EXPECTED_TOKEN, message="Expected `)`")

    return Tag(name=name, leading=leading, trailing=trailing)


def parse_children(parser: Parser) -> Document:
    parser.bump()  # {
    children = parse_nodes(parser, in_children=True)
    if not parser.eat(TokenKind.RBRACE):
        parser.error(PARSER_EXPECTED_TOKEN, message="Expected `}`")
    return children


def parse_escline(parser: Parser) -> None:
    """`\\` ws* (single-line comment | newline | EOF)."""
    parser.bump()  # \
    while parser.at_set(NODE_SPACE):
        parser.bump()

    if parser.at(TokenKind.SINGLE_LINE_COMMENT):
        parser.bump()
        parser.eat(TokenKind.NEWLINE)
    elif parser.at(TokenKind.NEWLINE):
        parser.bump()
    elif not parser.at(TokenKind.EOF):
        parser.error(PARSER_EXPECTED_TOKEN, message="Expected a newline after `\\`")


def skip_node_space(parser: Parser, *, in_children: bool = False, allow_slashdash: bool = False) -> bool:
    """Consume node-space; report whether anything was consumed."""
    start = parser.offset
    while True:
        if parser.at_set(NODE_SPACE):
            parser.bump()
        elif parser.at(TokenKind.ESCLINE):
            parse_escline(parser)
        elif allow_slashdash and parser.at(TokenKind.SLASHDASH):
            parse_slashdash_entry(parser, in_children=in_children)
        else:
            break
    return parser.offset > start


def skip_line_space(parser: Parser, *, in_children: bool = False, allow_slashdash: bool = True) -> None:
    while True:
        if parser.at_set(LINE_SPACE):
            parser.bump()
        elif parser.at(TokenKind.ESCLINE):
            parse_escline(parser)
        elif allow_slashdash and parser.at(TokenKind.SLASHDASH):
            parse_slashdash_node(parser, in_children=in_children)
        else:
            break


def parse_slashdash_node(parser: Parser, *, in_children: bool = False) -> Node | None:
    parser.bump()  # /-
    skip_line_space(parser, allow_slashdash=False)
    if at_node_start(parser):
        return parse_node(parser, in_children=in_children)

    parser.error(PARSER_DANGLING_SLASHDASH)
    return None


def parse_slashdash_entry(parser: Parser, *, in_children: bool = False) -> Entry | Document | None:
    parser.bump()  # /-
    skip_line_space(parser, allow_slashdash=False)
    if parser.at(TokenKind.LBRACE):
        return parse_children(parser)
    if at_entry_start(parser):
        return parse_entry(parser)

    parser.error(PARSER_DANGLING_SLASHDASH)
    return None


def at_node_start(parser: Parser) -> bool:
    return parser.at_set(STRING_TOKENS) or parser.at(TokenKind.LPAREN)


def at_entry_start(parser: Parser) -> bool:
    return parser.current.is_value or parser.at(TokenKind.LPAREN)


__all__ = [
    "LINE_SPACE",
    "NODE_SPACE",
    "at_entry_start",
    "at_node_start",
    "parse_children",
    "parse_entry",
    "parse_escline",
    "parse_identifier",
    "parse_node",
    "parse_nodes",
    "parse_node_terminator",
    "parse_slashdash_entry",
    "parse_slashdash_node",
    "parse_source_file",
    "parse_tag",
    "parse_tagged_value",
    "parse_value",
    "skip_line_space",
    "skip_node_space",
]
