import math

import pytest

from kdlpretty.ast import BooleanValue, Identifier, NullValue, NumberValue, StringValue
from kdlpretty.format import KdlSyntax, print_identifier, print_number, print_string, print_value
from kdlpretty.format.literals import format_float


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("plain", '"plain"'),
        ("", '""'),
        ('say "hi"', '#"say "hi""#'),
        ('a"#b', '##"a"#b"##'),
        ('"', r'"\""'),
        ('""', r'"\"\""'),
        ("line\nbreak", r'"line\nbreak"'),
        ('both"\n', r'"both\"\n"'),
        ("back\\slash", r'"back\\slash"'),
        ("tab\t", r'"tab\t"'),
        ("ls" + chr(0x2028), r'"ls\u{2028}"'),
        ("bell" + chr(7), r'"bell\u{7}"'),
    ],
    ids=[
        "plain",
        "empty",
        "quotes_use_raw",
        "minimal_hashes",
        "lone_quote_stays_quoted",
        "leading_double_quote",
        "newline_escaped",
        "newline_forces_quoted",
        "backslash",
        "tab",
        "line_separator",
        "control",
    ],
)
def test_print_string(text: str, expected: str) -> None:
    assert print_string(text) == expected


def test_print_string_v1_raw_prefix() -> None:
    assert print_string('say "hi"', KdlSyntax.V1) == 'r#"say "hi""#'


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("node", "node"),
        ("kebab-case", "kebab-case"),
        ("-", "-"),
        ("with space", '"with space"'),
        ("", '""'),
        ("1abc", '"1abc"'),
        ("-1", '"-1"'),
        (".5", '".5"'),
        ("true", '"true"'),
        ("nan", '"nan"'),
        ("a=b", '"a=b"'),
        ("a#b", '"a#b"'),
    ],
)
def test_print_identifier(name: str, expected: str) -> None:
    assert print_identifier(Identifier(name)) == expected


def test_print_identifier_v1() -> None:
    assert print_identifier(Identifier("nan"), KdlSyntax.V1) == "nan"
    assert print_identifier(Identifier("true"), KdlSyntax.V1) == '"true"'
    assert print_identifier(Identifier("r#x"), KdlSyntax.V1) == '"r#x"'
    assert print_identifier(Identifier("a<b"), KdlSyntax.V1) == '"a<b"'


@pytest.mark.parametrize(
    ("number", "expected"),
    [
        (0.0, "0"),
        (-0.0, "0"),
        (1.0, "1"),
        (-1.5, "-1.5"),
        (0.1, "0.1"),
        (123.456, "123.456"),
        (2000.0, "2000"),
        (1e20, "100000000000000000000"),
        (1e21, "1e+21"),
        (1.5e22, "1.5e+22"),
        (0.000001, "0.000001"),
        (1e-7, "1e-7"),
        (1.25e-10, "1.25e-10"),
        (123456789.125, "123456789.125"),
    ],
)
def test_format_float(number: float, expected: str) -> None:
    assert format_float(number) == expected


def test_print_number() -> None:
    assert print_number(42) == "42"
    assert print_number(-7) == "-7"
    assert print_number(12345678901234567890123) == "12345678901234567890123"
    assert print_number(2.5) == "2.5"
    assert print_number(math.inf) == "#inf"
    assert print_number(-math.inf) == "#-inf"
    assert print_number(math.nan) == "#nan"


@pytest.mark.parametrize("number", [math.inf, -math.inf, math.nan], ids=["inf", "neg_inf", "nan"])
def test_print_number_v1_rejects_non_finite(number: float) -> None:
    with pytest.raises(ValueError, match="KDL v1"):
        print_number(number, KdlSyntax.V1)


def test_print_value() -> None:
    assert print_value(StringValue("x")) == '"x"'
    assert print_value(BooleanValue(True)) == "#true"
    assert print_value(BooleanValue(False)) == "#false"
    assert print_value(NullValue()) == "#null"
    assert print_value(NumberValue(3)) == "3"


def test_print_value_v1() -> None:
    assert print_value(BooleanValue(True), KdlSyntax.V1) == "true"
    assert print_value(NullValue(), KdlSyntax.V1) == "null"
