import pytest

from calc.errors import CalcSyntaxError, UnsupportedToken
from calc.reader.lexer import lex, number_value


def _pairs(source):
    return [(t.kind, t.text) for t in lex(source)]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1+2", [("number", "1"), ("symbol", "+"), ("number", "2")]),
        (" 3.5 * x ", [("number", "3.5"), ("symbol", "*"), ("ident", "x")]),
        ("$abc_1", [("symbol", "$"), ("ident", "abc_1")]),
        ("sin(1)", [("ident", "sin"), ("symbol", "("), ("number", "1"), ("symbol", ")")]),
        ("'hi'", [("string", "hi")]),
        ('"a b"', [("string", "a b")]),
        ("`raw\\n`", [("string", "raw\\n")]),
        ('"a\\"b"', [("string", 'a"b')]),
        ("'tab\\t'", [("string", "tab\t")]),
        ("1e3", [("number", "1e3")]),
        (".5", [("number", ".5")]),
        ("0x1F 0o17 0b101", [("number", "0x1F"), ("number", "0o17"), ("number", "0b101")]),
        ("1--1", [("number", "1"), ("symbol", "-"), ("symbol", "-"), ("number", "1")]),
        ("a # b", [("ident", "a"), ("symbol", "#"), ("ident", "b")]),
        ("   ", []),
        ("", []),
    ]
)
def test_lexer_basic(source, expected):
    assert _pairs(source) == expected


def test_positions():
    tokens = list(lex("1 + 'x'"))
    assert [t.pos for t in tokens] == [0, 2, 4]


@pytest.mark.parametrize(
    "text,expected",
    [
        ("1", 1.0),
        ("2.5", 2.5),
        ("1e3", 1000.0),
        ("0x1F", 31.0),
        ("0o17", 15.0),
        ("0b101", 5.0),
    ]
)
def test_number_value(text, expected):
    value = number_value(text)
    assert value == expected
    assert isinstance(value, float)


@pytest.mark.parametrize("source", ["'abc", '"abc', "'abc\\"])
def test_unterminated_strings(source):
    with pytest.raises(CalcSyntaxError) as info:
        list(lex(source))
    # lexer failures are reported as unsupported tokens
    assert isinstance(info.value, UnsupportedToken)
