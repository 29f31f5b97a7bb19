import pytest

from routeconf.lexer import Lexer, Token, TokenType
from routeconf.text import TomlError


def texts(source, dot=True):
    return [token.text for token in Lexer(source).tokens(dot)]


def kinds(source, dot=True):
    return [token.kind for token in Lexer(source).tokens(dot)]


def test_initial_token_is_empty_newline():
    token = Lexer("x").token
    assert token.kind is TokenType.NEWLINE
    assert token.text == ""
    assert token.eof is False


def test_simple_keyval():
    source = "key = value\n"
    assert texts(source) == ["key", "=", "value", "\n"]
    assert kinds(source) == [
        TokenType.STRING,
        TokenType.EQUAL,
        TokenType.STRING,
        TokenType.NEWLINE,
    ]


def test_punctuation():
    assert kinds("{ } [ ] , =") == [
        TokenType.LBRACE,
        TokenType.RBRACE,
        TokenType.LBRACKET,
        TokenType.RBRACKET,
        TokenType.COMMA,
        TokenType.EQUAL,
    ]


def test_dot_special_splits_keys():
    assert texts("a.b", True) == ["a", ".", "b"]
    assert kinds("a.b", True)[1] is TokenType.DOT


def test_dot_not_special_keeps_value_whole():
    assert texts("a.b", False) == ["a.b"]
    assert texts("3.14", False) == ["3.14"]
    assert texts("3.14", True) == ["3", ".", "14"]


def test_comment_is_skipped():
    assert texts("a # comment = [x]\nb") == ["a", "\n", "b"]


def test_whitespace_is_skipped():
    assert texts("a\t\r= b") == ["a", "=", "b"]


def test_line_numbers_follow_newlines():
    source = "a\nb\n\nc"
    tokens = list(Lexer(source).tokens(True))
    assert tokens[-1].text == "c"
    assert tokens[-1].lineno == source.count("\n") + 1
    assert tokens[0].lineno == 1


def test_line_numbers_count_newlines_inside_strings():
    source = '"""a\nb"""\nc'
    tokens = list(Lexer(source).tokens(True))
    assert tokens[-1].text == "c"
    assert tokens[-1].lineno == source.count("\n") + 1


def test_token_offsets_match_text():
    source = "name = 'x'\n"
    lexer = Lexer(source)
    for token in lexer.tokens(True):
        assert source[token.start:token.end] == token.text


@pytest.mark.parametrize(
    "literal",
    [
        '"hello"',
        "'lit'",
        '"""multi\nline"""',
        "'''raw\ntext'''",
        '"esc \\" q"',
        '"\\u00E9"',
        '"\\U0001F600"',
        '"it\'s"',
        '"""a\\"""b"""',
        '"""a""""',
        "'''x''''",
        '"""a\\  \nb"""',
    ],
)
def test_quoted_strings_are_single_tokens(literal):
    tokens = list(Lexer(literal + " = 1").tokens(True))
    assert tokens[0].kind is TokenType.STRING
    assert tokens[0].text == literal
    assert tokens[1].kind is TokenType.EQUAL


@pytest.mark.parametrize(
    "stamp",
    ["1979-05-27T07:32:00Z", "1979-05-27 07:32:00", "07:32:00.999", "1979-05-27"],
)
def test_timestamps_are_single_tokens(stamp):
    assert texts(stamp + "  # note\n", True) == [stamp, "\n"]


def test_eof_token():
    source = "a"
    lexer = Lexer(source)
    assert lexer.advance(True).text == "a"
    end = lexer.advance(True)
    assert end.eof is True
    assert end.kind is TokenType.NEWLINE
    assert end.start == len(source)
    again = lexer.advance(True)
    assert again.eof is True
    assert again.start == len(source)


def test_text_ends_at_nul():
    assert texts("a\0b") == ["a"]


def test_advance_returns_current_token():
    lexer = Lexer("x = y")
    token = lexer.advance(True)
    assert lexer.token == token
    assert token == Token(TokenType.STRING, 1, 0, "x")


def test_unexpected_character_in_stream():
    lexer = Lexer("@")
    token = lexer.advance(True)
    assert token.kind is TokenType.STRING
    assert token.text == ""
    with pytest.raises(TomlError):
        list(Lexer("@").tokens(True))


@pytest.mark.parametrize(
    "source, message",
    [
        ('"abc', "unterminated quote"),
        ('"abc\n"', "unterminated quote"),
        ("'abc\n'", "unterminated s-quote"),
        ('"""abc', "unterminated triple-d-quote"),
        ("'''abc", "unterminated triple-s-quote"),
        ('"a\\qb"', "bad escape char"),
        ('"\\u12G4"', "expect hex char"),
        ('"a\'\'\'b"', "triple-s-quote inside string lit"),
        ('"""a\\q"""', "bad escape char"),
        ('"""\\u12"""', "expected more hex char"),
        ('"""\\u12G4"""', "expect hex char"),
    ],
)
def test_scan_errors(source, message):
    with pytest.raises(TomlError) as info:
        Lexer(source).advance(True)
    assert info.value.message == message


def test_error_carries_line_number():
    source = "\n\n\"abc"
    lexer = Lexer(source)
    with pytest.raises(TomlError) as info:
        list(lexer.tokens(True))
    assert info.value.lineno == source.count("\n") + 1