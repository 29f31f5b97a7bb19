"""Tokenizer for TOML documents."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from .text import TomlError

_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_TIME = re.compile(r"[0-9]{2}:[0-9]{2}:[0-9]{2}")
_STAMP_CHARS = re.compile(r"[0-9.:+\-Tt Zz]*")
_LITERAL_WITH_DOT = re.compile(r"[A-Za-z0-9+\-_.]*")
_LITERAL_NO_DOT = re.compile(r"[A-Za-z0-9+\-_]*")
_SIMPLE_ESCAPES = "btnfr\"\\"
_HEX_DIGITS = "0123456789ABCDEF"


class TokenType(Enum):
    """Kinds of token produced by the lexer."""

    DOT = auto()
    COMMA = auto()
    EQUAL = auto()
    LBRACE = auto()
    RBRACE = auto()
    NEWLINE = auto()
    LBRACKET = auto()
    RBRACKET = auto()
    STRING = auto()


_PUNCTUATION = {
    ",": TokenType.COMMA,
    "=": TokenType.EQUAL,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    "\n": TokenType.NEWLINE,
}


@dataclass(frozen=True)
class Token:
    """A slice of the document: its kind, line, offset and text."""

    kind: TokenType
    lineno: int
    start: int
    text: str
    eof: bool = False

    @property
    def end(self) -> int:
        return self.start + len(self.text)


class Lexer:
    """Splits a document into tokens one at a time.

    The current token starts as a zero-length newline on line 1; each call to
    :meth:`advance` consumes it and scans the next one.
    """

    def __init__(self, text: str) -> None:
        # The document ends at the first NUL character.
        self.text = text.split("\0", 1)[0]
        self.token = Token(TokenType.NEWLINE, 1, 0, "")

    def _char(self, index: int) -> str:
        return self.text[index] if 0 <= index < len(self.text) else ""

    def _set(self, kind: TokenType, lineno: int, start: int, end: int) -> Token:
        self.token = Token(kind, lineno, start, self.text[start:end])
        return self.token

    def advance(self, dot_is_special: bool) -> Token:
        """Consume the current token and return the next one.

        When ``dot_is_special`` is true a ``.`` is its own token; otherwise it
        may be part of a bare value. At the end of input a zero-length
        newline token with ``eof`` set is returned.
        """
        current = self.token
        lineno = current.lineno + current.text.count("\n")
        pos = current.end
        text = self.text
        stop = len(text)

        while pos < stop:
            ch = text[pos]
            if ch == "#":
                newline = text.find("\n", pos)
                pos = stop if newline < 0 else newline
                continue
            if dot_is_special and ch == ".":
                return self._set(TokenType.DOT, lineno, pos, pos + 1)
            kind = _PUNCTUATION.get(ch)
            if kind is not None:
                return self._set(kind, lineno, pos, pos + 1)
            if ch in "\r \t":
                pos += 1
                continue
            end = self._scan_string(pos, lineno, dot_is_special)
            return self._set(TokenType.STRING, lineno, pos, end)

        self.token = Token(TokenType.NEWLINE, lineno, stop, "", eof=True)
        return self.token

    def tokens(self, dot_is_special: bool) -> Iterator[Token]:
        """Yield the remaining tokens up to, but not including, end of input."""
        while True:
            token = self.advance(dot_is_special)
            if token.eof:
                return
            if token.kind is TokenType.STRING and not token.text:
                raise TomlError(
                    f"unexpected character {self.text[token.start]!r}", token.lineno
                )
            yield token

    def _scan_string(self, pos: int, lineno: int, dot_is_special: bool) -> int:
        text = self.text
        if text.startswith("'''", pos):
            return self._scan_triple_literal(pos, lineno)
        if text.startswith('"""', pos):
            return self._scan_triple_basic(pos, lineno)
        if text[pos] == "'":
            return self._scan_literal(pos, lineno)
        if text[pos] == '"':
            return self._scan_basic(pos, lineno)

        if _DATE.match(text, pos) or _TIME.match(text, pos):
            end = _STAMP_CHARS.match(text, pos).end()
            while text[end - 1] == " ":
                end -= 1
            return end

        pattern = _LITERAL_NO_DOT if dot_is_special else _LITERAL_WITH_DOT
        return pattern.match(text, pos).end()

    def _scan_triple_literal(self, pos: int, lineno: int) -> int:
        close = self.text.find("'''", pos + 3)
        if close < 0:
            raise TomlError("unterminated triple-s-quote", lineno)
        while self._char(close + 3) == "'":
            close += 1
        return close + 3

    def _scan_triple_basic(self, pos: int, lineno: int) -> int:
        text = self.text
        close = pos + 3
        while True:
            close = text.find('"""', close)
            if close < 0:
                raise TomlError("unterminated triple-d-quote", lineno)
            if text[close - 1] == "\\":
                close += 1
                continue
            break
        while self._char(close + 3) == '"':
            close += 1

        hexreq = 0
        escape = False
        for index in range(pos + 3, close):
            ch = text[index]
            if escape:
                escape = False
                if ch in _SIMPLE_ESCAPES:
                    continue
                if ch == "u":
                    hexreq = 4
                    continue
                if ch == "U":
                    hexreq = 8
                    continue
                if text[index:].lstrip(" \t\r").startswith("\n"):
                    continue
                raise TomlError("bad escape char", lineno)
            if hexreq:
                hexreq -= 1
                if ch in _HEX_DIGITS:
                    continue
                raise TomlError("expect hex char", lineno)
            if ch == "\\":
                escape = True
        if escape:
            raise TomlError("expect an escape char", lineno)
        if hexreq:
            raise TomlError("expected more hex char", lineno)
        return close + 3

    def _scan_literal(self, pos: int, lineno: int) -> int:
        index = pos + 1
        while self._char(index) not in ("", "\n", "'"):
            index += 1
        if self._char(index) != "'":
            raise TomlError("unterminated s-quote", lineno)
        return index + 1

    def _scan_basic(self, pos: int, lineno: int) -> int:
        text = self.text
        hexreq = 0
        escape = False
        index = pos + 1
        while index < len(text):
            ch = text[index]
            if escape:
                escape = False
                if ch in _SIMPLE_ESCAPES:
                    pass
                elif ch == "u":
                    hexreq = 4
                elif ch == "U":
                    hexreq = 8
                else:
                    raise TomlError("bad escape char", lineno)
            elif hexreq:
                hexreq -= 1
                if ch not in _HEX_DIGITS:
                    raise TomlError("expect hex char", lineno)
            elif ch == "\\":
                escape = True
            elif ch == "'":
                if text.startswith("'''", index):
                    raise TomlError("triple-s-quote inside string lit", lineno)
            elif ch in '\n"':
                break
            index += 1
        if self._char(index) != '"':
            raise TomlError("unterminated quote", lineno)
        return index + 1