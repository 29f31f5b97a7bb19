"""Parser that builds a :class:`~routeconf.document.Table` from TOML text."""

from __future__ import annotations

import re
from os import PathLike

from .document import Array, Table
from .lexer import Lexer, Token, TokenType
from .text import TomlError, normalize_basic

_BARE_KEY = re.compile(r"[A-Za-z0-9_-]*")
_MAX_PATH_DEPTH = 10
_ARRAY_TABLE_KEY = "__anon__"


def _normalize_key(token: Token) -> str:
    """Turn a key token into the key it names."""
    text = token.text
    lineno = token.lineno
    quote = text[:1]
    if quote in ("'", '"') and quote:
        if text[1:2] == quote and text[2:3] == quote:
            body = text[3:len(text) - 3]
            multiline = True
        else:
            body = text[1:len(text) - 1]
            multiline = False
        if quote == "'":
            key = body
        else:
            try:
                key = normalize_basic(body, multiline)
            except TomlError as exc:
                raise TomlError(exc.message, lineno) from None
        if "\n" in key:
            raise TomlError("bad key", lineno)
        return key

    if not _BARE_KEY.fullmatch(text):
        raise TomlError("bad key", lineno)
    return text


class _Parser:
    def __init__(self, text: str) -> None:
        self.lexer = Lexer(text)
        self.root = Table()
        self.current = self.root

    @property
    def token(self) -> Token:
        return self.lexer.token

    def _advance(self, dot_is_special: bool) -> Token:
        return self.lexer.advance(dot_is_special)

    def _eat(self, kind: TokenType, dot_is_special: bool) -> None:
        if self.token.kind is not kind:
            raise TomlError("internal error")
        self._advance(dot_is_special)

    def _syntax(self, message: str, lineno: int | None = None) -> TomlError:
        return TomlError(message, self.token.lineno if lineno is None else lineno)

    def _skip_newlines(self, dot_is_special: bool) -> None:
        while self.token.kind is TokenType.NEWLINE:
            self._advance(dot_is_special)
            if self.token.eof:
                break

    def parse(self) -> Table:
        while not self.token.eof:
            kind = self.token.kind
            if kind is TokenType.NEWLINE:
                self._advance(True)
            elif kind is TokenType.STRING:
                self._parse_keyval(self.current)
                if self.token.kind is not TokenType.NEWLINE:
                    raise self._syntax("extra chars after value")
                self._eat(TokenType.NEWLINE, True)
            elif kind is TokenType.LBRACKET:
                self._parse_select()
            else:
                raise self._syntax("syntax error")
        return self.root

    def _parse_keyval(self, table: Table) -> None:
        if table.readonly:
            raise self._syntax("cannot insert new entry into existing table")

        key = self.token
        self._eat(TokenType.STRING, True)

        if self.token.kind is TokenType.DOT:
            name = _normalize_key(key)
            sub = table.table(name)
            if sub is None:
                sub = table._add_table(name, key.lineno)
            self._advance(True)
            self._parse_keyval(sub)
            return

        if self.token.kind is not TokenType.EQUAL:
            raise self._syntax("missing =")
        self._advance(False)

        kind = self.token.kind
        if kind is TokenType.STRING:
            table._add_value(_normalize_key(key), self.token.text, key.lineno)
            self._advance(True)
        elif kind is TokenType.LBRACKET:
            array = table._add_array(_normalize_key(key), "", key.lineno)
            self._parse_array(array)
        elif kind is TokenType.LBRACE:
            sub = table._add_table(_normalize_key(key), key.lineno)
            self._parse_inline_table(sub)
        else:
            raise self._syntax("syntax error")

    def _parse_inline_table(self, table: Table) -> None:
        self._eat(TokenType.LBRACE, True)
        while True:
            if self.token.kind is TokenType.NEWLINE:
                raise self._syntax("newline not allowed in inline table")
            if self.token.kind is TokenType.RBRACE:
                break
            if self.token.kind is not TokenType.STRING:
                raise self._syntax("expect a string")
            self._parse_keyval(table)
            if self.token.kind is TokenType.NEWLINE:
                raise self._syntax("newline not allowed in inline table")
            if self.token.kind is TokenType.COMMA:
                self._eat(TokenType.COMMA, True)
                continue
            break
        self._eat(TokenType.RBRACE, True)
        table.readonly = True

    def _parse_array(self, array: Array) -> None:
        self._eat(TokenType.LBRACKET, False)
        while True:
            self._skip_newlines(False)
            kind = self.token.kind
            if kind is TokenType.RBRACKET:
                break
            if kind is TokenType.STRING:
                array._append_value(self.token.text)
                self._eat(TokenType.STRING, False)
            elif kind is TokenType.LBRACKET:
                self._parse_array(array._append_array())
            elif kind is TokenType.LBRACE:
                self._parse_inline_table(array._append_table())
            else:
                raise self._syntax("syntax error")

            self._skip_newlines(False)
            if self.token.kind is TokenType.COMMA:
                self._eat(TokenType.COMMA, False)
                continue
            break
        self._eat(TokenType.RBRACKET, True)

    def _fill_path(self) -> list[tuple[str, Token]]:
        lineno = self.token.lineno
        path: list[tuple[str, Token]] = []
        while True:
            if len(path) >= _MAX_PATH_DEPTH:
                raise TomlError("table path is too deep; max allowed is 10.", lineno)
            if self.token.kind is not TokenType.STRING:
                raise TomlError("invalid or missing key", lineno)
            path.append((_normalize_key(self.token), self.token))
            self._advance(True)
            if self.token.kind is TokenType.RBRACKET:
                break
            if self.token.kind is not TokenType.DOT:
                raise TomlError("invalid key", lineno)
            self._advance(True)
        return path

    def _walk_path(self, path: list[tuple[str, Token]]) -> Table:
        table = self.root
        for key, token in path:
            kind = table._kind(key)
            if kind == "t":
                table = table.table(key)
            elif kind == "a":
                array = table.array(key)
                if array.kind != "t" or not len(array):
                    raise TomlError("internal error")
                table = array.table(len(array) - 1)
            elif kind == "v":
                raise TomlError("key exists", token.lineno)
            else:
                table = table._add_table(key, implicit=True)
        return table

    def _next_char_is(self, char: str) -> bool:
        start = self.token.start + 1
        return self.lexer.text[start:start + 1] == char

    def _parse_select(self) -> None:
        double = self._next_char_is("[")
        self._eat(TokenType.LBRACKET, True)
        if double:
            self._eat(TokenType.LBRACKET, True)

        path = self._fill_path()
        last_key, last_token = path.pop()
        parent = self._walk_path(path)

        if not double:
            self.current = parent._add_table(last_key, last_token.lineno)
        else:
            array = parent.array(last_key)
            if array is None:
                array = parent._add_array(last_key, "t", last_token.lineno)
            if array.kind != "t":
                raise TomlError("array mismatch", last_token.lineno)
            self.current = array._append_table(_ARRAY_TABLE_KEY)

        if self.token.kind is not TokenType.RBRACKET:
            raise self._syntax("expects ]")
        if double:
            if not self._next_char_is("]"):
                raise self._syntax("expects ]]")
            self._eat(TokenType.RBRACKET, True)
        self._eat(TokenType.RBRACKET, True)

        if self.token.kind is not TokenType.NEWLINE:
            raise self._syntax("extra chars after ] or ]]")


def parse(text: str) -> Table:
    """Parse a TOML document and return its root table.

    Raises :class:`~routeconf.text.TomlError` on malformed input.
    """
    return _Parser(text).parse()


def parse_file(path: str | PathLike[str]) -> Table:
    """Read and parse the TOML document stored at ``path``."""
    with open(path, encoding="utf-8") as handle:
        content = handle.read()
    return parse(content)