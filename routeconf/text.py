"""Normalisation of TOML string literals into plain text."""

from __future__ import annotations

from .unicode import ucs_to_utf8

_HEX_DIGITS = "0123456789ABCDEF"
_SIMPLE_ESCAPES = {
    "b": "\b",
    "t": "\t",
    "n": "\n",
    "f": "\f",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}


class TomlError(ValueError):
    """A TOML document or value could not be understood."""

    def __init__(self, message: str, lineno: int | None = None) -> None:
        self.message = message
        self.lineno = lineno
        super().__init__(message if lineno is None else f"line {lineno}: {message}")


def _check_char(ch: str, multiline: bool) -> None:
    code = ord(ch)
    if code <= 0x08 or 0x0A <= code <= 0x1F or code == 0x7F:
        if not (multiline and ch in "\r\n"):
            raise TomlError(f"invalid char U+{code:04x}")


def normalize_literal(text: str, multiline: bool) -> str:
    """Validate the body of a single-quoted string and return it verbatim."""
    for ch in text:
        _check_char(ch, multiline)
    return text


def _decode_ucs(code: int) -> str:
    try:
        return ucs_to_utf8(code).decode("utf-8")
    except (ValueError, UnicodeDecodeError) as exc:
        raise TomlError("illegal ucs code in \\u or \\U") from exc


def normalize_basic(text: str, multiline: bool) -> str:
    """Resolve the escapes in the body of a double-quoted string."""
    out: list[str] = []
    pos = 0
    end = len(text)
    while pos < end:
        ch = text[pos]
        pos += 1
        if ch != "\\":
            _check_char(ch, multiline)
            out.append(ch)
            continue

        if pos >= end:
            raise TomlError("last backslash is invalid")

        if multiline:
            rest = text[pos:]
            if rest.lstrip(" \t\r").startswith("\n"):
                pos = end - len(rest.lstrip(" \t\r\n"))
                continue

        esc = text[pos]
        pos += 1
        if esc in "uU":
            ndigits = 4 if esc == "u" else 8
            code = 0
            for _ in range(ndigits):
                if pos >= end:
                    raise TomlError(f"\\{esc} expects {ndigits} hex chars")
                digit = _HEX_DIGITS.find(text[pos])
                pos += 1
                if digit < 0:
                    raise TomlError("invalid hex chars for \\u or \\U")
                code = code * 16 + digit
            out.append(_decode_ucs(code))
            continue

        try:
            out.append(_SIMPLE_ESCAPES[esc])
        except KeyError:
            raise TomlError(f"illegal escape char \\{esc}") from None
    return "".join(out)


def to_string(raw: str | None) -> str:
    """Turn a raw quoted TOML value into its string contents."""
    if not raw or raw[0] not in "'\"":
        raise TomlError("value is not a string")
    quote = raw[0]

    if raw[1:2] == quote and raw[2:3] == quote:
        multiline = True
        start = 3
        stop = len(raw) - 3
        if not (start <= stop and raw[stop:] == quote * 3):
            raise TomlError("unterminated string")
        if raw[start:start + 1] == "\n":
            start += 1
        elif raw[start:start + 2] == "\r\n":
            start += 2
    else:
        multiline = False
        start = 1
        stop = len(raw) - 1
        if not (start <= stop and raw[stop] == quote):
            raise TomlError("unterminated string")

    body = raw[start:stop]
    if quote == "'":
        return normalize_literal(body, multiline)
    return normalize_basic(body, multiline)