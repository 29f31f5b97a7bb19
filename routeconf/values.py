"""Interpretation of raw TOML scalar values: booleans, numbers and timestamps."""

from __future__ import annotations

import math
import re
import sys
from dataclasses import dataclass

from .text import TomlError

_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
# Numbers are assembled in a fixed-size scratch area; longer ones are rejected.
_BUFFER_SIZE = 100
_SPACE = "[ \t\n\v\f\r]*"

_INT_PATTERNS = {
    10: re.compile(_SPACE + "[+-]?[0-9]+"),
    16: re.compile(_SPACE + "[+-]?(?:0[xX])?[0-9a-fA-F]+"),
    8: re.compile(_SPACE + "[+-]?[0-7]+"),
    2: re.compile(_SPACE + "[+-]?[01]+"),
}
_INT_PREFIXES = {"x": 16, "o": 8, "b": 2}

_FLOAT_PATTERN = re.compile(
    _SPACE
    + "[+-]?(?:(?:[0-9]+\\.?[0-9]*|\\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    + "|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Timestamp:
    """A date, a time or both; fields that were not given are ``None``."""

    year: int | None = None
    month: int | None = None
    day: int | None = None
    hour: int | None = None
    minute: int | None = None
    second: int | None = None
    millisec: int | None = None
    z: str | None = None


def _isdigit(ch: str) -> bool:
    return len(ch) == 1 and "0" <= ch <= "9"


def _require(raw: str | None) -> str:
    if raw is None:
        raise TomlError("missing value")
    return raw


def _split_sign(raw: str) -> tuple[str, str]:
    if raw[:1] in ("+", "-") and raw:
        return raw[0], raw[1:]
    return "", raw


def _strip_underscores(body: str) -> str:
    """Drop single underscores between characters; reject doubled or trailing ones."""
    for index, ch in enumerate(body):
        if ch == "_":
            following = body[index + 1:index + 2]
            if following in ("_", ""):
                raise TomlError("misplaced underscore in number")
    return body.replace("_", "")


def _assemble(sign: str, body: str) -> str:
    text = sign + _strip_underscores(body)
    if len(text) >= _BUFFER_SIZE:
        raise TomlError("number is too long")
    return text


def to_bool(raw: str | None) -> bool:
    """Interpret ``true`` or ``false``."""
    raw = _require(raw)
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise TomlError(f"not a boolean: {raw!r}")


def to_int(raw: str | None) -> int:
    """Interpret a decimal, hexadecimal, octal or binary 64-bit integer."""
    raw = _require(raw)
    sign, body = _split_sign(raw)
    if body.startswith("_"):
        raise TomlError("number cannot start with an underscore")

    base = 10
    if body[:1] == "0":
        marker = body[1:2]
        if marker in _INT_PREFIXES:
            base = _INT_PREFIXES[marker]
            body = body[2:]
        elif marker == "":
            return 0
        else:
            raise TomlError("leading zeros are not allowed")

    text = _assemble(sign, body)
    if not text:
        return 0
    if not _INT_PATTERNS[base].fullmatch(text):
        raise TomlError(f"not an integer: {raw!r}")
    value = int(text.strip(), base)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise TomlError(f"integer out of range: {raw!r}")
    return value


def _underflows(text: str, value: float) -> bool:
    if value != 0.0 and abs(value) >= sys.float_info.min:
        return False
    mantissa = re.split("[eE]", text, maxsplit=1)[0]
    return any(ch in "123456789" for ch in mantissa)


def to_float(raw: str | None) -> float:
    """Interpret a floating-point number, including ``inf`` and ``nan``."""
    raw = _require(raw)
    sign, body = _split_sign(raw)
    if body.startswith("_"):
        raise TomlError("number cannot start with an underscore")

    dot = body.find(".")
    if dot >= 0:
        before = body[dot - 1] if dot > 0 else ""
        after = body[dot + 1:dot + 2]
        if not (_isdigit(before) and _isdigit(after)):
            raise TomlError("decimal point must be surrounded by digits")

    if body[:1] == "0" and body[1:2] and body[1:2] not in "eE.":
        raise TomlError("leading zeros are not allowed")

    text = _assemble(sign, body)
    if not text:
        return 0.0
    if not _FLOAT_PATTERN.fullmatch(text):
        raise TomlError(f"not a float: {raw!r}")

    value = float(text.strip())
    lowered = text.lower()
    if "inf" in lowered or "nan" in lowered:
        return value
    if math.isinf(value) or _underflows(text, value):
        raise TomlError(f"float out of range: {raw!r}")
    return value


def _scan_digits(text: str, start: int, count: int) -> int | None:
    chunk = text[start:start + count]
    if len(chunk) == count and all(_isdigit(ch) for ch in chunk):
        return int(chunk)
    return None


def _scan_date(text: str, pos: int) -> tuple[int, int, int] | None:
    year = _scan_digits(text, pos, 4)
    if year is None or text[pos + 4:pos + 5] != "-":
        return None
    month = _scan_digits(text, pos + 5, 2)
    if month is None or text[pos + 7:pos + 8] != "-":
        return None
    day = _scan_digits(text, pos + 8, 2)
    if day is None:
        return None
    return year, month, day


def _scan_time(text: str, pos: int) -> tuple[int, int, int] | None:
    hour = _scan_digits(text, pos, 2)
    if hour is None or text[pos + 2:pos + 3] != ":":
        return None
    minute = _scan_digits(text, pos + 3, 2)
    if minute is None or text[pos + 5:pos + 6] != ":":
        return None
    second = _scan_digits(text, pos + 6, 2)
    if second is None:
        return None
    return hour, minute, second


def _parse_millisec(text: str, pos: int) -> tuple[int, int]:
    total = 0
    unit = 100
    while pos < len(text) and _isdigit(text[pos]):
        total += int(text[pos]) * unit
        unit //= 10
        pos += 1
    return total, pos


def _parse_offset(text: str, pos: int) -> tuple[str, int]:
    """Read ``+HH``, ``-HH``, ``+HH:MM`` or ``-HH:MM`` starting at the sign."""
    zone = text[pos]
    pos += 1
    hours = text[pos:pos + 2]
    if _scan_digits(text, pos, 2) is None:
        raise TomlError("bad timezone offset")
    zone += hours
    pos += 2
    if text[pos:pos + 1] == ":":
        pos += 1
        if _scan_digits(text, pos, 2) is None:
            raise TomlError("bad timezone offset")
        zone += ":" + text[pos:pos + 2]
        pos += 2
    return zone, pos


def to_timestamp(raw: str | None) -> Timestamp:
    """Interpret a date, a time, or a date and time with optional offset."""
    raw = _require(raw)
    fields: dict[str, int | str] = {}
    pos = 0
    must_parse_time = False

    date = _scan_date(raw, 0)
    if date is not None:
        fields["year"], fields["month"], fields["day"] = date
        pos = 10
        if pos < len(raw):
            if raw[pos] not in "Tt ":
                raise TomlError(f"bad date-time separator in {raw!r}")
            must_parse_time = True
            pos += 1

    time = _scan_time(raw, pos)
    if time is not None:
        fields["hour"], fields["minute"], fields["second"] = time
        pos += 8
        if raw[pos:pos + 1] == ".":
            fields["millisec"], pos = _parse_millisec(raw, pos + 1)
        if pos < len(raw):
            ch = raw[pos]
            if ch in "Zz":
                fields["z"] = "Z"
                pos += 1
            elif ch in "+-":
                fields["z"], pos = _parse_offset(raw, pos)

    if pos != len(raw):
        raise TomlError(f"not a timestamp: {raw!r}")
    if must_parse_time and "hour" not in fields:
        raise TomlError(f"missing time in {raw!r}")
    return Timestamp(**fields)


def _accepts(convert, raw: str) -> bool:
    try:
        convert(raw)
    except TomlError:
        return False
    return True


def value_type(raw: str) -> str:
    """Classify a raw value.

    Returns ``'s'`` string, ``'b'`` bool, ``'i'`` int, ``'d'`` float,
    ``'T'`` timestamp, ``'D'`` date, ``'t'`` time or ``'u'`` unknown.
    """
    if raw[:1] in ("'", '"') and raw:
        return "s"
    if _accepts(to_bool, raw):
        return "b"
    if _accepts(to_int, raw):
        return "i"
    if _accepts(to_float, raw):
        return "d"
    try:
        stamp = to_timestamp(raw)
    except TomlError:
        return "u"
    if stamp.year is not None and stamp.hour is not None:
        return "T"
    if stamp.year is not None:
        return "D"
    return "t"