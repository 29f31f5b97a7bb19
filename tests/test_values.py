import math

import pytest

from routeconf.text import TomlError
from routeconf.values import (
    Timestamp,
    to_bool,
    to_float,
    to_int,
    to_timestamp,
    value_type,
)


# --- booleans ---------------------------------------------------------------

def test_bool_true_and_false():
    assert to_bool("true") is True
    assert to_bool("false") is False


@pytest.mark.parametrize("raw", ["True", "FALSE", "1", "", "yes", None])
def test_bool_rejects_other_text(raw):
    with pytest.raises(TomlError):
        to_bool(raw)


# --- integers ---------------------------------------------------------------

@pytest.mark.parametrize(
    "raw, expected",
    [
        ("42", 42),
        ("-17", -17),
        ("+5", 5),
        ("0", 0),
        ("-0", 0),
        ("+0", 0),
        ("1_000", 1000),
        ("9223372036854775807", 2**63 - 1),
        ("-9223372036854775808", -(2**63)),
    ],
)
def test_int_decimal(raw, expected):
    assert to_int(raw) == expected


@pytest.mark.parametrize(
    "raw, digits, base",
    [
        ("0xDEADbeef", "DEADbeef", 16),
        ("0o755", "755", 8),
        ("0b1101", "1101", 2),
    ],
)
def test_int_prefixed_bases(raw, digits, base):
    assert to_int(raw) == int(digits, base)


def test_int_underscore_after_prefix_is_skipped():
    assert to_int("0x_1f") == to_int("0x1f")


def test_int_underscores_do_not_change_value():
    assert to_int("1_2_3") == to_int("123")


@pytest.mark.parametrize(
    "raw",
    [
        "012",
        "_1",
        "+_1",
        "1__0",
        "1_",
        "0_1",
        "1.5",
        "1e3",
        "abc",
        "0b102",
        "0o8",
        "+",
        "9223372036854775808",
        "-9223372036854775809",
        None,
    ],
)
def test_int_rejects_invalid(raw):
    with pytest.raises(TomlError):
        to_int(raw)


def test_int_rejects_overlong_input():
    with pytest.raises(TomlError):
        to_int("1" * 100)


# --- floats -----------------------------------------------------------------

@pytest.mark.parametrize(
    "raw, text",
    [
        ("3.14", "3.14"),
        ("-0.5", "-0.5"),
        ("+1.5", "+1.5"),
        ("1e3", "1e3"),
        ("6.626e-34", "6.626e-34"),
        ("5E+22", "5E+22"),
        ("1_000.5", "1000.5"),
        ("0.0", "0.0"),
        ("0e5", "0e5"),
        ("42", "42"),
    ],
)
def test_float_values(raw, text):
    assert to_float(raw) == float(text)


def test_float_infinity_and_nan():
    assert math.isinf(to_float("inf")) and to_float("inf") > 0
    assert math.isinf(to_float("-inf")) and to_float("-inf") < 0
    assert math.isnan(to_float("nan"))


@pytest.mark.parametrize(
    "raw",
    [
        ".5",
        "5.",
        "1._5",
        "1_.5",
        "01.5",
        "_1.0",
        "1__0.0",
        "1.0_",
        "1e",
        "1.5.5",
        "abc",
        "1e999",
        "1e-400",
        None,
    ],
)
def test_float_rejects_invalid(raw):
    with pytest.raises(TomlError):
        to_float(raw)


def test_float_length_limit():
    assert to_float("1" * 99) == float("1" * 99)
    with pytest.raises(TomlError):
        to_float("1" * 100)


# --- timestamps -------------------------------------------------------------

def test_timestamp_full_utc():
    stamp = to_timestamp("1979-05-27T07:32:00Z")
    assert stamp == Timestamp(
        year=1979, month=5, day=27, hour=7, minute=32, second=0, z="Z"
    )


def test_timestamp_lowercase_separators():
    assert to_timestamp("1979-05-27t07:32:00z") == to_timestamp("1979-05-27T07:32:00Z")


def test_timestamp_space_separator():
    stamp = to_timestamp("1979-05-27 07:32:00")
    assert (stamp.year, stamp.hour, stamp.z) == (1979, 7, None)


def test_timestamp_offset_with_minutes():
    stamp = to_timestamp("1979-05-27T00:32:00-07:00")
    assert stamp.z == "-07:00"
    assert stamp.hour == 0


def test_timestamp_offset_hours_only():
    assert to_timestamp("07:32:00+05").z == "+05"


def test_timestamp_fraction_truncated_to_milliseconds():
    assert to_timestamp("07:32:00.999999").millisec == 999
    assert to_timestamp("07:32:00.999").millisec == 999


def test_date_only():
    stamp = to_timestamp("1979-05-27")
    assert (stamp.year, stamp.month, stamp.day) == (1979, 5, 27)
    assert stamp.hour is None and stamp.z is None


def test_time_only():
    stamp = to_timestamp("07:32:00")
    assert (stamp.hour, stamp.minute, stamp.second) == (7, 32, 0)
    assert stamp.year is None and stamp.millisec is None


def test_empty_text_gives_empty_timestamp():
    assert to_timestamp("") == Timestamp()


@pytest.mark.parametrize(
    "raw",
    [
        "1979-05-27X07:32:00",
        "1979-05-27T",
        "1979-5-27",
        "07:32",
        "07:32:00+5",
        "07:32:00+05:0",
        "07:32:00 extra",
        "1979-05-27T07:32:00Q",
        None,
    ],
)
def test_timestamp_rejects_invalid(raw):
    with pytest.raises(TomlError):
        to_timestamp(raw)


# --- classification ---------------------------------------------------------

@pytest.mark.parametrize(
    "raw, kind",
    [
        ('"abc"', "s"),
        ("'abc'", "s"),
        ("true", "b"),
        ("false", "b"),
        ("42", "i"),
        ("0x1f", "i"),
        ("3.5", "d"),
        ("inf", "d"),
        ("1979-05-27T07:32:00Z", "T"),
        ("1979-05-27 07:32:00", "T"),
        ("1979-05-27", "D"),
        ("07:32:00", "t"),
        ("abc", "u"),
        ("1979-05-27X", "u"),
    ],
)
def test_value_type(raw, kind):
    assert value_type(raw) == kind