"""Tests for formatting module."""
import pytest

from conspiracyengine.formatting import format_duration, format_number, format_per_second


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, "0.0"),
        (1.5, "1.5"),
        (42.9, "42"),
        (999.9, "999"),
        (1500, "1.50K"),
        (12345, "12.3K"),
        (123456, "123K"),
        (2.5e6, "2.50M"),
        (7.25e9, "7.25B"),
        (3e12, "3.00T"),
        (4.5e15, "4.50Q"),
        (1e18, "1.00e+18"),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_format_negative():
    assert format_number(-1500) == "-1.50K"


def test_format_non_finite():
    assert format_number(float("inf")) == "1.80e+308"
    assert format_number(float("-inf")) == "-1.80e+308"
    assert format_number(float("nan")) == "NaN"


def test_format_per_second():
    assert format_per_second(2500) == "2.50K/sec"


@pytest.mark.parametrize(
    "seconds,expected",
    [
        (0, "0s"),
        (42, "42s"),
        (95, "1m 35s"),
        (3725, "1h 2m"),
        (90061.7, "25h 1m"),
        (-5, "0s"),
    ],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected
