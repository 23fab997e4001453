"""Tests for display formatting and parsing."""

import math

import pytest

from calcpad.core.config import CalculatorConfig
from calcpad.core.formatter import count_digits, format_number, parse_display


@pytest.mark.parametrize("value, expected", [
    (10.0, "10"),
    (0.0, "0"),
    (-0.0, "0"),
    (1234.5, "1,234.5"),
    (-1234.5, "-1,234.5"),
    (-0.5, "-0.5"),
    (0.05, "0.05"),
    (1234567.0, "1,234,567"),
    (999999999999.0, "999,999,999,999"),
    (0.1 + 0.2, "0.30000000000000004"),
    (0.000015, "0.000015"),
])
def test_standard_notation(value, expected):
    assert format_number(value) == expected


@pytest.mark.parametrize("value, expected", [
    (1e12, "1.000000e+12"),
    (-1234567890123.0, "-1.234568e+12"),
    (1e-11, "1.000000e-11"),
    # below the shortest round-trip plain form
    (1e-7, "1.000000e-7"),
    (-2.5e-8, "-2.500000e-8"),
    (1e100, "1.000000e+100"),
])
def test_scientific_notation(value, expected):
    assert format_number(value) == expected


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_non_finite_is_error(value):
    assert format_number(value) == "Error"


def test_custom_config():
    config = CalculatorConfig(max_digits=6, group_separator=" ", error_text="E")
    assert config.scientific_upper == 1e6
    assert format_number(123456.0, config) == "123 456"
    assert format_number(1e6, config) == "1.000000e+6"
    assert format_number(math.nan, config) == "E"
    assert parse_display("123 456", config) == 123456.0


def test_invalid_config():
    from pydantic import ValidationError

    with pytest.raises(ValidationError):
        CalculatorConfig(max_digits=2)


def test_parse_display():
    assert parse_display("1,234.5") == 1234.5
    assert parse_display("-9") == -9.0
    assert parse_display("0.") == 0.0
    assert parse_display("1.000000e+12") == 1e12
    assert parse_display("1.000000e-7") == 1e-7
    assert math.isnan(parse_display("Error"))


@pytest.mark.parametrize("typed", ["1234567", "-9876.5", "0.25", "999999999999"])
def test_parse_then_format_keeps_digits(typed):
    assert format_number(parse_display(typed)).replace(",", "") == typed


def test_count_digits():
    assert count_digits("-1,234.5") == 5
    assert count_digits("0.") == 1
    assert count_digits("Error") == 0
