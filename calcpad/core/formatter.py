"""
Number rendering for the calculator display.

Results are shown grouped with thousands separators, switching to
scientific notation when they do not fit the display, and as the error
marker when they are not finite. Raw digit entry is never grouped: only
values produced by an operation pass through here.
"""

import math
from decimal import Decimal

from .config import DEFAULT_CONFIG, CalculatorConfig

# Shortest round-trip text uses exponent form below this magnitude.
_EXPONENT_FORM_BELOW = 1e-6


def _scientific(value: float, config: CalculatorConfig) -> str:
    """Scientific notation with an unpadded exponent, e.g. ``1.000000e-7``."""
    mantissa, _, exponent = f"{value:.{config.scientific_precision}e}".partition("e")
    return f"{mantissa}e{exponent[0]}{int(exponent[1:])}"


def _plain_notation(value: float) -> str | None:
    """Shortest round-trip text of ``value`` without an exponent, if it has one."""
    if value.is_integer():
        return str(int(value))
    if abs(value) < _EXPONENT_FORM_BELOW:
        return None
    return format(Decimal(repr(value)), "f")


def format_number(value: float, config: CalculatorConfig | None = None) -> str:
    """Format a numeric result for display.

    Args:
        value: The number to render
        config: Display settings, defaults to ``DEFAULT_CONFIG``

    Returns:
        The display text: grouped decimal, scientific notation, or the
        error marker for non-finite values.
    """
    config = config or DEFAULT_CONFIG
    if not math.isfinite(value):
        return config.error_text

    magnitude = abs(value)
    if magnitude and (magnitude >= config.scientific_upper or magnitude < config.scientific_lower):
        return _scientific(value, config)

    plain = _plain_notation(value)
    if plain is None:
        return _scientific(value, config)

    sign, digits = ("-", plain[1:]) if plain.startswith("-") else ("", plain)
    int_part, point, fraction = digits.partition(".")
    grouped = f"{int(int_part):,}"
    if config.group_separator != ",":
        grouped = grouped.replace(",", config.group_separator)
    return f"{sign}{grouped}{point}{fraction}"


def parse_display(text: str, config: CalculatorConfig | None = None) -> float:
    """Parse display text back into a number.

    Grouping separators are ignored. Text that is not a number, such as
    the error marker, parses as NaN.
    """
    config = config or DEFAULT_CONFIG
    normalized = text.replace(config.group_separator, "") if config.group_separator else text
    try:
        return float(normalized)
    except ValueError:
        return math.nan


def count_digits(text: str) -> int:
    """Count the decimal digits in display text."""
    return sum(1 for char in text if char.isdigit())
