"""Core engine, formatting and base classes for Calcpad."""

from .base import AppConfig, AppRegistry, AppStatus, BaseTextualApp, register_app
from .config import DEFAULT_CONFIG, CalculatorConfig
from .engine import CalculatorSession, Operator
from .formatter import format_number, parse_display

__all__ = [
    "BaseTextualApp",
    "AppConfig",
    "AppStatus",
    "AppRegistry",
    "register_app",
    "CalculatorConfig",
    "DEFAULT_CONFIG",
    "CalculatorSession",
    "Operator",
    "format_number",
    "parse_display",
]
