"""Calcpad - a keypad calculator for the terminal with an MCP interface."""

__version__ = "0.1.0"
