"""
Keypad calculator app.
Supports the four basic operations, modulo, sign toggling, percent and decimal input.
"""

import logging
from typing import Any

from textual import events, on
from textual.app import ComposeResult
from textual.containers import Container
from textual.css.query import NoMatches
from textual.reactive import var
from textual.widgets import Button, Digits, Footer, Header

from calcpad.core.base import AppConfig, AppStatus, BaseTextualApp, register_app
from calcpad.core.config import CalculatorConfig
from calcpad.core.engine import CalculatorSession
from calcpad.core.keymap import button_for_key

logger = logging.getLogger(__name__)


class KeypadButton(Button, can_focus=False):
    """Keypad button that never takes focus, so every key reaches the app."""


@register_app
class CalculatorApp(BaseTextualApp):
    """Calculator with a numeric display and keypad."""

    APP_CONFIG = AppConfig(
        name="calculator",
        description="Keypad calculator with chained operations, percent and sign toggle",
        version="0.1.0",
        tags=["calculator", "math", "utility"],
    )

    TITLE = "Calculator"

    CSS = """
    #calculator {
        layout: grid;
        grid-size: 4;
        grid-gutter: 1 2;
        grid-columns: 1fr;
        grid-rows: 2fr 1fr 1fr 1fr 1fr 1fr;
        margin: 1 2;
        min-height: 25;
        min-width: 26;
        height: 100%;
    }

    Button {
        width: 100%;
        height: 100%;
    }

    #numbers {
        column-span: 4;
        padding: 0 1;
        height: 100%;
        background: $panel;
        color: $text;
        content-align: center middle;
        text-align: right;
    }
    """

    numbers = var("0")

    def __init__(self, config: CalculatorConfig | None = None, **kwargs):
        super().__init__(**kwargs)
        self.session = CalculatorSession(config)

    def watch_numbers(self, value: str) -> None:
        """Update the display when numbers change."""
        try:
            self.query_one("#numbers", Digits).update(value)
        except NoMatches:
            # Widget not yet mounted
            pass

    def compose(self) -> ComposeResult:
        """Compose the display and keypad."""
        yield Header()

        with Container(id="calculator"):
            yield Digits(self.session.display, id="numbers")
            yield KeypadButton("Clear", id="clear", variant="primary")
            yield KeypadButton("±", id="plus-minus", variant="primary")
            yield KeypadButton("%", id="percent", variant="primary")
            yield KeypadButton("÷", id="divide", variant="warning")
            yield KeypadButton("7", id="number-7", classes="number")
            yield KeypadButton("8", id="number-8", classes="number")
            yield KeypadButton("9", id="number-9", classes="number")
            yield KeypadButton("×", id="multiply", variant="warning")
            yield KeypadButton("4", id="number-4", classes="number")
            yield KeypadButton("5", id="number-5", classes="number")
            yield KeypadButton("6", id="number-6", classes="number")
            yield KeypadButton("-", id="minus", variant="warning")
            yield KeypadButton("1", id="number-1", classes="number")
            yield KeypadButton("2", id="number-2", classes="number")
            yield KeypadButton("3", id="number-3", classes="number")
            yield KeypadButton("+", id="plus", variant="warning")
            yield KeypadButton("mod", id="modulo", variant="warning")
            yield KeypadButton("0", id="number-0", classes="number")
            yield KeypadButton(".", id="point")
            yield KeypadButton("=", id="equals", variant="success")

        yield Footer()

    def on_key(self, event: events.Key) -> None:
        """Called when the user presses a key."""
        key = event.character if event.is_printable else event.key
        button_id = button_for_key(key) if key else None
        if button_id is None:
            return
        logger.debug(f"Key {key!r} presses #{button_id}")
        try:
            self.query_one(f"#{button_id}", Button).press()
        except NoMatches:
            pass

    @on(Button.Pressed, ".number")
    def number_pressed(self, event: Button.Pressed) -> None:
        """Pressed a number."""
        assert event.button.id is not None
        self.session.digit(event.button.id.partition("-")[-1])
        self._show(event.button.id)

    @on(Button.Pressed, "#plus,#minus,#multiply,#divide,#modulo")
    def operator_pressed(self, event: Button.Pressed) -> None:
        """Pressed one of the arithmetic operations."""
        assert event.button.id is not None
        self.session.choose_operator(event.button.id)
        self._show(event.button.id)

    @on(Button.Pressed, "#point,#clear,#plus-minus,#percent,#equals")
    def function_pressed(self, event: Button.Pressed) -> None:
        """Pressed ., Clear, ±, % or =."""
        assert event.button.id is not None
        self.session.press(event.button.id)
        self._show(event.button.id)

    def _show(self, button_id: str) -> None:
        self.numbers = self.session.display
        self._log_output(f"{button_id}: {self.session.display}")

    async def get_app_specific_state(self) -> dict[str, Any]:
        return {"calculator": self.session.snapshot()}

    def get_status(self) -> AppStatus:
        """Get current application status."""
        return AppStatus(
            app_id=self.app_id or "unknown",
            name=self.APP_CONFIG.name,
            status="running" if self.is_running else "stopped",
            start_time=self.started_at,
            error_message=self.session.display if self.session.is_error else None
        )


if __name__ == "__main__":
    app = CalculatorApp()
    app.run()
