"""
Calculator engine: the input and evaluation state machine behind the keypad.

A session owns the display text plus one explicit state describing what the
accumulator and pending operator are. Each keypad intent is one method.
Arithmetic never raises out of the session. Division by zero moves it into
``ErrorState``; other non-finite results are kept and display as the error
marker.
"""

import logging
import math
import operator
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from .config import DEFAULT_CONFIG, CalculatorConfig
from .formatter import count_digits, format_number, parse_display
from .keymap import button_for_key

logger = logging.getLogger(__name__)

DIGITS = "0123456789"


def _remainder(left: float, right: float) -> float:
    """C-style remainder: the sign follows the dividend, undefined cases give NaN."""
    try:
        return math.fmod(left, right)
    except ValueError:
        return math.nan


class Operator(str, Enum):
    """Binary operators, valued by their keypad button id."""
    PLUS = "plus"
    MINUS = "minus"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    MODULO = "modulo"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    def apply(self, left: float, right: float) -> float:
        """Compute ``left <op> right``.

        Raises:
            ZeroDivisionError: when dividing by zero
        """
        return _OPERATIONS[self](left, right)


_OPERATIONS = {
    Operator.PLUS: operator.add,
    Operator.MINUS: operator.sub,
    Operator.MULTIPLY: operator.mul,
    Operator.DIVIDE: operator.truediv,
    Operator.MODULO: _remainder,
}

_SYMBOLS = {
    Operator.PLUS: "+",
    Operator.MINUS: "-",
    Operator.MULTIPLY: "×",
    Operator.DIVIDE: "÷",
    Operator.MODULO: "mod",
}


class CalcState(BaseModel):
    """Base for the session states. Each state is immutable."""
    model_config = ConfigDict(frozen=True)

    @property
    def accumulator(self) -> float | None:
        return None

    @property
    def pending_operator(self) -> Operator | None:
        return None

    @property
    def just_evaluated(self) -> bool:
        return False


class Start(CalcState):
    """Nothing accumulated. ``fresh`` is set after a percent result."""
    fresh: bool = False

    @property
    def just_evaluated(self) -> bool:
        return self.fresh


class AccumulatorSet(CalcState):
    """A previous result is held while a new number is typed, no operator chosen."""
    value: float

    @property
    def accumulator(self) -> float | None:
        return self.value


class OperatorPending(CalcState):
    """Left operand and operator chosen, waiting for the right operand."""
    value: float
    op: Operator
    fresh: bool = False

    @property
    def accumulator(self) -> float | None:
        return self.value

    @property
    def pending_operator(self) -> Operator | None:
        return self.op

    @property
    def just_evaluated(self) -> bool:
        return self.fresh


class Evaluated(CalcState):
    """The display shows a finished result."""
    value: float

    @property
    def accumulator(self) -> float | None:
        return self.value

    @property
    def just_evaluated(self) -> bool:
        return True


class ErrorState(CalcState):
    """A division by zero cleared the session; the display shows the error marker."""

    @property
    def just_evaluated(self) -> bool:
        return True


class CalculatorSession:
    """One calculator: display text plus evaluation state."""

    def __init__(self, config: CalculatorConfig | None = None):
        self.config = config or DEFAULT_CONFIG
        self.display = "0"
        self.state: CalcState = Start()

    def __repr__(self) -> str:
        return f"CalculatorSession(display={self.display!r}, state={self.state!r})"

    @property
    def accumulator(self) -> float | None:
        return self.state.accumulator

    @property
    def pending_operator(self) -> Operator | None:
        return self.state.pending_operator

    @property
    def just_evaluated(self) -> bool:
        return self.state.just_evaluated

    @property
    def is_error(self) -> bool:
        return isinstance(self.state, ErrorState)

    # Intents

    def digit(self, digit: str) -> None:
        """Type one digit."""
        if len(digit) != 1 or digit not in DIGITS:
            raise ValueError(f"Not a digit: {digit!r}")

        if self.state.just_evaluated:
            self.state = self._begin_entry()
            self.display = digit
        elif self.display == "0":
            self.display = digit
        elif count_digits(self.display) >= self.config.max_digits:
            logger.debug(f"Display full at {self.config.max_digits} digits, ignoring {digit}")
        else:
            self.display += digit

    def decimal_point(self) -> None:
        """Type the decimal point."""
        if self.state.just_evaluated:
            self.state = self._begin_entry()
            self.display = "0."
        elif "." not in self.display:
            self.display += "."

    def clear(self) -> None:
        """Reset the session."""
        self.display = "0"
        self.state = Start()

    def toggle_sign(self) -> None:
        """Flip the sign of the displayed number."""
        if self.display == self.config.error_text:
            return
        if self.display.startswith("-"):
            self.display = self.display[1:]
        elif self.display != "0":
            self.display = "-" + self.display

    def percent(self) -> None:
        """Divide the displayed number by 100."""
        if self.is_error:
            return
        self.display = format_number(self._current() / 100, self.config)
        self.state = self._mark_fresh()

    def choose_operator(self, op: Operator | str) -> None:
        """Choose the next binary operator, applying any pending one first."""
        op = Operator(op)
        state = self.state

        if isinstance(state, ErrorState):
            accumulator = 0.0
        else:
            current = self._current()
            if state.accumulator is None or state.just_evaluated:
                accumulator = current
            elif isinstance(state, OperatorPending):
                result = self._apply(state, current)
                if result is None:
                    return
                accumulator = result
            else:
                accumulator = state.accumulator

        self.state = OperatorPending(value=accumulator, op=op)
        self.display = "0"

    def equals(self) -> None:
        """Apply the pending operator and show the result."""
        state = self.state
        if isinstance(state, ErrorState):
            return

        current = self._current()
        if isinstance(state, OperatorPending):
            result = self._apply(state, current)
            if result is None:
                return
        else:
            result = current

        # Non-finite results stay in the accumulator and render as the error marker
        self.display = format_number(result, self.config)
        self.state = Evaluated(value=result)

    # Keypad dispatch

    def press(self, button_id: str) -> bool:
        """Press a keypad button by id. Returns False for unknown buttons."""
        if button_id.startswith("number-"):
            digit = button_id.partition("-")[2]
            if len(digit) != 1 or digit not in DIGITS:
                return False
            self.digit(digit)
        elif button_id in self._ACTIONS:
            getattr(self, self._ACTIONS[button_id])()
        else:
            try:
                op = Operator(button_id)
            except ValueError:
                return False
            self.choose_operator(op)

        logger.debug(f"{button_id} -> {self.display!r} ({type(self.state).__name__})")
        return True

    def press_key(self, key: str) -> bool:
        """Press the button bound to a keyboard key. Unbound keys are ignored."""
        button_id = button_for_key(key)
        if button_id is None:
            return False
        return self.press(button_id)

    def snapshot(self) -> dict[str, Any]:
        """Plain view of the session for status reporting."""
        pending = self.pending_operator
        return {
            "display": self.display,
            "accumulator": self.accumulator,
            "pending_operator": pending.value if pending else None,
            "just_evaluated": self.just_evaluated,
            "state": type(self.state).__name__,
        }

    _ACTIONS = {
        "point": "decimal_point",
        "clear": "clear",
        "plus-minus": "toggle_sign",
        "percent": "percent",
        "equals": "equals",
    }

    # Helpers

    def _current(self) -> float:
        return parse_display(self.display, self.config)

    def _begin_entry(self) -> CalcState:
        """State once typing starts over a finished result."""
        state = self.state
        if isinstance(state, Evaluated):
            return AccumulatorSet(value=state.value)
        if isinstance(state, OperatorPending):
            return state.model_copy(update={"fresh": False})
        return Start()

    def _mark_fresh(self) -> CalcState:
        """State once the display holds a finished result."""
        state = self.state
        if isinstance(state, AccumulatorSet):
            return Evaluated(value=state.value)
        if isinstance(state, (Start, OperatorPending)):
            return state.model_copy(update={"fresh": True})
        return state

    def _apply(self, state: OperatorPending, right: float) -> float | None:
        """Evaluate the pending operation.

        Division by zero enters the error state and returns None. Other
        results, NaN and infinity included, are returned as they are.
        """
        try:
            return state.op.apply(state.value, right)
        except ZeroDivisionError:
            self._fail(f"division by zero: {state.value} {state.op.symbol} {right}")
            return None

    def _fail(self, reason: str) -> None:
        logger.info(f"Calculator error: {reason}")
        self.display = self.config.error_text
        self.state = ErrorState()
