"""
Calculator engine: the input/operator state machine behind the calculator page.

Every operation is a pure function taking a CalculatorState and returning a
Step (new state + the display string to show). A Step whose display is None
is a silent no-op and the display should stay as it is.
"""
import logging
import math
import operator
import re
from dataclasses import dataclass, replace
from decimal import Decimal

from app.projects.calculator.core.constants import (
    ERROR_DISPLAY,
    INITIAL_DISPLAY,
    MAX_STATE_FIELD_LENGTH,
    OPERATOR_SYMBOLS,
    ROUNDING_DIGITS,
)

logger = logging.getLogger(__name__)


class CalculatorError(Exception):
    pass


class DivisionByZero(CalculatorError):
    """Right operand of / or % is zero. Handled inside evaluate()."""


class InvalidState(CalculatorError):
    """A serialized state failed validation."""


@dataclass(frozen=True)
class CalculatorState:
    entry: str = ""
    pending_operand: str = ""
    pending_operator: str | None = None
    reset_next: bool = False

    def to_dict(self) -> dict:
        return {
            "entry": self.entry,
            "pending_operand": self.pending_operand,
            "pending_operator": self.pending_operator,
            "reset_next": self.reset_next,
        }

    @classmethod
    def from_dict(cls, data) -> "CalculatorState":
        """
        Build a state from its dict form (e.g. JSON sent back by the page).

        Missing keys take their initial values. Raises InvalidState on wrong
        types, unknown operators, over-long strings, or an operator without
        an operand.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise InvalidState("state must be an object")

        entry = data.get("entry", "")
        pending_operand = data.get("pending_operand", "")
        pending_operator = data.get("pending_operator") or None
        reset_next = data.get("reset_next", False)

        for name, value in (("entry", entry), ("pending_operand", pending_operand)):
            if not isinstance(value, str):
                raise InvalidState(f"{name} must be a string")
            if len(value) > MAX_STATE_FIELD_LENGTH:
                raise InvalidState(f"{name} is too long")
        if pending_operator is not None and pending_operator not in OPERATOR_SYMBOLS:
            raise InvalidState(f"Unknown operator: {pending_operator!r}")
        if pending_operator is not None and not pending_operand:
            raise InvalidState("pending_operator requires a pending_operand")
        if not isinstance(reset_next, bool):
            raise InvalidState("reset_next must be a boolean")

        return cls(
            entry=entry,
            pending_operand=pending_operand,
            pending_operator=pending_operator,
            reset_next=reset_next,
        )


@dataclass(frozen=True)
class Step:
    state: CalculatorState
    display: str | None = None
    error: bool = False


# --- Number handling ---

# Longest numeric prefix, the way a browser's parseFloat reads it
_NUMBER_PREFIX = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


def parse_number(text: str) -> float:
    """Parse the numeric prefix of text ("0." -> 0.0, "1e-" -> 1.0). NaN if there is none."""
    match = _NUMBER_PREFIX.match(text)
    if not match:
        return math.nan
    return float(match.group(1))


def round_result(value: float) -> float:
    """Round half up to ROUNDING_DIGITS decimals. Non-finite values pass through."""
    scale = 10 ** ROUNDING_DIGITS
    scaled = value * scale
    if not math.isfinite(scaled):
        return scaled / scale
    return math.floor(scaled + 0.5) / scale


def format_number(value: float) -> str:
    """
    Stringify a result for the display.

    Integral values print without a fraction ("36"), others with the
    shortest digits that round-trip ("0.3"). Exponent notation is used only
    below 1e-6 or from 1e21 upwards ("1e-7", "1e+21").
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    magnitude = abs(value)
    if 1e-6 <= magnitude < 1e21:
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")

    mantissa, _, exponent = repr(value).partition("e")
    return f"{mantissa}e{int(exponent):+d}"


def _remainder(left: float, right: float) -> float:
    # Sign follows the dividend; an infinite dividend has no remainder
    if math.isinf(left):
        return math.nan
    return math.fmod(left, right)


OPERATORS = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "%": _remainder,
}


def _apply_operator(symbol: str, left: float, right: float) -> float:
    if symbol in ("/", "%") and right == 0:
        raise DivisionByZero(f"{left} {symbol} {right}")
    return OPERATORS[symbol](left, right)


# --- Operations ---

def enter_digit(state: CalculatorState, digit: str) -> Step:
    """Append a digit to the entry, starting a fresh entry after a committed value."""
    entry = "" if state.reset_next else state.entry

    # No second leading zero
    if entry == "0" and digit == "0":
        return Step(state)

    entry = digit if entry == "0" else entry + digit
    new_state = replace(state, entry=entry, reset_next=False)
    return Step(new_state, entry)


def enter_decimal(state: CalculatorState) -> Step:
    """Append a decimal point unless the entry already has one."""
    entry = "0" if state.reset_next else state.entry
    if entry == "":
        entry = "0"

    if "." in entry:
        return Step(state)

    entry += "."
    new_state = replace(state, entry=entry, reset_next=False)
    return Step(new_state, entry)


def choose_operator(state: CalculatorState, symbol: str) -> Step:
    """
    Commit the entry as the pending operand and remember the operator.

    A fully specified pending operation is resolved first, so 2 + 3 +
    carries 5 forward. With no entry the pending operand is reused, which
    lets the user change the operator. With nothing to operate on the press
    is ignored.
    """
    if state.entry and state.pending_operand and state.pending_operator:
        step = evaluate(state)
        if step.error:
            return step
        state = step.state

    entry = state.entry
    if not entry and state.pending_operand:
        entry = state.pending_operand
    if not entry:
        return Step(state)

    new_state = CalculatorState(
        entry="",
        pending_operand=entry,
        pending_operator=symbol,
        reset_next=True,
    )
    return Step(new_state, entry)


def evaluate(state: CalculatorState) -> Step:
    """Resolve pending_operand <operator> entry. No-op unless all three are present."""
    if not (state.pending_operand and state.entry and state.pending_operator):
        return Step(state)

    left = parse_number(state.pending_operand)
    right = parse_number(state.entry)
    try:
        result = _apply_operator(state.pending_operator, left, right)
    except DivisionByZero as e:
        logger.debug(f"Division by zero: {e}")
        return Step(CalculatorState(), ERROR_DISPLAY, error=True)

    text = format_number(round_result(result))
    new_state = CalculatorState(entry=text, reset_next=True)
    return Step(new_state, text)


def square(state: CalculatorState) -> Step:
    if not state.entry:
        return Step(state)

    value = parse_number(state.entry)
    text = format_number(round_result(value * value))
    new_state = replace(state, entry=text, reset_next=True)
    return Step(new_state, text)


def toggle_sign(state: CalculatorState) -> Step:
    if state.entry in ("", "0"):
        return Step(state)

    if state.entry.startswith("-"):
        entry = state.entry[1:]
    else:
        entry = "-" + state.entry
    return Step(replace(state, entry=entry), entry)


def clear() -> Step:
    """Back to the initial state (AC)."""
    return Step(CalculatorState(), INITIAL_DISPLAY)


def backspace(state: CalculatorState) -> Step:
    if not state.entry:
        return Step(state)

    entry = state.entry[:-1]
    if entry in ("", "-"):
        return Step(replace(state, entry=""), INITIAL_DISPLAY)
    return Step(replace(state, entry=entry), entry)
