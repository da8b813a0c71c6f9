"""
Classify calculator input tokens and route them to engine operations.

Tokens come from two places: button presses on the page (data-input
attributes) and keyboard keys (KeyboardEvent.key values).
"""
import enum

from app.projects.calculator.core import engine
from app.projects.calculator.core.constants import OPERATOR_SYMBOLS

DIGITS = "0123456789"
EQUALS_KEYS = ("=", "Enter")
CLEAR_KEYS = ("Escape", "clear")
BACKSPACE_KEYS = ("Backspace",)

# Keys whose browser default action the page suppresses
KEYBOARD_KEYS = list(DIGITS) + list(OPERATOR_SYMBOLS) + [".", "=", "Enter", "Escape", "Backspace"]


class InputKind(enum.Enum):
    DIGIT = "digit"
    DECIMAL = "decimal"
    OPERATOR = "operator"
    EQUALS = "equals"
    CLEAR = "clear"
    BACKSPACE = "backspace"
    SQUARE = "square"
    NEGATE = "negate"


def classify(token):
    """Return the InputKind for a token, or None if it is not a calculator input."""
    if not isinstance(token, str) or not token:
        return None
    if len(token) == 1 and token in DIGITS:
        return InputKind.DIGIT
    if token == ".":
        return InputKind.DECIMAL
    if token in OPERATOR_SYMBOLS:
        return InputKind.OPERATOR
    if token in EQUALS_KEYS:
        return InputKind.EQUALS
    if token in CLEAR_KEYS:
        return InputKind.CLEAR
    if token in BACKSPACE_KEYS:
        return InputKind.BACKSPACE
    if token == "square":
        return InputKind.SQUARE
    if token == "negate":
        return InputKind.NEGATE
    return None


def dispatch(state, token):
    """
    Apply one input token to a state.

    Returns the engine Step, or None if the token is not recognised.
    """
    kind = classify(token)
    if kind is None:
        return None

    if kind is InputKind.DIGIT:
        return engine.enter_digit(state, token)
    if kind is InputKind.DECIMAL:
        return engine.enter_decimal(state)
    if kind is InputKind.OPERATOR:
        return engine.choose_operator(state, token)
    if kind is InputKind.EQUALS:
        return engine.evaluate(state)
    if kind is InputKind.CLEAR:
        return engine.clear()
    if kind is InputKind.BACKSPACE:
        return engine.backspace(state)
    if kind is InputKind.SQUARE:
        return engine.square(state)
    return engine.toggle_sign(state)
