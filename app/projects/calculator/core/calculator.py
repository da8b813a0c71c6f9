"""
Stateful calculator: owns one CalculatorState and the current display.

Used where a long-lived object is more convenient than threading state
through the pure engine functions (the CLI, tests of whole key sequences).
"""
from app.projects.calculator.core import engine
from app.projects.calculator.core.constants import INITIAL_DISPLAY
from app.projects.calculator.core.keys import dispatch


class Calculator:
    def __init__(self, on_display=None):
        """
        Args:
            on_display (callable, optional): Sink called with every display
                string the calculator emits.
        """
        self.state = engine.CalculatorState()
        self.display = INITIAL_DISPLAY
        self.on_display = on_display

    def _apply(self, step):
        self.state = step.state
        if step.display is not None:
            self._show(step.display)
        return step

    def _show(self, text):
        self.display = text
        if self.on_display:
            self.on_display(text)

    def enter_digit(self, digit):
        return self._apply(engine.enter_digit(self.state, digit))

    def enter_decimal(self):
        return self._apply(engine.enter_decimal(self.state))

    def choose_operator(self, symbol):
        return self._apply(engine.choose_operator(self.state, symbol))

    def evaluate(self):
        return self._apply(engine.evaluate(self.state))

    def square(self):
        return self._apply(engine.square(self.state))

    def toggle_sign(self):
        return self._apply(engine.toggle_sign(self.state))

    def clear(self):
        return self._apply(engine.clear())

    def backspace(self):
        return self._apply(engine.backspace(self.state))

    def press(self, token):
        """Apply an input token. Returns the Step, or None for an unrecognised token."""
        step = dispatch(self.state, token)
        if step is None:
            return None
        return self._apply(step)

    def reset_display(self):
        """Timer callback after an error: put "0" back on the display."""
        self._show(INITIAL_DISPLAY)
