"""
Calculator - four-function calculator page.
The page keeps the calculator state in memory and sends every button/key
press to /api/press, which runs it through the engine and returns the
display string and the new state.
"""
import logging

from flask import Blueprint, current_app, jsonify, render_template, request

from app.projects.calculator.core.constants import DEFAULT_ERROR_RESET_MS, ERROR_DISPLAY
from app.projects.calculator.core.engine import CalculatorState, InvalidState
from app.projects.calculator.core.keys import KEYBOARD_KEYS, InputKind, classify, dispatch
from app.utils.logging import log_project_visit

logger = logging.getLogger(__name__)

calculator_bp = Blueprint('calculator', __name__,
                          template_folder='templates',
                          static_folder='static',
                          url_prefix='/calculator')


def _error_reset_ms():
    return current_app.config.get('CALCULATOR_ERROR_RESET_MS', DEFAULT_ERROR_RESET_MS)


@calculator_bp.route('/')
def index():
    """Display the calculator"""
    log_project_visit('calculator', 'Calculator')
    return render_template(
        'calculator.html',
        keyboard_keys=KEYBOARD_KEYS,
        error_reset_ms=_error_reset_ms(),
    )


@calculator_bp.route('/api/press', methods=['POST'])
def api_press():
    """Apply one input to the posted state. Returns {display, state, error, reset_after_ms} or {error}."""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'error': 'Missing input'}), 400
    token = data.get('input')
    if not isinstance(token, str) or not token:
        return jsonify({'error': 'Missing input'}), 400

    try:
        state = CalculatorState.from_dict(data.get('state'))
    except InvalidState as e:
        logger.warning(f"Rejected calculator state: {e}")
        # Clear must always work, whatever the page sent
        if classify(token) is not InputKind.CLEAR:
            return jsonify({'error': f'Invalid state: {e}'}), 400
        state = CalculatorState()

    try:
        step = dispatch(state, token)
    except Exception:
        logger.exception(f"Calculator failed on input {token!r}")
        return jsonify({
            'display': ERROR_DISPLAY,
            'state': CalculatorState().to_dict(),
            'error': True,
            'reset_after_ms': _error_reset_ms(),
        }), 500

    if step is None:
        return jsonify({'error': f'Unrecognized input: {token}'}), 400

    return jsonify({
        'display': step.display,
        'state': step.state.to_dict(),
        'error': step.error,
        'reset_after_ms': _error_reset_ms() if step.error else None,
    })
