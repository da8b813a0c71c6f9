"""
Constants for the Calculator: display sentinels, rounding, limits.
"""

# Display values
INITIAL_DISPLAY = "0"
ERROR_DISPLAY = "Error"

# Results are rounded to this many decimal digits to hide float noise (0.1 + 0.2)
ROUNDING_DIGITS = 8

# How long the page shows "Error" before resetting the display to "0"
DEFAULT_ERROR_RESET_MS = 2000

# Upper bound on any string field of a client-supplied state
MAX_STATE_FIELD_LENGTH = 256

OPERATOR_SYMBOLS = ("+", "-", "*", "/", "%")
