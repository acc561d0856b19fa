"""
Errors raised by the statistics core.

Undefined statistics are never raised; they are reported as NaN.
"""


class InvalidInputError(ValueError):
    """Raised when a caller breaks an input contract (e.g. mismatched array lengths)."""
    pass
