"""
Error types for the chord evolution engine.

All of these are raised before the offending arithmetic happens, so a
failed step never leaves half-updated state behind.
"""


class DriftError(Exception):
    """Base class for engine precondition failures"""


class ZeroDenominatorError(DriftError, ZeroDivisionError):
    """An interval or combined ratio would have a zero denominator"""


class InvalidIntervalError(DriftError, ValueError):
    """Numerator or denominator is not a strictly positive integer"""


class EmptyChordError(DriftError, ValueError):
    """A chord with no notes was passed where an average over notes is needed"""
