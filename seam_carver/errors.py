"""
Exceptions raised by the carving engine.

Each error also derives from the closest builtin so callers can catch
either the specific type or a plain ``ValueError``/``IndexError``.
"""


class SeamCarvingError(Exception):
    """Base class for all carving errors."""


class InvalidInputError(SeamCarvingError, ValueError):
    """The pixel grid handed to the engine is missing, empty or not RGB."""


class OutOfRangeError(SeamCarvingError, IndexError):
    """A coordinate lies outside the current grid."""


class InvalidSeamError(SeamCarvingError, ValueError):
    """A seam is malformed, or the targeted dimension cannot shrink further."""
