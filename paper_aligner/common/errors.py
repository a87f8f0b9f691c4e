"""
Error taxonomy for the paper alignment pipeline.

"Not found" is deliberately absent: failing to detect a sheet is a
legitimate result (see DetectionStatus), not an exception.
"""


class PaperAlignerError(ValueError):
    """Base class for all pipeline failures."""


class InvalidInputError(PaperAlignerError):
    """Malformed or out-of-range parameters or pixel buffers."""


class DegenerateGeometryError(PaperAlignerError):
    """Valid input that yields a geometrically unusable result."""
