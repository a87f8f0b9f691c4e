"""
Common types and errors shared across all pipeline stages.
"""

from paper_aligner.common.errors import (
    DegenerateGeometryError,
    InvalidInputError,
    PaperAlignerError,
)
from paper_aligner.common.types import ImageBuffer, Point

__all__ = [
    "ImageBuffer",
    "Point",
    "PaperAlignerError",
    "InvalidInputError",
    "DegenerateGeometryError",
]
