"""
Paper Aligner

Locates a rectangular sheet of paper in a photograph and rectifies it into
a fronto-parallel rectangle.

Sub-packages:
- common: pixel buffer / point types and the error taxonomy
- preprocessing: grayscale, local-mean threshold, morphology
- detection: boundary tracing, quadrilateral selection, corner ordering
- alignment: homography, rectification and the end-to-end processor
- utils: image/YAML I/O and overlay drawing
"""

from paper_aligner.alignment import (
    AlignerConfig,
    AlignmentResult,
    DetectionStatus,
    PaperAligner,
    load_config,
    process_image,
)
from paper_aligner.common import (
    DegenerateGeometryError,
    InvalidInputError,
    PaperAlignerError,
)

__version__ = "0.1.0"

__all__ = [
    "PaperAligner",
    "process_image",
    "load_config",
    "AlignerConfig",
    "AlignmentResult",
    "DetectionStatus",
    "PaperAlignerError",
    "InvalidInputError",
    "DegenerateGeometryError",
]
