"""
Paper rectification: homography solve, resampling and the end-to-end
alignment processor.

Pipeline stages:
1. Grayscale reduction
2. Local-mean binarization
3. Morphological closing
4. Boundary extraction & quadrilateral selection
5. Reduction to 4 corners
6. Corner ordering
7. Perspective rectification
"""

from paper_aligner.alignment.config_loader import load_config, validate_config
from paper_aligner.alignment.homography import (
    apply_homography,
    compute_homography,
    warp_perspective,
)
from paper_aligner.alignment.image_rectification import compute_target_size, rectify
from paper_aligner.alignment.processor import PaperAligner, process_image
from paper_aligner.alignment.types import (
    AlignerConfig,
    AlignmentResult,
    DetectionStatus,
    RectificationResult,
)

__all__ = [
    "PaperAligner",
    "process_image",
    "load_config",
    "validate_config",
    "compute_homography",
    "apply_homography",
    "warp_perspective",
    "compute_target_size",
    "rectify",
    "AlignerConfig",
    "AlignmentResult",
    "DetectionStatus",
    "RectificationResult",
]
