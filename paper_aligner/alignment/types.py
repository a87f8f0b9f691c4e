"""
Data types and structures for the alignment pipeline.

Provides type-safe containers for configuration and results.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from paper_aligner.common.types import Point

INTERPOLATION_METHODS = ("linear", "nearest")


class DetectionStatus(Enum):
    """Pipeline outcomes."""

    FOUND = "FOUND"
    NOT_FOUND = "NOT_FOUND"  # No qualifying quadrilateral; not an error


@dataclass
class ThresholdConfig:
    """Local-mean binarization parameters."""

    block_size: int = 15  # Odd side length of the averaging block
    c: int = 10  # Bias subtracted from the block mean


@dataclass
class MorphologyConfig:
    """Closing parameters."""

    kernel_size: int = 5


@dataclass
class ContourConfig:
    """Polygon simplification parameters."""

    epsilon_ratio: float = 0.02  # Tolerance as a fraction of the perimeter


@dataclass
class RectificationConfig:
    """Resampling options."""

    interpolation: str = "linear"  # "linear" (bilinear) or "nearest"


@dataclass
class AnnotationConfig:
    """Overlay styling for the annotated original (BGR colors)."""

    line_color: Tuple[int, int, int] = (0, 255, 0)
    line_thickness: int = 2
    marker_color: Tuple[int, int, int] = (0, 0, 255)
    marker_radius: int = 5


@dataclass
class AlignerConfig:
    """Complete pipeline configuration."""

    threshold: ThresholdConfig = field(default_factory=ThresholdConfig)
    morphology: MorphologyConfig = field(default_factory=MorphologyConfig)
    contour: ContourConfig = field(default_factory=ContourConfig)
    rectification: RectificationConfig = field(default_factory=RectificationConfig)
    annotation: AnnotationConfig = field(default_factory=AnnotationConfig)


@dataclass
class RectificationResult:
    """
    Output of the rectifier.

    Attributes:
        image: Resampled buffer of shape (height, width[, C]).
        transform: 3x3 homography mapping source corners to the target rectangle.
        width: Target width in pixels.
        height: Target height in pixels.
    """

    image: np.ndarray
    transform: np.ndarray
    width: int
    height: int


@dataclass
class AlignmentResult:
    """
    Output from the alignment pipeline.

    Attributes:
        status: FOUND or NOT_FOUND.
        annotated_original: Copy of the input; when found, with the detected
            quadrilateral's edges and vertices drawn on it.
        rectified: Fronto-parallel view of the sheet (None if not found).
        corners: Ordered corners [TL, TR, BR, BL], shape (4, 2) (None if not found).
        raw_polygon: Selected polygon before reduction to 4 corners.
        candidate_count: Number of qualifying convex polygons seen.
        transform: 3x3 homography used for rectification.
    """

    status: DetectionStatus
    annotated_original: np.ndarray
    rectified: Optional[np.ndarray] = None
    corners: Optional[np.ndarray] = None
    raw_polygon: Optional[np.ndarray] = None
    candidate_count: int = 0
    transform: Optional[np.ndarray] = None

    def is_found(self) -> bool:
        """Check if a sheet was detected and rectified."""
        return self.status == DetectionStatus.FOUND

    def corner_points(self) -> List[Point]:
        """Ordered corners as Point models (empty if not found)."""
        if self.corners is None:
            return []
        return [Point.from_numpy(c) for c in self.corners]

    def get_message(self) -> str:
        """Get human-readable summary."""
        if not self.is_found():
            return "No paper sheet detected; showing original image"

        height, width = self.rectified.shape[:2]
        corners = ", ".join(repr(p) for p in self.corner_points())
        return f"Paper sheet rectified to {width}x{height} from corners {corners}"
