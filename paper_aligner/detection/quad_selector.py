"""
Quadrilateral selection.

Picks the sheet outline among the simplified boundaries of a mask: the
largest-area convex polygon with at least four vertices.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import cv2
import numpy as np

from paper_aligner.common.errors import InvalidInputError
from paper_aligner.detection.contours import (
    find_boundaries,
    is_convex,
    perimeter,
    polygon_area,
    simplify_polygon,
)

logger = logging.getLogger(__name__)


@dataclass
class SelectionResult:
    """
    Outcome of quadrilateral selection.

    Attributes:
        best: Winning polygon of shape (N, 2), N >= 4, or None.
        best_area: Enclosed area of the winner (0.0 if none).
        candidates: Every simplified polygon that qualified (>= 4 vertices,
            positive area, convex), in extraction order.
    """

    best: Optional[np.ndarray] = None
    best_area: float = 0.0
    candidates: List[np.ndarray] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.best is not None


def select_quadrilateral(
    boundaries: Sequence[np.ndarray], epsilon_ratio: float = 0.02
) -> SelectionResult:
    """
    Select the largest convex polygon with at least 4 vertices.

    Each boundary is simplified with a tolerance of
    ``epsilon_ratio * perimeter`` before being measured. Ties on area keep
    the first polygon encountered, so the winner among equal shapes depends
    only on boundary extraction order.

    Args:
        boundaries: Closed boundary curves, each of shape (N, 2).
        epsilon_ratio: Simplification tolerance relative to the perimeter.

    Returns:
        SelectionResult; ``best`` is None when nothing qualifies.
    """
    result = SelectionResult()

    for index, boundary in enumerate(boundaries):
        approx = simplify_polygon(boundary, epsilon_ratio * perimeter(boundary))
        area = polygon_area(approx)

        if len(approx) < 4 or area <= 0 or not is_convex(approx):
            continue

        result.candidates.append(approx)
        logger.debug(
            f"Boundary {index}: {len(approx)} vertices, area={area:.1f} qualifies"
        )

        if area > result.best_area:
            result.best = approx
            result.best_area = area

    if result.found:
        logger.info(
            f"Selected {len(result.best)}-vertex polygon with area "
            f"{result.best_area:.1f} among {len(result.candidates)} candidates"
        )
    else:
        logger.info("No convex polygon with at least 4 vertices found")

    return result


def detect_quadrilateral(
    mask: np.ndarray, epsilon_ratio: float = 0.02
) -> SelectionResult:
    """Extract the outer boundaries of ``mask`` and select the sheet outline."""
    return select_quadrilateral(find_boundaries(mask), epsilon_ratio)


def reduce_to_quadrilateral(polygon: np.ndarray) -> np.ndarray:
    """
    Reduce a selected polygon to exactly four corners.

    Polygons with more than four vertices are replaced by the corners of
    their minimum-area bounding rectangle.

    Returns:
        float32 array of shape (4, 2), in polygon (not geometric) order.

    Raises:
        InvalidInputError: If the polygon has fewer than 4 vertices.
    """
    pts = np.asarray(polygon, dtype=np.float32).reshape(-1, 2)

    if len(pts) < 4:
        raise InvalidInputError(
            f"Need at least 4 vertices to form a quadrilateral, got {len(pts)}"
        )
    if len(pts) == 4:
        return pts.copy()

    box = cv2.minAreaRect(pts)
    corners = cv2.boxPoints(box).astype(np.float32)
    logger.warning(
        f"Polygon has {len(pts)} vertices, using minimum-area rectangle "
        f"(center={box[0]}, size={box[1]}, angle={box[2]:.1f})"
    )
    return corners
