"""
Boundary extraction and polygon geometry.

Traces the outer boundaries of foreground regions in a binary mask and
provides the polygon measurements used to pick the sheet outline:
perimeter, Douglas-Peucker simplification, shoelace area and convexity,
all computed with OpenCV.
"""

import logging
from typing import List, Union

import cv2
import numpy as np

from paper_aligner.common.errors import InvalidInputError
from paper_aligner.preprocessing.thresholding import validate_single_channel

logger = logging.getLogger(__name__)

PolygonLike = Union[np.ndarray, list]


def _as_contour(polygon: PolygonLike) -> np.ndarray:
    """Convert a polygon to OpenCV's contour layout (N, 1, 2), int32 or float32."""
    pts = np.asarray(polygon)
    if pts.ndim == 3 and pts.shape[1] == 1:
        # Already in OpenCV contour layout
        pts = pts.reshape(-1, 2)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise InvalidInputError(f"Expected polygon of shape (N, 2), got {pts.shape}")

    dtype = np.int32 if np.issubdtype(pts.dtype, np.integer) else np.float32
    return pts.astype(dtype).reshape(-1, 1, 2)


def find_boundaries(mask: np.ndarray) -> List[np.ndarray]:
    """
    Extract the outermost boundary of every foreground region.

    Nested boundaries (holes and shapes inside holes) are not returned.
    Straight runs are compressed to their end points.

    Args:
        mask: Binary uint8 mask of shape (H, W); non-zero is foreground.

    Returns:
        List of int32 arrays of shape (N, 2) in boundary traversal order.
        List order follows OpenCV's scan order and carries no geometric
        meaning.
    """
    buffer = validate_single_channel(mask)

    contours, _ = cv2.findContours(
        buffer.data.copy(), cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE
    )
    boundaries = [c.reshape(-1, 2).astype(np.int32) for c in contours]

    logger.debug(f"Found {len(boundaries)} outer boundaries")
    return boundaries


def perimeter(polygon: PolygonLike) -> float:
    """Length of the closed polyline through all vertices."""
    contour = _as_contour(polygon)
    if len(contour) < 2:
        return 0.0
    return float(cv2.arcLength(contour, True))


def polygon_area(polygon: PolygonLike) -> float:
    """Enclosed area of a closed polygon (shoelace formula)."""
    contour = _as_contour(polygon)
    if len(contour) < 3:
        return 0.0
    return float(abs(cv2.contourArea(contour)))


def simplify_polygon(polygon: PolygonLike, epsilon: float) -> np.ndarray:
    """
    Simplify a closed curve with the Douglas-Peucker algorithm.

    A vertex is kept only when its perpendicular distance to the chord of
    the chain it splits exceeds ``epsilon``.

    Args:
        polygon: Closed curve of shape (N, 2) (or OpenCV's (N, 1, 2)).
        epsilon: Distance tolerance in pixels.

    Returns:
        Polygon of shape (M, 2), M <= N, following the input's traversal
        direction. int32 for integer input, float32 otherwise.
    """
    contour = _as_contour(polygon)
    if len(contour) < 3:
        return contour.reshape(-1, 2).copy()

    approx = cv2.approxPolyDP(contour, float(epsilon), True)
    return approx.reshape(-1, 2)


def _drop_redundant_vertices(pts: np.ndarray) -> np.ndarray:
    """Remove repeated vertices and vertices lying inside a straight run."""
    pts = pts[np.any(pts != np.roll(pts, 1, axis=0), axis=1)]
    if len(pts) < 3:
        return pts

    incoming = pts - np.roll(pts, 1, axis=0)
    outgoing = np.roll(pts, -1, axis=0) - pts
    cross = incoming[:, 0] * outgoing[:, 1] - incoming[:, 1] * outgoing[:, 0]
    dot = incoming[:, 0] * outgoing[:, 0] + incoming[:, 1] * outgoing[:, 1]
    return pts[~((cross == 0) & (dot > 0))]


def is_convex(polygon: PolygonLike) -> bool:
    """
    Check whether a closed polygon is convex and simple.

    Zero-length edges and straight-through vertices are ignored; the
    remaining turns must all share one direction. A polygon that winds
    around more than once (a star) does not enclose its own convex hull
    and is rejected.
    """
    pts = _as_contour(polygon).reshape(-1, 2).astype(np.float64)
    pts = _drop_redundant_vertices(pts)
    if len(pts) < 3:
        return False

    contour = pts.astype(np.float32).reshape(-1, 1, 2)
    if not cv2.isContourConvex(contour):
        return False

    area = abs(cv2.contourArea(contour))
    hull_area = cv2.contourArea(cv2.convexHull(contour))
    return bool(area > 0 and np.isclose(area, hull_area, rtol=1e-6, atol=1e-6))
