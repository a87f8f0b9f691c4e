"""
Visualization Utilities

Overlay of the detected sheet outline on the original image.
"""

from typing import Tuple, Union

import cv2
import numpy as np

from paper_aligner.common.types import Point


def draw_quadrilateral(
    image: np.ndarray,
    corners: Union[np.ndarray, list],
    line_color: Tuple[int, int, int] = (0, 255, 0),
    line_thickness: int = 2,
    marker_color: Tuple[int, int, int] = (0, 0, 255),
    marker_radius: int = 5,
) -> np.ndarray:
    """
    Draw a polygon's edges and vertex markers on a copy of ``image``.

    Args:
        image: BGR image (H, W, 3).
        corners: Vertices in cyclic order, shape (N, 2).
        line_color: BGR color of the edges.
        line_thickness: Edge thickness in pixels.
        marker_color: BGR color of the filled vertex circles.
        marker_radius: Radius of the vertex circles.

    Returns:
        Annotated copy; the input is left untouched.
    """
    annotated = image.copy()
    pts = [Point.from_numpy(c).to_pixel() for c in np.asarray(corners).reshape(-1, 2)]

    for i, pt in enumerate(pts):
        cv2.line(annotated, pt, pts[(i + 1) % len(pts)], line_color, line_thickness)
    for pt in pts:
        cv2.circle(annotated, pt, marker_radius, marker_color, -1)

    return annotated
