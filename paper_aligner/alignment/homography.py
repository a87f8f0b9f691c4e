"""
Projective transforms.

Solves the exact homography for four point correspondences and resamples
images through it with OpenCV.
"""

import logging
from typing import Tuple, Union

import cv2
import numpy as np

from paper_aligner.alignment.types import INTERPOLATION_METHODS
from paper_aligner.common.errors import DegenerateGeometryError, InvalidInputError

logger = logging.getLogger(__name__)

INTERPOLATION_FLAGS = {
    "linear": cv2.INTER_LINEAR,
    "nearest": cv2.INTER_NEAREST,
}


def _has_full_rank(src: np.ndarray, dst: np.ndarray) -> bool:
    """Check that the 8x8 system behind the homography is solvable."""
    A = np.zeros((8, 8), dtype=np.float64)
    for i, ((x, y), (u, v)) in enumerate(zip(src, dst)):
        A[2 * i] = [x, y, 1, 0, 0, 0, -u * x, -u * y]
        A[2 * i + 1] = [0, 0, 0, x, y, 1, -v * x, -v * y]
    return np.linalg.matrix_rank(A) == 8


def compute_homography(
    src: Union[np.ndarray, list], dst: Union[np.ndarray, list]
) -> np.ndarray:
    """
    Compute the homography mapping 4 source points onto 4 destination points.

    Fixing ``H[2, 2] = 1`` leaves 8 unknowns; each correspondence
    ``(x, y) -> (u, v)`` contributes two linear equations::

        x*h0 + y*h1 + h2 - u*x*h6 - u*y*h7 = u
        x*h3 + y*h4 + h5 - v*x*h6 - v*y*h7 = v

    The resulting 8x8 system is solved exactly by
    ``cv2.getPerspectiveTransform``.

    Args:
        src: Source points, shape (4, 2).
        dst: Destination points, shape (4, 2).

    Returns:
        3x3 float64 homography.

    Raises:
        InvalidInputError: If either input is not 4 points.
        DegenerateGeometryError: If the points make the system singular
            (three collinear or coincident points).

    Example:
        >>> square = [[0, 0], [1, 0], [1, 1], [0, 1]]
        >>> H = compute_homography(square, [[0, 0], [2, 0], [2, 2], [0, 2]])
        >>> apply_homography(H, [[1, 1]])
        array([[2., 2.]])
    """
    src = np.asarray(src, dtype=np.float32)
    dst = np.asarray(dst, dtype=np.float32)

    if src.shape != (4, 2) or dst.shape != (4, 2):
        raise InvalidInputError(
            f"Expected 4 point correspondences with shape (4, 2), "
            f"got {src.shape} and {dst.shape}"
        )

    if not _has_full_rank(src.astype(np.float64), dst.astype(np.float64)):
        raise DegenerateGeometryError(
            "Cannot solve homography: corner points are collinear or coincident"
        )

    try:
        H = cv2.getPerspectiveTransform(src, dst)
    except cv2.error as e:
        raise DegenerateGeometryError(f"Cannot solve homography: {e}") from e

    if not np.all(np.isfinite(H)):
        raise DegenerateGeometryError("Homography solve produced non-finite values")

    return H.astype(np.float64)


def apply_homography(H: np.ndarray, points: Union[np.ndarray, list]) -> np.ndarray:
    """Project (N, 2) points through a 3x3 homography."""
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 1, 2)
    return cv2.perspectiveTransform(pts, np.asarray(H, dtype=np.float64)).reshape(-1, 2)


def warp_perspective(
    image: np.ndarray,
    H: np.ndarray,
    size: Tuple[int, int],
    interpolation: str = "linear",
) -> np.ndarray:
    """
    Resample ``image`` through the homography ``H`` into a new buffer.

    Every destination pixel is mapped back through ``H^-1`` into the
    source. Source samples outside the image are black.

    Args:
        image: uint8 buffer of shape (H, W) or (H, W, C).
        H: 3x3 homography from source to destination coordinates.
        size: Destination (width, height).
        interpolation: "linear" (bilinear) or "nearest".

    Returns:
        New uint8 buffer of shape (height, width) or (height, width, C).

    Raises:
        InvalidInputError: If the interpolation method is unknown.
        DegenerateGeometryError: If ``H`` is not invertible.
    """
    if interpolation not in INTERPOLATION_METHODS:
        raise InvalidInputError(
            f"Unknown interpolation '{interpolation}'. "
            f"Must be one of {list(INTERPOLATION_METHODS)}"
        )

    H = np.asarray(H, dtype=np.float64)
    try:
        np.linalg.inv(H)
    except np.linalg.LinAlgError as e:
        raise DegenerateGeometryError("Homography is not invertible") from e

    width, height = size
    warped = cv2.warpPerspective(
        image,
        H,
        (int(width), int(height)),
        flags=INTERPOLATION_FLAGS[interpolation],
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=0,
    )

    logger.debug(f"Warped {image.shape} -> {warped.shape} ({interpolation})")
    return warped
