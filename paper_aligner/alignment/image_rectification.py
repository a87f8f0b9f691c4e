"""
Image Rectification

Maps the detected sheet quadrilateral onto an upright rectangle whose size
is derived from the quadrilateral's edge lengths.
"""

import logging
from typing import Tuple, Union

import numpy as np

from paper_aligner.alignment.homography import compute_homography, warp_perspective
from paper_aligner.alignment.types import RectificationResult
from paper_aligner.common.errors import DegenerateGeometryError, InvalidInputError
from paper_aligner.common.types import ImageBuffer

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(np.floor(value + 0.5))


def _validate_corners(corners: Union[np.ndarray, list]) -> np.ndarray:
    corners = np.asarray(corners, dtype=np.float64)
    if corners.shape != (4, 2):
        raise InvalidInputError(
            f"Expected exactly 4 corners with shape (4, 2), got shape {corners.shape}"
        )
    return corners


def compute_target_size(corners: Union[np.ndarray, list]) -> Tuple[int, int]:
    """
    Compute the rectified width and height from ordered corners.

    Takes the longer of each pair of opposite edges so no content is
    squeezed.

    Args:
        corners: Ordered corners [TL, TR, BR, BL], shape (4, 2).

    Returns:
        Tuple of (width, height), each rounded to the nearest pixel.

    Example:
        >>> compute_target_size([[0, 0], [300, 0], [300, 100], [0, 110]])
        (300, 110)
    """
    tl, tr, br, bl = _validate_corners(corners)

    width = max(np.linalg.norm(tr - tl), np.linalg.norm(br - bl))
    height = max(np.linalg.norm(bl - tl), np.linalg.norm(br - tr))

    logger.debug(f"Target size: {width:.1f} x {height:.1f}")
    return _round_half_up(width), _round_half_up(height)


def rectify(
    image: np.ndarray,
    corners: Union[np.ndarray, list],
    interpolation: str = "linear",
) -> RectificationResult:
    """
    Warp the quadrilateral ``corners`` of ``image`` to a top-down rectangle.

    The destination rectangle is (0, 0), (w-1, 0), (w-1, h-1), (0, h-1) in
    the same TL, TR, BR, BL order as the corners.

    Args:
        image: Source buffer (H, W, 3) or (H, W).
        corners: Ordered corners [TL, TR, BR, BL], shape (4, 2).
        interpolation: "linear" (bilinear) or "nearest".

    Returns:
        RectificationResult with the resampled image and the transform.

    Raises:
        InvalidInputError: If the image is empty or corners are not 4 points.
        DegenerateGeometryError: If the target rectangle has no area or the
            corners do not determine a transform.
    """
    buffer = ImageBuffer.validate_array(image)
    corners = _validate_corners(corners)

    width, height = compute_target_size(corners)
    if width <= 0 or height <= 0:
        raise DegenerateGeometryError(
            f"Rectified size {width}x{height} is empty: "
            "corners are collinear or coincident"
        )

    dst = np.array(
        [
            [0, 0],  # Top-Left
            [width - 1, 0],  # Top-Right
            [width - 1, height - 1],  # Bottom-Right
            [0, height - 1],  # Bottom-Left
        ],
        dtype=np.float64,
    )

    transform = compute_homography(corners, dst)
    rectified = warp_perspective(buffer.data, transform, (width, height), interpolation)

    logger.info(f"Rectified quadrilateral to {width}x{height} rectangle")

    return RectificationResult(
        image=rectified, transform=transform, width=width, height=height
    )
