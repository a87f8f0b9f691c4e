"""
Canonical corner ordering.
"""

import logging
from typing import Union

import numpy as np

from paper_aligner.common.errors import InvalidInputError

logger = logging.getLogger(__name__)


def order_corners(points: Union[np.ndarray, list]) -> np.ndarray:
    """
    Order 4 points as Top-Left, Top-Right, Bottom-Right, Bottom-Left.

    The points are stably sorted by y. The two smallest-y points form the
    top pair and the other two the bottom pair; within each pair the
    smaller x is the left corner.

    Points sharing a y value keep their input order, so a square rotated by
    exactly 45 degrees (two corners on the same horizontal line through the
    centre) can end up with a left/right corner assigned to the wrong pair.
    This is a known limitation.

    Args:
        points: 4 points of shape (4, 2), in any order.

    Returns:
        float32 array of shape (4, 2): [TL, TR, BR, BL].

    Raises:
        InvalidInputError: If the input is not exactly 4 points.

    Example:
        >>> order_corners([[10, 10], [0, 0], [0, 10], [10, 0]]).tolist()
        [[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0]]
    """
    pts = np.array(points, dtype=np.float32)

    if pts.shape != (4, 2):
        raise InvalidInputError(
            f"Expected exactly 4 points with shape (4, 2), got shape {pts.shape}"
        )

    by_y = sorted(range(4), key=lambda i: pts[i][1])
    top, bottom = by_y[:2], by_y[2:]

    if pts[top[0]][0] < pts[top[1]][0]:
        top_left, top_right = top
    else:
        top_right, top_left = top

    if pts[bottom[0]][0] < pts[bottom[1]][0]:
        bottom_left, bottom_right = bottom
    else:
        bottom_right, bottom_left = bottom

    ordered = pts[[top_left, top_right, bottom_right, bottom_left]]

    logger.debug(
        f"Ordered corners: TL={ordered[0]}, TR={ordered[1]}, "
        f"BR={ordered[2]}, BL={ordered[3]}"
    )
    return ordered
