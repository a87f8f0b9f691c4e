"""
Grayscale reduction.

Converts a BGR pixel buffer (the OpenCV channel order produced by
cv2.imread) to single-channel luminance using the ITU-R BT.601 weights.
"""

import logging

import numpy as np

from paper_aligner.common.errors import InvalidInputError
from paper_aligner.common.types import ImageBuffer

logger = logging.getLogger(__name__)

# BT.601 luma weights, listed in B, G, R order to match the buffer layout
BGR_WEIGHTS = np.array([0.114, 0.587, 0.299], dtype=np.float64)


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """
    Convert a BGR image to luminance.

    Each output pixel is ``round(0.299*R + 0.587*G + 0.114*B)`` with
    round-half-up, clamped to [0, 255].

    Args:
        image: uint8 array of shape (H, W, 3) in B, G, R channel order.

    Returns:
        New uint8 array of shape (H, W).

    Raises:
        InvalidInputError: If the image is empty, not uint8, or not 3-channel.

    Example:
        >>> red = np.zeros((2, 2, 3), dtype=np.uint8)
        >>> red[..., 2] = 255
        >>> to_grayscale(red)[0, 0]
        76
    """
    buffer = ImageBuffer.validate_array(image)
    if buffer.channels != 3:
        raise InvalidInputError(
            f"Expected a 3-channel BGR image, got shape {buffer.shape}"
        )

    luminance = buffer.data.astype(np.float64) @ BGR_WEIGHTS
    gray = np.clip(np.floor(luminance + 0.5), 0, 255).astype(np.uint8)

    logger.debug(f"Converted {buffer.width}x{buffer.height} image to grayscale")
    return gray
