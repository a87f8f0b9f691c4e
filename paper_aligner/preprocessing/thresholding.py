"""
Local-mean binarization.

Marks a pixel as foreground when it is darker than the mean of the square
block centred on it by more than a bias constant. Pixels closer than
``block_size // 2`` to the image edge are never evaluated and stay at the
background value.
"""

import logging

import numpy as np

from paper_aligner.common.errors import InvalidInputError
from paper_aligner.common.types import ImageBuffer

logger = logging.getLogger(__name__)

FOREGROUND = 255
BACKGROUND = 0


def validate_single_channel(image: np.ndarray) -> ImageBuffer:
    """
    Validate a grayscale/binary buffer.

    Raises:
        InvalidInputError: If the buffer is empty, not uint8 or not 2-D.
    """
    buffer = ImageBuffer.validate_array(image)
    if not buffer.is_grayscale:
        raise InvalidInputError(
            f"Expected a single-channel image, got shape {buffer.shape}"
        )
    return buffer


def block_sums(image: np.ndarray, block_size: int) -> np.ndarray:
    """
    Sum of every ``block_size x block_size`` window, via an integral image.

    Returns:
        int64 array of shape (H - block_size + 1, W - block_size + 1); entry
        (i, j) is the sum of the window whose top-left pixel is (i, j).
    """
    integral = np.zeros((image.shape[0] + 1, image.shape[1] + 1), dtype=np.int64)
    integral[1:, 1:] = image.astype(np.int64).cumsum(axis=0).cumsum(axis=1)

    k = block_size
    return (
        integral[k:, k:] - integral[:-k, k:] - integral[k:, :-k] + integral[:-k, :-k]
    )


def local_mean_threshold(
    gray: np.ndarray, block_size: int = 15, c: int = 10
) -> np.ndarray:
    """
    Binarize a grayscale image against its local block mean.

    For every interior pixel, ``mean = block_sum // block_size**2`` (integer
    division) and the output is 255 when ``pixel < mean - c``, else 0.

    Args:
        gray: uint8 array of shape (H, W).
        block_size: Odd side length of the averaging block (>= 3).
        c: Bias subtracted from the mean.

    Returns:
        New uint8 mask of shape (H, W) with values in {0, 255}.

    Raises:
        InvalidInputError: If block_size is even, smaller than 3, or larger
            than the image's smaller dimension.
    """
    buffer = validate_single_channel(gray)

    if block_size < 3 or block_size % 2 == 0:
        raise InvalidInputError(
            f"block_size must be an odd integer >= 3, got {block_size}"
        )
    if block_size > min(buffer.height, buffer.width):
        raise InvalidInputError(
            f"block_size {block_size} exceeds image dimensions "
            f"{buffer.width}x{buffer.height}"
        )

    offset = block_size // 2
    result = np.zeros_like(buffer.data)

    means = block_sums(buffer.data, block_size) // (block_size * block_size)
    centers = buffer.data[
        offset : buffer.height - offset, offset : buffer.width - offset
    ].astype(np.int64)
    result[offset : buffer.height - offset, offset : buffer.width - offset] = np.where(
        centers < means - c, FOREGROUND, BACKGROUND
    )

    logger.debug(
        f"Local-mean threshold (block_size={block_size}, c={c}): "
        f"{int(np.count_nonzero(result))} foreground pixels"
    )
    return result
