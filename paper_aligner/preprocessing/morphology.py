"""
Morphological dilation, erosion and closing on binary masks.

Only interior pixels are filtered; the border band of width
``kernel_size // 2`` keeps its source values.
"""

import logging
from typing import Callable

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from paper_aligner.common.errors import InvalidInputError
from paper_aligner.preprocessing.thresholding import validate_single_channel

logger = logging.getLogger(__name__)


def _validate_kernel(image: np.ndarray, kernel_size: int) -> np.ndarray:
    buffer = validate_single_channel(image)

    if kernel_size < 1 or kernel_size % 2 == 0:
        raise InvalidInputError(
            f"kernel_size must be a positive odd integer, got {kernel_size}"
        )
    if kernel_size >= min(buffer.height, buffer.width):
        raise InvalidInputError(
            f"kernel_size {kernel_size} must be smaller than image dimensions "
            f"{buffer.width}x{buffer.height}"
        )
    return buffer.data


def _filter(
    image: np.ndarray,
    kernel_size: int,
    reducer: Callable[..., np.ndarray],
) -> np.ndarray:
    src = _validate_kernel(image, kernel_size)
    offset = kernel_size // 2
    height, width = src.shape

    result = src.copy()
    windows = sliding_window_view(src, (kernel_size, kernel_size))
    result[offset : height - offset, offset : width - offset] = reducer(
        windows, axis=(-2, -1)
    )
    return result


def dilate(mask: np.ndarray, kernel_size: int = 5) -> np.ndarray:
    """
    Replace each interior pixel with the maximum of its neighbourhood.

    Raises:
        InvalidInputError: If kernel_size is even or not smaller than the image.
    """
    return _filter(mask, kernel_size, np.max)


def erode(mask: np.ndarray, kernel_size: int = 5) -> np.ndarray:
    """
    Replace each interior pixel with the minimum of its neighbourhood.

    Raises:
        InvalidInputError: If kernel_size is even or not smaller than the image.
    """
    return _filter(mask, kernel_size, np.min)


def morph_close(mask: np.ndarray, kernel_size: int = 5) -> np.ndarray:
    """
    Morphological closing: dilate, then erode with the same kernel.

    Dilating first bridges small gaps in the sheet outline; the erosion
    restores the outline thickness while the bridges survive.
    """
    closed = erode(dilate(mask, kernel_size), kernel_size)
    logger.debug(f"Closed mask with kernel_size={kernel_size}")
    return closed
