"""
I/O Utilities

Image and YAML file input/output. These sit outside the pipeline: the
pipeline itself only sees decoded pixel buffers.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import cv2
import numpy as np
import yaml

from paper_aligner.common.errors import InvalidInputError

logger = logging.getLogger(__name__)


def load_image(file_path: Path) -> np.ndarray:
    """
    Decode an image file to a BGR uint8 buffer.

    Raises:
        InvalidInputError: If the file is missing or cannot be decoded.
    """
    file_path = Path(file_path)
    image = cv2.imread(str(file_path), cv2.IMREAD_COLOR)
    if image is None or image.size == 0:
        raise InvalidInputError(f"Could not load image: {file_path}")

    logger.debug(f"Loaded {file_path} ({image.shape[1]}x{image.shape[0]})")
    return image


def save_image(file_path: Path, image: np.ndarray) -> None:
    """Encode a buffer to disk, creating parent directories."""
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(file_path), image):
        raise OSError(f"Could not write image: {file_path}")
    logger.debug(f"Saved {file_path}")


def load_yaml(file_path: Path) -> Dict[str, Any]:
    """Load YAML file."""
    with open(file_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}
