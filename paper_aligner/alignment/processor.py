"""
Main processor for the paper alignment pipeline.

Orchestrates the complete pipeline:
1. Grayscale reduction
2. Local-mean binarization
3. Morphological closing
4. Boundary extraction and quadrilateral selection
5. Reduction to 4 corners (minimum-area rectangle fallback)
6. Corner ordering
7. Perspective rectification

Detection failure is reported as NOT_FOUND; invalid input and degenerate
geometry propagate as exceptions.
"""

import logging
from pathlib import Path
from typing import Optional

import numpy as np

from paper_aligner.alignment.config_loader import load_config, validate_config
from paper_aligner.alignment.image_rectification import rectify
from paper_aligner.alignment.types import (
    AlignerConfig,
    AlignmentResult,
    DetectionStatus,
)
from paper_aligner.common.errors import InvalidInputError
from paper_aligner.common.types import ImageBuffer
from paper_aligner.detection.corner_ordering import order_corners
from paper_aligner.detection.quad_selector import (
    SelectionResult,
    detect_quadrilateral,
    reduce_to_quadrilateral,
)
from paper_aligner.preprocessing.grayscale import to_grayscale
from paper_aligner.preprocessing.morphology import morph_close
from paper_aligner.preprocessing.thresholding import local_mean_threshold
from paper_aligner.utils.visualization import draw_quadrilateral

logger = logging.getLogger(__name__)


class PaperAligner:
    """
    Detects a sheet of paper in a photograph and rectifies it.

    The processor holds only its configuration; every call to ``process``
    is independent.

    Example:
        >>> aligner = PaperAligner()
        >>> image = cv2.imread("paper.jpg")
        >>> result = aligner.process(image)
        >>> if result.is_found():
        ...     cv2.imwrite("rectified.jpg", result.rectified)
    """

    def __init__(
        self,
        config: Optional[AlignerConfig] = None,
        config_path: Optional[Path] = None,
    ):
        """
        Initialize the aligner.

        Args:
            config: Pre-built configuration object.
            config_path: YAML file with overrides, used when config is None.
                With neither, the built-in defaults are used.

        Raises:
            InvalidInputError: If the configuration values are invalid.
        """
        if config is not None:
            self.config = config
            logger.info("Using provided configuration")
        elif config_path is not None:
            self.config = load_config(config_path)
            logger.info(f"Loaded configuration from {config_path}")
        else:
            self.config = AlignerConfig()
            logger.info("Using default configuration")

        validate_config(self.config)

    def detect(self, image: np.ndarray) -> SelectionResult:
        """
        Run stages 1-4 and return the quadrilateral selection.

        Args:
            image: BGR image (H, W, 3).

        Returns:
            SelectionResult from the quadrilateral selector.
        """
        logger.info("[Stage 1/7] Grayscale Reduction")
        gray = to_grayscale(image)

        logger.info("[Stage 2/7] Local-Mean Binarization")
        mask = local_mean_threshold(
            gray,
            block_size=self.config.threshold.block_size,
            c=self.config.threshold.c,
        )

        logger.info("[Stage 3/7] Morphological Closing")
        closed = morph_close(mask, kernel_size=self.config.morphology.kernel_size)

        logger.info("[Stage 4/7] Boundary Extraction & Quadrilateral Selection")
        return detect_quadrilateral(
            closed, epsilon_ratio=self.config.contour.epsilon_ratio
        )

    def process(self, image: np.ndarray) -> AlignmentResult:
        """
        Execute the complete alignment pipeline.

        Args:
            image: BGR image (H, W, 3), uint8.

        Returns:
            AlignmentResult; when no sheet is found, ``annotated_original``
            is an unmodified copy of the input and ``rectified`` is None.

        Raises:
            InvalidInputError: If the image or parameters are invalid.
            DegenerateGeometryError: If the detected corners cannot be rectified.
        """
        buffer = ImageBuffer.validate_array(image)
        if buffer.channels != 3:
            raise InvalidInputError(
                f"Expected a 3-channel BGR image, got shape {buffer.shape}"
            )

        logger.info("=" * 60)
        logger.info(f"Starting Paper Alignment ({buffer.width}x{buffer.height})")
        logger.info("=" * 60)

        selection = self.detect(buffer.data)

        if not selection.found:
            logger.warning("No paper sheet detected; returning original image")
            return AlignmentResult(
                status=DetectionStatus.NOT_FOUND,
                annotated_original=buffer.data.copy(),
                candidate_count=len(selection.candidates),
            )

        logger.info("[Stage 5/7] Corner Reduction")
        quad = reduce_to_quadrilateral(selection.best)

        logger.info("[Stage 6/7] Corner Ordering")
        corners = order_corners(quad)

        logger.info("[Stage 7/7] Perspective Rectification")
        rectification = rectify(
            buffer.data, corners, interpolation=self.config.rectification.interpolation
        )

        style = self.config.annotation
        annotated = draw_quadrilateral(
            buffer.data,
            corners,
            line_color=style.line_color,
            line_thickness=style.line_thickness,
            marker_color=style.marker_color,
            marker_radius=style.marker_radius,
        )

        logger.info("=" * 60)
        logger.info(
            f"Paper FOUND - rectified to {rectification.width}x{rectification.height}"
        )
        logger.info("=" * 60)

        return AlignmentResult(
            status=DetectionStatus.FOUND,
            annotated_original=annotated,
            rectified=rectification.image,
            corners=corners,
            raw_polygon=selection.best,
            candidate_count=len(selection.candidates),
            transform=rectification.transform,
        )


def process_image(
    image: np.ndarray, config: Optional[AlignerConfig] = None
) -> AlignmentResult:
    """
    Convenience function for one-shot alignment.

    Example:
        >>> result = process_image(cv2.imread("paper.jpg"))
        >>> print(result.get_message())
    """
    return PaperAligner(config=config).process(image)
