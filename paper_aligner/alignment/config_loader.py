"""
Configuration loader for the alignment pipeline.

Every parameter has an in-code default (see types.py); an optional YAML
file may override any subset of them.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from paper_aligner.alignment.types import (
    INTERPOLATION_METHODS,
    AlignerConfig,
    AnnotationConfig,
    ContourConfig,
    MorphologyConfig,
    RectificationConfig,
    ThresholdConfig,
)
from paper_aligner.common.errors import InvalidInputError
from paper_aligner.utils.io import load_yaml

logger = logging.getLogger(__name__)


def load_config(config_path: Path) -> AlignerConfig:
    """
    Load pipeline configuration overrides from a YAML file.

    Args:
        config_path: Path to the configuration YAML file.

    Returns:
        Validated AlignerConfig; sections or keys absent from the file keep
        their defaults.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is invalid.

    Example:
        >>> config = load_config(Path("aligner.yaml"))
        >>> print(config.threshold.block_size)
        15
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.debug(f"Loading aligner config from {config_path}")
    raw_config = load_yaml(config_path)

    try:
        config = _parse_config(raw_config)
        validate_config(config)
        logger.info("Successfully loaded aligner configuration")
        return config
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid configuration file: {e}") from e


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise TypeError(f"Section '{name}' must be a mapping")
    return section


def _color(value: Any) -> tuple:
    if len(value) != 3:
        raise ValueError(f"Color must have 3 components (B, G, R), got {value}")
    return tuple(int(v) for v in value)


def _parse_config(raw: Dict[str, Any]) -> AlignerConfig:
    """Parse raw dictionary into structured config objects."""
    if not isinstance(raw, dict):
        raise TypeError("Configuration root must be a mapping")

    defaults = AlignerConfig()
    threshold = _section(raw, "threshold")
    morphology = _section(raw, "morphology")
    contour = _section(raw, "contour")
    rectification = _section(raw, "rectification")
    annotation = _section(raw, "annotation")

    return AlignerConfig(
        threshold=ThresholdConfig(
            block_size=int(
                threshold.get("block_size", defaults.threshold.block_size)
            ),
            c=int(threshold.get("c", defaults.threshold.c)),
        ),
        morphology=MorphologyConfig(
            kernel_size=int(
                morphology.get("kernel_size", defaults.morphology.kernel_size)
            ),
        ),
        contour=ContourConfig(
            epsilon_ratio=float(
                contour.get("epsilon_ratio", defaults.contour.epsilon_ratio)
            ),
        ),
        rectification=RectificationConfig(
            interpolation=str(
                rectification.get(
                    "interpolation", defaults.rectification.interpolation
                )
            ),
        ),
        annotation=AnnotationConfig(
            line_color=_color(
                annotation.get("line_color", defaults.annotation.line_color)
            ),
            line_thickness=int(
                annotation.get("line_thickness", defaults.annotation.line_thickness)
            ),
            marker_color=_color(
                annotation.get("marker_color", defaults.annotation.marker_color)
            ),
            marker_radius=int(
                annotation.get("marker_radius", defaults.annotation.marker_radius)
            ),
        ),
    )


def validate_config(config: AlignerConfig) -> None:
    """
    Validate configuration values that do not depend on the image.

    Size limits relative to the image are checked by each stage.

    Raises:
        InvalidInputError: If any configuration value is invalid.
    """
    block_size = config.threshold.block_size
    if block_size < 3 or block_size % 2 == 0:
        raise InvalidInputError(
            f"block_size must be an odd integer >= 3, got {block_size}"
        )

    kernel_size = config.morphology.kernel_size
    if kernel_size < 1 or kernel_size % 2 == 0:
        raise InvalidInputError(
            f"kernel_size must be a positive odd integer, got {kernel_size}"
        )

    if config.contour.epsilon_ratio <= 0:
        raise InvalidInputError("epsilon_ratio must be positive")

    if config.rectification.interpolation not in INTERPOLATION_METHODS:
        raise InvalidInputError(
            f"Invalid interpolation: {config.rectification.interpolation}. "
            f"Must be one of {list(INTERPOLATION_METHODS)}"
        )

    if config.annotation.line_thickness < 1:
        raise InvalidInputError("line_thickness must be at least 1")

    if config.annotation.marker_radius < 0:
        raise InvalidInputError("marker_radius cannot be negative")

    logger.debug("Configuration validation passed")
