"""
Command-line entry point.

Loads an image, runs the alignment pipeline and writes the annotated
original and the rectified sheet next to each other in an output directory.
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from paper_aligner.alignment.config_loader import load_config
from paper_aligner.alignment.processor import PaperAligner
from paper_aligner.alignment.types import INTERPOLATION_METHODS, AlignerConfig
from paper_aligner.common.errors import PaperAlignerError
from paper_aligner.utils.io import load_image, save_image

logger = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def build_config(args: argparse.Namespace) -> AlignerConfig:
    """Merge the optional YAML file with command-line overrides."""
    config = load_config(Path(args.config)) if args.config else AlignerConfig()

    if args.block_size is not None or args.c is not None:
        config.threshold = replace(
            config.threshold,
            block_size=(
                args.block_size
                if args.block_size is not None
                else config.threshold.block_size
            ),
            c=args.c if args.c is not None else config.threshold.c,
        )
    if args.kernel_size is not None:
        config.morphology = replace(config.morphology, kernel_size=args.kernel_size)
    if args.interpolation is not None:
        config.rectification = replace(
            config.rectification, interpolation=args.interpolation
        )
    return config


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Detect a sheet of paper in a photo and rectify it",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--input", type=str, required=True, help="Input image")
    parser.add_argument(
        "--output-dir", type=str, default="results", help="Output directory"
    )
    parser.add_argument("--config", type=str, default=None, help="YAML overrides")
    parser.add_argument("--block-size", type=int, default=None, help="Threshold block size")
    parser.add_argument("--c", type=int, default=None, help="Threshold bias constant")
    parser.add_argument("--kernel-size", type=int, default=None, help="Closing kernel size")
    parser.add_argument(
        "--interpolation",
        choices=INTERPOLATION_METHODS,
        default=None,
        help="Resampling method",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    args = parse_args(argv)

    input_path = Path(args.input)
    output_dir = Path(args.output_dir)

    try:
        config = build_config(args)
        image = load_image(input_path)
        result = PaperAligner(config=config).process(image)
    except (PaperAlignerError, ValueError, FileNotFoundError) as e:
        logger.error(f"Alignment aborted: {e}")
        return EXIT_ERROR

    try:
        save_image(
            output_dir / f"{input_path.stem}_annotated.png", result.annotated_original
        )
        if result.is_found():
            save_image(output_dir / f"{input_path.stem}_rectified.png", result.rectified)
    except OSError as e:
        logger.error(f"Could not write results to {output_dir}: {e}")
        return EXIT_ERROR

    logger.info(result.get_message())
    if not result.is_found():
        return EXIT_NOT_FOUND

    for label, point in zip(
        ("Top-Left", "Top-Right", "Bottom-Right", "Bottom-Left"),
        result.corner_points(),
    ):
        logger.info(f"{label}: {point}")
    return EXIT_FOUND


if __name__ == "__main__":
    sys.exit(main())
