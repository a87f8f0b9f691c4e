"""
Shared Utilities

Image/YAML I/O and result visualization.
"""

from paper_aligner.utils.io import load_image, load_yaml, save_image
from paper_aligner.utils.visualization import draw_quadrilateral

__all__ = [
    "load_image",
    "save_image",
    "load_yaml",
    "draw_quadrilateral",
]
