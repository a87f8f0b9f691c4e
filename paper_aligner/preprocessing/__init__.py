"""
Pixel-level preprocessing: grayscale, local-mean threshold, morphology.
"""

from paper_aligner.preprocessing.grayscale import to_grayscale
from paper_aligner.preprocessing.morphology import dilate, erode, morph_close
from paper_aligner.preprocessing.thresholding import local_mean_threshold

__all__ = [
    "to_grayscale",
    "local_mean_threshold",
    "dilate",
    "erode",
    "morph_close",
]
