"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules.
"""

import pytest

# Corners of the synthetic sheet, in TL, TR, BR, BL order
PAPER_CORNERS = [[50, 40], [350, 60], [340, 260], [60, 250]]


@pytest.fixture
def paper_corners():
    """Fixture providing the ground-truth corners of the synthetic sheet."""
    import numpy as np

    return np.array(PAPER_CORNERS, dtype=np.float32)


@pytest.fixture
def synthetic_paper_image():
    """Fixture providing a 400x300 white quadrilateral on black."""
    import cv2
    import numpy as np

    image = np.zeros((300, 400, 3), dtype=np.uint8)
    pts = np.array(PAPER_CORNERS, dtype=np.int32)
    cv2.fillPoly(image, [pts], (255, 255, 255))
    return image


@pytest.fixture
def filled_rectangle_mask():
    """Fixture providing a binary mask holding one filled axis-aligned rectangle."""
    import numpy as np

    mask = np.zeros((100, 120), dtype=np.uint8)
    mask[20:61, 30:91] = 255  # Corners (30, 20) and (90, 60) inclusive
    return mask
