"""
Unit tests for thresholding module.
"""

import numpy as np
import pytest

from paper_aligner.common.errors import InvalidInputError
from paper_aligner.preprocessing.thresholding import block_sums, local_mean_threshold


def reference_threshold(gray, block_size, c):
    """Direct per-pixel evaluation of the local-mean rule."""
    offset = block_size // 2
    result = np.zeros_like(gray)
    height, width = gray.shape
    for y in range(offset, height - offset):
        for x in range(offset, width - offset):
            block = gray[y - offset : y + offset + 1, x - offset : x + offset + 1]
            mean = int(block.astype(np.int64).sum()) // (block_size * block_size)
            result[y, x] = 255 if int(gray[y, x]) < mean - c else 0
    return result


class TestBlockSums:
    """Tests for block_sums helper."""

    def test_matches_direct_sums(self):
        rng = np.random.default_rng(3)
        image = rng.integers(0, 256, size=(9, 11), dtype=np.uint8)

        sums = block_sums(image, 3)

        assert sums.shape == (7, 9)
        assert sums[0, 0] == int(image[0:3, 0:3].astype(np.int64).sum())
        assert sums[6, 8] == int(image[6:9, 8:11].astype(np.int64).sum())


class TestLocalMeanThreshold:
    """Tests for local_mean_threshold function."""

    def test_uniform_image_is_background(self):
        """No local contrast: pixel == mean, so nothing is foreground."""
        gray = np.full((40, 40), 128, dtype=np.uint8)

        result = local_mean_threshold(gray)

        assert result.shape == gray.shape
        assert result.dtype == np.uint8
        assert not np.any(result)

    def test_dark_pixel_is_foreground(self):
        """A single dark pixel on a bright background is marked."""
        gray = np.full((41, 41), 200, dtype=np.uint8)
        gray[20, 20] = 0

        result = local_mean_threshold(gray, block_size=15, c=10)

        assert result[20, 20] == 255
        assert np.count_nonzero(result) == 1

    def test_border_band_not_processed(self):
        """Pixels closer than block_size // 2 to the edge stay at 0."""
        gray = np.full((41, 41), 200, dtype=np.uint8)
        gray[2, 2] = 0
        gray[38, 20] = 0

        result = local_mean_threshold(gray, block_size=15, c=10)

        assert not np.any(result)

    def test_mean_uses_truncating_division(self):
        """(8 * 10 + 9) // 9 == 9, so 9 < 9 - 0 is false."""
        gray = np.full((5, 5), 10, dtype=np.uint8)
        gray[2, 2] = 9

        result = local_mean_threshold(gray, block_size=3, c=0)
        assert result[2, 2] == 0

        gray[2, 2] = 8  # (80 + 8) // 9 == 9 > 8
        result = local_mean_threshold(gray, block_size=3, c=0)
        assert result[2, 2] == 255

    def test_matches_reference_implementation(self):
        """Integral-image evaluation equals direct block summation."""
        rng = np.random.default_rng(7)
        gray = rng.integers(0, 256, size=(24, 31), dtype=np.uint8)

        for block_size, c in [(3, 0), (5, 10), (7, -5)]:
            np.testing.assert_array_equal(
                local_mean_threshold(gray, block_size=block_size, c=c),
                reference_threshold(gray, block_size, c),
            )

    def test_block_equal_to_smaller_dimension(self):
        """A block as large as the image processes only the centre pixel."""
        gray = np.full((15, 20), 200, dtype=np.uint8)
        gray[7, 10] = 0

        result = local_mean_threshold(gray, block_size=15, c=10)

        assert result[7, 10] == 255
        assert np.count_nonzero(result) == 1

    @pytest.mark.parametrize("block_size", [4, 14, 1, 0])
    def test_invalid_block_size(self, block_size):
        gray = np.zeros((40, 40), dtype=np.uint8)
        with pytest.raises(InvalidInputError, match="block_size"):
            local_mean_threshold(gray, block_size=block_size)

    def test_block_larger_than_image(self):
        gray = np.zeros((10, 20), dtype=np.uint8)
        with pytest.raises(InvalidInputError, match="exceeds image dimensions"):
            local_mean_threshold(gray, block_size=11)

    def test_color_image_rejected(self):
        with pytest.raises(InvalidInputError, match="single-channel"):
            local_mean_threshold(np.zeros((40, 40, 3), dtype=np.uint8))
