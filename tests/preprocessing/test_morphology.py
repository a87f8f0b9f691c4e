"""
Unit tests for morphology module.
"""

import numpy as np
import pytest

from paper_aligner.common.errors import InvalidInputError
from paper_aligner.preprocessing.morphology import dilate, erode, morph_close


@pytest.fixture
def random_mask():
    """
    Random binary mask with an empty band of width kernel_size - 1 at the edges.

    The band must stay empty: border pixels are copied rather than filtered,
    so a foreground pixel next to a background border pixel would be eroded
    by the closing and erode(dilate(x)) would no longer contain x.
    """
    rng = np.random.default_rng(0)
    mask = np.where(rng.random((40, 40)) > 0.6, 255, 0).astype(np.uint8)
    mask[:4] = 0
    mask[-4:] = 0
    mask[:, :4] = 0
    mask[:, -4:] = 0
    return mask


class TestDilateErode:
    """Tests for dilate and erode functions."""

    def test_dilate_single_pixel(self):
        mask = np.zeros((21, 21), dtype=np.uint8)
        mask[10, 10] = 255

        result = dilate(mask, kernel_size=5)

        assert np.count_nonzero(result) == 25
        assert np.all(result[8:13, 8:13] == 255)

    def test_erode_square_to_centre(self):
        mask = np.zeros((21, 21), dtype=np.uint8)
        mask[8:13, 8:13] = 255

        result = erode(mask, kernel_size=5)

        assert np.count_nonzero(result) == 1
        assert result[10, 10] == 255

    def test_border_copied_from_source(self):
        """Border band keeps source values; interior sees border pixels."""
        mask = np.zeros((20, 20), dtype=np.uint8)
        mask[0, 0] = 255

        result = dilate(mask, kernel_size=5)

        assert result[0, 0] == 255
        assert result[1, 1] == 0  # Border, copied unchanged
        assert result[2, 2] == 255  # Interior, window reaches (0, 0)

    def test_erode_keeps_border_foreground(self):
        mask = np.full((20, 20), 255, dtype=np.uint8)
        mask[10, 10] = 0

        result = erode(mask, kernel_size=5)

        assert np.all(result[:2] == 255)
        assert np.all(result[8:13, 8:13] == 0)

    def test_inputs_not_modified(self, random_mask):
        original = random_mask.copy()
        dilate(random_mask)
        erode(random_mask)
        np.testing.assert_array_equal(random_mask, original)

    def test_erode_of_dilate_contains_original(self, random_mask):
        closed = erode(dilate(random_mask, 5), 5)
        assert np.all(closed[random_mask == 255] == 255)

    def test_dilate_of_erode_within_original(self, random_mask):
        opened = dilate(erode(random_mask, 5), 5)
        assert np.all(opened[random_mask == 0] == 0)

    def test_border_background_erodes_neighbours(self):
        """Closing is only extensive when the border band is empty."""
        mask = np.full((20, 20), 255, dtype=np.uint8)
        mask[0, 0] = 0

        closed = erode(dilate(mask, 5), 5)

        assert mask[2, 2] == 255
        assert closed[2, 2] == 0

    @pytest.mark.parametrize("kernel_size", [0, 2, 4, -1])
    def test_invalid_kernel_size(self, kernel_size):
        with pytest.raises(InvalidInputError, match="kernel_size"):
            dilate(np.zeros((20, 20), dtype=np.uint8), kernel_size=kernel_size)

    def test_kernel_not_smaller_than_image(self):
        with pytest.raises(InvalidInputError, match="smaller than image"):
            erode(np.zeros((5, 30), dtype=np.uint8), kernel_size=5)

    def test_color_image_rejected(self):
        with pytest.raises(InvalidInputError, match="single-channel"):
            dilate(np.zeros((20, 20, 3), dtype=np.uint8))


class TestMorphClose:
    """Tests for morph_close function."""

    def test_filled_rectangle_unchanged(self):
        mask = np.zeros((60, 60), dtype=np.uint8)
        mask[20:41, 15:46] = 255

        np.testing.assert_array_equal(morph_close(mask), mask)

    def test_idempotent(self):
        mask = np.zeros((60, 60), dtype=np.uint8)
        mask[20:41, 15:46] = 255
        mask[10:14, 10:50] = 255

        once = morph_close(mask)
        np.testing.assert_array_equal(morph_close(once), once)

    def test_bridges_small_gap(self):
        """A 2-pixel break in a 3-pixel stroke is filled."""
        mask = np.zeros((60, 60), dtype=np.uint8)
        mask[29:32, 10:29] = 255
        mask[29:32, 31:51] = 255

        closed = morph_close(mask, kernel_size=5)

        assert np.all(closed[29:32, 29:31] == 255)
        # The stroke does not grow
        assert not np.any(closed[:29])
        assert not np.any(closed[32:])
