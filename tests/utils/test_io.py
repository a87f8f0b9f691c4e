"""
Unit tests for io module.
"""

import numpy as np
import pytest

from paper_aligner.common.errors import InvalidInputError
from paper_aligner.utils.io import load_image, load_yaml, save_image


class TestImageIO:
    """Tests for load_image and save_image."""

    def test_save_then_load_png(self, tmp_path, synthetic_paper_image):
        path = tmp_path / "nested" / "paper.png"

        save_image(path, synthetic_paper_image)
        loaded = load_image(path)

        assert path.exists()
        np.testing.assert_array_equal(loaded, synthetic_paper_image)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InvalidInputError, match="Could not load image"):
            load_image(tmp_path / "missing.png")

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")

        with pytest.raises(InvalidInputError, match="Could not load image"):
            load_image(path)


class TestLoadYaml:
    """Tests for load_yaml."""

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_yaml(path) == {}

    def test_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("threshold:\n  c: 3\n", encoding="utf-8")

        assert load_yaml(path) == {"threshold": {"c": 3}}
