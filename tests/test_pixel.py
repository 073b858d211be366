"""
Unit tests for the Pixel value type.

Tests alpha masking, immutability, equality and ordering.
"""

import dataclasses

import pytest

from ImgDiff_Libs.PixelLib.pixel import Pixel


class TestPixelConstruction:
    """Tests for Pixel construction."""

    def test_keeps_position(self):
        """Should keep x and y unchanged."""
        pixel = Pixel(3, 7, 12)

        assert pixel.x == 3
        assert pixel.y == 7
        assert pixel.alpha == 12

    def test_masks_negative_alpha(self):
        """Negative alpha deltas should be stored in byte range."""
        assert Pixel(0, 0, -1).alpha == 255
        assert Pixel(0, 0, -128).alpha == 128

    def test_masks_oversized_alpha(self):
        """Alpha should keep only its low 8 bits."""
        assert Pixel(0, 0, 256).alpha == 0
        assert Pixel(0, 0, 0x1FF).alpha == 255

    def test_is_immutable(self):
        """Should reject attribute assignment."""
        pixel = Pixel(1, 2, 3)

        with pytest.raises(dataclasses.FrozenInstanceError):
            pixel.x = 5


class TestPixelEquality:
    """Tests for Pixel equality, hashing and ordering."""

    def test_equal_on_full_triple(self):
        assert Pixel(1, 2, 3) == Pixel(1, 2, 3)
        assert Pixel(1, 2, 3) != Pixel(1, 2, 4)
        assert Pixel(1, 2, 3) != Pixel(2, 1, 3)

    def test_masked_alphas_compare_equal(self):
        """Alphas equal after masking should give equal pixels."""
        assert Pixel(0, 0, -1) == Pixel(0, 0, 255)

    def test_hash_matches_equality(self):
        assert len({Pixel(1, 2, 3), Pixel(1, 2, 3), Pixel(1, 2, 4)}) == 2

    def test_orders_by_x_then_y_then_alpha(self):
        pixels = [Pixel(1, 0, 0), Pixel(0, 1, 5), Pixel(0, 1, 2), Pixel(0, 0, 9)]

        assert sorted(pixels) == [Pixel(0, 0, 9), Pixel(0, 1, 2), Pixel(0, 1, 5), Pixel(1, 0, 0)]
