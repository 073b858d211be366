"""
Pytest configuration and shared fixtures for Image Diff tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import numpy as np
import pytest
from PIL import Image


def make_image(pixels):
    """
    Build an RGBA image from rows of (R, G, B, A) tuples.

    Args:
        pixels: List of rows, each a list of RGBA tuples

    Returns:
        PIL Image in RGBA mode
    """
    height = len(pixels)
    width = len(pixels[0]) if height else 0
    image = Image.new("RGBA", (width, height))
    image.putdata([color for row in pixels for color in row])
    return image


@pytest.fixture
def black_white_pair():
    """
    Provide the 2x1 image pair used across the diff tests.

    Image A is opaque black then opaque white; image B matches except its
    second pixel is 0xFF7F7F7F.

    Returns:
        Tuple of (image_a, image_b)
    """
    image_a = make_image([[(0, 0, 0, 255), (255, 255, 255, 255)]])
    image_b = make_image([[(0, 0, 0, 255), (127, 127, 127, 255)]])
    return image_a, image_b


@pytest.fixture
def random_image_pair():
    """
    Provide two random 16x12 RGBA images of equal size.

    Returns:
        Tuple of (image_a, image_b)
    """
    rng = np.random.default_rng(1234)
    first = rng.integers(0, 256, size=(12, 16, 4), dtype=np.uint8)
    second = rng.integers(0, 256, size=(12, 16, 4), dtype=np.uint8)
    return Image.fromarray(first), Image.fromarray(second)


@pytest.fixture
def temp_output_dir(tmp_path):
    """
    Provide a temporary directory for written images and diff files.

    Args:
        tmp_path: Pytest's built-in temporary directory fixture

    Returns:
        Path object pointing to a temporary directory
    """
    return tmp_path


@pytest.fixture
def image_factory():
    """
    Provide the make_image helper to tests.

    Returns:
        Callable building an RGBA image from rows of RGBA tuples
    """
    return make_image
