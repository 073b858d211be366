"""
ImageHandlerLib - Image I/O and comparison

This module loads, decodes and encodes images and builds diffs
from pairs of images.
"""

from ImgDiff_Libs.ImageHandlerLib.image_handler import (
    load_file,
    create_image_from_bytes,
    image_to_bytes,
    deep_copy,
    load_image,
    save_image,
    compare,
    save_diff_file,
    load_diff_file,
)

__all__ = [
    "load_file",
    "create_image_from_bytes",
    "image_to_bytes",
    "deep_copy",
    "load_image",
    "save_image",
    "compare",
    "save_diff_file",
    "load_diff_file",
]
