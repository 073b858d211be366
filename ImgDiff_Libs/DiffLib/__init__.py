"""
DiffLib - Sparse image diff storage

This module provides the diff container and its binary encoding.
"""

from ImgDiff_Libs.DiffLib.diff_container import DiffContainer, DiffDecodeError

__all__ = [
    "DiffContainer",
    "DiffDecodeError",
]
