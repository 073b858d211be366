"""
PixelLib - Pixel value types and raster access

This module provides the positioned alpha sample, the color/delta
value used by the diff engine, and packed ARGB access to images.
"""

from ImgDiff_Libs.PixelLib.pixel import Pixel
from ImgDiff_Libs.PixelLib.pixel_color import ColorKey, PixelColor, to_int16
from ImgDiff_Libs.PixelLib.raster import ArgbRaster, pack_argb, unpack_argb

__all__ = [
    "Pixel",
    "ColorKey",
    "PixelColor",
    "to_int16",
    "ArgbRaster",
    "pack_argb",
    "unpack_argb",
]
