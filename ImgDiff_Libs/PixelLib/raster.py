"""
Packed ARGB access to Pillow images.

The diff engine reads and writes pixels as packed 32-bit ARGB integers.
ArgbRaster wraps an RGBA Pillow image and converts between its (R, G, B, A)
tuples and packed integers.

Classes:
    ArgbRaster: Bounds-checked packed ARGB view of an RGBA image

Functions:
    pack_argb: Pack an RGBA tuple into an ARGB integer
    unpack_argb: Split an ARGB integer into an RGBA tuple
"""

from typing import Any, Tuple

from PIL import Image

from ImgDiff_Libs.constants import ARGB_IMAGE_MODE, BYTE_MASK, TRANSPARENT_BLACK

RgbaColor = Tuple[int, int, int, int]


def pack_argb(rgba: RgbaColor) -> int:
    """Pack an (R, G, B, A) tuple into an unsigned 0xAARRGGBB integer."""
    r, g, b, a = rgba
    return (a & BYTE_MASK) << 24 | (r & BYTE_MASK) << 16 | (g & BYTE_MASK) << 8 | (b & BYTE_MASK)


def unpack_argb(argb: int) -> RgbaColor:
    """
    Split a packed ARGB integer into an (R, G, B, A) tuple.

    Only the low byte of each channel position is kept, as a 32-bit ARGB
    raster does, so negative or oversized packed values still unpack.
    """
    return (
        (argb >> 16) & BYTE_MASK,
        (argb >> 8) & BYTE_MASK,
        argb & BYTE_MASK,
        (argb >> 24) & BYTE_MASK,
    )


class ArgbRaster:
    """
    Packed ARGB view of a Pillow image.

    Images that are not RGBA are converted on construction, so writes only
    reach the caller's image when it was already RGBA.

    Example:
        >>> raster = ArgbRaster.blank(2, 1)
        >>> raster.set_argb(1, 0, 0xFF7F7F7F)
        >>> hex(raster.get_argb(1, 0))
        '0xff7f7f7f'
    """

    def __init__(self, image: Any):
        if image.mode != ARGB_IMAGE_MODE:
            image = image.convert(ARGB_IMAGE_MODE)
        self.image = image
        self._pixels = image.load()

    @classmethod
    def blank(cls, width: int, height: int) -> "ArgbRaster":
        """Create a fully transparent black raster."""
        if width < 0 or height < 0:
            raise ValueError(f"Raster dimensions must be >= 0, got {width}x{height}")
        return cls(Image.new(ARGB_IMAGE_MODE, (width, height), TRANSPARENT_BLACK))

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_argb(self, x: int, y: int) -> int:
        self._check_bounds(x, y)
        return pack_argb(self._pixels[x, y])

    def set_argb(self, x: int, y: int, argb: int) -> None:
        self._check_bounds(x, y)
        self._pixels[x, y] = unpack_argb(argb)

    def _check_bounds(self, x: int, y: int) -> None:
        # Pillow pixel access accepts negative indices and wraps them
        if not self.contains(x, y):
            raise IndexError(
                f"Coordinate ({x}, {y}) out of bounds for {self.width}x{self.height} raster"
            )
