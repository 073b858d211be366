"""
Positioned alpha sample stored in a diff container.

Classes:
    Pixel: Immutable (x, y, alpha) value
"""

from dataclasses import dataclass

from ImgDiff_Libs.constants import BYTE_MASK


@dataclass(frozen=True, order=True)
class Pixel:
    """
    A single position in a diff together with its alpha value.

    The alpha is kept to its low 8 bits so that a negative alpha delta is
    stored in byte range.

    Attributes:
        x: Column of the pixel
        y: Row of the pixel
        alpha: Alpha value, masked to 0-255
    """

    x: int
    y: int
    alpha: int = 0

    def __post_init__(self):
        object.__setattr__(self, "x", int(self.x))
        object.__setattr__(self, "y", int(self.y))
        object.__setattr__(self, "alpha", int(self.alpha) & BYTE_MASK)
