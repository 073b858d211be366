"""
Color and color-delta values for the diff engine.

A PixelColor holds four signed 16-bit channels. Colors read from an image
hold 0-255 values, while deltas between two colors may be negative.
Identity is defined on the RGB channels only: two colors that differ only
in alpha compare equal and share a ColorKey.

Classes:
    ColorKey: Hashable (r, g, b) key used by the diff container
    PixelColor: Immutable four channel color or color delta

Functions:
    to_int16: Narrow an integer to a signed 16-bit value
"""

from dataclasses import dataclass
from typing import NamedTuple

from ImgDiff_Libs.constants import BYTE_MASK, INT16_MASK, INT16_SIGN


def to_int16(value: int) -> int:
    """
    Narrow an integer to a signed 16-bit value with two's complement wraparound.

    Args:
        value: Integer to narrow

    Returns:
        Integer in the range -32768..32767
    """
    return ((int(value) + INT16_SIGN) & INT16_MASK) - INT16_SIGN


class ColorKey(NamedTuple):
    """RGB part of a PixelColor, used as the key of the sparse pixel map."""

    r: int
    g: int
    b: int


@dataclass(frozen=True, eq=False)
class PixelColor:
    """
    Four channel color or color delta.

    Use from_packed_argb() for colors read from an image and
    from_channels() for deltas, which may be negative.

    Attributes:
        r: Red channel
        g: Green channel
        b: Blue channel
        a: Alpha channel (not part of the color's identity)
    """

    r: int
    g: int
    b: int
    a: int = 0

    @classmethod
    def from_packed_argb(cls, argb: int) -> "PixelColor":
        """
        Build a color from a packed 32-bit ARGB integer.

        Signed and unsigned 32-bit inputs give the same result.

        Args:
            argb: Packed color, 0xAARRGGBB

        Returns:
            PixelColor with each channel in 0-255
        """
        return cls(
            r=(argb >> 16) & BYTE_MASK,
            g=(argb >> 8) & BYTE_MASK,
            b=argb & BYTE_MASK,
            a=(argb >> 24) & BYTE_MASK,
        )

    @classmethod
    def from_channels(cls, r: int, g: int, b: int, a: int) -> "PixelColor":
        """Build a color or delta from explicit channels, narrowed to int16."""
        return cls(to_int16(r), to_int16(g), to_int16(b), to_int16(a))

    @property
    def key(self) -> ColorKey:
        return ColorKey(self.r, self.g, self.b)

    def to_packed_argb(self) -> int:
        """
        Pack the channels as (a << 24) | (r << 16) | (g << 8) | b.

        No masking is applied. Channels outside 0-255 bleed into their
        neighbours, so callers mask deltas before rendering them.
        """
        return self.a << 24 | self.r << 16 | self.g << 8 | self.b

    def difference(self, other: "PixelColor") -> "PixelColor":
        """
        Channel-wise difference other - self.

        Args:
            other: Color to subtract this color from

        Returns:
            Delta PixelColor, each channel narrowed to int16
        """
        return PixelColor.from_channels(
            other.r - self.r,
            other.g - self.g,
            other.b - self.b,
            other.a - self.a,
        )

    def add(self, delta: "PixelColor") -> "PixelColor":
        """Channel-wise sum self + delta, each channel narrowed to int16."""
        return PixelColor.from_channels(
            self.r + delta.r,
            self.g + delta.g,
            self.b + delta.b,
            self.a + delta.a,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelColor):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return f"{self.a} {self.r} {self.g} {self.b}"
