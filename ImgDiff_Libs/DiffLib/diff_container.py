"""
Sparse per-pixel diff container and its binary format.

A DiffContainer maps each RGB delta (ColorKey) to the list of pixels that
carry that delta. Pixels sharing an RGB delta are grouped under one key,
while each pixel keeps its own position and alpha.

Binary layout (big-endian, fixed width):

    int32 width
    int32 height
    int32 colorCount
    colorCount times:
        int16 r, int16 g, int16 b
        int32 pixelCount
        pixelCount times:
            int32 x, int32 y, int16 alpha

Colors are written sorted by (r, g, b) and pixels sorted by (x, y, alpha),
so equal containers always encode to identical bytes.

Classes:
    DiffDecodeError: Raised for malformed diff bytes
    DiffContainer: The sparse pixel map
"""

import logging
import struct
from typing import Any, Dict, Iterator, List, Tuple, Union

from ImgDiff_Libs.constants import (
    BYTE_MASK,
    COLOR_RECORD_FORMAT,
    HEADER_FORMAT,
    PIXEL_RECORD_FORMAT,
)
from ImgDiff_Libs.PixelLib.raster import ArgbRaster
from ImgDiff_Libs.PixelLib.pixel import Pixel
from ImgDiff_Libs.PixelLib.pixel_color import ColorKey, PixelColor

logger = logging.getLogger(__name__)

HEADER_SIZE = struct.calcsize(HEADER_FORMAT)
COLOR_RECORD_SIZE = struct.calcsize(COLOR_RECORD_FORMAT)
PIXEL_RECORD_SIZE = struct.calcsize(PIXEL_RECORD_FORMAT)

ColorLike = Union[PixelColor, ColorKey, Tuple[int, int, int]]


class DiffDecodeError(ValueError):
    """Raised when diff bytes are truncated or structurally inconsistent."""


def _as_key(color: ColorLike) -> ColorKey:
    if isinstance(color, PixelColor):
        return color.key
    r, g, b = color
    return ColorKey(r, g, b)


class DiffContainer:
    """
    Sparse map from RGB delta to the pixels carrying it.

    The container is append-only: pixels are added with put_pixel() and
    never removed. Iteration is canonical, keys sorted by (r, g, b) and
    pixels by (x, y, alpha).

    Example:
        >>> container = DiffContainer(2, 1)
        >>> delta = PixelColor.from_channels(-128, -128, -128, 0)
        >>> container.put_pixel(delta, Pixel(1, 0, delta.a))
        True
        >>> container.get_pixels(delta)
        [Pixel(x=1, y=0, alpha=0)]
    """

    def __init__(self, width: int, height: int):
        self.width = int(width)
        self.height = int(height)
        self._pixels: Dict[ColorKey, List[Pixel]] = {}

    def put_pixel(self, color: ColorLike, pixel: Pixel) -> bool:
        """
        Add a pixel under the RGB key of a color.

        The alpha of the color is ignored; the pixel's own alpha is kept.
        Pixels are not deduplicated.

        Args:
            color: Color or delta whose (r, g, b) is the key
            pixel: Position and alpha of the sample

        Returns:
            True once the pixel has been appended
        """
        self._pixels.setdefault(_as_key(color), []).append(pixel)
        return True

    def get_pixels(self, color: ColorLike) -> List[Pixel]:
        """
        Get the pixels stored under the RGB key of a color.

        Args:
            color: Color or delta to look up, alpha ignored

        Returns:
            Copy of the stored pixel list, empty if the key is absent
        """
        return list(self._pixels.get(_as_key(color), []))

    def colors(self) -> List[ColorKey]:
        """Sorted list of stored RGB keys."""
        return sorted(self._pixels)

    def items(self) -> Iterator[Tuple[ColorKey, List[Pixel]]]:
        """Yield (key, pixels) pairs in canonical order."""
        for key in self.colors():
            yield key, sorted(self._pixels[key])

    @property
    def pixel_count(self) -> int:
        return sum(len(pixels) for pixels in self._pixels.values())

    def __len__(self) -> int:
        return len(self._pixels)

    def _iter_deltas(self) -> Iterator[Tuple[PixelColor, Pixel]]:
        for key, pixels in self.items():
            for pixel in pixels:
                yield PixelColor(key.r, key.g, key.b, pixel.alpha), pixel

    def as_image(self) -> Any:
        """
        Render the container as a standalone RGBA image.

        Each channel is written as the magnitude of the stored delta, so the
        result shows how much changed, not in which direction. Positions not
        stored stay transparent black.

        Returns:
            PIL Image of width x height

        Raises:
            IndexError: If a stored pixel lies outside the container
        """
        raster = ArgbRaster.blank(self.width, self.height)
        for delta, pixel in self._iter_deltas():
            magnitude = PixelColor(
                abs(delta.r) & BYTE_MASK,
                abs(delta.g) & BYTE_MASK,
                abs(delta.b) & BYTE_MASK,
                abs(pixel.alpha) & BYTE_MASK,
            )
            raster.set_argb(pixel.x, pixel.y, magnitude.to_packed_argb())
        return raster.image

    def compose_onto(self, base: Any) -> Any:
        """
        Add the stored deltas onto a base image.

        Composing the diff of (A, B) onto A reconstructs B. Pixels outside
        the base receive the packed delta as-is, since there is nothing to
        add it to.

        Args:
            base: PIL Image the deltas are added to

        Returns:
            New RGBA PIL Image sized to the larger of base and container

        Raises:
            IndexError: If a stored pixel lies outside the result
        """
        source = ArgbRaster(base)
        result = ArgbRaster.blank(
            max(source.width, self.width),
            max(source.height, self.height),
        )

        for delta, pixel in self._iter_deltas():
            if not source.contains(pixel.x, pixel.y):
                result.set_argb(pixel.x, pixel.y, delta.to_packed_argb())
                continue

            original = PixelColor.from_packed_argb(source.get_argb(pixel.x, pixel.y))
            result.set_argb(pixel.x, pixel.y, original.add(delta).to_packed_argb())

        return result.image

    def to_bytes(self) -> bytes:
        """
        Encode the container in the binary diff format.

        Returns:
            Encoded bytes

        Raises:
            ValueError: If a value does not fit its fixed-width field
        """
        chunks = []
        try:
            chunks.append(struct.pack(HEADER_FORMAT, self.width, self.height, len(self._pixels)))
            for key, pixels in self.items():
                chunks.append(struct.pack(COLOR_RECORD_FORMAT, key.r, key.g, key.b, len(pixels)))
                for pixel in pixels:
                    chunks.append(struct.pack(PIXEL_RECORD_FORMAT, pixel.x, pixel.y, pixel.alpha))
        except struct.error as e:
            raise ValueError(f"Diff does not fit the binary format: {e}") from e

        data = b"".join(chunks)
        logger.debug(
            f"Encoded diff {self.width}x{self.height}: "
            f"{len(self._pixels)} colors, {self.pixel_count} pixels, {len(data)} bytes"
        )
        return data

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, memoryview]) -> "DiffContainer":
        """
        Decode a container from the binary diff format.

        Args:
            data: Encoded bytes

        Returns:
            Decoded DiffContainer

        Raises:
            DiffDecodeError: If the bytes are truncated or a count is
                negative or larger than the remaining bytes allow
        """
        data = bytes(data)
        offset = 0

        def read(fmt: str, size: int) -> Tuple[int, ...]:
            nonlocal offset
            try:
                values = struct.unpack_from(fmt, data, offset)
            except struct.error as e:
                raise DiffDecodeError(
                    f"Truncated diff: need {size} bytes at offset {offset}, "
                    f"have {len(data) - offset}"
                ) from e
            offset += size
            return values

        width, height, color_count = read(HEADER_FORMAT, HEADER_SIZE)
        if color_count < 0:
            raise DiffDecodeError(f"Negative color count: {color_count}")
        if color_count * COLOR_RECORD_SIZE > len(data) - offset:
            raise DiffDecodeError(
                f"Color count {color_count} exceeds remaining {len(data) - offset} bytes"
            )

        container = cls(width, height)
        for _ in range(color_count):
            r, g, b, pixel_count = read(COLOR_RECORD_FORMAT, COLOR_RECORD_SIZE)
            if pixel_count < 0:
                raise DiffDecodeError(f"Negative pixel count {pixel_count} for color ({r}, {g}, {b})")
            if pixel_count * PIXEL_RECORD_SIZE > len(data) - offset:
                raise DiffDecodeError(
                    f"Pixel count {pixel_count} for color ({r}, {g}, {b}) "
                    f"exceeds remaining {len(data) - offset} bytes"
                )

            for _ in range(pixel_count):
                x, y, alpha = read(PIXEL_RECORD_FORMAT, PIXEL_RECORD_SIZE)
                container.put_pixel(PixelColor(r, g, b, alpha), Pixel(x, y, alpha))

        if offset < len(data):
            logger.debug(f"Ignoring {len(data) - offset} trailing bytes after diff records")

        logger.debug(
            f"Decoded diff {width}x{height}: {color_count} colors, {container.pixel_count} pixels"
        )
        return container

    def covers(self, other: "DiffContainer") -> bool:
        """
        One-directional containment check.

        True when this container holds every key of other, every pixel list
        of other appears among this container's lists (order-sensitive), and
        the dimensions match. Unlike ==, extra keys here are allowed.
        """
        if not isinstance(other, DiffContainer):
            return False
        keys = all(key in self._pixels for key in other._pixels)
        own_values = list(self._pixels.values())
        values = all(pixels in own_values for pixels in other._pixels.values())
        sizes = self.width == other.width and self.height == other.height
        return keys and values and sizes

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiffContainer):
            return NotImplemented
        if (self.width, self.height) != (other.width, other.height):
            return False
        if self._pixels.keys() != other._pixels.keys():
            return False
        return all(
            sorted(pixels) == sorted(other._pixels[key])
            for key, pixels in self._pixels.items()
        )

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"DiffContainer(width={self.width}, height={self.height}, "
            f"colors={len(self._pixels)}, pixels={self.pixel_count})"
        )
