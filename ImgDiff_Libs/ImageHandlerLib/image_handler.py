"""
Image loading, encoding and comparison for Image Diff.

This module is the glue between files on disk, Pillow images and the
diff container: it reads raw bytes, decodes and encodes images, and
compares two images pixel by pixel.

Functions:
    load_file: Read a file into memory
    create_image_from_bytes: Decode image bytes into an RGBA image
    image_to_bytes: Encode an image into bytes
    deep_copy: Independent copy of an image
    load_image: Read and decode an image file
    save_image: Encode and write an image file
    compare: Build a DiffContainer from two images
    save_diff_file: Write a DiffContainer to disk
    load_diff_file: Read a DiffContainer from disk
"""

import io
import logging
from pathlib import Path
from typing import Any, Union

import numpy as np
from PIL import Image

from ImgDiff_Libs.constants import ARGB_IMAGE_MODE, DEFAULT_OUTPUT_FORMAT
from ImgDiff_Libs.DiffLib.diff_container import DiffContainer
from ImgDiff_Libs.PixelLib.pixel import Pixel
from ImgDiff_Libs.PixelLib.pixel_color import PixelColor

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def load_file(path: PathLike) -> bytes:
    """
    Read a whole file into memory.

    Args:
        path: File to read

    Returns:
        The file's raw bytes

    Raises:
        FileNotFoundError: If the file does not exist
        OSError: If the file cannot be read
    """
    file_path = Path(path)
    data = file_path.read_bytes()
    logger.debug(f"Loaded {len(data)} bytes from {file_path}")
    return data


def create_image_from_bytes(data: bytes) -> Any:
    """
    Decode image bytes (PNG, JPEG, BMP, ...) into an RGBA image.

    Args:
        data: Encoded image bytes

    Returns:
        PIL Image in RGBA mode

    Raises:
        IOError: If the bytes cannot be decoded as an image
    """
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (OSError, SyntaxError, ValueError) as e:
        raise IOError(f"Failed to decode image from {len(data)} bytes: {e}") from e

    if img.mode != ARGB_IMAGE_MODE:
        img = img.convert(ARGB_IMAGE_MODE)
    return img


def image_to_bytes(image: Any, format: str = DEFAULT_OUTPUT_FORMAT) -> bytes:
    """
    Encode an image into bytes.

    Args:
        image: PIL Image to encode
        format: Pillow format name, e.g. "PNG" or "BMP"

    Returns:
        Encoded image bytes
    """
    buffer = io.BytesIO()
    image.save(buffer, format=format)
    return buffer.getvalue()


def deep_copy(image: Any) -> Any:
    """Return an independent copy of an image."""
    return image.copy()


def load_image(path: PathLike) -> Any:
    """Read an image file and decode it into an RGBA image."""
    return create_image_from_bytes(load_file(path))


def save_image(image: Any, path: PathLike, format: str = DEFAULT_OUTPUT_FORMAT) -> Path:
    """
    Encode an image and write it to disk.

    Returns:
        Path the image was written to
    """
    output_path = Path(path)
    output_path.write_bytes(image_to_bytes(image, format))
    logger.debug(f"Wrote {format} image {image.width}x{image.height} to {output_path}")
    return output_path


def _padded_channels(image: Any, width: int, height: int) -> np.ndarray:
    # Positions outside the image read as transparent black
    channels = np.zeros((height, width, 4), dtype=np.int16)
    if image.width and image.height:
        channels[: image.height, : image.width] = np.asarray(image, dtype=np.int16)
    return channels


def compare(image_a: Any, image_b: Any) -> DiffContainer:
    """
    Compare two images and record the per-pixel delta from A to B.

    The container is sized to the larger of the two images. Every position
    covered by at least one image is recorded; where only one image covers
    it, the other reads as transparent black. Composing the result onto A
    reconstructs B.

    Args:
        image_a: Primary (base) image
        image_b: Secondary (target) image

    Returns:
        DiffContainer holding B - A for every covered pixel
    """
    if image_a.mode != ARGB_IMAGE_MODE:
        image_a = image_a.convert(ARGB_IMAGE_MODE)
    if image_b.mode != ARGB_IMAGE_MODE:
        image_b = image_b.convert(ARGB_IMAGE_MODE)

    width = max(image_a.width, image_b.width)
    height = max(image_a.height, image_b.height)

    deltas = _padded_channels(image_b, width, height) - _padded_channels(image_a, width, height)

    covered = np.zeros((height, width), dtype=bool)
    covered[: image_a.height, : image_a.width] = True
    covered[: image_b.height, : image_b.width] = True
    ys, xs = np.nonzero(covered)

    container = DiffContainer(width, height)
    for x, y, (r, g, b, a) in zip(xs.tolist(), ys.tolist(), deltas[ys, xs].tolist()):
        delta = PixelColor.from_channels(r, g, b, a)
        container.put_pixel(delta, Pixel(x, y, delta.a))

    logger.debug(
        f"Compared {image_a.width}x{image_a.height} with {image_b.width}x{image_b.height}: "
        f"{len(container)} distinct deltas over {container.pixel_count} pixels"
    )
    return container


def save_diff_file(container: DiffContainer, path: PathLike) -> Path:
    """
    Write a DiffContainer to disk in the binary diff format.

    Returns:
        Path the diff was written to
    """
    output_path = Path(path)
    output_path.write_bytes(container.to_bytes())
    return output_path


def load_diff_file(path: PathLike) -> DiffContainer:
    """
    Read a DiffContainer from a binary diff file.

    Raises:
        FileNotFoundError: If the file does not exist
        DiffDecodeError: If the file is malformed
    """
    return DiffContainer.from_bytes(load_file(path))
