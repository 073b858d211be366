"""
Command-line driver for Image Diff.

Usage:
    img-diff <image1> <image2> <outputBaseName> [--composite] [--verify]
    img-diff-apply <baseImage> <diffFile> <output>

img-diff writes diff_<outputBaseName>, an image of the per-pixel change
magnitude, and <outputBaseName>.diff, the binary diff. img-diff-apply
composes a stored diff onto a base image to reconstruct the target.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ImgDiff_Libs.constants import (
    COMPOSITE_IMAGE_PREFIX,
    DEFAULT_LOG_LEVEL,
    DIFF_FILE_EXTENSION,
    DIFF_IMAGE_PREFIX,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
)
from ImgDiff_Libs.DiffLib import DiffDecodeError
from ImgDiff_Libs.ImageHandlerLib import (
    compare,
    load_diff_file,
    load_image,
    save_diff_file,
    save_image,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)


def prefixed_path(base: Path, prefix: str) -> Path:
    """Put a prefix in front of the file name part of a path."""
    return base.with_name(f"{prefix}{base.name}")


def diff_file_path(base: Path) -> Path:
    return base.with_name(f"{base.name}{DIFF_FILE_EXTENSION}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="img-diff",
        description="Compute the per-pixel difference between two images.",
    )
    parser.add_argument("image1", type=Path, help="Base image")
    parser.add_argument("image2", type=Path, help="Target image")
    parser.add_argument(
        "output",
        type=Path,
        help="Output base name; writes diff_<output> and <output>.diff",
    )
    parser.add_argument(
        "--composite",
        action="store_true",
        help="Also write composite_<output>, the diff composed onto image1",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Reload the written .diff file and check it matches",
    )
    parser.add_argument("--log-level", default=DEFAULT_LOG_LEVEL, choices=LOG_LEVELS)
    return parser


def build_apply_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="img-diff-apply",
        description="Compose a stored diff onto a base image.",
    )
    parser.add_argument("base", type=Path, help="Base image the diff was computed from")
    parser.add_argument("diff", type=Path, help="Binary .diff file")
    parser.add_argument("output", type=Path, help="Reconstructed image path")
    parser.add_argument("--log-level", default=DEFAULT_LOG_LEVEL, choices=LOG_LEVELS)
    return parser


def run_diff(image1: Path, image2: Path, output: Path, composite: bool = False, verify: bool = False) -> bool:
    """
    Compare two image files and write the diff outputs.

    Returns:
        False if verification was requested and failed, True otherwise

    Raises:
        OSError: If an input cannot be read or decoded, or an output
            cannot be written
    """
    base_image = load_image(image1)
    target_image = load_image(image2)

    container = compare(base_image, target_image)
    logger.info(f"Diff has {len(container)} distinct deltas over {container.pixel_count} pixels")

    image_path = save_image(container.as_image(), prefixed_path(output, DIFF_IMAGE_PREFIX))
    logger.info(f"Wrote diff image {image_path}")

    diff_path = save_diff_file(container, diff_file_path(output))
    logger.info(f"Wrote diff file {diff_path} ({diff_path.stat().st_size} bytes)")

    if composite:
        composite_path = save_image(
            container.compose_onto(base_image),
            prefixed_path(output, COMPOSITE_IMAGE_PREFIX),
        )
        logger.info(f"Wrote composite image {composite_path}")

    if verify:
        reloaded = load_diff_file(diff_path)
        if reloaded != container:
            logger.error(f"Reloaded diff {diff_path} does not match the computed diff")
            return False
        logger.info(f"Verified {diff_path}")

    return True


def run_apply(base: Path, diff: Path, output: Path) -> Path:
    """Compose a diff file onto a base image file and write the result."""
    container = load_diff_file(diff)
    result = container.compose_onto(load_image(base))
    return save_image(result, output)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        ok = run_diff(args.image1, args.image2, args.output, args.composite, args.verify)
    except (OSError, ValueError) as e:
        logger.error(f"Diff failed: {e}")
        return 1

    return 0 if ok else 1


def apply_main(argv: Optional[List[str]] = None) -> int:
    args = build_apply_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        output_path = run_apply(args.base, args.diff, args.output)
    except DiffDecodeError as e:
        logger.error(f"Malformed diff file {args.diff}: {e}")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"Apply failed: {e}")
        return 1

    logger.info(f"Wrote reconstructed image {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
