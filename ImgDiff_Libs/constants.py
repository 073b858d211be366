"""
Constants and configuration values for Image Diff.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Output file naming
DIFF_IMAGE_PREFIX = "diff_"
COMPOSITE_IMAGE_PREFIX = "composite_"
DIFF_FILE_EXTENSION = ".diff"
DEFAULT_OUTPUT_FORMAT = "PNG"

# Raster mode used for every decoded image
ARGB_IMAGE_MODE = "RGBA"
TRANSPARENT_BLACK = (0, 0, 0, 0)

# Channel masks and signed 16-bit bounds
BYTE_MASK = 0xFF
INT16_MASK = 0xFFFF
INT16_SIGN = 0x8000

# Binary diff format (big-endian, fixed width)
HEADER_FORMAT = ">iii"        # width, height, color count
COLOR_RECORD_FORMAT = ">hhhi"  # r, g, b, pixel count
PIXEL_RECORD_FORMAT = ">iih"   # x, y, alpha

# Logging
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"
