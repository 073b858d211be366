"""
ImgDiff_Libs - Image Diff Library Modules

This package contains core functionality for the Image Diff project,
organized into specialized sub-packages:

- PixelLib: Pixel and PixelColor value types
- DiffLib: Sparse diff container and its binary format
- ImageHandlerLib: Image loading, encoding and comparison
"""

__version__ = "0.1.0"
