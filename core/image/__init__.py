"""
Image utilities for the transform pipeline.

This package provides focused image modules:
- formats: Codec resolution from content type and key
- converters: Decode/encode and PIL <-> NumPy conversions
- processors: Grayscale, resize and rotate operations
"""

from core.image.converters import decode_image, encode_image
from core.image.formats import require_format, resolve_format
from core.image.processors import resize_to_target, rotate_clockwise, to_grayscale

__all__ = [
    "decode_image",
    "encode_image",
    "require_format",
    "resolve_format",
    "resize_to_target",
    "rotate_clockwise",
    "to_grayscale",
]
