"""
Constants and configuration values for the image transform service.
Centralizes all magic numbers and fixed lookup tables.
"""

from core.enums import CodecFormat, TransformKind


# Transform Constants
class TransformConstants:
    """Constants related to the transform operations."""

    # Resize: proportional downscale to a fixed width, never upscale
    RESIZE_TARGET_WIDTH = 800
    MIN_OUTPUT_DIMENSION = 1

    # Output namespace per transform kind
    DESTINATION_PREFIXES = {
        TransformKind.GRAYSCALE: "grayscale/",
        TransformKind.RESIZE: "resized/",
        TransformKind.ROTATE: "rotated/",
    }


# Format Constants
class FormatConstants:
    """Constants related to codec resolution and raster layouts."""

    IMAGE_MIME_PREFIX = "image/"
    DEFAULT_CONTENT_TYPE = "application/octet-stream"

    # Declared content types recognized exactly
    MIME_TO_CODEC = {
        "image/jpeg": CodecFormat.JPEG.value,
        "image/jpg": CodecFormat.JPEG.value,
        "image/png": CodecFormat.PNG.value,
        "image/gif": CodecFormat.GIF.value,
        "image/bmp": CodecFormat.BMP.value,
        "image/webp": CodecFormat.WEBP.value,
    }

    # Key extension aliases
    EXTENSION_ALIASES = {
        "jpg": CodecFormat.JPEG.value,
    }

    # Pixel layouts the transform operations work on. Bilevel and
    # high bit depth gray keep their own sample type.
    GRAY_LAYOUTS = ("1", "L", "LA", "I;16", "I", "F")
    COLOR_LAYOUTS = ("RGB", "RGBA")
    SUPPORTED_LAYOUTS = GRAY_LAYOUTS + COLOR_LAYOUTS

    # Layout used for indexed sources (full alpha)
    INDEXED_LAYOUTS = ("P", "PA")
    INDEXED_TARGET_LAYOUT = "RGBA"

    # Byte-order variants of 16-bit gray, widened to 32-bit "I"
    WIDE_GRAY_VARIANTS = ("I;16B", "I;16L", "I;16N")
    WIDE_GRAY_TARGET_LAYOUT = "I"

    # Layouts with more than 8 bits per sample
    HIGH_DEPTH_LAYOUTS = ("I;16", "I", "F")
    MAX_16BIT_SAMPLE = 65535
    MAX_8BIT_SAMPLE = 255

    # Resize output is always opaque
    RESIZE_OUTPUT_LAYOUT = "RGB"
