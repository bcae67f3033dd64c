"""
Image conversion utilities.

Handles conversions between the representations used by the pipeline:
- Encoded bytes (any codec Pillow can read and write)
- PIL Images, normalized to gray (1, L, LA, I;16, I, F) or RGB / RGBA layouts
- NumPy arrays (RGB channel order, sample type kept, as used by OpenCV)
"""

import io
import logging
from contextlib import contextmanager
from typing import Iterator

import numpy as np
from PIL import Image

from core.constants import FormatConstants
from core.exceptions import DecodeFailed, EncodeFailed
from core.image.formats import pil_format_for

logger = logging.getLogger(__name__)

# Errors Pillow raises for unreadable or unwritable data. PNG chunk errors
# surface as SyntaxError, truncated GIFs as EOFError.
_PIL_DECODE_ERRORS = (OSError, SyntaxError, EOFError, ValueError, Image.DecompressionBombError)
_PIL_ENCODE_ERRORS = (OSError, KeyError, ValueError, TypeError)


def numpy_to_pil(image: np.ndarray) -> Image.Image:
    """
    Convert NumPy array to PIL Image.

    The mode follows the array shape and dtype: 2D bool -> 1, 2D uint8 -> L,
    2D uint16 -> I;16, 2D int32 -> I, 2D float32 -> F, and for uint8
    channels 2 -> LA, 3 -> RGB, 4 -> RGBA.

    Args:
        image: NumPy array in RGB channel order

    Returns:
        PIL Image
    """
    return Image.fromarray(np.ascontiguousarray(image))


def pil_to_numpy(image: Image.Image) -> np.ndarray:
    """
    Convert PIL Image to NumPy array, keeping the sample type.

    Args:
        image: PIL Image in one of the supported layouts

    Returns:
        NumPy array, shape (h, w) for single-band layouts and (h, w, c)
        otherwise. Bilevel images give a bool array.
    """
    return np.array(image)


def normalize_layout(image: Image.Image) -> Image.Image:
    """
    Normalize a decoded image to a layout the transforms work on.

    - 1, L, LA, I;16, I, F, RGB, RGBA are kept as-is
    - Indexed (P, PA) sources become RGBA (full alpha)
    - Byte-order variants of 16-bit gray become I (no precision lost)
    - Any other source (CMYK, YCbCr, ...) becomes RGB, or RGBA when the
      mode carries alpha

    Args:
        image: Decoded PIL Image

    Returns:
        Image in one of FormatConstants.SUPPORTED_LAYOUTS (may be the same object)
    """
    mode = image.mode

    if mode in FormatConstants.SUPPORTED_LAYOUTS:
        return image

    if mode in FormatConstants.INDEXED_LAYOUTS:
        return image.convert(FormatConstants.INDEXED_TARGET_LAYOUT)

    if mode in FormatConstants.WIDE_GRAY_VARIANTS:
        return image.convert(FormatConstants.WIDE_GRAY_TARGET_LAYOUT)

    target = "RGBA" if "A" in image.getbands() else "RGB"
    logger.debug(f"Normalizing image mode {mode} to {target}")
    return image.convert(target)


def to_eight_bit(image: Image.Image) -> Image.Image:
    """
    Scale a high bit depth gray image down to 8-bit L.

    Integer samples are treated as 16-bit and shifted right by 8, so the
    full range is kept instead of clamping at 255. Float samples are
    clipped to 0..255. Other layouts are returned unchanged.

    Args:
        image: Normalized PIL Image

    Returns:
        8-bit image (the same object when no scaling was needed)
    """
    if image.mode not in FormatConstants.HIGH_DEPTH_LAYOUTS:
        return image

    array = pil_to_numpy(image)
    if image.mode == "F":
        scaled = np.clip(array, 0, FormatConstants.MAX_8BIT_SAMPLE)
    else:
        scaled = np.clip(array, 0, FormatConstants.MAX_16BIT_SAMPLE) >> 8
    return numpy_to_pil(scaled.astype(np.uint8))


@contextmanager
def decode_image(data: bytes, codec: str) -> Iterator[Image.Image]:
    """
    Decode image bytes into a normalized PIL Image.

    The image (and any intermediate conversion) is closed when the context
    exits, on every exit path. Only the first frame of multi-frame input is
    used.

    Args:
        data: Encoded image bytes
        codec: Resolved codec identifier

    Yields:
        Normalized PIL Image

    Raises:
        DecodeFailed: Codec unsupported or bytes unreadable
    """
    if pil_format_for(codec) is None:
        raise DecodeFailed(f"Unsupported image codec '{codec}'")

    try:
        source = Image.open(io.BytesIO(data))
    except _PIL_DECODE_ERRORS as e:
        raise DecodeFailed(f"Failed to decode {codec} image", cause=e) from e

    try:
        try:
            source.load()
            image = normalize_layout(source)
        except _PIL_DECODE_ERRORS as e:
            raise DecodeFailed(f"Failed to decode {codec} image", cause=e) from e

        try:
            yield image
        finally:
            if image is not source:
                image.close()
    finally:
        source.close()


def encode_image(image: Image.Image, codec: str) -> bytes:
    """
    Encode PIL Image with the given codec, using codec defaults.

    Args:
        image: Image to encode
        codec: Codec identifier (same as the one used for decoding)

    Returns:
        Encoded bytes

    Raises:
        EncodeFailed: Codec unsupported or rejects the image layout
    """
    pil_format = pil_format_for(codec)
    if pil_format is None:
        raise EncodeFailed(f"Unsupported image codec '{codec}'")

    with io.BytesIO() as buffer:
        try:
            image.save(buffer, format=pil_format)
        except _PIL_ENCODE_ERRORS as e:
            raise EncodeFailed(
                f"Failed to encode {image.mode} image as {codec}", cause=e
            ) from e
        return buffer.getvalue()
