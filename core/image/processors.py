"""
Image processing operations.

Handles the raster transforms:
- Grayscale conversion (layout preserving)
- Proportional downscale to a fixed width
- Clockwise quarter-turn rotation

Operations take a normalized PIL Image (a gray layout, RGB or RGBA) and return a
new PIL Image. Pixel work is done on NumPy arrays with OpenCV.
"""

import logging
from typing import Tuple

import cv2
import numpy as np
from PIL import Image

from core.constants import FormatConstants, TransformConstants
from core.image.converters import numpy_to_pil, pil_to_numpy, to_eight_bit

logger = logging.getLogger(__name__)


def to_grayscale(image: Image.Image) -> Image.Image:
    """
    Convert image to luminance, keeping the source channel layout.

    Luminance uses the ITU-R 601 weights (OpenCV RGB2GRAY). The gray channel
    is re-expanded so the output has the same layout as the input:
    RGB -> RGB with R=G=B, RGBA -> RGBA with R=G=B. Gray layouts (1, L, LA,
    I;16, I, F) are already luminance and are returned unchanged, at their
    own bit depth. Alpha is carried over unchanged.

    Args:
        image: Normalized PIL Image

    Returns:
        Grayscale image with the same size and mode
    """
    layout = image.mode

    if layout in FormatConstants.GRAY_LAYOUTS:
        return image.copy()

    array = pil_to_numpy(image)

    if layout == "RGB":
        gray = cv2.cvtColor(array, cv2.COLOR_RGB2GRAY)
        return numpy_to_pil(cv2.cvtColor(gray, cv2.COLOR_GRAY2RGB))

    if layout == "RGBA":
        gray = cv2.cvtColor(array, cv2.COLOR_RGBA2GRAY)
        alpha = array[:, :, 3]
        return numpy_to_pil(np.dstack([gray, gray, gray, alpha]))

    raise ValueError(f"Unsupported layout for grayscale: {layout}")


def needs_resize(width: int) -> bool:
    """True when the image is wider than the resize target."""
    return width > TransformConstants.RESIZE_TARGET_WIDTH


def scaled_size(width: int, height: int) -> Tuple[int, int]:
    """
    Calculate the downscaled size for an image wider than the target.

    Height is round-half-up(height * target / width), computed with integer
    arithmetic so that exact halves are never subject to float error, and is
    never smaller than one pixel.

    Args:
        width: Source width (must exceed the target width)
        height: Source height

    Returns:
        Tuple of (new_width, new_height)
    """
    target = TransformConstants.RESIZE_TARGET_WIDTH
    new_height = (2 * height * target + width) // (2 * width)
    return target, max(TransformConstants.MIN_OUTPUT_DIMENSION, new_height)


def resize_to_target(image: Image.Image) -> Image.Image:
    """
    Downscale image to the fixed target width with bilinear interpolation.

    The output is always an opaque 8-bit RGB image: alpha is dropped, gray
    sources are expanded to three channels and high bit depth sources are
    scaled down to 8 bits first.

    Args:
        image: Normalized PIL Image wider than the target width

    Returns:
        Resized RGB image
    """
    if not needs_resize(image.width):
        raise ValueError(
            f"Refusing to upscale: width {image.width} <= "
            f"{TransformConstants.RESIZE_TARGET_WIDTH}"
        )

    new_width, new_height = scaled_size(image.width, image.height)

    source = to_eight_bit(image)
    if source.mode != FormatConstants.RESIZE_OUTPUT_LAYOUT:
        rgb = source.convert(FormatConstants.RESIZE_OUTPUT_LAYOUT)
        array = pil_to_numpy(rgb)
        rgb.close()
    else:
        array = pil_to_numpy(source)
    if source is not image:
        source.close()

    resized = cv2.resize(array, (new_width, new_height), interpolation=cv2.INTER_LINEAR)

    logger.debug(f"Resized {image.width}x{image.height} -> {new_width}x{new_height}")
    return numpy_to_pil(resized)


def rotate_clockwise(image: Image.Image) -> Image.Image:
    """
    Rotate image 90 degrees clockwise.

    Exact pixel permutation: source (x, y) lands at (height - 1 - y, x) in
    an output of size (height, width). Layout and sample type are preserved,
    including bilevel and 16-bit gray.

    Args:
        image: Normalized PIL Image

    Returns:
        Rotated image
    """
    array = pil_to_numpy(image)

    if array.dtype == np.bool_:
        # OpenCV has no boolean arrays
        rotated = cv2.rotate(array.astype(np.uint8), cv2.ROTATE_90_CLOCKWISE)
        return numpy_to_pil(rotated.astype(np.bool_))

    return numpy_to_pil(cv2.rotate(array, cv2.ROTATE_90_CLOCKWISE))
