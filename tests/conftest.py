"""
Pytest configuration and fixtures for image transform tests
"""

import io

import cv2
import numpy as np
import pytest
from PIL import Image

from core.storage import InMemoryStorageGateway
from services.transform_service import TransformService


def _encode(image: Image.Image, fmt: str) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def rgb_array():
    """Create a 300x200 RGB test raster with distinct pixels"""
    rng = np.random.default_rng(42)
    image = rng.integers(0, 256, size=(200, 300, 3), dtype=np.uint8)
    # Add some structure
    cv2.rectangle(image, (20, 20), (120, 80), (255, 0, 0), -1)
    cv2.circle(image, (220, 140), 40, (0, 255, 0), -1)
    return image


@pytest.fixture
def rgba_array(rgb_array):
    """RGB test raster with a horizontal alpha gradient"""
    alpha = np.tile(np.linspace(0, 255, rgb_array.shape[1], dtype=np.uint8), (rgb_array.shape[0], 1))
    return np.dstack([rgb_array, alpha])


@pytest.fixture
def encode_array():
    """Encode a NumPy raster (RGB order) with Pillow"""

    def encode(array: np.ndarray, fmt: str = "PNG") -> bytes:
        return _encode(Image.fromarray(array), fmt)

    return encode


@pytest.fixture
def image_bytes():
    """Create an encoded image of the given size, mode and format"""

    def create(width: int, height: int, mode: str = "RGB", fmt: str = "PNG") -> bytes:
        rng = np.random.default_rng(width * 31 + height)
        if mode == "1":
            image = Image.fromarray(rng.integers(0, 2, size=(height, width)).astype(bool))
            return _encode(image, fmt)
        if mode == "I;16":
            array = rng.integers(0, 65536, size=(height, width), dtype=np.uint16)
            return _encode(Image.fromarray(array), fmt)

        channels = len(Image.new(mode, (1, 1)).getbands()) if mode != "P" else 3
        shape = (height, width) if channels == 1 else (height, width, channels)
        array = rng.integers(0, 256, size=shape, dtype=np.uint8)
        image = Image.fromarray(array)
        if mode == "P":
            image = image.convert("P")
        return _encode(image, fmt)

    return create


@pytest.fixture
def open_image():
    """Decode bytes into a fully loaded PIL Image"""

    def open_(data: bytes) -> Image.Image:
        image = Image.open(io.BytesIO(data))
        image.load()
        return image

    return open_


@pytest.fixture
def storage():
    """Create in-memory storage gateway for testing"""
    return InMemoryStorageGateway()


@pytest.fixture
def transform_service(storage):
    """Create TransformService backed by in-memory storage"""
    return TransformService(storage=storage)
