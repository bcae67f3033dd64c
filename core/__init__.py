"""
Core modules for the image transform service
"""

from .enums import CodecFormat, TransformKind, TransformStatus
from .exceptions import TransformError
from .transform_engine import TransformEngine

__all__ = [
    "CodecFormat",
    "TransformKind",
    "TransformStatus",
    "TransformError",
    "TransformEngine",
]
