"""
Centralized enums for the image transform service.

All enums subclass ``str`` so they serialize to plain strings in API
responses and compare equal to their raw values.
"""

from enum import Enum
from typing import Optional


class TransformKind(str, Enum):
    """Transform selected for a single invocation."""

    GRAYSCALE = "grayscale"
    RESIZE = "resize"
    ROTATE = "rotate"

    @property
    def prefix(self) -> str:
        """Destination key prefix reserved for this transform."""
        from core.constants import TransformConstants

        return TransformConstants.DESTINATION_PREFIXES[self]

    def destination_key(self, source_key: str) -> str:
        """Derive the output key: prefix followed by the unmodified source key."""
        return self.prefix + source_key


class TransformStatus(str, Enum):
    """Outcome of an invocation."""

    SUCCESS = "success"
    FAILED = "failed"


class TransformStage(str, Enum):
    """Pipeline stage, attached to failures for diagnostics."""

    VALIDATE = "validate"
    FETCH = "fetch"
    RESOLVE = "resolve"
    DECODE = "decode"
    TRANSFORM = "transform"
    ENCODE = "encode"
    STORE = "store"


class ErrorCode(str, Enum):
    """Failure taxonomy surfaced to callers."""

    INVALID_REQUEST = "invalid_request"
    NOT_FOUND = "not_found"
    ACCESS_DENIED = "access_denied"
    FETCH_FAILED = "fetch_failed"
    UNKNOWN_FORMAT = "unknown_format"
    DECODE_FAILED = "decode_failed"
    ENCODE_FAILED = "encode_failed"
    STORE_FAILED = "store_failed"


class CodecFormat(str, Enum):
    """Codecs with a well-known MIME type."""

    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    BMP = "bmp"
    WEBP = "webp"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value}"

    @classmethod
    def from_identifier(cls, codec: str) -> Optional["CodecFormat"]:
        """Look up a codec identifier, returning None for unknown codecs."""
        try:
            return cls(codec)
        except ValueError:
            return None
