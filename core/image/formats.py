"""
Codec resolution.

Determines the codec identifier used for both decode and encode from a
declared content type and a filename-like storage key. The declared content
type always takes precedence over the key extension.
"""

import logging
from typing import Optional

from PIL import Image

from core.constants import FormatConstants
from core.enums import CodecFormat
from core.exceptions import UnknownFormat

logger = logging.getLogger(__name__)


def _codec_from_content_type(content_type: Optional[str]) -> Optional[str]:
    if not content_type:
        return None

    # Drop MIME parameters ("image/png; charset=binary")
    mime = content_type.split(";", 1)[0].strip().lower()

    codec = FormatConstants.MIME_TO_CODEC.get(mime)
    if codec:
        return codec

    prefix = FormatConstants.IMAGE_MIME_PREFIX
    if mime.startswith(prefix) and len(mime) > len(prefix):
        # Best effort: the subtype may not be a codec we can handle
        return mime[len(prefix):]

    return None


def _codec_from_key(key: str) -> Optional[str]:
    index = key.rfind(".")
    if index < 0 or index == len(key) - 1:
        return None

    extension = key[index + 1 :].lower()
    return FormatConstants.EXTENSION_ALIASES.get(extension, extension)


def resolve_format(content_type: Optional[str], key: str) -> Optional[str]:
    """
    Resolve the codec identifier for an object.

    Args:
        content_type: Declared MIME type from storage metadata, if any
        key: Object key (filename-like string)

    Returns:
        Codec identifier (e.g. "jpeg", "png"), or None if neither the content
        type nor the key extension is usable

    Example:
        >>> resolve_format("image/png", "photo.jpg")
        'png'
        >>> resolve_format(None, "photo.JPG")
        'jpeg'
    """
    codec = _codec_from_content_type(content_type)
    if codec:
        logger.debug(f"Resolved codec '{codec}' from content type '{content_type}'")
        return codec

    codec = _codec_from_key(key)
    if codec:
        logger.debug(f"Resolved codec '{codec}' from key extension of '{key}'")
    return codec


def require_format(content_type: Optional[str], key: str) -> str:
    """Resolve the codec identifier, raising UnknownFormat when impossible."""
    codec = resolve_format(content_type, key)
    if codec is None:
        raise UnknownFormat(
            f"Cannot determine image format for key '{key}' "
            f"(content type: {content_type or 'none'})"
        )
    return codec


def pil_format_for(codec: str) -> Optional[str]:
    """
    Map a codec identifier to a Pillow format name.

    Uses Pillow's registered extensions first ("tif" -> "TIFF"), then the
    upper-cased identifier. Only formats Pillow can both read and write are
    returned.

    Args:
        codec: Codec identifier

    Returns:
        Pillow format name, or None if Pillow cannot round-trip the codec
    """
    Image.init()

    candidate = Image.registered_extensions().get(f".{codec}", codec.upper())
    if candidate in Image.OPEN and candidate in Image.SAVE:
        return candidate
    return None


def content_type_for(codec: str, declared: Optional[str] = None) -> str:
    """
    Content type stored alongside the transformed object.

    A declared image content type is kept as-is. Non-image declarations
    (e.g. S3's default "binary/octet-stream") are replaced by the codec's
    canonical MIME type, falling back to a generic binary type.
    """
    if _codec_from_content_type(declared) is not None:
        return declared

    known = CodecFormat.from_identifier(codec)
    if known is not None:
        return known.mime_type
    return FormatConstants.DEFAULT_CONTENT_TYPE
