"""
Transform Engine - decode, run one operation, encode.

The three operations are selected through a single TransformKind table.
Encoding always uses the codec the input was decoded with.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from PIL import Image

from core.enums import TransformKind
from core.exceptions import TransformError
from core.image.converters import decode_image, encode_image
from core.image.processors import (
    needs_resize,
    resize_to_target,
    rotate_clockwise,
    to_grayscale,
)

logger = logging.getLogger(__name__)

Operation = Callable[[Image.Image], Image.Image]

OPERATIONS: Dict[TransformKind, Operation] = {
    TransformKind.GRAYSCALE: to_grayscale,
    TransformKind.RESIZE: resize_to_target,
    TransformKind.ROTATE: rotate_clockwise,
}


@dataclass
class TransformOutput:
    """Encoded output of one operation plus what was observed along the way"""

    body: bytes
    passthrough: bool = False
    diagnostics: Dict[str, Any] = field(default_factory=dict)


class TransformEngine:
    """
    Runs a single transform over encoded image bytes.

    Resize of an image that is already narrow enough is a passthrough: the
    input bytes are returned untouched, without re-encoding.
    """

    def __init__(self, operations: Optional[Dict[TransformKind, Operation]] = None):
        self.operations = OPERATIONS if operations is None else operations

    def apply(self, kind: TransformKind, data: bytes, codec: str) -> TransformOutput:
        """
        Decode, transform and re-encode an image.

        Args:
            kind: Transform to run
            data: Encoded source bytes
            codec: Resolved codec identifier, used for decode and encode

        Returns:
            TransformOutput with encoded bytes and diagnostics

        Raises:
            DecodeFailed: Source bytes cannot be decoded
            EncodeFailed: Codec rejects the transformed image
        """
        diagnostics: Dict[str, Any] = {"image_format": codec, "input_size": len(data)}
        try:
            return self._apply(kind, data, codec, diagnostics)
        except TransformError as e:
            # Keep whatever was learned before the failure
            e.diagnostics.update(diagnostics)
            raise

    def _apply(
        self, kind: TransformKind, data: bytes, codec: str, diagnostics: Dict[str, Any]
    ) -> TransformOutput:
        operation = self.operations[kind]

        with decode_image(data, codec) as image:
            diagnostics.update(
                original_width=image.width,
                original_height=image.height,
                source_mode=image.mode,
            )

            if kind is TransformKind.RESIZE:
                diagnostics["resized"] = needs_resize(image.width)
                if not diagnostics["resized"]:
                    logger.info(
                        f"Width {image.width} within target, passing {codec} bytes through"
                    )
                    diagnostics.update(
                        new_width=image.width,
                        new_height=image.height,
                        output_mode=image.mode,
                        output_size=len(data),
                    )
                    return TransformOutput(body=data, passthrough=True, diagnostics=diagnostics)

            result = operation(image)
            try:
                body = encode_image(result, codec)
                diagnostics.update(
                    new_width=result.width,
                    new_height=result.height,
                    output_mode=result.mode,
                    output_size=len(body),
                )
            finally:
                result.close()

        return TransformOutput(body=body, diagnostics=diagnostics)
