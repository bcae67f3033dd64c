"""
Typed failures raised by the transform pipeline.

Every failure carries the error code surfaced to callers, the pipeline stage
that produced it and, when available, the underlying cause.
"""

from typing import Any, Dict, Optional

from core.enums import ErrorCode, TransformStage


class TransformError(Exception):
    """Base class for all pipeline failures."""

    code: ErrorCode = ErrorCode.INVALID_REQUEST
    default_stage: TransformStage = TransformStage.VALIDATE

    def __init__(
        self,
        message: str,
        stage: Optional[TransformStage] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.stage = stage or self.default_stage
        self.cause = cause
        # Partial diagnostics collected before the failure
        self.diagnostics: Dict[str, Any] = {}

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class InvalidRequest(TransformError):
    """Missing or malformed container, key or transform kind."""

    code = ErrorCode.INVALID_REQUEST
    default_stage = TransformStage.VALIDATE


class ObjectNotFound(TransformError):
    """Source object (or its container) does not exist."""

    code = ErrorCode.NOT_FOUND
    default_stage = TransformStage.FETCH

    def __init__(self, container: str, key: str, cause: Optional[BaseException] = None):
        super().__init__(f"Object not found: {container}/{key}", cause=cause)
        self.container = container
        self.key = key


class AccessDenied(TransformError):
    """Caller is not authorized to read the source object."""

    code = ErrorCode.ACCESS_DENIED
    default_stage = TransformStage.FETCH

    def __init__(self, container: str, key: str, cause: Optional[BaseException] = None):
        super().__init__(f"Access denied: {container}/{key}", cause=cause)
        self.container = container
        self.key = key


class FetchFailed(TransformError):
    """Any other backend error while reading the source object."""

    code = ErrorCode.FETCH_FAILED
    default_stage = TransformStage.FETCH


class UnknownFormat(TransformError):
    """No codec could be derived from content type or key."""

    code = ErrorCode.UNKNOWN_FORMAT
    default_stage = TransformStage.RESOLVE


class DecodeFailed(TransformError):
    """Bytes could not be decoded with the resolved codec."""

    code = ErrorCode.DECODE_FAILED
    default_stage = TransformStage.DECODE


class EncodeFailed(TransformError):
    """Codec rejected the transformed raster."""

    code = ErrorCode.ENCODE_FAILED
    default_stage = TransformStage.ENCODE


class StoreFailed(TransformError):
    """Backend error while writing the destination object."""

    code = ErrorCode.STORE_FAILED
    default_stage = TransformStage.STORE
