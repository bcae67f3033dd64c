"""
Transform API models.

This module contains models for a single transform invocation:
- Request (container, key, transform kind)
- Result with diagnostics and optional failure details
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.enums import ErrorCode, TransformKind, TransformStage, TransformStatus
from core.exceptions import InvalidRequest, TransformError


class TransformTarget(BaseModel):
    """Source image reference"""

    model_config = ConfigDict(frozen=True)

    container: str = Field(..., description="Bucket / container holding the source image")
    key: str = Field(..., description="Object key of the source image")

    @field_validator("container", "key")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v


class TransformRequest(TransformTarget):
    """Request to transform one stored image"""

    kind: TransformKind = Field(..., description="Transform to apply")

    @classmethod
    def parse(cls, payload: Dict[str, Any]) -> "TransformRequest":
        """
        Build a request from untrusted input.

        Raises:
            InvalidRequest: Missing or malformed fields
        """
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise InvalidRequest(f"Invalid transform request ({fields})", cause=e) from e

    @property
    def destination_key(self) -> str:
        return self.kind.destination_key(self.key)


class TransformDiagnostics(BaseModel):
    """What was observed while running the transform"""

    image_format: Optional[str] = None
    original_width: Optional[int] = None
    original_height: Optional[int] = None
    new_width: Optional[int] = None
    new_height: Optional[int] = None
    resized: Optional[bool] = Field(
        default=None, description="Resize only: False when the source was passed through"
    )
    source_mode: Optional[str] = None
    output_mode: Optional[str] = None
    input_size: Optional[int] = None
    output_size: Optional[int] = None
    processing_time_ms: int = 0


class TransformFailure(BaseModel):
    """Typed failure details"""

    code: ErrorCode
    stage: TransformStage
    message: str

    @classmethod
    def from_error(cls, error: TransformError) -> "TransformFailure":
        return cls(code=error.code, stage=error.stage, message=str(error))


class TransformResult(BaseModel):
    """Outcome of one transform invocation"""

    container: Optional[str] = None
    source_key: Optional[str] = None
    kind: Optional[TransformKind] = None
    status: TransformStatus
    destination_key: Optional[str] = None
    diagnostics: TransformDiagnostics = Field(default_factory=TransformDiagnostics)
    error: Optional[TransformFailure] = None

    @property
    def succeeded(self) -> bool:
        return self.status == TransformStatus.SUCCESS
