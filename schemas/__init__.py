"""
Schemas Package

Pydantic schemas for validation and serialization, shared by the API layer,
the Lambda entry points and the transform service.
"""

from .transform import (
    TransformDiagnostics,
    TransformFailure,
    TransformRequest,
    TransformResult,
    TransformTarget,
)

__all__ = [
    "TransformDiagnostics",
    "TransformFailure",
    "TransformRequest",
    "TransformResult",
    "TransformTarget",
]
