"""
AWS Lambda entry points.

``lambda_handler`` takes ``{"bucket", "key", "transform"}``; the fixed-kind
handlers take ``{"bucket", "key"}`` so each transform can be deployed as its
own function. Every handler returns the TransformResult as a JSON-compatible
dict and never raises for pipeline failures.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from api.dependencies import build_storage_gateway
from config import get_settings
from core.enums import TransformKind
from services.transform_service import TransformService

logger = logging.getLogger(__name__)
logger.setLevel(getattr(logging, get_settings().system.log_level))


@lru_cache()
def get_transform_service() -> TransformService:
    """Build the service once per Lambda container."""
    return TransformService(storage=build_storage_gateway(get_settings().storage))


def _payload(event: Any, kind: Optional[TransformKind] = None) -> Dict[str, Any]:
    if not isinstance(event, dict):
        return {}
    return {
        "container": event.get("bucket"),
        "key": event.get("key"),
        "kind": kind.value if kind is not None else event.get("transform"),
    }


def _handle(event: Any, kind: Optional[TransformKind] = None) -> Dict[str, Any]:
    result = get_transform_service().execute_payload(_payload(event, kind))
    return result.model_dump(mode="json")


def lambda_handler(event, context):
    """Transform selected by the event's "transform" field."""
    return _handle(event)


def grayscale_handler(event, context):
    return _handle(event, TransformKind.GRAYSCALE)


def resize_handler(event, context):
    return _handle(event, TransformKind.RESIZE)


def rotate_handler(event, context):
    return _handle(event, TransformKind.ROTATE)
