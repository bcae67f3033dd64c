"""
Transform API Router - Run one image transform per request
"""

import logging

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from api.dependencies import get_transform_service
from api.exceptions import TransformFailedException, safe_endpoint
from core.enums import TransformKind
from schemas.transform import TransformRequest, TransformResult, TransformTarget
from services.transform_service import TransformService

logger = logging.getLogger(__name__)

router = APIRouter()


async def _run(service: TransformService, request: TransformRequest) -> TransformResult:
    # Decode/encode and storage calls block; keep them off the event loop
    result = await run_in_threadpool(service.execute, request)
    if not result.succeeded:
        raise TransformFailedException(result)
    return result


@router.post("")
@safe_endpoint
async def transform(
    request: TransformRequest, service: TransformService = Depends(get_transform_service)
) -> TransformResult:
    """
    Transform a stored image.

    Fetches ``container/key``, applies ``kind`` and stores the output under
    the kind's prefix (``grayscale/``, ``resized/`` or ``rotated/``).

    Args:
        request: Transform request with container, key and kind
        service: Transform service dependency

    Returns:
        TransformResult with destination key and diagnostics
    """
    return await _run(service, request)


@router.post("/{kind}")
@safe_endpoint
async def transform_kind(
    kind: TransformKind,
    target: TransformTarget,
    service: TransformService = Depends(get_transform_service),
) -> TransformResult:
    """
    Transform a stored image with the kind given in the path.

    Args:
        kind: grayscale, resize or rotate
        target: Container and key of the source image
        service: Transform service dependency

    Returns:
        TransformResult with destination key and diagnostics
    """
    request = TransformRequest(container=target.container, key=target.key, kind=kind)
    return await _run(service, request)
