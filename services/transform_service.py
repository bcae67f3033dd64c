"""
Transform Service - Business logic for one transform invocation.

This service orchestrates fetch -> resolve -> decode/transform/encode ->
store against a caller-supplied storage gateway, and turns any pipeline
failure into a failed TransformResult. Nothing is written unless every
earlier stage succeeded.
"""

import logging
from typing import Any, Dict, Optional

from core.enums import TransformStatus
from core.exceptions import TransformError
from core.image.formats import content_type_for, require_format
from core.storage.base import StorageGateway
from core.transform_engine import TransformEngine
from core.utils.decorators import timer
from schemas.transform import (
    TransformDiagnostics,
    TransformFailure,
    TransformRequest,
    TransformResult,
)

logger = logging.getLogger(__name__)


class TransformService:
    """
    Service for running image transforms.

    The storage gateway is created once by the caller and shared; the
    service itself holds no per-request state.
    """

    def __init__(self, storage: StorageGateway, engine: Optional[TransformEngine] = None):
        """
        Initialize transform service.

        Args:
            storage: Storage gateway used for fetch and store
            engine: Transform engine (default engine if None)
        """
        self.storage = storage
        self.engine = engine or TransformEngine()

    def execute(self, request: TransformRequest) -> TransformResult:
        """
        Run one transform.

        Args:
            request: Validated transform request

        Returns:
            TransformResult; status is FAILED with error details when any
            stage failed
        """
        logger.info(f"Processing {request.kind.value}: {request.container}/{request.key}")

        diagnostics: Dict[str, Any] = {}
        error: Optional[TransformError] = None

        with timer() as t:
            try:
                diagnostics = self._run(request)
            except TransformError as e:
                error = e
                diagnostics = e.diagnostics

        diagnostics["processing_time_ms"] = t["ms"]

        if error is not None:
            logger.error(
                f"{request.kind.value} failed at {error.stage.value} stage for "
                f"{request.container}/{request.key}: {error}"
            )
            return self._failed(request, error, diagnostics)

        logger.info(
            f"{request.kind.value} stored at {request.container}/{request.destination_key} "
            f"in {t['ms']}ms"
        )
        return TransformResult(
            container=request.container,
            source_key=request.key,
            kind=request.kind,
            status=TransformStatus.SUCCESS,
            destination_key=request.destination_key,
            diagnostics=TransformDiagnostics(**diagnostics),
        )

    def execute_payload(self, payload: Dict[str, Any]) -> TransformResult:
        """
        Validate an untrusted payload and run the transform.

        Invalid payloads produce a failed result instead of raising.
        """
        try:
            request = TransformRequest.parse(payload)
        except TransformError as e:
            logger.error(f"Rejected transform request: {e}")
            return TransformResult(
                container=payload.get("container") if isinstance(payload, dict) else None,
                source_key=payload.get("key") if isinstance(payload, dict) else None,
                status=TransformStatus.FAILED,
                error=TransformFailure.from_error(e),
            )
        return self.execute(request)

    def _run(self, request: TransformRequest) -> Dict[str, Any]:
        stored = self.storage.fetch(request.container, request.key)
        codec = require_format(stored.content_type, request.key)

        output = self.engine.apply(request.kind, stored.body, codec)

        try:
            self.storage.store(
                request.container,
                request.destination_key,
                output.body,
                content_type=content_type_for(codec, stored.content_type),
            )
        except TransformError as e:
            e.diagnostics.update(output.diagnostics)
            raise
        return output.diagnostics

    @staticmethod
    def _failed(
        request: TransformRequest, error: TransformError, diagnostics: Dict[str, Any]
    ) -> TransformResult:
        return TransformResult(
            container=request.container,
            source_key=request.key,
            kind=request.kind,
            status=TransformStatus.FAILED,
            diagnostics=TransformDiagnostics(**diagnostics),
            error=TransformFailure.from_error(error),
        )
