"""
Shared FastAPI dependencies for the image transform service.
"""

import logging

from fastapi import HTTPException, Request

from config import StorageSettings
from core.storage import InMemoryStorageGateway, S3StorageGateway, StorageGateway
from services.transform_service import TransformService

logger = logging.getLogger(__name__)


def build_storage_gateway(storage_settings: StorageSettings) -> StorageGateway:
    """
    Create the storage gateway selected in settings.

    Args:
        storage_settings: Storage section of the settings

    Returns:
        StorageGateway instance (created once per process)
    """
    if storage_settings.backend == "memory":
        logger.warning("Using in-memory storage; objects are lost on restart")
        return InMemoryStorageGateway()
    return S3StorageGateway.from_settings(storage_settings)


def get_transform_service(request: Request) -> TransformService:
    """
    Get TransformService instance from app state.

    Raises:
        HTTPException: If the service was not initialized
    """
    service = getattr(request.app.state, "transform_service", None)
    if service is None:
        logger.error("Transform service not initialized in app state")
        raise HTTPException(
            status_code=500, detail="Internal server error: Transform service not initialized"
        )
    return service
