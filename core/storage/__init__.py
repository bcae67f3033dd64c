"""
Storage gateways.

- base: StorageGateway contract and StoredObject
- s3: boto3-backed gateway
- memory: dict-backed gateway for local runs and tests
"""

from core.storage.base import StorageGateway, StoredObject
from core.storage.memory import InMemoryStorageGateway
from core.storage.s3 import S3StorageGateway

__all__ = ["StorageGateway", "StoredObject", "InMemoryStorageGateway", "S3StorageGateway"]
