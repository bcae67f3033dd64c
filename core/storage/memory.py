"""
In-memory storage gateway.

Keeps objects in a dict and records every store call. Used for local runs
without an object store and as the storage fake in tests.
"""

import logging
from threading import RLock
from typing import Dict, List, Optional, Tuple

from core.exceptions import AccessDenied, ObjectNotFound, StoreFailed
from core.storage.base import StorageGateway, StoredObject

logger = logging.getLogger(__name__)


class InMemoryStorageGateway(StorageGateway):
    """Dict-backed storage gateway"""

    def __init__(self, denied_containers: Optional[List[str]] = None, read_only: bool = False):
        """
        Initialize in-memory storage.

        Args:
            denied_containers: Containers whose objects may not be read
            read_only: If True, every store call fails with StoreFailed
        """
        self.objects: Dict[Tuple[str, str], StoredObject] = {}
        self.store_calls: List[Tuple[str, str]] = []
        self.denied_containers = set(denied_containers or [])
        self.read_only = read_only

        # Guards the dicts when shared by concurrent requests
        self.lock = RLock()

    def put(
        self, container: str, key: str, body: bytes, content_type: Optional[str] = None
    ) -> None:
        """Seed an object without recording it as a store call."""
        with self.lock:
            self.objects[(container, key)] = StoredObject(body=body, content_type=content_type)

    def fetch(self, container: str, key: str) -> StoredObject:
        if container in self.denied_containers:
            raise AccessDenied(container, key)
        with self.lock:
            stored = self.objects.get((container, key))
        if stored is None:
            raise ObjectNotFound(container, key)
        return stored

    def store(
        self,
        container: str,
        key: str,
        body: bytes,
        content_type: Optional[str] = None,
    ) -> None:
        with self.lock:
            self.store_calls.append((container, key))
            if self.read_only:
                raise StoreFailed(f"Storage is read-only: {container}/{key}")
            self.objects[(container, key)] = StoredObject(body=body, content_type=content_type)
        logger.debug(f"Stored {container}/{key} in memory ({len(body)} bytes)")
