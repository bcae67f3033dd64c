"""Abstract contract for blob storage used by the transform pipeline."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StoredObject:
    """Object body plus the content type recorded in storage metadata"""

    body: bytes
    content_type: Optional[str] = None


class StorageGateway(ABC):
    """Contract for fetching source images and storing transformed ones.

    Implementations could be S3, local memory, etc. The transform service
    depends on this interface and receives an instance from its caller.
    Calls are synchronous and blocking.
    """

    @abstractmethod
    def fetch(self, container: str, key: str) -> StoredObject:
        """Fetch a whole object.

        Args:
            container: Bucket / container name
            key: Object key

        Returns:
            StoredObject with body and declared content type (if any)

        Raises:
            ObjectNotFound: Object or container does not exist
            AccessDenied: Caller may not read the object
            FetchFailed: Any other backend error
        """

    @abstractmethod
    def store(
        self,
        container: str,
        key: str,
        body: bytes,
        content_type: Optional[str] = None,
    ) -> None:
        """Write (or overwrite) an object.

        Args:
            container: Bucket / container name
            key: Object key
            body: Object content
            content_type: Content type metadata to record

        Raises:
            StoreFailed: Any backend error
        """
