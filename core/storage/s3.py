"""
S3 storage gateway built on boto3.

One client is created per gateway and reused for every call. Botocore error
codes are translated into the pipeline's typed failures.
"""

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from core.exceptions import AccessDenied, FetchFailed, ObjectNotFound, StoreFailed
from core.storage.base import StorageGateway, StoredObject

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"NoSuchKey", "NoSuchBucket", "NotFound", "404"}
_ACCESS_DENIED_CODES = {"AccessDenied", "AllAccessDisabled", "Forbidden", "403"}


def _error_code(error: ClientError) -> str:
    return str(error.response.get("Error", {}).get("Code", ""))


def _status_code(error: ClientError) -> Optional[int]:
    return error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")


class S3StorageGateway(StorageGateway):
    """Storage gateway backed by an S3-compatible object store."""

    def __init__(self, client: Any = None, **client_kwargs):
        """
        Initialize S3 gateway.

        Args:
            client: Pre-built boto3 S3 client (created from client_kwargs if None)
            **client_kwargs: Passed to boto3.client("s3", ...)
        """
        self._client = client if client is not None else boto3.client("s3", **client_kwargs)

    @classmethod
    def from_settings(cls, storage_settings) -> "S3StorageGateway":
        """Build a gateway from StorageSettings."""
        config = Config(
            signature_version="s3v4",
            s3={"addressing_style": storage_settings.addressing_style},
            retries={"max_attempts": storage_settings.max_attempts, "mode": "standard"},
            connect_timeout=storage_settings.connect_timeout,
            read_timeout=storage_settings.read_timeout,
        )
        kwargs: Dict[str, Any] = {"config": config}
        if storage_settings.region:
            kwargs["region_name"] = storage_settings.region
        if storage_settings.endpoint_url:
            kwargs["endpoint_url"] = storage_settings.endpoint_url
        return cls(**kwargs)

    def fetch(self, container: str, key: str) -> StoredObject:
        try:
            response = self._client.get_object(Bucket=container, Key=key)
        except ClientError as e:
            code = _error_code(e)
            status = _status_code(e)
            if code in _NOT_FOUND_CODES or status == 404:
                raise ObjectNotFound(container, key, cause=e) from e
            if code in _ACCESS_DENIED_CODES or status == 403:
                raise AccessDenied(container, key, cause=e) from e
            raise FetchFailed(f"Failed to fetch s3://{container}/{key}", cause=e) from e
        except BotoCoreError as e:
            raise FetchFailed(f"Failed to fetch s3://{container}/{key}", cause=e) from e

        body = response["Body"]
        try:
            data = body.read()
        except BotoCoreError as e:
            raise FetchFailed(f"Failed to read s3://{container}/{key}", cause=e) from e
        finally:
            body.close()

        logger.debug(f"Fetched s3://{container}/{key} ({len(data)} bytes)")
        return StoredObject(body=data, content_type=response.get("ContentType"))

    def store(
        self,
        container: str,
        key: str,
        body: bytes,
        content_type: Optional[str] = None,
    ) -> None:
        params: Dict[str, Any] = {"Bucket": container, "Key": key, "Body": body}
        if content_type:
            params["ContentType"] = content_type

        try:
            self._client.put_object(**params)
        except (ClientError, BotoCoreError) as e:
            raise StoreFailed(f"Failed to store s3://{container}/{key}", cause=e) from e

        logger.debug(f"Stored s3://{container}/{key} ({len(body)} bytes)")
