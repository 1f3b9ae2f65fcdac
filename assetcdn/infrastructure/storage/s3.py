"""
S3 / MinIO object store.

boto3 is blocking, so every call runs in the threadpool.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Any, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
from starlette.concurrency import run_in_threadpool

from .base import ObjectStore
from .exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


class S3ObjectStore(ObjectStore):
    """
    Store objects in an S3-compatible bucket.

    Usage::

        store = S3ObjectStore(
            bucket="assets",
            endpoint_url="http://localhost:9000",  # for MinIO
            access_key_id="minioadmin",
            secret_access_key="minioadmin",
        )
    """

    def __init__(
        self,
        bucket: str,
        endpoint_url: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        region: str = "us-east-1",
        chunk_size: int = 1024 * 1024,
        client: Any = None,
    ) -> None:
        self.bucket = bucket
        self.chunk_size = chunk_size
        self._endpoint_url = endpoint_url
        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self._region = region
        self._client = client

    def _get_client(self):
        if self._client is None:
            kwargs: dict[str, Any] = {
                "region_name": self._region,
                # path-style addressing is what MinIO and most local S3 setups expect
                "config": Config(s3={"addressing_style": "path"}),
            }
            if self._endpoint_url:
                kwargs["endpoint_url"] = self._endpoint_url
            if self._access_key_id:
                kwargs["aws_access_key_id"] = self._access_key_id
            if self._secret_access_key:
                kwargs["aws_secret_access_key"] = self._secret_access_key
            self._client = boto3.client("s3", **kwargs)
        return self._client

    async def put(self, key: str, data: bytes | bytearray, content_type: str) -> None:
        try:
            await run_in_threadpool(
                self._get_client().put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StoreUnavailableError("put", key, exc) from exc
        logger.debug("Stored object s3://%s/%s", self.bucket, key)

    async def get(self, key: str) -> AsyncIterator[bytes]:
        try:
            response = await run_in_threadpool(
                self._get_client().get_object, Bucket=self.bucket, Key=key
            )
        except (BotoCoreError, ClientError) as exc:
            raise StoreUnavailableError("get", key, exc) from exc
        return self._iter_body(key, response["Body"])

    async def _iter_body(self, key: str, body) -> AsyncIterator[bytes]:
        try:
            while True:
                try:
                    chunk = await run_in_threadpool(body.read, self.chunk_size)
                except (BotoCoreError, ClientError) as exc:
                    raise StoreUnavailableError("get", key, exc) from exc
                if not chunk:
                    break
                yield chunk
        finally:
            body.close()

    async def copy(self, src_key: str, dest_key: str) -> None:
        try:
            await run_in_threadpool(
                self._get_client().copy_object,
                Bucket=self.bucket,
                CopySource={"Bucket": self.bucket, "Key": src_key},
                Key=dest_key,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StoreUnavailableError("copy", src_key, exc) from exc
        logger.debug("Copied object s3://%s/%s -> %s", self.bucket, src_key, dest_key)
