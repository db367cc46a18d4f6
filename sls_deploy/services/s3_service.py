from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import aioboto3

from sls_deploy.services.config import DeployConfig
from sls_deploy.services.errors import RemoteCallError


logger = logging.getLogger(__name__)

# S3 DeleteObjects accepts at most this many keys per request.
_MAX_DELETE_KEYS = 1000


class S3Service:
    def __init__(self, config: DeployConfig, *, session: Optional[aioboto3.Session] = None) -> None:
        self._config = config
        self._session = session or aioboto3.Session()

    def _client(self, region_name: Optional[str] = None) -> Any:
        return self._session.client(
            "s3",
            region_name=region_name or self._config.region_name,
            endpoint_url=self._config.endpoint_url,
        )

    async def get_bucket_location(self, *, bucket: str, region_name: Optional[str] = None) -> Optional[str]:
        """Return the bucket's ``LocationConstraint`` as reported by S3.

        S3 reports ``None``/empty for us-east-1 and ``EU`` for legacy eu-west-1 buckets; callers
        normalise the value.
        """

        try:
            s3_client: Any = self._client(region_name)
            async with s3_client as s3:
                response = await s3.get_bucket_location(Bucket=bucket)
        except Exception as exc:
            logger.exception("S3 get_bucket_location failed")
            raise RemoteCallError(f"Failed to get location of S3 bucket (bucket={bucket})") from exc

        return response.get("LocationConstraint")

    async def list_object_keys(self, *, bucket: str, region_name: Optional[str] = None) -> list[str]:
        keys: list[str] = []
        try:
            s3_client: Any = self._client(region_name)
            async with s3_client as s3:
                paginator = s3.get_paginator("list_objects_v2")
                async for page in paginator.paginate(Bucket=bucket):
                    keys.extend(str(o["Key"]) for o in page.get("Contents", []))
        except Exception as exc:
            logger.exception("S3 list_object_keys failed")
            raise RemoteCallError(f"Failed to list objects in S3 bucket (bucket={bucket})") from exc

        return keys

    async def delete_objects(
        self,
        *,
        bucket: str,
        keys: Sequence[str],
        region_name: Optional[str] = None,
    ) -> None:
        if not keys:
            raise ValueError("'keys' must not be empty")

        failed: list[dict[str, Any]] = []
        try:
            s3_client: Any = self._client(region_name)
            async with s3_client as s3:
                for start in range(0, len(keys), _MAX_DELETE_KEYS):
                    batch = keys[start : start + _MAX_DELETE_KEYS]
                    response = await s3.delete_objects(
                        Bucket=bucket,
                        Delete={"Objects": [{"Key": key} for key in batch]},
                    )
                    # Per-key failures come back in a 200 response, not as an exception.
                    failed.extend(response.get("Errors") or [])
        except Exception as exc:
            logger.exception("S3 delete_objects failed")
            raise RemoteCallError(f"Failed to delete objects from S3 bucket (bucket={bucket})") from exc

        if failed:
            details = ", ".join(f"{e.get('Key')} ({e.get('Code')})" for e in failed)
            logger.error("S3 delete_objects left %d object(s) in %s: %s", len(failed), bucket, details)
            raise RemoteCallError(f"Failed to delete {len(failed)} object(s) from S3 bucket (bucket={bucket}): {details}")
