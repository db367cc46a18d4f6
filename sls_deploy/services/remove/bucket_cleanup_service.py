from __future__ import annotations

import logging
from dataclasses import dataclass

from sls_deploy.models.manifest import ServiceManifest
from sls_deploy.services.cloudformation_service import CloudFormationService
from sls_deploy.services.compile.templates import DEPLOYMENT_BUCKET_LOGICAL_ID
from sls_deploy.services.s3_service import S3Service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BucketCleanupResult:
    bucket_name: str
    deleted_count: int


class BucketCleanupService:
    """Empties the deployment bucket so the stack (and its bucket) can be deleted.

    Steps run strictly in order:
    1) Resolve the bucket name (configured bucket, or the stack's ServerlessDeploymentBucket).
    2) List every object key in it.
    3) Bulk-delete the keys; an empty bucket results in no delete request.
    """

    def __init__(self, *, s3: S3Service, cloudformation: CloudFormationService) -> None:
        self._s3 = s3
        self._cloudformation = cloudformation

    async def empty_deployment_bucket(self, manifest: ServiceManifest, *, stage: str, region: str) -> BucketCleanupResult:
        bucket_name = await self.get_deployment_bucket_name(manifest, stage=stage, region=region)
        keys = await self.list_objects(bucket_name=bucket_name, region=region)
        await self.delete_objects(bucket_name=bucket_name, keys=keys, region=region)
        return BucketCleanupResult(bucket_name=bucket_name, deleted_count=len(keys))

    async def get_deployment_bucket_name(self, manifest: ServiceManifest, *, stage: str, region: str) -> str:
        if manifest.provider.deployment_bucket:
            return manifest.provider.deployment_bucket

        return await self._cloudformation.get_physical_resource_id(
            stack_name=manifest.stack_name(stage),
            logical_id=DEPLOYMENT_BUCKET_LOGICAL_ID,
            region_name=region,
        )

    async def list_objects(self, *, bucket_name: str, region: str) -> list[str]:
        logger.info("Getting all objects in S3 bucket...")
        return await self._s3.list_object_keys(bucket=bucket_name, region_name=region)

    async def delete_objects(self, *, bucket_name: str, keys: list[str], region: str) -> None:
        logger.info("Removing objects in S3 bucket...")
        if not keys:
            logger.info("S3 bucket %s is already empty", bucket_name)
            return

        await self._s3.delete_objects(bucket=bucket_name, keys=keys, region_name=region)
