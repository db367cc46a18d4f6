from __future__ import annotations

import logging
from typing import Any, Optional

from sls_deploy.models.manifest import ServiceManifest
from sls_deploy.services.compile.templates import (
    DEPLOYMENT_BUCKET_LOGICAL_ID,
    DEPLOYMENT_BUCKET_OUTPUT_ID,
    core_template,
)
from sls_deploy.services.errors import RegionMismatchError
from sls_deploy.services.s3_service import S3Service

logger = logging.getLogger(__name__)


def normalize_bucket_region(location: Optional[str]) -> str:
    # S3 returns no constraint for us-east-1 and "EU" for old eu-west-1 buckets.
    if not location:
        return "us-east-1"
    if location == "EU":
        return "eu-west-1"
    return location


class StackConfigurationService:
    """Validates or provisions the deployment bucket before the template is finalised."""

    def __init__(self, *, s3: S3Service) -> None:
        self._s3 = s3

    async def configure_stack(self, manifest: ServiceManifest, template: dict[str, Any], *, region: str) -> None:
        bucket_name = manifest.provider.deployment_bucket
        if bucket_name:
            await self._validate_deployment_bucket(bucket_name=bucket_name, region=region)
            self._use_existing_bucket(template, bucket_name=bucket_name)
        else:
            self._use_default_bucket(template)

    async def _validate_deployment_bucket(self, *, bucket_name: str, region: str) -> None:
        logger.info("Validating region of deployment bucket %s", bucket_name)
        location = await self._s3.get_bucket_location(bucket=bucket_name, region_name=region)

        bucket_region = normalize_bucket_region(location)
        if bucket_region != region:
            raise RegionMismatchError(
                "Deployment bucket is not in the same region as the lambda function "
                f"(bucket={bucket_name}, bucket_region={bucket_region}, region={region})"
            )

    @staticmethod
    def _use_existing_bucket(template: dict[str, Any], *, bucket_name: str) -> None:
        template.setdefault("Resources", {}).pop(DEPLOYMENT_BUCKET_LOGICAL_ID, None)
        template.setdefault("Outputs", {})[DEPLOYMENT_BUCKET_OUTPUT_ID] = {"Value": bucket_name}

    @staticmethod
    def _use_default_bucket(template: dict[str, Any]) -> None:
        core = core_template()
        resources = template.setdefault("Resources", {})
        outputs = template.setdefault("Outputs", {})
        resources.setdefault(DEPLOYMENT_BUCKET_LOGICAL_ID, core["Resources"][DEPLOYMENT_BUCKET_LOGICAL_ID])
        outputs.setdefault(DEPLOYMENT_BUCKET_OUTPUT_ID, core["Outputs"][DEPLOYMENT_BUCKET_OUTPUT_ID])
