from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sls_deploy.models.manifest import ServiceManifest
from sls_deploy.services.compile.functions import FunctionCompiler
from sls_deploy.services.compile.iam_role import merge_iam_role
from sls_deploy.services.compile.settings import resolve_setting
from sls_deploy.services.compile.templates import core_template
from sls_deploy.services.config import DeployConfig
from sls_deploy.services.remove.bucket_cleanup_service import BucketCleanupResult, BucketCleanupService
from sls_deploy.services.setup.stack_configuration_service import StackConfigurationService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledStack:
    stack_name: str
    template: dict[str, Any]


class DeployService:
    """Runs the deploy and remove pipelines for a service manifest.

    Every step awaits its predecessor; a failure aborts the rest of the chain and no partial
    template is returned.
    """

    def __init__(
        self,
        config: DeployConfig,
        *,
        stack_configuration: StackConfigurationService,
        bucket_cleanup: BucketCleanupService,
    ) -> None:
        self._config = config
        self._stack_configuration = stack_configuration
        self._bucket_cleanup = bucket_cleanup

    def _stage(self, manifest: ServiceManifest) -> str:
        return resolve_setting(manifest.provider.stage, default=self._config.stage)

    def _region(self, manifest: ServiceManifest) -> str:
        return resolve_setting(manifest.provider.region, default=self._config.region_name)

    async def compile_template(self, manifest: ServiceManifest) -> CompiledStack:
        stage = self._stage(manifest)
        region = self._region(manifest)
        stack_name = manifest.stack_name(stage)
        logger.info("Compiling CloudFormation template for stack %s (region=%s)", stack_name, region)

        template = core_template()
        FunctionCompiler(manifest, stage=stage).compile_functions(template)
        merge_iam_role(manifest, template)
        await self._stack_configuration.configure_stack(manifest, template, region=region)

        return CompiledStack(stack_name=stack_name, template=template)

    async def empty_deployment_bucket(self, manifest: ServiceManifest) -> BucketCleanupResult:
        return await self._bucket_cleanup.empty_deployment_bucket(
            manifest,
            stage=self._stage(manifest),
            region=self._region(manifest),
        )
