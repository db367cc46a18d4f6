from __future__ import annotations

from functools import lru_cache

import aioboto3

from sls_deploy.services.cloudformation_service import CloudFormationService
from sls_deploy.services.config import DeployConfig
from sls_deploy.services.deploy_service import DeployService
from sls_deploy.services.remove.bucket_cleanup_service import BucketCleanupService
from sls_deploy.services.s3_service import S3Service
from sls_deploy.services.setup.stack_configuration_service import StackConfigurationService


@lru_cache(maxsize=1)
def get_deploy_config() -> DeployConfig:
    return DeployConfig.from_env()


def get_deploy_service() -> DeployService:
    """FastAPI dependency provider for the deploy/remove pipelines.

    The S3 and CloudFormation services share one aioboto3 session.
    """

    config = get_deploy_config()
    session = aioboto3.Session()
    s3 = S3Service(config, session=session)
    cloudformation = CloudFormationService(config, session=session)

    return DeployService(
        config,
        stack_configuration=StackConfigurationService(s3=s3),
        bucket_cleanup=BucketCleanupService(s3=s3, cloudformation=cloudformation),
    )
