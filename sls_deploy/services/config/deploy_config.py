from __future__ import annotations

import os
from dataclasses import dataclass
from typing import ClassVar, Optional


@dataclass(frozen=True)
class DeployConfig:
    """Runtime defaults for deploy/remove runs.

    The manifest's ``provider.stage`` / ``provider.region`` take precedence over these values.
    """

    _DEFAULT_STAGE: ClassVar[str] = "dev"
    _DEFAULT_REGION: ClassVar[str] = "us-east-1"

    stage: str = _DEFAULT_STAGE
    region_name: str = _DEFAULT_REGION
    endpoint_url: Optional[str] = None

    @staticmethod
    def from_env() -> "DeployConfig":
        stage = os.getenv("SLS_STAGE", DeployConfig._DEFAULT_STAGE).strip()
        if not stage:
            raise ValueError("Invalid SLS_STAGE; must not be empty")

        region_name = os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION") or DeployConfig._DEFAULT_REGION
        # Lets the AWS clients target LocalStack or another S3/CloudFormation-compatible endpoint.
        endpoint_url = os.getenv("AWS_ENDPOINT_URL")

        return DeployConfig(stage=stage, region_name=region_name, endpoint_url=endpoint_url)
