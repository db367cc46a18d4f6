from __future__ import annotations

import logging
from typing import Any, Optional

import aioboto3

from sls_deploy.services.config import DeployConfig
from sls_deploy.services.errors import RemoteCallError


logger = logging.getLogger(__name__)


class CloudFormationService:
    def __init__(self, config: DeployConfig, *, session: Optional[aioboto3.Session] = None) -> None:
        self._config = config
        self._session = session or aioboto3.Session()

    def _client(self, region_name: Optional[str] = None) -> Any:
        return self._session.client(
            "cloudformation",
            region_name=region_name or self._config.region_name,
            endpoint_url=self._config.endpoint_url,
        )

    async def get_physical_resource_id(
        self,
        *,
        stack_name: str,
        logical_id: str,
        region_name: Optional[str] = None,
    ) -> str:
        try:
            cfn_client: Any = self._client(region_name)
            async with cfn_client as cfn:
                response = await cfn.describe_stack_resource(StackName=stack_name, LogicalResourceId=logical_id)
        except Exception as exc:
            logger.exception("CloudFormation describe_stack_resource failed")
            raise RemoteCallError(
                f"Failed to describe stack resource (stack={stack_name}, resource={logical_id})"
            ) from exc

        return str(response["StackResourceDetail"]["PhysicalResourceId"])
