from __future__ import annotations

import copy
import logging
from typing import Any

from sls_deploy.models.manifest import ServiceManifest
from sls_deploy.services.compile.templates import (
    IAM_ROLE_LOGICAL_ID,
    iam_policy_lambda_vpc,
    iam_role_lambda_execution,
)

logger = logging.getLogger(__name__)


def merge_iam_role(manifest: ServiceManifest, template: dict[str, Any]) -> None:
    """Merge the ``IamRoleLambdaExecution`` role into ``template["Resources"]``.

    Skipped when ``provider.iamRoleARN`` points at an existing role; the functions reference
    that ARN directly. Caller-supplied ``iamRoleStatements`` follow the baseline statement, and
    a VPC policy is appended when any function runs inside a VPC.
    """

    if manifest.provider.iam_role_arn:
        logger.info("Using existing IAM role %s, skipping %s", manifest.provider.iam_role_arn, IAM_ROLE_LOGICAL_ID)
        return

    role = iam_role_lambda_execution()
    policies: list[dict[str, Any]] = role["Properties"]["Policies"]

    statements: list[dict[str, Any]] = policies[0]["PolicyDocument"]["Statement"]
    statements.extend(copy.deepcopy(manifest.provider.iam_role_statements))

    if manifest.uses_vpc():
        policies.append(iam_policy_lambda_vpc())

    template.setdefault("Resources", {})[IAM_ROLE_LOGICAL_ID] = role
