from __future__ import annotations

import logging
import re
from typing import Any, Union

from sls_deploy.models.manifest import FunctionSpec, ServiceManifest
from sls_deploy.services.compile.artifacts import ArtifactReference, resolve_artifacts
from sls_deploy.services.compile.settings import (
    DEFAULT_MEMORY_SIZE,
    DEFAULT_RUNTIME,
    DEFAULT_TIMEOUT,
    resolve_setting,
)
from sls_deploy.services.compile.templates import DEPLOYMENT_BUCKET_LOGICAL_ID, IAM_ROLE_LOGICAL_ID
from sls_deploy.services.errors import ConfigurationError

logger = logging.getLogger(__name__)

FUNCTION_LOGICAL_ID_SUFFIX = "LambdaFunction"
FUNCTION_OUTPUT_DESCRIPTION = "Lambda function info"

_NON_ALPHANUMERIC = re.compile(r"[^A-Za-z0-9]")


def normalize_name(name: str) -> str:
    """``anotherFunc`` -> ``AnotherFunc``, ``my-func`` -> ``Myfunc``."""

    capitalized = name[:1].upper() + name[1:]
    return _NON_ALPHANUMERIC.sub("", capitalized)


def function_logical_id(function_key: str) -> str:
    return f"{normalize_name(function_key)}{FUNCTION_LOGICAL_ID_SUFFIX}"


def function_output_id(function_key: str) -> str:
    return f"{function_logical_id(function_key)}Arn"


class FunctionCompiler:
    """Compiles every function of a manifest into an ``AWS::Lambda::Function`` resource.

    Each function also gets an ``<LogicalId>Arn`` output. The template is mutated in place; all
    validation happens before the first resource is written.
    """

    def __init__(self, manifest: ServiceManifest, *, stage: str) -> None:
        self._manifest = manifest
        self._stage = stage

    def compile_functions(self, template: dict[str, Any]) -> None:
        artifacts = resolve_artifacts(self._manifest)
        logical_ids = self._validate_functions()

        resources = template.setdefault("Resources", {})
        outputs = template.setdefault("Outputs", {})

        for key, spec in self._manifest.functions.items():
            logical_id = logical_ids[key]
            resources[logical_id] = self._function_resource(key, spec, artifacts)
            outputs[function_output_id(key)] = {
                "Description": FUNCTION_OUTPUT_DESCRIPTION,
                "Value": {"Fn::GetAtt": [logical_id, "Arn"]},
            }
            logger.debug("Compiled function %s as %s", key, logical_id)

        logger.info("Compiled %d function(s) for service %s", len(logical_ids), self._manifest.service)

    def _validate_functions(self) -> dict[str, str]:
        logical_ids: dict[str, str] = {}
        seen: dict[str, str] = {}
        for key, spec in self._manifest.functions.items():
            if not spec.handler:
                raise ConfigurationError(f"Missing 'handler' property for function '{key}'.")

            if not normalize_name(key):
                raise ConfigurationError(f"Function name '{key}' has no alphanumeric characters to build a logical id from.")

            logical_id = function_logical_id(key)
            if logical_id in seen:
                raise ConfigurationError(
                    f"Functions '{seen[logical_id]}' and '{key}' both compile to the logical id '{logical_id}'."
                )
            seen[logical_id] = key
            logical_ids[key] = logical_id
        return logical_ids

    def _function_resource(self, key: str, spec: FunctionSpec, artifacts: ArtifactReference) -> dict[str, Any]:
        provider = self._manifest.provider

        properties: dict[str, Any] = {
            "Code": {
                "S3Bucket": self._code_bucket(),
                "S3Key": self._code_key(artifacts.file_name_for(key)),
            },
            "FunctionName": spec.name or f"{self._manifest.service}-{self._stage}-{key}",
            "Handler": spec.handler,
            "MemorySize": resolve_setting(spec.memory_size, provider.memory_size, default=DEFAULT_MEMORY_SIZE),
            "Role": self._role(),
            "Runtime": resolve_setting(spec.runtime, provider.runtime, default=DEFAULT_RUNTIME),
            "Timeout": resolve_setting(spec.timeout, provider.timeout, default=DEFAULT_TIMEOUT),
        }

        if spec.vpc is not None:
            properties["VpcConfig"] = {
                "SecurityGroupIds": list(spec.vpc.security_group_ids),
                "SubnetIds": list(spec.vpc.subnet_ids),
            }

        return {"Type": "AWS::Lambda::Function", "Properties": properties}

    def _code_bucket(self) -> Union[str, dict[str, str]]:
        if self._manifest.provider.deployment_bucket:
            return self._manifest.provider.deployment_bucket
        return {"Ref": DEPLOYMENT_BUCKET_LOGICAL_ID}

    def _code_key(self, file_name: str) -> str:
        folder = self._manifest.package.artifact_directory_name
        return f"{folder}/{file_name}" if folder else file_name

    def _role(self) -> Union[str, dict[str, list[str]]]:
        if self._manifest.provider.iam_role_arn:
            return self._manifest.provider.iam_role_arn
        return {"Fn::GetAtt": [IAM_ROLE_LOGICAL_ID, "Arn"]}
