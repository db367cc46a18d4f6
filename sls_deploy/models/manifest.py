from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class _ManifestModel(BaseModel):
    # Manifests are written in camelCase (serverless.yml); attributes are snake_case.
    model_config = ConfigDict(populate_by_name=True)


class VpcConfig(_ManifestModel):
    security_group_ids: list[str] = Field(default_factory=list, alias="securityGroupIds")
    subnet_ids: list[str] = Field(default_factory=list, alias="subnetIds")


class FunctionSpec(_ManifestModel):
    # Optional here so a missing handler is reported by the compiler as a ConfigurationError.
    handler: Optional[str] = Field(default=None, description="Handler path, e.g. 'handler.hello'")
    name: Optional[str] = Field(default=None, description="Deployed function name override")
    memory_size: Optional[int] = Field(default=None, alias="memorySize")
    timeout: Optional[int] = None
    runtime: Optional[str] = None
    artifact: Optional[str] = Field(default=None, description="Per-function package location")
    vpc: Optional[VpcConfig] = None


class ProviderConfig(_ManifestModel):
    name: str = "aws"
    runtime: Optional[str] = None
    memory_size: Optional[int] = Field(default=None, alias="memorySize")
    timeout: Optional[int] = None
    stage: Optional[str] = None
    region: Optional[str] = None
    iam_role_arn: Optional[str] = Field(default=None, alias="iamRoleARN")
    iam_role_statements: list[dict[str, Any]] = Field(default_factory=list, alias="iamRoleStatements")
    deployment_bucket: Optional[str] = Field(default=None, alias="deploymentBucket")


class PackageConfig(_ManifestModel):
    artifact: Optional[str] = Field(default=None, description="Service-wide package location")
    artifact_directory_name: Optional[str] = Field(default=None, alias="artifactDirectoryName")
    individually: bool = False


class ServiceManifest(_ManifestModel):
    service: str
    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    package: PackageConfig = Field(default_factory=PackageConfig)
    functions: dict[str, FunctionSpec] = Field(default_factory=dict)

    def stack_name(self, stage: str) -> str:
        return f"{self.service}-{stage}"

    def uses_vpc(self) -> bool:
        return any(spec.vpc is not None for spec in self.functions.values())
