from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Mapping, Union

from sls_deploy.models.manifest import ServiceManifest
from sls_deploy.services.errors import ConfigurationError


def artifact_file_name(location: str) -> str:
    # Artifact paths may come from either platform's packaging step.
    return PurePosixPath(location.replace("\\", "/")).name


@dataclass(frozen=True)
class SharedArtifact:
    """One package deployed for every function of the service."""

    path: str

    def file_name_for(self, function_key: str) -> str:
        return artifact_file_name(self.path)


@dataclass(frozen=True)
class PerFunctionArtifact:
    """One package per function (``package.individually``)."""

    paths: Mapping[str, str] = field(default_factory=dict)

    def file_name_for(self, function_key: str) -> str:
        return artifact_file_name(self.paths[function_key])


ArtifactReference = Union[SharedArtifact, PerFunctionArtifact]


def resolve_artifacts(manifest: ServiceManifest) -> ArtifactReference:
    if not manifest.package.individually:
        if not manifest.package.artifact:
            raise ConfigurationError(
                f"No service artifact found for service '{manifest.service}'. Package the service before deploying."
            )
        return SharedArtifact(path=manifest.package.artifact)

    paths: dict[str, str] = {}
    for key, spec in manifest.functions.items():
        if not spec.artifact:
            raise ConfigurationError(
                f"No artifact found for function '{key}' while packaging individually."
            )
        paths[key] = spec.artifact
    return PerFunctionArtifact(paths=paths)
