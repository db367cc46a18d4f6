from __future__ import annotations

from typing import Any, Callable

import pytest

from sls_deploy.models.manifest import ServiceManifest


def _base_manifest() -> dict[str, Any]:
    return {
        "service": "new-service",
        "provider": {"name": "aws"},
        "package": {
            "artifactDirectoryName": "somedir",
            "artifact": "artifact.zip",
        },
        "functions": {
            "test": {
                "name": "test",
                "artifact": "test.zip",
                "handler": "handler.hello",
            },
        },
    }


@pytest.fixture
def manifest_data() -> dict[str, Any]:
    """Raw (camelCase) manifest, as loaded from serverless.yml."""
    return _base_manifest()


@pytest.fixture
def make_manifest(manifest_data: dict[str, Any]) -> Callable[..., ServiceManifest]:
    def _make(**sections: Any) -> ServiceManifest:
        data = dict(manifest_data)
        for key, value in sections.items():
            if isinstance(value, dict) and isinstance(data.get(key), dict) and key != "functions":
                data[key] = {**data[key], **value}
            else:
                data[key] = value
        return ServiceManifest.model_validate(data)

    return _make
