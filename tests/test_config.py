from __future__ import annotations

import pytest

from sls_deploy.services.config import DeployConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("SLS_STAGE", "AWS_REGION", "AWS_DEFAULT_REGION", "AWS_ENDPOINT_URL"):
        monkeypatch.delenv(name, raising=False)


def test_from_env_defaults():
    assert DeployConfig.from_env() == DeployConfig(stage="dev", region_name="us-east-1", endpoint_url=None)


def test_from_env_reads_variables(monkeypatch):
    monkeypatch.setenv("SLS_STAGE", "prod")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
    monkeypatch.setenv("AWS_ENDPOINT_URL", "http://localhost:4566")

    config = DeployConfig.from_env()

    assert config == DeployConfig(stage="prod", region_name="eu-west-1", endpoint_url="http://localhost:4566")


def test_aws_region_wins_over_default_region(monkeypatch):
    monkeypatch.setenv("AWS_REGION", "us-west-2")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")

    assert DeployConfig.from_env().region_name == "us-west-2"


def test_empty_stage_is_rejected(monkeypatch):
    monkeypatch.setenv("SLS_STAGE", "  ")

    with pytest.raises(ValueError, match="SLS_STAGE"):
        DeployConfig.from_env()
