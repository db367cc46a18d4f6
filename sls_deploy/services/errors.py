from __future__ import annotations


class DeployError(RuntimeError):
    pass


class ConfigurationError(DeployError):
    """The service manifest cannot be compiled (missing artifact, handler, ...)."""


class RegionMismatchError(DeployError):
    pass


class RemoteCallError(DeployError):
    """An AWS call failed. The client exception is kept as ``__cause__``."""
