"""Configuration package (Facade).

Re-exports the public config types so callers import from a single, stable path:

	from sls_deploy.services.config import DeployConfig
"""

from sls_deploy.services.config.deploy_config import DeployConfig

__all__ = ["DeployConfig"]
