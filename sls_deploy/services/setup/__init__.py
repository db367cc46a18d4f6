"""Setup (provisioning) services.

This package contains orchestration helpers that *provision* or *verify* external
infrastructure required by a deployment (e.g., the deployment bucket).
"""
