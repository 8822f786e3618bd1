"""User-provisioning client implementations."""

from src.infrastructure.provisioning.http_provisioner import (
    HTTPUserProvisioner,
    get_user_provisioner,
)

__all__ = ["HTTPUserProvisioner", "get_user_provisioner"]
