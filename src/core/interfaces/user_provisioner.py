"""Abstract interface for the external user-provisioning endpoint."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class ProvisionedUser:
    """What the endpoint returns once the account and profile exist."""

    user_id: str
    message: str


class IUserProvisioner(ABC):
    """Creates a sign-in account and its profile document together."""

    @abstractmethod
    async def create_user(self, payload: dict[str, Any]) -> ProvisionedUser:
        """Provision a user; raises ProvisioningError on failure."""
        pass
