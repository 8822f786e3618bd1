"""Abstract interface for string-keyed local persistence slots."""

from abc import ABC, abstractmethod


class IKeyValueStore(ABC):
    """One string value per key. Writes overwrite; last write wins."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Read a slot, or None if it was never written or was deleted."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Overwrite a slot."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Clear a slot. Deleting a missing key is not an error."""
        pass
