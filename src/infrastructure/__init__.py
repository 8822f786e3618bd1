"""Infrastructure layer implementations."""

from src.infrastructure import provisioning, storage

__all__ = ["storage", "provisioning"]
