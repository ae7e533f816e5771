"""User use cases."""

from .unlink_provider import UnlinkProviderUseCase

__all__ = ["UnlinkProviderUseCase"]
