"""Protocol interfaces for the chain abstraction client."""
from .provider import Provider, VersionGatedProvider

__all__ = ["Provider", "VersionGatedProvider"]
