"""Provider protocols for pluggable chain backends."""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..client import Client


class Provider(Protocol):
    """Contract every registered provider satisfies.

    ``kind`` identifies the provider variant; at most one provider of a kind
    may be registered with a client. ``capabilities`` names the chain
    operations the provider implements; each name must be an async method.
    """

    kind: str
    capabilities: frozenset[str]

    def set_client(self, client: Client) -> None: ...


@runtime_checkable
class VersionGatedProvider(Protocol):
    """Optional version gate consulted by the resolver."""

    def supports_method(self, method: str, version: str | None) -> bool: ...
