"""Method resolver: picks the provider that executes an operation.

Resolution is layered: a provider registered after another may override or
decorate its operations. When it needs the underlying behaviour it resolves
with itself as ``requestor``, which limits the search to providers registered
strictly before it, so it can never select itself or anything stacked above.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable

from .errors import NoProviderError, UnimplementedMethodError, UnsupportedMethodError
from .interfaces.provider import VersionGatedProvider

if TYPE_CHECKING:
    from .interfaces.provider import Provider
    from .registry import ProviderRegistry

logger = logging.getLogger(__name__)


class MethodResolver:
    """Resolve operation names against a provider registry."""

    def __init__(self, registry: ProviderRegistry, version: str | None = None) -> None:
        self._registry = registry
        self.version = version

    def get_provider_for_method(
        self, method: str, requestor: Provider | None = None
    ) -> Provider:
        """Return the provider that executes ``method``.

        Raises:
            NoProviderError: the stack is empty.
            UnimplementedMethodError: no provider in the search window
                implements ``method``.
            UnsupportedMethodError: the first matching provider rejects
                ``method`` for the client version. The search stops there.
        """
        providers = self._registry.providers
        if not providers:
            raise NoProviderError("No provider provided. Add a provider to the client")

        upper = (
            self._registry.index_of(requestor.kind)
            if requestor is not None
            else len(providers)
        )

        provider = None
        for index in range(upper - 1, -1, -1):
            if method in providers[index].capabilities:
                provider = providers[index]
                break

        if provider is None:
            raise UnimplementedMethodError(method)

        if isinstance(provider, VersionGatedProvider) and not provider.supports_method(
            method, self.version
        ):
            raise UnsupportedMethodError(method, self.version)

        logger.debug(
            "Resolved '%s' to provider '%s'%s",
            method,
            provider.kind,
            f" (requested by '{requestor.kind}')" if requestor is not None else "",
        )
        return provider

    def get_method(
        self, method: str, requestor: Provider | None = None
    ) -> Callable[..., Any]:
        """Return ``method`` bound to the provider that executes it."""
        provider = self.get_provider_for_method(method, requestor)
        return getattr(provider, method)
