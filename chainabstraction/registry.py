"""Ordered, one-per-kind provider stack."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .errors import DuplicateProviderError, InvalidProviderError

if TYPE_CHECKING:
    from .client import Client
    from .interfaces.provider import Provider

logger = logging.getLogger(__name__)


def _check_contract(provider: Any) -> None:
    """Raise InvalidProviderError unless ``provider`` exposes the provider contract."""
    if not callable(getattr(provider, "set_client", None)):
        raise InvalidProviderError('Provider should have "set_client" method')

    kind = getattr(provider, "kind", None)
    if not isinstance(kind, str) or not kind:
        raise InvalidProviderError('Provider should declare a non-empty "kind"')

    capabilities = getattr(provider, "capabilities", None)
    if not isinstance(capabilities, (set, frozenset)):
        raise InvalidProviderError(
            f'Provider "{kind}" should declare "capabilities" as a set of method names'
        )
    for method in capabilities:
        if not callable(getattr(provider, method, None)):
            raise InvalidProviderError(
                f'Provider "{kind}" declares "{method}" but does not implement it'
            )


class ProviderRegistry:
    """Ordered provider stack; the last provider added has the highest priority.

    The stack is filled at setup time and is not safe for mutation concurrent
    with resolution.
    """

    def __init__(self, client: Client) -> None:
        self._client = client
        self._providers: list[Provider] = []

    def __len__(self) -> int:
        return len(self._providers)

    @property
    def providers(self) -> tuple[Provider, ...]:
        return tuple(self._providers)

    def index_of(self, kind: str) -> int:
        """Index of the last provider of ``kind``, or -1."""
        for index in range(len(self._providers) - 1, -1, -1):
            if self._providers[index].kind == kind:
                return index
        return -1

    def add(self, provider: Provider) -> None:
        _check_contract(provider)

        if self.index_of(provider.kind) != -1:
            raise DuplicateProviderError(f'Duplicate provider "{provider.kind}"')

        provider.set_client(self._client)
        self._providers.append(provider)
        logger.info(
            "Registered provider '%s' at position %d", provider.kind, len(self._providers) - 1
        )
