"""Base class for providers plugged into a Client."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, ClassVar

if TYPE_CHECKING:
    from ..client import Client


class BaseProvider:
    """Common provider plumbing: kind tag, capability descriptor, client binding.

    Subclasses set ``kind`` and ``capabilities``. A provider layered on top of
    another one reaches "the provider beneath it" through :meth:`get_method`,
    which resolves with itself as requestor.
    """

    kind: ClassVar[str] = ""
    capabilities: ClassVar[frozenset[str]] = frozenset()

    def __init__(self) -> None:
        self._client: Client | None = None

    @property
    def client(self) -> Client:
        if self._client is None:
            raise RuntimeError(f"Provider '{self.kind}' is not bound to a client")
        return self._client

    def set_client(self, client: Client) -> None:
        self._client = client

    def get_method(self, method: str) -> Callable[..., Any]:
        """Resolve ``method`` among providers registered before this one."""
        return self.client.get_method(method, requestor=self)
