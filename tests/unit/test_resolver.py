"""Unit tests for method resolution across the provider stack."""
from __future__ import annotations

import pytest

from chainabstraction.client import Client
from chainabstraction.errors import (
    ErrorKind,
    NoProviderError,
    UnimplementedMethodError,
    UnsupportedMethodError,
)
from chainabstraction.providers.base import BaseProvider


class TestGetProviderForMethod:
    def test_empty_stack_raises(self, client: Client) -> None:
        with pytest.raises(NoProviderError) as exc:
            client.get_provider_for_method("get_block_height")
        assert exc.value.kind is ErrorKind.NO_PROVIDER

    def test_latest_added_wins(self, client: Client, make_provider) -> None:
        a = make_provider("a", get_block_height=1)
        b = make_provider("b", get_block_height=2)
        client.add_provider(a).add_provider(b)
        assert client.get_provider_for_method("get_block_height") is b

    def test_skips_providers_without_capability(
        self, client: Client, make_provider
    ) -> None:
        a = make_provider("a", get_block_height=1)
        b = make_provider("b", get_balance=0)
        client.add_provider(a).add_provider(b)
        assert client.get_provider_for_method("get_block_height") is a

    def test_unimplemented_raises(self, client: Client, make_provider) -> None:
        client.add_provider(make_provider("a", get_balance=0))
        with pytest.raises(UnimplementedMethodError, match="get_block_height"):
            client.get_provider_for_method("get_block_height")

    def test_requestor_limits_window(self, client: Client, make_provider) -> None:
        a = make_provider("a", get_block_height=1)
        b = make_provider("b", get_block_height=2)
        c = make_provider("c", get_block_height=3)
        client.add_provider(a).add_provider(b).add_provider(c)
        assert client.get_provider_for_method("get_block_height", requestor=c) is b
        assert client.get_provider_for_method("get_block_height", requestor=b) is a

    def test_requestor_never_sees_providers_above(
        self, client: Client, make_provider
    ) -> None:
        a = make_provider("a", get_balance=0)
        b = make_provider("b", get_block_height=2)
        c = make_provider("c", get_block_height=3)
        client.add_provider(a).add_provider(b).add_provider(c)
        with pytest.raises(UnimplementedMethodError):
            client.get_provider_for_method("get_block_height", requestor=b)

    def test_first_requestor_has_empty_window(
        self, client: Client, make_provider
    ) -> None:
        a = make_provider("a", get_block_height=1)
        client.add_provider(a)
        with pytest.raises(UnimplementedMethodError):
            client.get_provider_for_method("get_block_height", requestor=a)

    def test_requestor_matched_by_kind(self, client: Client, make_provider) -> None:
        a = make_provider("a", get_block_height=1)
        b = make_provider("b", get_block_height=2)
        client.add_provider(a).add_provider(b)
        other_b = make_provider("b")
        assert client.get_provider_for_method("get_block_height", requestor=other_b) is a

    def test_unregistered_requestor_has_empty_window(
        self, client: Client, make_provider
    ) -> None:
        client.add_provider(make_provider("a", get_block_height=1))
        with pytest.raises(UnimplementedMethodError):
            client.get_provider_for_method(
                "get_block_height", requestor=make_provider("stranger")
            )

    def test_resolution_is_repeatable(self, client: Client, make_provider) -> None:
        a = make_provider("a", get_block_height=1)
        b = make_provider("b", get_block_height=2)
        client.add_provider(a).add_provider(b)
        results = {client.get_provider_for_method("get_block_height") for _ in range(5)}
        assert results == {b}


class TestVersionGate:
    def test_gate_receives_method_and_version(
        self, client: Client, make_gated_provider
    ) -> None:
        gated = make_gated_provider("gated", True, get_block_height=1)
        client.add_provider(gated)
        assert client.get_provider_for_method("get_block_height") is gated
        assert gated.gate_calls == [("get_block_height", "0.18.1")]

    def test_unsupported_raises(self, client: Client, make_gated_provider) -> None:
        client.add_provider(make_gated_provider("gated", False, get_block_height=1))
        with pytest.raises(UnsupportedMethodError) as exc:
            client.get_provider_for_method("get_block_height")
        assert exc.value.kind is ErrorKind.UNSUPPORTED_METHOD
        assert "0.18.1" in str(exc.value)

    def test_unsupported_does_not_fall_back(
        self, client: Client, make_provider, make_gated_provider
    ) -> None:
        compatible = make_provider("compatible", get_block_height=1)
        gated = make_gated_provider("gated", False, get_block_height=2)
        client.add_provider(compatible).add_provider(gated)
        with pytest.raises(UnsupportedMethodError):
            client.get_provider_for_method("get_block_height")

    def test_gate_only_consulted_on_match(
        self, client: Client, make_provider, make_gated_provider
    ) -> None:
        gated = make_gated_provider("gated", False, get_balance=0)
        top = make_provider("top", get_block_height=1)
        client.add_provider(gated).add_provider(top)
        assert client.get_provider_for_method("get_block_height") is top
        assert gated.gate_calls == []


class TestGetMethod:
    @pytest.mark.asyncio
    async def test_returns_bound_callable(self, client: Client, make_provider) -> None:
        client.add_provider(make_provider("a", get_block_height=42))
        method = client.get_method("get_block_height")
        assert await method() == 42


class _HeightOffsetProvider(BaseProvider):
    """Decorator provider adding an offset to the height beneath it."""

    kind = "offset"
    capabilities = frozenset({"get_block_height"})

    async def get_block_height(self) -> int:
        return await self.get_method("get_block_height")() + 10


class TestLayeredProviders:
    @pytest.mark.asyncio
    async def test_decorator_delegates_to_provider_beneath(
        self, client: Client, make_provider
    ) -> None:
        client.add_provider(make_provider("base", get_block_height=100))
        client.add_provider(_HeightOffsetProvider())
        assert await client.get_block_height() == 110

    @pytest.mark.asyncio
    async def test_decorator_alone_cannot_recurse(self, client: Client) -> None:
        client.add_provider(_HeightOffsetProvider())
        with pytest.raises(UnimplementedMethodError):
            await client.get_block_height()
