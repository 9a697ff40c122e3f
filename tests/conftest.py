"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from chainabstraction.client import Client
from chainabstraction.config import ClientConfig, ProviderConfig
from chainabstraction.models import (
    Address,
    CollateralParameters,
    CollateralValues,
    SwapParameters,
)
from chainabstraction.providers.base import BaseProvider

BLOCK_HASH = "00000000000000000008a89e854d57e5667df88f1cdef6fde2fbca1de5b639ad"
PARENT_HASH = "0000000000000000000b4d0b6f3b6e5c9b3e0e9a0a2d3f7b1c4e5f6a7b8c9d0e"
TX_HASH = "a1075db55d416d3ca199f55b6084e2115b9345e16c5cf302fc80e9d5fbf5d48d"


# ---------------------------------------------------------------------------
# Stub providers
# ---------------------------------------------------------------------------


class StubProvider(BaseProvider):
    """Provider whose operations are AsyncMocks returning canned results."""

    def __init__(self, kind: str, **results: Any) -> None:
        super().__init__()
        self.kind = kind
        self.capabilities = frozenset(results)
        for method, result in results.items():
            setattr(self, method, AsyncMock(return_value=result))


class GatedStubProvider(StubProvider):
    """Stub provider with a version gate."""

    def __init__(self, kind: str, supported: bool, **results: Any) -> None:
        super().__init__(kind, **results)
        self.supported = supported
        self.gate_calls: list[tuple[str, str | None]] = []

    def supports_method(self, method: str, version: str | None) -> bool:
        self.gate_calls.append((method, version))
        return self.supported


@pytest.fixture()
def make_provider():
    return StubProvider


@pytest.fixture()
def make_gated_provider():
    return GatedStubProvider


@pytest.fixture()
def client() -> Client:
    return Client(version="0.18.1")


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_transaction() -> dict[str, Any]:
    return {
        "hash": TX_HASH,
        "value": 5000000000,
        "blockHash": BLOCK_HASH,
        "confirmations": 3,
    }


@pytest.fixture()
def sample_block() -> dict[str, Any]:
    return {
        "number": 600000,
        "hash": BLOCK_HASH,
        "timestamp": 1571443461,
        "size": 1245,
        "parentHash": PARENT_HASH,
        "difficulty": 13008091666971.9,
        "nonce": 1066913763,
        "transactions": [TX_HASH],
    }


@pytest.fixture()
def swap_params() -> SwapParameters:
    return SwapParameters(
        value=100000,
        recipient_address="bcrt1qrecipient",
        refund_address="bcrt1qrefund",
        secret_hash="ab" * 32,
        expiration=1571443461,
    )


@pytest.fixture()
def collateral_params() -> CollateralParameters:
    return CollateralParameters(
        borrower_pubkey="02" + "11" * 32,
        lender_pubkey="03" + "22" * 32,
        secret_hash_a1="a1" * 32,
        secret_hash_a2="a2" * 32,
        secret_hash_b2="b2" * 32,
        secret_hash_b3="b3" * 32,
        loan_expiration=1000,
        bidding_expiration=2000,
        seizure_expiration=3000,
    )


@pytest.fixture()
def collateral_values() -> CollateralValues:
    return CollateralValues(refundable=70000, seizable=30000)


@pytest.fixture()
def sample_addresses() -> list[Address]:
    return [Address(address="bcrt1qfirst"), Address(address="bcrt1qsecond")]


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_provider_config() -> ProviderConfig:
    return ProviderConfig(
        kind="bitcoin_rpc",
        rpc_endpoints=(
            "https://rpc1.example.com",
            "https://rpc2.example.com",
            "https://rpc3.example.com",
        ),
        rpc_timeout=5,
        rpc_username="bitcoin",
        rpc_password="local321",
    )


@pytest.fixture()
def sample_client_config(sample_provider_config: ProviderConfig) -> ClientConfig:
    return ClientConfig(version="0.18.1", providers=(sample_provider_config,))


SAMPLE_YAML = textwrap.dedent("""\
    version: "0.18.1"
    providers:
      - kind: bitcoin_rpc
        rpc_endpoints: ["http://localhost:18443"]
        rpc_timeout: 10
        rpc_username: bitcoin
        rpc_password: local321
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file
