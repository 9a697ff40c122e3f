"""Uniform chain operations dispatched to the provider stack."""
from __future__ import annotations

import logging
from typing import Any, Callable

from .checks import ensure_bool, ensure_hex, ensure_number, is_hex, is_number
from .collateral import CollateralProtocol
from .errors import InvalidProviderResponseError
from .interfaces.provider import Provider
from .registry import ProviderRegistry
from .resolver import MethodResolver
from .swap import SwapProtocol
from .validator import ResponseValidator

logger = logging.getLogger(__name__)


class Client:
    """Chain abstraction client.

    Args:
        provider: Optional first provider for the stack.
        version: Target node version, passed to provider version gates.
        validator: Response validator; defaults to the bundled schemas.
    """

    def __init__(
        self,
        provider: Provider | None = None,
        version: str | None = None,
        validator: ResponseValidator | None = None,
    ) -> None:
        self._validator = validator or ResponseValidator()
        self._registry = ProviderRegistry(self)
        self._resolver = MethodResolver(self._registry, version)

        self.swap = SwapProtocol(self)
        self.collateral = CollateralProtocol(self)

        if provider is not None:
            self.add_provider(provider)

    @property
    def version(self) -> str | None:
        return self._resolver.version

    @property
    def providers(self) -> tuple[Provider, ...]:
        return self._registry.providers

    # ------------------------------------------------------------------
    # Provider stack
    # ------------------------------------------------------------------

    def add_provider(self, provider: Provider) -> Client:
        """Add a provider on top of the stack.

        Raises:
            InvalidProviderError: provider does not satisfy the contract.
            DuplicateProviderError: a provider of the same kind is registered.
        """
        self._registry.add(provider)
        return self

    def get_provider_for_method(
        self, method: str, requestor: Provider | None = None
    ) -> Provider:
        return self._resolver.get_provider_for_method(method, requestor)

    def get_method(
        self, method: str, requestor: Provider | None = None
    ) -> Callable[..., Any]:
        return self._resolver.get_method(method, requestor)

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    async def generate_block(self, number_of_blocks: int) -> list[str]:
        """Generate blocks; resolves with the hashes of the new blocks."""
        ensure_number(number_of_blocks, "Number of blocks")

        block_hashes = await self.get_method("generate_block")(number_of_blocks)

        if not isinstance(block_hashes, list):
            raise InvalidProviderResponseError("Response should be an array")

        if any(not is_hex(block_hash) for block_hash in block_hashes):
            raise InvalidProviderResponseError(
                "Invalid block(s) found in provider's response"
            )

        return block_hashes

    def _check_block(self, block: Any) -> None:
        result = self._validator.validate_block(block)
        if not result.valid:
            logger.warning("Invalid block from provider: %s %s", result.path, result.message)
            raise InvalidProviderResponseError(
                f"Provider returned an invalid block, {result.path} {result.message}",
                path=result.path,
            )

    async def get_block_by_hash(
        self, block_hash: str, include_tx: bool = False
    ) -> dict[str, Any]:
        """Get a block given its hash.

        If ``include_tx`` is true, ``transactions`` holds full transactions;
        otherwise it is a list of transaction hashes.
        """
        ensure_hex(block_hash, "Block hash")
        ensure_bool(include_tx, "include_tx")

        block = await self.get_method("get_block_by_hash")(block_hash, include_tx)
        self._check_block(block)
        return block

    async def get_block_by_number(
        self, block_number: int, include_tx: bool = False
    ) -> dict[str, Any]:
        """Get a block given its number."""
        ensure_number(block_number, "Block number")
        ensure_bool(include_tx, "include_tx")

        block = await self.get_method("get_block_by_number")(block_number, include_tx)
        self._check_block(block)
        return block

    async def get_block_height(self) -> int:
        block_height = await self.get_method("get_block_height")()

        if not is_number(block_height):
            raise InvalidProviderResponseError(
                "Provider returned an invalid block height"
            )

        return block_height

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def get_transaction_by_hash(self, tx_hash: str) -> dict[str, Any] | None:
        """Get a transaction given its hash; None when the provider finds none."""
        ensure_hex(tx_hash, "Transaction hash")

        transaction = await self.get_method("get_transaction_by_hash")(tx_hash)

        if transaction is not None:
            result = self._validator.validate_transaction(transaction)
            if not result.valid:
                logger.warning(
                    "Invalid transaction from provider: %s %s", result.path, result.message
                )
                raise InvalidProviderResponseError(
                    f"Provider returned an invalid transaction: {result.path} {result.message}",
                    path=result.path,
                )

        return transaction

    async def send_transaction(
        self, to: str, value: int | float, data: str | None = None, from_address: str | None = None
    ) -> Any:
        """Create, sign and broadcast a transaction."""
        return await self.get_method("send_transaction")(to, value, data, from_address)

    async def send_raw_transaction(self, raw_transaction: str) -> str:
        """Broadcast a signed transaction; resolves with its identifier."""
        tx_hash = await self.get_method("send_raw_transaction")(raw_transaction)

        if not isinstance(tx_hash, str):
            raise InvalidProviderResponseError(
                "send_raw_transaction method should return a transaction id string"
            )

        return tx_hash

    # ------------------------------------------------------------------
    # Addresses & wallet
    # ------------------------------------------------------------------

    async def get_balance(self, addresses: Any) -> int | float:
        """Cumulative balance of one address or a list of addresses."""
        if not isinstance(addresses, list):
            addresses = [addresses]

        balance = await self.get_method("get_balance")(addresses)

        if not is_number(balance):
            raise InvalidProviderResponseError("Provider returned an invalid balance")

        return balance

    async def get_addresses(
        self, starting_index: int = 0, num_addresses: int = 1, change: bool = False
    ) -> list[Any]:
        addresses = await self.get_method("get_addresses")(
            starting_index, num_addresses, change
        )

        if not isinstance(addresses, list):
            raise InvalidProviderResponseError("Provider returned an invalid address list")

        return addresses

    async def is_address_used(self, address: Any) -> Any:
        return await self.get_method("is_address_used")(address)

    async def get_used_addresses(self, num_address_per_call: int | None = None) -> Any:
        return await self.get_method("get_used_addresses")(num_address_per_call)

    async def get_unused_address(
        self, change: bool = False, num_address_per_call: int | None = None
    ) -> Any:
        return await self.get_method("get_unused_address")(change, num_address_per_call)

    async def sign_message(self, message: str, from_address: str) -> Any:
        return await self.get_method("sign_message")(message, from_address)

    async def get_address_mempool(self, addresses: list[Any]) -> Any:
        return await self.get_method("get_address_mempool")(addresses)

    async def is_wallet_available(self) -> Any:
        return await self.get_method("is_wallet_available")()

    async def get_wallet_network_id(self) -> Any:
        return await self.get_method("get_wallet_network_id")()

    async def get_wallet_info(self) -> Any:
        return await self.get_method("get_wallet_info")()
