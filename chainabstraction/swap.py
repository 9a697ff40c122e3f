"""Hash-time-locked swap operations.

A swap moves through ``SwapState``: CREATED (script computed) → INITIATED
(funds locked) → VERIFIED (counterparty checked the lock on-chain) → CLAIMED
(secret revealed) or REFUNDED (expiration passed). Which terminal state occurs
depends on timing outside the client; this module only validates inputs and
dispatches each step through the client's provider stack.
"""
from __future__ import annotations

import hashlib
import logging
from typing import TYPE_CHECKING, Any

from .checks import ensure_hex, ensure_number, ensure_string
from .errors import InvalidProviderResponseError
from .models import SwapParameters, SwapState

if TYPE_CHECKING:
    from .client import Client

logger = logging.getLogger(__name__)


def sha256_hex(message: str) -> str:
    return hashlib.sha256(message.encode("utf-8")).hexdigest()


def _check_script_parameters(params: SwapParameters) -> None:
    ensure_string(params.recipient_address, "Recipient address")
    ensure_string(params.refund_address, "Refund address")
    ensure_hex(params.secret_hash, "Secret hash")
    ensure_number(params.expiration, "Expiration")


def _check_parameters(params: SwapParameters) -> None:
    ensure_number(params.value, "Value")
    _check_script_parameters(params)


class SwapProtocol:
    """Swap step operations bound to a client."""

    def __init__(self, client: Client) -> None:
        self._client = client

    async def create_swap_script(self, params: SwapParameters) -> Any:
        _check_script_parameters(params)
        return await self._client.get_method("create_swap_script")(params)

    async def initiate_swap(self, params: SwapParameters) -> Any:
        """Lock ``params.value``; resolves with the initiation transaction id."""
        _check_parameters(params)
        tx_hash = await self._client.get_method("initiate_swap")(params)
        logger.info("Swap %s: %s", SwapState.INITIATED.value, tx_hash)
        return tx_hash

    async def verify_initiate_swap_transaction(
        self, initiation_tx_hash: str, params: SwapParameters
    ) -> bool:
        ensure_hex(initiation_tx_hash, "Initiation transaction hash")
        _check_parameters(params)
        verified = await self._client.get_method("verify_initiate_swap_transaction")(
            initiation_tx_hash, params
        )
        if verified:
            logger.info("Swap %s: %s", SwapState.VERIFIED.value, initiation_tx_hash)
        return verified

    async def claim_swap(
        self, initiation_tx_hash: str, params: SwapParameters, secret: str
    ) -> Any:
        ensure_hex(initiation_tx_hash, "Initiation transaction hash")
        ensure_hex(secret, "Secret")
        _check_script_parameters(params)
        tx_hash = await self._client.get_method("claim_swap")(
            initiation_tx_hash, params, secret
        )
        logger.info("Swap %s: %s", SwapState.CLAIMED.value, tx_hash)
        return tx_hash

    async def refund_swap(self, initiation_tx_hash: str, params: SwapParameters) -> Any:
        ensure_hex(initiation_tx_hash, "Initiation transaction hash")
        _check_script_parameters(params)
        tx_hash = await self._client.get_method("refund_swap")(initiation_tx_hash, params)
        logger.info("Swap %s: %s", SwapState.REFUNDED.value, tx_hash)
        return tx_hash

    async def find_initiate_swap_transaction(self, params: SwapParameters) -> Any:
        _check_parameters(params)
        return await self._client.get_method("find_initiate_swap_transaction")(params)

    async def find_claim_swap_transaction(
        self, initiation_tx_hash: str, params: SwapParameters
    ) -> Any:
        ensure_hex(initiation_tx_hash, "Initiation transaction hash")
        _check_script_parameters(params)
        return await self._client.get_method("find_claim_swap_transaction")(
            initiation_tx_hash, params
        )

    async def generate_secret(self, message: str) -> str:
        """Derive a secret from ``message`` signed by the first wallet address.

        The same message and signing address always give the same secret, so
        a party can rebuild it after a restart instead of storing it.
        """
        ensure_string(message, "Message")
        addresses = await self._client.get_addresses()
        if not addresses:
            raise InvalidProviderResponseError("Provider returned no addresses")

        address = str(addresses[0])
        signed_message = await self._client.sign_message(message, address)
        if not isinstance(signed_message, str):
            raise InvalidProviderResponseError("Provider returned an invalid signature")

        return sha256_hex(signed_message)

    async def get_swap_secret(self, claim_tx_hash: str) -> Any:
        """Extract the secret revealed by a claim transaction."""
        ensure_hex(claim_tx_hash, "Claim transaction hash")
        return await self._client.get_method("get_swap_secret")(claim_tx_hash)
