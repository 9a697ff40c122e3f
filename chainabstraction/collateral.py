"""Collateralized-loan operations over two independently hash-locked pools.

The refundable pool returns to the borrower on repayment; the seizable pool
is forfeit to the lender on default. Three escalating deadlines stage the
settlement: repayment before ``loan_expiration``, negotiation until
``bidding_expiration``, unilateral seizure after ``seizure_expiration``.

Outcomes (``CollateralState``): LOCKED → REPAID, NEGOTIATED (co-signed
multisig settlement, bypassing the timeouts) or DEFAULTED (lender seizes the
seizable pool; the borrower can still reclaim the refundable one).
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .checks import ensure_bool, ensure_hex, ensure_number
from .models import CollateralParameters, CollateralState, CollateralValues

if TYPE_CHECKING:
    from .client import Client

logger = logging.getLogger(__name__)


def check_collateral_parameters(params: CollateralParameters) -> None:
    ensure_hex(params.borrower_pubkey, "Borrower public key")
    ensure_hex(params.lender_pubkey, "Lender public key")
    for name, secret_hash in params.secret_hashes.items():
        ensure_hex(secret_hash, name)
    for name, expiration in params.expirations.items():
        ensure_number(expiration, name)


class CollateralProtocol:
    """Collateral operations bound to a client."""

    def __init__(self, client: Client) -> None:
        self._client = client

    async def create_refundable_collateral_script(self, params: CollateralParameters) -> Any:
        check_collateral_parameters(params)
        return await self._client.get_method("create_refundable_collateral_script")(params)

    async def create_seizable_collateral_script(self, params: CollateralParameters) -> Any:
        check_collateral_parameters(params)
        return await self._client.get_method("create_seizable_collateral_script")(params)

    async def lock_collateral(
        self, values: CollateralValues, params: CollateralParameters
    ) -> Any:
        """Lock both pools; resolves with the provider's lock result."""
        ensure_number(values.refundable, "Refundable value")
        ensure_number(values.seizable, "Seizable value")
        check_collateral_parameters(params)
        result = await self._client.get_method("lock_collateral")(values, params)
        logger.info("Collateral %s: %s", CollateralState.LOCKED.value, result)
        return result

    async def refund_collateral(
        self,
        refundable_tx_hash: str,
        seizable_tx_hash: str,
        params: CollateralParameters,
        secret_b2: str,
    ) -> Any:
        """Release both pools to the borrower once the lender reveals B2."""
        ensure_hex(refundable_tx_hash, "Refundable transaction hash")
        ensure_hex(seizable_tx_hash, "Seizable transaction hash")
        ensure_hex(secret_b2, "Secret B2")
        check_collateral_parameters(params)
        result = await self._client.get_method("refund_collateral")(
            refundable_tx_hash, seizable_tx_hash, params, secret_b2
        )
        logger.info("Collateral %s: %s", CollateralState.REPAID.value, result)
        return result

    async def seize_collateral(
        self, seizable_tx_hash: str, params: CollateralParameters, secret_a1: str
    ) -> Any:
        ensure_hex(seizable_tx_hash, "Seizable transaction hash")
        ensure_hex(secret_a1, "Secret A1")
        check_collateral_parameters(params)
        result = await self._client.get_method("seize_collateral")(
            seizable_tx_hash, params, secret_a1
        )
        logger.info("Collateral %s: %s", CollateralState.DEFAULTED.value, result)
        return result

    async def refund_refundable_collateral(
        self, refundable_tx_hash: str, params: CollateralParameters
    ) -> Any:
        ensure_hex(refundable_tx_hash, "Refundable transaction hash")
        check_collateral_parameters(params)
        return await self._client.get_method("refund_refundable_collateral")(
            refundable_tx_hash, params
        )

    async def refund_seizable_collateral(
        self, seizable_tx_hash: str, params: CollateralParameters
    ) -> Any:
        ensure_hex(seizable_tx_hash, "Seizable transaction hash")
        check_collateral_parameters(params)
        return await self._client.get_method("refund_seizable_collateral")(
            seizable_tx_hash, params
        )

    async def multisig_sign_collateral(
        self,
        refundable_tx_hash: str,
        seizable_tx_hash: str,
        params: CollateralParameters,
        is_borrower: bool,
        to: str,
    ) -> Any:
        """Produce this party's signatures for a co-signed settlement."""
        ensure_hex(refundable_tx_hash, "Refundable transaction hash")
        ensure_hex(seizable_tx_hash, "Seizable transaction hash")
        ensure_bool(is_borrower, "is_borrower")
        check_collateral_parameters(params)
        return await self._client.get_method("multisig_sign_collateral")(
            refundable_tx_hash, seizable_tx_hash, params, is_borrower, to
        )

    async def multisig_send_collateral(
        self,
        refundable_tx_hash: str,
        seizable_tx_hash: str,
        params: CollateralParameters,
        secret_a2: str,
        secret_b3: str,
        borrower_signatures: Any,
        lender_signatures: Any,
        to: str,
    ) -> Any:
        """Broadcast the settlement once both parties have signed."""
        ensure_hex(refundable_tx_hash, "Refundable transaction hash")
        ensure_hex(seizable_tx_hash, "Seizable transaction hash")
        ensure_hex(secret_a2, "Secret A2")
        ensure_hex(secret_b3, "Secret B3")
        check_collateral_parameters(params)
        result = await self._client.get_method("multisig_send_collateral")(
            refundable_tx_hash,
            seizable_tx_hash,
            params,
            secret_a2,
            secret_b3,
            borrower_signatures,
            lender_signatures,
            to,
        )
        logger.info("Collateral %s: %s", CollateralState.NEGOTIATED.value, result)
        return result
