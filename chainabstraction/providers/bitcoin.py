"""Bitcoin Core node provider."""
from __future__ import annotations

import logging
import re
from typing import Any

from ..models import Address
from .jsonrpc import JsonRpcProvider, RpcError

logger = logging.getLogger(__name__)

SATOSHIS_PER_BTC = 10**8
GENESIS_PARENT = "0" * 64

# bitcoind: "No such mempool or blockchain transaction"
RPC_INVALID_ADDRESS_OR_KEY = -5

# generatetoaddress appeared in 0.13.0
_MIN_VERSIONS: dict[str, tuple[int, ...]] = {
    "generate_block": (0, 13, 0),
}


def to_satoshis(amount: float) -> int:
    return int(round(amount * SATOSHIS_PER_BTC))


def parse_version(version: str) -> tuple[int, ...]:
    """``"0.18.1"`` → ``(0, 18, 1)``; non-numeric parts are ignored."""
    return tuple(int(part) for part in re.findall(r"\d+", version)[:3])


class BitcoinRpcProvider(JsonRpcProvider):
    """Read blocks and transactions, manage addresses and broadcast via bitcoind RPC."""

    kind = "bitcoin_rpc"
    capabilities = frozenset(
        {
            "generate_block",
            "get_block_by_hash",
            "get_block_by_number",
            "get_block_height",
            "get_transaction_by_hash",
            "send_raw_transaction",
            "get_balance",
            "get_addresses",
            "is_address_used",
            "sign_message",
            "get_address_mempool",
        }
    )

    def supports_method(self, method: str, version: str | None) -> bool:
        minimum = _MIN_VERSIONS.get(method)
        if minimum is None or not version:
            return True
        return parse_version(version) >= minimum

    # ------------------------------------------------------------------
    # Normalisation
    # ------------------------------------------------------------------

    @staticmethod
    def _format_transaction(raw: dict[str, Any]) -> dict[str, Any]:
        tx: dict[str, Any] = {
            "hash": raw["txid"],
            "value": sum(to_satoshis(out.get("value", 0)) for out in raw.get("vout", [])),
            "_raw": raw,
        }
        if raw.get("blockhash"):
            tx["blockHash"] = raw["blockhash"]
        if "confirmations" in raw:
            tx["confirmations"] = raw["confirmations"]
        return tx

    def _format_block(self, raw: dict[str, Any], transactions: list[Any]) -> dict[str, Any]:
        return {
            "number": raw["height"],
            "hash": raw["hash"],
            "timestamp": raw["time"],
            "size": raw["size"],
            "parentHash": raw.get("previousblockhash", GENESIS_PARENT),
            "difficulty": raw.get("difficulty", 0),
            "nonce": raw.get("nonce", 0),
            "transactions": transactions,
            "_raw": raw,
        }

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    async def generate_block(self, number_of_blocks: int) -> list[str]:
        address = await self.rpc_call("getnewaddress")
        return await self.rpc_call("generatetoaddress", [number_of_blocks, address])

    async def get_block_height(self) -> int:
        return await self.rpc_call("getblockcount")

    async def get_block_by_hash(
        self, block_hash: str, include_tx: bool = False
    ) -> dict[str, Any]:
        if not include_tx:
            raw = await self.rpc_call("getblock", [block_hash, 1])
            return self._format_block(raw, list(raw.get("tx", [])))

        # verbosity 2 embeds decoded transactions, so no txindex is needed
        raw = await self.rpc_call("getblock", [block_hash, 2])
        transactions = [
            self._format_transaction(
                {
                    **tx,
                    "blockhash": raw["hash"],
                    "confirmations": raw.get("confirmations", 0),
                }
            )
            for tx in raw.get("tx", [])
        ]
        return self._format_block(raw, transactions)

    async def get_block_by_number(
        self, block_number: int, include_tx: bool = False
    ) -> dict[str, Any]:
        block_hash = await self.rpc_call("getblockhash", [block_number])
        return await self.get_block_by_hash(block_hash, include_tx)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    async def get_transaction_by_hash(self, tx_hash: str) -> dict[str, Any] | None:
        try:
            raw = await self.rpc_call("getrawtransaction", [tx_hash, True])
        except RpcError as e:
            if e.code == RPC_INVALID_ADDRESS_OR_KEY:
                logger.debug("Transaction %s not found", tx_hash)
                return None
            raise
        return self._format_transaction(raw)

    async def send_raw_transaction(self, raw_transaction: str) -> str:
        return await self.rpc_call("sendrawtransaction", [raw_transaction])

    # ------------------------------------------------------------------
    # Addresses
    # ------------------------------------------------------------------

    async def get_balance(self, addresses: list[Any]) -> int:
        unspent = await self.rpc_call(
            "listunspent", [0, 9999999, [str(a) for a in addresses]]
        )
        return sum(to_satoshis(utxo["amount"]) for utxo in unspent)

    async def get_addresses(
        self, starting_index: int = 0, num_addresses: int = 1, change: bool = False
    ) -> list[Address]:
        received = await self.rpc_call("listreceivedbyaddress", [0, True])
        window = received[starting_index:starting_index + num_addresses]
        return [Address(address=entry["address"]) for entry in window]

    async def is_address_used(self, address: Any) -> bool:
        received = await self.rpc_call("getreceivedbyaddress", [str(address), 0])
        return received > 0

    async def sign_message(self, message: str, from_address: str) -> str:
        return await self.rpc_call("signmessage", [from_address, message])

    async def get_address_mempool(self, addresses: list[Any]) -> list[dict[str, Any]]:
        """Mempool transactions paying to any of ``addresses``."""
        wanted = {str(a) for a in addresses}
        matches: list[dict[str, Any]] = []
        for txid in await self.rpc_call("getrawmempool"):
            raw = await self.rpc_call("getrawtransaction", [txid, True])
            for out in raw.get("vout", []):
                script = out.get("scriptPubKey", {})
                out_addresses = set(script.get("addresses", []))
                if script.get("address"):
                    out_addresses.add(script["address"])
                if out_addresses & wanted:
                    matches.append(self._format_transaction(raw))
                    break
        return matches
