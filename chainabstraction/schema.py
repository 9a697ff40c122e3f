"""JSON schemas for the Block and Transaction shapes returned by providers."""
from __future__ import annotations

from typing import Any

HEX_PATTERN = "^[A-Fa-f0-9]+$"

TRANSACTION: dict[str, Any] = {
    "type": "object",
    "properties": {
        "hash": {"type": "string", "pattern": HEX_PATTERN},
        "value": {"type": "number"},
        "blockHash": {"type": "string", "pattern": HEX_PATTERN},
        "blockNumber": {"type": "integer", "minimum": 0},
        "confirmations": {"type": "integer", "minimum": 0},
        "fee": {"type": "number"},
        "secret": {"type": "string"},
        "_raw": {},
    },
    "required": ["hash", "value"],
}

BLOCK: dict[str, Any] = {
    "type": "object",
    "properties": {
        "number": {"type": "integer", "minimum": 0},
        "hash": {"type": "string", "pattern": HEX_PATTERN},
        "timestamp": {"type": "number"},
        "size": {"type": "integer", "minimum": 0},
        "parentHash": {"type": "string", "pattern": HEX_PATTERN},
        "difficulty": {"type": "number"},
        "nonce": {"type": "integer"},
        "transactions": {
            "type": "array",
            "items": {
                "anyOf": [
                    {"type": "string", "pattern": HEX_PATTERN},
                    TRANSACTION,
                ]
            },
        },
        "_raw": {},
    },
    "required": ["number", "hash", "timestamp", "size", "parentHash"],
}
