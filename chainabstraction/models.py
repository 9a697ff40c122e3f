"""Data models (all frozen)."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Address:
    """Wallet address controlled by a signing provider."""

    address: str
    derivation_path: str | None = None
    public_key: str | None = None

    def __str__(self) -> str:
        return self.address


@dataclass(frozen=True)
class SwapParameters:
    """Hash-and-time-locked exchange parameters."""

    value: int | float
    recipient_address: str
    refund_address: str
    secret_hash: str
    expiration: int | float


@dataclass(frozen=True)
class CollateralParameters:
    """Two-party collateral terms with staged deadlines.

    A1/A2 hash-locks belong to the borrower, B2/B3 to the lender. Deadlines
    escalate: ``loan_expiration`` < ``bidding_expiration`` < ``seizure_expiration``.
    """

    borrower_pubkey: str
    lender_pubkey: str
    secret_hash_a1: str
    secret_hash_a2: str
    secret_hash_b2: str
    secret_hash_b3: str
    loan_expiration: int | float
    bidding_expiration: int | float
    seizure_expiration: int | float

    @property
    def secret_hashes(self) -> dict[str, str]:
        return {
            "secret_hash_a1": self.secret_hash_a1,
            "secret_hash_a2": self.secret_hash_a2,
            "secret_hash_b2": self.secret_hash_b2,
            "secret_hash_b3": self.secret_hash_b3,
        }

    @property
    def expirations(self) -> dict[str, int | float]:
        return {
            "loan_expiration": self.loan_expiration,
            "bidding_expiration": self.bidding_expiration,
            "seizure_expiration": self.seizure_expiration,
        }


@dataclass(frozen=True)
class CollateralValues:
    """Amounts locked into the refundable and seizable pools."""

    refundable: int | float
    seizable: int | float


class SwapState(str, Enum):
    CREATED = "created"
    INITIATED = "initiated"
    VERIFIED = "verified"
    CLAIMED = "claimed"
    REFUNDED = "refunded"


class CollateralState(str, Enum):
    LOCKED = "locked"
    REPAID = "repaid"
    NEGOTIATED = "negotiated"
    DEFAULTED = "defaulted"
