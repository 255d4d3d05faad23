"""Core data types shared across the protocol: accounts, assets, transactions, TEE identities."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

PUBLIC_KEY_LENGTH = 32


@dataclass(frozen=True)
class AccountId:
    """A user account on some chain."""

    chain_id: int
    address: str


@dataclass(frozen=True)
class AssetId:
    """A specific asset on a specific chain."""

    chain_id: int
    token_symbol: str
    token_address: str


@dataclass(frozen=True)
class LockInfo:
    """A resource that must be locked for a transaction to proceed."""

    account: AccountId
    asset: AssetId
    amount: int


class TxType(enum.Enum):
    """Kinds of transaction handled by the protocol."""

    SINGLE_CHAIN_TRANSFER = "single_chain_transfer"
    CROSS_CHAIN_SWAP = "cross_chain_swap"


@dataclass
class Transaction:
    """A single transaction.

    For a single-chain transfer ``accounts`` is ``[from, to]``; for a
    cross-chain swap it is ``[from_a, to_a, from_b, to_b]``.
    ``timeout`` is in seconds.
    """

    tx_id: str
    tx_type: TxType
    accounts: list[AccountId] = field(default_factory=list)
    amounts: list[int] = field(default_factory=list)
    required_locks: list[LockInfo] = field(default_factory=list)
    target_asset: AssetId | None = None
    timeout: float = 0.0


@dataclass
class GraphNode:
    """A weighted node of the account graph used for partitioning."""

    account: AccountId
    node_weight: float


@dataclass
class GraphEdge:
    """A weighted edge of the account graph used for partitioning."""

    src: AccountId
    dst: AccountId
    edge_weight: float


@dataclass(frozen=True)
class TEEIdentity:
    """Identity of a TEE node: a numeric id and its raw Ed25519 public key."""

    id: int
    public_key: bytes

    def __post_init__(self) -> None:
        if len(self.public_key) != PUBLIC_KEY_LENGTH:
            raise ValueError(
                f"public key must be {PUBLIC_KEY_LENGTH} bytes, got {len(self.public_key)}"
            )


def _raw_public_key(signing_key: Ed25519PrivateKey) -> bytes:
    return signing_key.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)


def generate_identity(id: int) -> tuple[TEEIdentity, Ed25519PrivateKey]:
    """Create a fresh key pair and the TEE identity holding its public key."""
    signing_key = Ed25519PrivateKey.generate()
    return TEEIdentity(id=id, public_key=_raw_public_key(signing_key)), signing_key