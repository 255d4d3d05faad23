"""Types for TEE liveness verification: challenges, attestations, configuration and state."""

from __future__ import annotations

import enum
import struct
import time
from dataclasses import dataclass, field

from teeshard.data_structures import TEEIdentity

NONCE_LENGTH = 32


@dataclass(frozen=True)
class TeeDelays:
    """Simulated TEE operation delays in milliseconds; all zero by default."""

    sign_min_ms: int = 0
    sign_max_ms: int = 0
    verify_min_ms: int = 0
    verify_max_ms: int = 0
    attest_min_ms: int = 0
    attest_max_ms: int = 0


def _check_nonce(nonce: bytes) -> None:
    if len(nonce) != NONCE_LENGTH:
        raise ValueError(f"nonce must be {NONCE_LENGTH} bytes, got {len(nonce)}")


@dataclass(frozen=True)
class ChallengeNonce:
    """A challenge sent to a node; ``timestamp`` is milliseconds since the epoch."""

    nonce: bytes
    target_node_id: int
    timestamp: int

    def __post_init__(self) -> None:
        _check_nonce(self.nonce)


@dataclass(frozen=True)
class LivenessAttestation:
    """A node's signed answer to a challenge."""

    node_id: int
    nonce: bytes
    timestamp: int
    signature: bytes

    def __post_init__(self) -> None:
        _check_nonce(self.nonce)


class VerificationResult(enum.Enum):
    """Result of checking one liveness attestation."""

    VALID = "valid"
    INVALID_SIGNATURE = "invalid_signature"
    NONCE_MISMATCH = "nonce_mismatch"
    TIMESTAMP_MISMATCH = "timestamp_mismatch"


@dataclass
class LivenessConfig:
    """Liveness parameters; intervals and the challenge window are in seconds."""

    default_trust: float = 100.0
    trust_increment: float = 1.0
    trust_decrement: float = 10.0
    trust_threshold: float = 50.0
    high_trust_threshold: float = 150.0
    min_interval: float = 10.0
    max_interval: float = 300.0
    max_failures: int = 3
    challenge_window: float = 5.0
    tee_delays: TeeDelays = field(default_factory=TeeDelays)


@dataclass
class LivenessState:
    """Per-node liveness bookkeeping."""

    trust_score: float
    challenge_interval: float
    last_challenge_time: float
    consecutive_failures: int = 0

    @classmethod
    def from_config(cls, config: LivenessConfig) -> LivenessState:
        """Start at the default trust with an interval halfway between min and max."""
        return cls(
            trust_score=config.default_trust,
            challenge_interval=(config.min_interval + config.max_interval) / 2.0,
            last_challenge_time=time.monotonic(),
            consecutive_failures=0,
        )


@dataclass(frozen=True)
class NonceChallenge:
    """Challenge message routed to a TEE node."""

    target_tee: TEEIdentity
    nonce: int


class VerificationStatus(enum.Enum):
    """Status of verifying an attestation response."""

    VALID = "valid"
    INVALID_SIGNATURE = "invalid_signature"
    INVALID_NONCE = "invalid_nonce"
    INVALID_REPORT_DATA = "invalid_report_data"
    TIMEOUT = "timeout"


def attestation_message(node_id: int, nonce: bytes, timestamp: int) -> bytes:
    """Bytes a node signs to answer a challenge: node id, nonce, timestamp (native 64-bit)."""
    _check_nonce(nonce)
    return struct.pack("=Q", node_id) + bytes(nonce) + struct.pack("=Q", timestamp)