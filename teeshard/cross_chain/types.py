"""Types used while executing cross-chain swaps."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from teeshard.data_structures import LockInfo, TEEIdentity


@dataclass(frozen=True)
class LockProof:
    """A shard's signed proof that a resource has been locked."""

    tx_id: str
    shard_id: int
    lock_info: LockInfo
    signer_identity: TEEIdentity
    attestation_or_sig: bytes


@dataclass(frozen=True)
class LockRequest:
    """Request from a coordinator to shard TEEs to lock a resource."""

    tx_id: str
    lock_info: LockInfo


class AbortKind(enum.Enum):
    """Why a cross-chain swap was aborted."""

    VERIFICATION_FAILED = "verification_failed"
    TIMEOUT = "timeout"
    LOCK_PROOF_VERIFICATION_FAILED = "lock_proof_verification_failed"
    TIMEOUT_WAITING_FOR_LOCKS = "timeout_waiting_for_locks"
    LOCAL_VALIDATION_ERROR = "local_validation_error"
    COORDINATOR_FAILURE = "coordinator_failure"
    OTHER = "other"


_ABORT_KINDS_WITH_MESSAGE = {AbortKind.LOCAL_VALIDATION_ERROR, AbortKind.OTHER}


@dataclass(frozen=True)
class AbortReason:
    """An abort reason; local validation errors and other reasons carry a message."""

    kind: AbortKind
    message: str | None = None

    def __post_init__(self) -> None:
        needs_message = self.kind in _ABORT_KINDS_WITH_MESSAGE
        if needs_message and self.message is None:
            raise ValueError(f"{self.kind.name} requires a message")
        if not needs_message and self.message is not None:
            raise ValueError(f"{self.kind.name} takes no message")


class OutcomeKind(enum.Enum):
    """Final outcome of a swap attempt."""

    GLOBAL_COMMIT_SUCCESS = "global_commit_success"
    GLOBAL_ABORT_COMPLETE = "global_abort_complete"
    IMMEDIATE_ABORT = "immediate_abort"
    INCONSISTENT_STATE = "inconsistent_state"


@dataclass(frozen=True)
class SwapOutcome:
    """Outcome of a swap; a completed abort carries its reason, an inconsistent state a detail."""

    kind: OutcomeKind
    reason: AbortReason | None = None
    detail: str | None = None

    def __post_init__(self) -> None:
        if (self.kind is OutcomeKind.GLOBAL_ABORT_COMPLETE) != (self.reason is not None):
            raise ValueError("an abort reason is required exactly for GLOBAL_ABORT_COMPLETE")
        if (self.kind is OutcomeKind.INCONSISTENT_STATE) != (self.detail is not None):
            raise ValueError("a detail is required exactly for INCONSISTENT_STATE")


@dataclass(frozen=True)
class SignedCoordinatorDecision:
    """The coordinators' combined decision: release when ``commit`` is true, else abort."""

    tx_id: str
    commit: bool
    signature: bytes