"""Network message types and the interface used to send them."""

from __future__ import annotations

import abc
import threading
from dataclasses import dataclass

from teeshard.cross_chain.types import LockRequest
from teeshard.data_structures import TEEIdentity
from teeshard.liveness.types import LivenessAttestation, NonceChallenge


@dataclass(frozen=True)
class LivenessChallenge:
    """Liveness challenge sent from the liveness service to a node."""

    challenge: NonceChallenge


@dataclass(frozen=True)
class LivenessResponse:
    """A node's liveness attestation sent back to the aggregator."""

    attestation: LivenessAttestation


@dataclass(frozen=True)
class ShardLockRequest:
    """Lock request sent from a coordinator to shard TEEs."""

    request: LockRequest


@dataclass(frozen=True)
class Placeholder:
    """Free-form message for kinds not yet modelled."""

    text: str


Message = LivenessChallenge | LivenessResponse | ShardLockRequest | Placeholder


@dataclass(frozen=True)
class NetworkMessage:
    """A message in transit between two TEEs."""

    sender: TEEIdentity
    receiver: TEEIdentity
    message: Message


class NetworkInterface(abc.ABC):
    """Something that can deliver network messages."""

    @abc.abstractmethod
    def send_message(self, msg: NetworkMessage) -> None:
        """Send one message."""


class MockNetwork(NetworkInterface):
    """Thread-safe network that records sent messages instead of delivering them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sent: list[NetworkMessage] = []

    def send_message(self, msg: NetworkMessage) -> None:
        with self._lock:
            self._sent.append(msg)

    def get_sent_messages(self) -> list[NetworkMessage]:
        """Return a copy of every message not yet retrieved."""
        with self._lock:
            return list(self._sent)

    def clear_sent_messages(self) -> None:
        """Forget every recorded message."""
        with self._lock:
            self._sent.clear()

    def retrieve_messages_for(self, recipient: TEEIdentity) -> list[NetworkMessage]:
        """Remove and return, in order, the messages addressed to ``recipient``."""
        with self._lock:
            taken = [m for m in self._sent if m.receiver == recipient]
            self._sent = [m for m in self._sent if m.receiver != recipient]
        return taken