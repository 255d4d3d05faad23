"""Liveness aggregator: checks attestations against pending challenges and tracks trust."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from teeshard.data_structures import TEEIdentity
from teeshard.liveness.types import (
    ChallengeNonce,
    LivenessAttestation,
    LivenessConfig,
    LivenessState,
    VerificationResult,
    attestation_message,
)

logger = logging.getLogger(__name__)


class Aggregator:
    """Verifies liveness attestations, keeps per-node trust and reports nodes to isolate."""

    def __init__(
        self,
        identity: TEEIdentity,
        config: LivenessConfig,
        initial_nodes: Iterable[TEEIdentity],
        isolation_queue: asyncio.Queue[list[int]] | None = None,
    ) -> None:
        self.identity = identity
        self.config = config
        self._states: dict[int, LivenessState] = {}
        self._identities: dict[int, TEEIdentity] = {}
        for node in initial_nodes:
            self._states[node.id] = LivenessState.from_config(config)
            self._identities[node.id] = node
        self._pending: dict[int, ChallengeNonce] = {}
        self.isolation_queue: asyncio.Queue[list[int]] = (
            isolation_queue if isolation_queue is not None else asyncio.Queue()
        )

    @property
    def liveness_states(self) -> Mapping[int, LivenessState]:
        """Liveness state of every tracked node, by node id."""
        return MappingProxyType(self._states)

    @property
    def node_identities(self) -> Mapping[int, TEEIdentity]:
        """Identity of every tracked node, by node id."""
        return MappingProxyType(self._identities)

    @property
    def pending_challenges(self) -> Mapping[int, ChallengeNonce]:
        """The outstanding challenge for each node that has one."""
        return MappingProxyType(self._pending)

    def add_pending_challenge(self, challenge: ChallengeNonce) -> bool:
        """Record a challenge unless one is already pending for that node.

        Returns whether the challenge was recorded.
        """
        node_id = challenge.target_node_id
        if node_id in self._pending:
            logger.debug(
                "Aggregator %d: ignoring challenge for node %d, one is already pending",
                self.identity.id,
                node_id,
            )
            return False
        self._pending[node_id] = challenge
        return True

    async def _simulate_verify_delay(self) -> None:
        delays = self.config.tee_delays
        if delays.verify_max_ms > 0:
            low = min(delays.verify_min_ms, delays.verify_max_ms)
            await asyncio.sleep(random.uniform(low, delays.verify_max_ms) / 1000.0)

    async def _verify_signature(
        self, identity: TEEIdentity, attestation: LivenessAttestation
    ) -> bool:
        await self._simulate_verify_delay()
        message = attestation_message(
            attestation.node_id, attestation.nonce, attestation.timestamp
        )
        try:
            Ed25519PublicKey.from_public_bytes(identity.public_key).verify(
                attestation.signature, message
            )
        except (InvalidSignature, ValueError):
            return False
        return True

    async def _check(self, node_id: int, attestation: LivenessAttestation) -> VerificationResult:
        expected = self._pending.get(node_id)
        if expected is None:
            logger.info(
                "Aggregator %d: attestation from node %d without a pending challenge",
                self.identity.id,
                node_id,
            )
            return VerificationResult.NONCE_MISMATCH
        if attestation.nonce != expected.nonce:
            return VerificationResult.NONCE_MISMATCH
        if attestation.timestamp != expected.timestamp:
            return VerificationResult.TIMESTAMP_MISMATCH
        if await self._verify_signature(self._identities[node_id], attestation):
            return VerificationResult.VALID
        return VerificationResult.INVALID_SIGNATURE

    def _penalize(self, node_id: int) -> None:
        state = self._states[node_id]
        state.trust_score = max(state.trust_score - self.config.trust_decrement, 0.0)
        state.consecutive_failures += 1
        self._pending.pop(node_id, None)

    async def process_attestation_batch(
        self, batch: Iterable[LivenessAttestation]
    ) -> dict[int, VerificationResult]:
        """Verify a batch of attestations and update the state of each node that answered.

        Nodes absent from the batch are left alone; a later attestation from the same
        node replaces an earlier one. Returns the verification result per node.
        """
        received = {attestation.node_id: attestation for attestation in batch}
        logger.info(
            "Aggregator %d: processing %d attestations", self.identity.id, len(received)
        )
        results: dict[int, VerificationResult] = {}
        for node_id in list(self._states):
            attestation = received.get(node_id)
            if attestation is None:
                continue
            result = await self._check(node_id, attestation)
            if node_id not in self._states:
                continue
            state = self._states[node_id]
            if result is VerificationResult.VALID:
                state.trust_score += self.config.trust_increment
                state.consecutive_failures = 0
                self._pending.pop(node_id, None)
            else:
                logger.info(
                    "Aggregator %d: verification failed for node %d (%s)",
                    self.identity.id,
                    node_id,
                    result.name,
                )
                self._penalize(node_id)
            results[node_id] = result
            logger.debug(
                "Aggregator %d: node %d score=%s fails=%d",
                self.identity.id,
                node_id,
                state.trust_score,
                state.consecutive_failures,
            )
        return results

    def identify_and_isolate_nodes(self) -> list[int]:
        """Ids, in ascending order, of nodes whose consecutive failures reached the limit."""
        return sorted(
            node_id
            for node_id, state in self._states.items()
            if state.consecutive_failures >= self.config.max_failures
        )

    def expire_challenges(self, now_ms: int | None = None) -> list[int]:
        """Penalize and drop challenges older than the challenge window.

        ``now_ms`` is milliseconds since the epoch, the current time by default.
        Returns the ids of the nodes that timed out, in ascending order.
        """
        if now_ms is None:
            now_ms = time.time_ns() // 1_000_000
        window_ms = int(self.config.challenge_window * 1000)
        timed_out = sorted(
            node_id
            for node_id, challenge in self._pending.items()
            if max(now_ms - challenge.timestamp, 0) > window_ms
        )
        for node_id in timed_out:
            self._pending.pop(node_id, None)
            if node_id in self._states:
                logger.info("Aggregator %d: node %d timed out", self.identity.id, node_id)
                self._penalize(node_id)
        return timed_out

    async def report_isolated_nodes(self, nodes: Iterable[int]) -> None:
        """Send a report listing nodes to isolate."""
        report = list(nodes)
        logger.info("Aggregator %d: reporting isolated nodes %s", self.identity.id, report)
        await self.isolation_queue.put(report)