"""System-wide configuration for sharding, consensus, swaps and liveness."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from teeshard.data_structures import TEEIdentity, TxType, generate_identity
from teeshard.liveness.types import LivenessConfig, TeeDelays

logger = logging.getLogger(__name__)

_HEARTBEATS_PER_CHALLENGE_WINDOW = 10
_MIN_CHALLENGE_WINDOW_SECONDS = 0.5


def _default_edge_weights() -> dict[TxType, float]:
    # Cross-chain edges are more expensive to cut than single-chain ones.
    return {TxType.SINGLE_CHAIN_TRANSFER: 1.0, TxType.CROSS_CHAIN_SWAP: 5.0}


def _default_coordinators() -> list[TEEIdentity]:
    return [generate_identity(node_id)[0] for node_id in (100, 101, 102)]


@dataclass
class SystemConfig:
    """Parameters of the whole system; durations carry their unit in the name."""

    # General
    num_shards: int = 3
    tee_threshold: int = 2

    # Sharding / partitioning
    max_iterations: int = 10
    node_weight_alpha: float = 0.5
    edge_weight_config: dict[TxType, float] = field(default_factory=_default_edge_weights)
    partition_overload_threshold: float = 1.5
    nodes_per_shard: int = 3

    # Raft consensus within shards
    raft_heartbeat_ms: int = 100
    raft_election_timeout_min_ms: int = 150
    raft_election_timeout_max_ms: int = 300

    # Cross-chain swaps
    cross_chain_swap_timeout_ms: int = 5000
    num_coordinators: int = 3

    # TEE liveness verification
    liveness_default_trust: float = 100.0
    liveness_trust_increment: float = 1.0
    liveness_trust_decrement: float = 10.0
    liveness_trust_threshold: float = 50.0
    liveness_high_trust_threshold: float = 150.0
    liveness_min_interval_ms: int = 1000
    liveness_max_interval_ms: int = 10000
    liveness_max_consecutive_fails: int = 5

    # Network simulation
    network_delay_range_ms: tuple[int, int] = (10, 50)

    # Coordinator multi-signature
    coordinator_threshold: int = 2
    coordinator_identities: list[TEEIdentity] = field(default_factory=_default_coordinators)

    # Simulated TEE overhead
    tee_delays: TeeDelays = field(default_factory=TeeDelays)

    def liveness_config(self) -> LivenessConfig:
        """Derive the liveness configuration.

        The challenge window is ten heartbeat intervals, but never under half a second.
        """
        heartbeat = self.raft_heartbeat_ms / 1000.0
        challenge_window = max(
            heartbeat * _HEARTBEATS_PER_CHALLENGE_WINDOW, _MIN_CHALLENGE_WINDOW_SECONDS
        )
        logger.info(
            "Calculated liveness challenge window: %.3fs (based on %.3fs heartbeat)",
            challenge_window,
            heartbeat,
        )
        return LivenessConfig(
            default_trust=self.liveness_default_trust,
            trust_increment=self.liveness_trust_increment,
            trust_decrement=self.liveness_trust_decrement,
            trust_threshold=self.liveness_trust_threshold,
            high_trust_threshold=self.liveness_high_trust_threshold,
            min_interval=self.liveness_min_interval_ms / 1000.0,
            max_interval=self.liveness_max_interval_ms / 1000.0,
            max_failures=self.liveness_max_consecutive_fails,
            challenge_window=challenge_window,
            tee_delays=self.tee_delays,
        )