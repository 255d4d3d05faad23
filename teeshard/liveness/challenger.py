"""Liveness challenger: sends nonce challenges to nodes and informs the aggregator."""

from __future__ import annotations

import asyncio
import logging
import secrets
import sys
import time
from collections.abc import Iterable

from teeshard.data_structures import TEEIdentity
from teeshard.liveness.types import NONCE_LENGTH, ChallengeNonce, NonceChallenge
from teeshard.network import LivenessChallenge, NetworkInterface, NetworkMessage

logger = logging.getLogger(__name__)


class Challenger:
    """Challenges every known node and reports each challenge to the aggregator."""

    def __init__(
        self,
        identity: TEEIdentity,
        nodes: Iterable[TEEIdentity],
        network: NetworkInterface,
        aggregator_queue: asyncio.Queue[ChallengeNonce],
    ) -> None:
        self.identity = identity
        self.nodes_to_challenge = list(nodes)
        self.network = network
        self.aggregator_queue = aggregator_queue

    async def issue_challenges(self) -> list[ChallengeNonce]:
        """Challenge every node once and return the challenges issued."""
        issued = []
        for node in list(self.nodes_to_challenge):
            nonce = secrets.token_bytes(NONCE_LENGTH)
            challenge = ChallengeNonce(
                nonce=nonce,
                target_node_id=node.id,
                timestamp=time.time_ns() // 1_000_000,
            )
            routed = NonceChallenge(
                target_tee=node,
                nonce=int.from_bytes(nonce[:8], sys.byteorder),
            )
            logger.debug("Issuing challenge to node %d", node.id)
            self.network.send_message(
                NetworkMessage(
                    sender=self.identity,
                    receiver=node,
                    message=LivenessChallenge(routed),
                )
            )
            await self.aggregator_queue.put(challenge)
            issued.append(challenge)
        return issued

    async def run(self, interval: float = 1.0) -> None:
        """Issue challenges now and then every ``interval`` seconds until cancelled."""
        logger.info("Challenger %d starting run loop", self.identity.id)
        while True:
            await self.issue_challenges()
            await asyncio.sleep(interval)