"""Long-running aggregator tasks: challenge intake, attestation batching and timeouts.

Each listener reads from an ``asyncio.Queue``. Putting ``None`` into the queue
closes it, and the listener returns.
"""

from __future__ import annotations

import asyncio
import logging

from teeshard.liveness.aggregator import Aggregator
from teeshard.liveness.types import ChallengeNonce, LivenessAttestation

logger = logging.getLogger(__name__)

DEFAULT_BATCH_TIMEOUT = 1.0


async def _report_if_needed(aggregator: Aggregator) -> list[int]:
    nodes = aggregator.identify_and_isolate_nodes()
    if nodes:
        logger.info(
            "Aggregator %d: sending isolation report for nodes %s",
            aggregator.identity.id,
            nodes,
        )
        await aggregator.report_isolated_nodes(nodes)
    return nodes


async def run_challenge_listener(
    aggregator: Aggregator, challenges: asyncio.Queue[ChallengeNonce | None]
) -> None:
    """Record each issued challenge as pending until the queue is closed."""
    logger.info("Aggregator %d: challenge listener started", aggregator.identity.id)
    while True:
        challenge = await challenges.get()
        if challenge is None:
            break
        aggregator.add_pending_challenge(challenge)
    logger.info("Aggregator %d: challenge listener finished", aggregator.identity.id)


async def run_attestation_listener(
    aggregator: Aggregator,
    attestations: asyncio.Queue[LivenessAttestation | None],
    batch_timeout: float = DEFAULT_BATCH_TIMEOUT,
) -> None:
    """Collect attestations into batches and process a batch once input pauses.

    A batch is processed when no attestation arrives for ``batch_timeout``
    seconds; afterwards nodes that reached the failure limit are reported.
    Closing the queue ends the listener; attestations still batched are dropped.
    """
    logger.info("Aggregator %d: attestation listener started", aggregator.identity.id)
    batch: list[LivenessAttestation] = []
    while True:
        try:
            attestation = await asyncio.wait_for(attestations.get(), batch_timeout)
        except asyncio.TimeoutError:
            if batch:
                pending, batch = batch, []
                await aggregator.process_attestation_batch(pending)
                await _report_if_needed(aggregator)
            continue
        if attestation is None:
            logger.info(
                "Aggregator %d: attestation queue closed", aggregator.identity.id
            )
            break
        batch.append(attestation)


async def run_timeout_checker(aggregator: Aggregator) -> None:
    """Every half challenge window, penalize expired challenges and report isolations.

    Runs until cancelled.
    """
    interval = aggregator.config.challenge_window / 2
    logger.info(
        "Aggregator %d: timeout checker started (interval %.3fs)",
        aggregator.identity.id,
        interval,
    )
    while True:
        timed_out = aggregator.expire_challenges()
        if timed_out:
            logger.info(
                "Aggregator %d: challenges timed out for nodes %s",
                aggregator.identity.id,
                timed_out,
            )
            await _report_if_needed(aggregator)
        await asyncio.sleep(interval)