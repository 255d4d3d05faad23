# teeshard

Building blocks for a sharded protocol whose shards and cross-chain swap
coordinators run inside trusted execution environments (TEEs). The package
provides:

- the core data model: accounts, assets, locks, transactions, partitioning
  graph nodes and edges, and TEE identities holding raw Ed25519 public keys
  (`teeshard.data_structures`);
- cross-chain swap types: `LockRequest`, `LockProof`, `AbortReason`,
  `SwapOutcome` and `SignedCoordinatorDecision` (`teeshard.cross_chain.types`);
- system-wide configuration with defaults, `SystemConfig`
  (`teeshard.config`);
- network message types and `MockNetwork`, an in-memory, thread-safe network
  that records messages instead of delivering them (`teeshard.network`);
- TEE liveness verification: challenge and attestation types
  (`teeshard.liveness.types`), a `Challenger` that issues nonce challenges
  (`teeshard.liveness.challenger`), an `Aggregator` that verifies signed
  attestations, keeps trust scores and reports failing nodes
  (`teeshard.liveness.aggregator`), and asyncio coroutines that drive the
  aggregator (`teeshard.liveness.tasks`).

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command line

```
teeshard
```

prints `Hello from experiments!` followed by `Hello from teeshard-protocol!`.
It takes no options beyond `--help` and is only a check that the package is
installed.

## Examples

Identities and a transaction:

```python
from teeshard.data_structures import (
    AccountId, AssetId, LockInfo, Transaction, TxType, generate_identity,
)

identity, signing_key = generate_identity(1)   # TEEIdentity, Ed25519 private key

alice = AccountId(chain_id=1, address="addr1")
eth = AssetId(chain_id=1, token_symbol="ETH", token_address="0x...")
lock = LockInfo(account=alice, asset=eth, amount=100)

tx = Transaction(
    tx_id="tx1",
    tx_type=TxType.SINGLE_CHAIN_TRANSFER,
    accounts=[alice, AccountId(chain_id=1, address="addr2")],
    amounts=[100],
    required_locks=[lock],
    timeout=60.0,                               # seconds
)
```

Liveness settings derived from the system configuration:

```python
from teeshard.config import SystemConfig
from teeshard.liveness.types import LivenessState

config = SystemConfig()
liveness = config.liveness_config()   # challenge window: 10 heartbeats, at least 0.5 s
state = LivenessState.from_config(liveness)
print(state.trust_score)               # 100.0
```

Verifying an attestation:

```python
import asyncio

from teeshard.data_structures import generate_identity
from teeshard.liveness.aggregator import Aggregator
from teeshard.liveness.types import (
    ChallengeNonce, LivenessAttestation, LivenessConfig, attestation_message,
)

async def demo():
    aggregator_id, _ = generate_identity(0)
    node, node_key = generate_identity(1)
    aggregator = Aggregator(aggregator_id, LivenessConfig(), [node])

    challenge = ChallengeNonce(nonce=bytes(32), target_node_id=1, timestamp=1000)
    aggregator.add_pending_challenge(challenge)

    signature = node_key.sign(attestation_message(1, challenge.nonce, 1000))
    attestation = LivenessAttestation(
        node_id=1, nonce=challenge.nonce, timestamp=1000, signature=signature
    )
    print(await aggregator.process_attestation_batch([attestation]))
    # {1: <VerificationResult.VALID: 'valid'>}

asyncio.run(demo())
```

A valid attestation raises the node's trust by `trust_increment` and resets
its failure count; a nonce or timestamp mismatch, a bad signature or an
attestation with no pending challenge lowers trust by `trust_decrement`
(never below zero) and counts a failure. `expire_challenges()` penalizes
challenges older than the challenge window, `identify_and_isolate_nodes()`
lists nodes whose consecutive failures reached `max_failures`, and
`report_isolated_nodes()` puts such a list on the aggregator's
`isolation_queue`.

## Background tasks

`teeshard.liveness.tasks` has three coroutines:

- `run_challenge_listener(aggregator, challenges)` records each challenge
  from an `asyncio.Queue` as pending;
- `run_attestation_listener(aggregator, attestations, batch_timeout=1.0)`
  batches attestations and processes a batch once none arrives for
  `batch_timeout` seconds, then reports nodes to isolate;
- `run_timeout_checker(aggregator)` expires old challenges every half
  challenge window and reports nodes to isolate; it runs until cancelled.

Putting `None` into a listener's queue ends that listener. A `Challenger`
sends `LivenessChallenge` messages through any `NetworkInterface` and puts
each `ChallengeNonce` it issues on the queue given to it, so it can feed
`run_challenge_listener` directly.

## What the package does not do

The package holds types, configuration and the liveness service only. It has
no swap coordinator that collects lock proofs and signs decisions, no
consensus within shards, no account-graph partitioner, no connection to any
blockchain and no real network transport: `MockNetwork` is the only
`NetworkInterface` provided. The `teeshard` command does not run a
simulation.