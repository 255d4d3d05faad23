"""Types describing cross-chain swaps: lock requests and proofs, aborts, outcomes and decisions."""