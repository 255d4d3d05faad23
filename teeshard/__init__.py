"""Building blocks for a TEE-backed sharded cross-chain protocol: data model, configuration, messaging and liveness."""

__version__ = "0.1.0"