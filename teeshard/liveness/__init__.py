"""TEE liveness verification: challenge types, challenger, aggregator and its asyncio tasks."""