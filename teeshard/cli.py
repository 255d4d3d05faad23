"""Command-line entry point that greets from the experiments runner and the protocol."""

from __future__ import annotations

import argparse
from collections.abc import Sequence

PROTOCOL_NAME = "teeshard-protocol"


def hello_from_protocol() -> str:
    """Print the protocol library's greeting and return it."""
    greeting = f"Hello from {PROTOCOL_NAME}!"
    print(greeting)
    return greeting


def main(argv: Sequence[str] | None = None) -> int:
    """Run the experiments entry point."""
    parser = argparse.ArgumentParser(
        prog="experiments", description="Run teeshard experiments."
    )
    parser.parse_args(argv)
    print("Hello from experiments!")
    hello_from_protocol()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())