"""Command line entry point for the token ring simulator."""

from __future__ import annotations

import re
import sys

from .model import N_NODES, SimulationError
from .simulation import run

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def help_text(progname: str) -> str:
    """Return the usage message for ``progname``."""
    return (
        f"{progname} <nPackets>\n"
        "\n"
        f"Simulates a token ring network with {N_NODES} machines,\n"
        "sending <nPackets> randomly generated packets on the\n"
        "network before exitting and printing statistics\n"
        "\n"
    )


def _parse_count(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def main(argv: list[str] | None = None) -> int:
    """Run the simulator from command line arguments; return the exit status."""
    if argv is None:
        argv = sys.argv
    progname = argv[0] if argv else "tokensim"

    if len(argv) < 2:
        sys.stderr.write(help_text(progname))
        return 1

    num_packets = _parse_count(argv[1])
    if num_packets is None:
        sys.stderr.write(f"Cannot parse number of packets from '{argv[1]}'\n")
        sys.stderr.write(help_text(progname))
        return 1

    try:
        lines = run(num_packets)
    except SimulationError as exc:
        sys.stdout.write(f"{exc}\n")
        return 5

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())