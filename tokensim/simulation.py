"""Driving a token ring simulation: node threads, packet generation and results."""

from __future__ import annotations

import random
import threading

from .model import FRAME_BYTE, MAX_DATA, N_NODES, Ring, SimulationError
from .node import token_node


class Simulation:
    """A token ring with one thread per node and a random packet generator."""

    def __init__(self, seed: int | None = None, n_nodes: int = N_NODES) -> None:
        self.ring = Ring(n_nodes)
        self.rng = random.Random(seed)
        self.threads: list[threading.Thread] = []

    def start(self) -> None:
        """Start a thread for every node; node 0 creates the first token."""
        if self.threads:
            raise SimulationError("simulation already started")
        for num in range(self.ring.n_nodes):
            thread = threading.Thread(
                target=token_node,
                args=(self.ring, num),
                name=f"token-node-{num}",
                daemon=True,
            )
            self.threads.append(thread)
            thread.start()

    def generate(self, num_packets: int) -> None:
        """Queue ``num_packets`` random packets on random nodes.

        Each packet waits until its node has finished sending the previous
        one. Raises SimulationError if a node's packet slot is still full.
        """
        ring = self.ring
        n_nodes = ring.n_nodes
        for _ in range(max(num_packets, 0)):
            num = self.rng.randrange(n_nodes)
            ring.ready[num].acquire()
            with ring.crit:
                packet = ring.nodes[num].to_send
                if packet.length > 0:
                    raise SimulationError("to_send filled")
                packet.token_flag = FRAME_BYTE
                to = self.rng.randrange(n_nodes)
                while to == num:
                    to = self.rng.randrange(n_nodes)
                packet.to = to
                packet.source = num
                packet.length = self.rng.randrange(MAX_DATA) + 1

    def shutdown(self) -> None:
        """Wait until every node has sent its packet, then stop all nodes."""
        ring = self.ring
        for sem in ring.ready:
            sem.acquire()
        with ring.crit:
            for node in ring.nodes:
                node.terminate = True
        for thread in self.threads:
            thread.join()

    def report(self) -> list[str]:
        """Return one line of sent/received counts per node."""
        return [
            f"Node {num}: sent={node.sent} received={node.received}"
            for num, node in enumerate(self.ring.nodes)
        ]


def run(num_packets: int, seed: int | None = None) -> list[str]:
    """Run a full simulation of ``num_packets`` packets and return the report."""
    sim = Simulation(seed)
    sim.start()
    sim.generate(num_packets)
    sim.shutdown()
    return sim.report()