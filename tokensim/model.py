"""Shared state of the simulated token ring: nodes, packets and byte slots."""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass, field

MAX_DATA = 250
N_NODES = 7

TOKEN_BYTE = ord("1")
FRAME_BYTE = ord("0")


class FrameState(enum.IntEnum):
    """Position within a frame travelling round the ring."""

    TOKEN_FLAG = 1
    TO = 2
    FROM = 3
    LEN = 4
    DATA = 5
    DONE = 6


class SimulationError(RuntimeError):
    """Raised when the ring reaches an inconsistent state."""


@dataclass
class Packet:
    """A packet waiting to be sent by a node."""

    token_flag: int = TOKEN_BYTE
    to: int = 0
    source: int = 0
    length: int = 0
    data: bytearray = field(default_factory=lambda: bytearray(MAX_DATA))


@dataclass
class NodeData:
    """Per-node shared state: the incoming byte slot, outgoing packet and counters."""

    data_xfer: int = 0
    to_send: Packet = field(default_factory=Packet)
    sent: int = 0
    received: int = 0
    terminate: bool = False


class Ring:
    """The nodes of the ring and the semaphores that pass bytes between them.

    Each node owns a one-byte slot guarded by an ``empty``/``filled``
    semaphore pair. ``ready`` tells the packet generator when a node's
    outgoing packet may be refilled, and ``crit`` guards packet updates.
    """

    def __init__(self, n_nodes: int = N_NODES) -> None:
        if n_nodes < 2:
            raise ValueError(f"a ring needs at least 2 nodes, got {n_nodes}")
        self.n_nodes = n_nodes
        self.nodes = [NodeData() for _ in range(n_nodes)]
        self.empty = [threading.Semaphore(1) for _ in range(n_nodes)]
        self.filled = [threading.Semaphore(0) for _ in range(n_nodes)]
        self.ready = [threading.Semaphore(1) for _ in range(n_nodes)]
        self.crit = threading.Lock()
        self.snd_state = FrameState.TOKEN_FLAG
        self.snd_pos = 0
        self.snd_len = 0

    def successor(self, num: int) -> int:
        """Return the number of the node after ``num`` on the ring."""
        return (num + 1) % self.n_nodes

    def send_byte(self, num: int, byte: int) -> None:
        """Pass one byte from node ``num`` to its successor, waiting for room."""
        nxt = self.successor(num)
        self.empty[nxt].acquire()
        self.nodes[nxt].data_xfer = byte & 0xFF
        self.filled[nxt].release()

    def rcv_byte(self, num: int) -> int:
        """Take the next byte delivered to node ``num``, waiting for one."""
        self.filled[num].acquire()
        byte = self.nodes[num].data_xfer
        self.empty[num].release()
        return byte