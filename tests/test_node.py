import threading
from collections import Counter

import pytest

from tokensim.model import FRAME_BYTE, TOKEN_BYTE, FrameState, Ring
from tokensim.node import send_pkt, token_node


def _load(ring, src, dst, payload):
    ring.ready[src].acquire()
    with ring.crit:
        packet = ring.nodes[src].to_send
        packet.token_flag = FRAME_BYTE
        packet.to = dst
        packet.source = src
        packet.length = len(payload)
        packet.data[: len(payload)] = payload


def _start(ring, nums):
    threads = [
        threading.Thread(target=token_node, args=(ring, n), daemon=True) for n in nums
    ]
    for t in threads:
        t.start()
    return threads


def _finish(ring, threads):
    for ready in ring.ready:
        ready.acquire()
    with ring.crit:
        for node in ring.nodes:
            node.terminate = True
    for t in threads:
        t.join(5)
    return [t.is_alive() for t in threads]


def test_send_pkt_emits_frame_then_token():
    ring = Ring(2)
    _load(ring, 0, 1, b"abc")
    results, wire = [], []
    for _ in range(8):
        results.append(send_pkt(ring, 0))
        wire.append(ring.rcv_byte(1))
    assert wire == [FRAME_BYTE, 1, 0, 3, *b"abc", TOKEN_BYTE]
    assert results == [False] * 7 + [True]


def test_send_pkt_resets_packet_and_counts():
    ring = Ring(2)
    _load(ring, 0, 1, b"x")
    for _ in range(6):
        send_pkt(ring, 0)
        ring.rcv_byte(1)
    node = ring.nodes[0]
    assert node.sent == 1
    assert node.to_send.length == 0
    assert node.to_send.token_flag == TOKEN_BYTE
    assert ring.snd_state is FrameState.TOKEN_FLAG
    assert ring.ready[0].acquire(blocking=False) is True


@pytest.mark.timeout(10)
def test_node_zero_creates_token_and_terminates():
    ring = Ring(2)
    (worker,) = _start(ring, [0])
    assert ring.rcv_byte(1) == TOKEN_BYTE
    ring.nodes[0].terminate = True
    ring.send_byte(1, TOKEN_BYTE)
    assert ring.rcv_byte(1) == TOKEN_BYTE
    worker.join(5)
    assert not worker.is_alive()


@pytest.mark.timeout(10)
def test_idle_node_forwards_token():
    ring = Ring(2)
    (worker,) = _start(ring, [1])
    ring.send_byte(0, TOKEN_BYTE)
    assert ring.rcv_byte(0) == TOKEN_BYTE
    assert worker.is_alive()
    ring.nodes[1].terminate = True
    ring.send_byte(0, TOKEN_BYTE)
    assert ring.rcv_byte(0) == TOKEN_BYTE
    worker.join(5)
    assert not worker.is_alive()


@pytest.mark.timeout(10)
def test_relaying_node_counts_frame_addressed_to_it():
    ring = Ring(3)
    (worker,) = _start(ring, [1])
    frame = [FRAME_BYTE, 1, 0, 2, 9, 8, TOKEN_BYTE]
    relayed = []
    for byte in frame:
        ring.send_byte(0, byte)
        relayed.append(ring.rcv_byte(2))
    assert relayed == frame
    assert ring.nodes[1].received == 1
    ring.nodes[1].terminate = True
    ring.send_byte(0, TOKEN_BYTE)
    assert ring.rcv_byte(2) == TOKEN_BYTE
    worker.join(5)
    assert not worker.is_alive()


@pytest.mark.timeout(10)
def test_relaying_node_ignores_frame_for_others():
    ring = Ring(3)
    (worker,) = _start(ring, [1])
    for byte in [FRAME_BYTE, 2, 0, 1, 4, TOKEN_BYTE]:
        ring.send_byte(0, byte)
        ring.rcv_byte(2)
    assert ring.nodes[1].received == 0
    ring.nodes[1].terminate = True
    ring.send_byte(0, TOKEN_BYTE)
    ring.rcv_byte(2)
    worker.join(5)
    assert not worker.is_alive()


@pytest.mark.timeout(20)
@pytest.mark.parametrize(
    "n_nodes, packets",
    [
        (2, [(0, 1, b"hello")]),
        (3, [(1, 2, b"ab"), (2, 0, b"c")]),
        (4, [(0, 3, b"x"), (0, 2, b"yz"), (3, 1, b"q" * 10), (2, 1, b"w")]),
        (7, [(i, (i + 3) % 7, bytes([i]) * (i + 1)) for i in range(7)]),
    ],
)
def test_ring_delivers_all_packets(n_nodes, packets):
    ring = Ring(n_nodes)
    threads = _start(ring, range(n_nodes))
    for src, dst, payload in packets:
        _load(ring, src, dst, payload)
    assert _finish(ring, threads) == [False] * n_nodes

    sent = Counter(src for src, _, _ in packets)
    received = Counter(dst for _, dst, _ in packets)
    assert [node.sent for node in ring.nodes] == [sent[i] for i in range(n_nodes)]
    assert [node.received for node in ring.nodes] == [
        received[i] for i in range(n_nodes)
    ]
    assert all(node.to_send.length == 0 for node in ring.nodes)


@pytest.mark.timeout(20)
def test_ring_with_no_packets_shuts_down_cleanly():
    ring = Ring(5)
    threads = _start(ring, range(5))
    assert _finish(ring, threads) == [False] * 5
    assert sum(node.sent for node in ring.nodes) == 0
    assert sum(node.received for node in ring.nodes) == 0