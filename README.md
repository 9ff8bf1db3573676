# tokensim

A simulation of a token ring LAN. Each node on the ring runs in its own
thread. Nodes do not use a network cable: they pass single bytes to their
neighbour through a shared one-byte transfer slot, and semaphores guard the
slot. A generator gives randomly made packets to random nodes. A node with a
packet waiting takes the token, sends the packet round the ring one byte at a
time and then passes the token on. Each node counts the packets it sent and
the packets addressed to it that went past it.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command line

```
tokensim <nPackets>
```

`python -m tokensim.cli <nPackets>` does the same. The command runs a
seven-node ring and sends `nPackets` random packets over it. It then waits
until every node has sent its packet, stops the nodes and prints one line per
node to standard output:

```
Node 0: sent=3 received=2
Node 1: sent=1 received=4
...
```

The argument is read up to the first character that is not part of an
integer. Leading whitespace and a sign are allowed, so `12abc` counts as 12.
A count of zero or less sends no packets.

Exit status:

- `0`: the simulation finished and the report was printed.
- `1`: the argument is missing or does not start with an integer. The usage
  text goes to standard error.
- `5`: the simulation reached a state the protocol does not allow. The message
  goes to standard output.

## Library use

```python
from tokensim.simulation import Simulation, run

# All in one call: start, generate, shut down, and return the report lines.
lines = run(100, seed=42)

# Or one step at a time.
sim = Simulation(seed=42, n_nodes=7)
sim.start()
sim.generate(100)
sim.shutdown()
print("\n".join(sim.report()))
```

`Simulation(seed=None, n_nodes=7)` seeds its own `random.Random`.

- `start()` starts one daemon thread per node. Calling it a second time raises
  `SimulationError`.
- `generate(n)` queues `n` packets. Each packet has a random source, a
  different random destination and a length from 1 to 250. Before it fills a
  node's packet slot, it waits until that node has finished sending its
  previous packet.
- `shutdown()` waits until every node is idle, tells the nodes to terminate
  and joins their threads.
- `report()` returns the `Node <n>: sent=<s> received=<r>` lines.

The building blocks are in `tokensim.model`:

- `Ring(n_nodes=7)` holds one `NodeData` per node, each with its pending
  `Packet`. It provides the blocking `send_byte(num, byte)` and
  `rcv_byte(num)` and also `successor(num)`. A ring of fewer than two nodes
  raises `ValueError`.
- `FrameState` names the fields of a frame in the order they travel:
  `TOKEN_FLAG`, `TO`, `FROM`, `LEN`, `DATA`, `DONE`.
- `SimulationError` is a `RuntimeError` raised on states the protocol does not
  allow.

The behaviour of a single node is in `tokensim.node`:

- `token_node(ring, num)` is the body of a node thread. Node 0 creates the
  first token.
- `send_pkt(ring, num)` sends the node's packet one byte per call and returns
  `True` once the packet is done and the token has been passed on.

## Limits

Packets carry only a length. Their data bytes are zero-filled, and nothing
reads them or checks them on arrival. The ring is a simulation between
threads in one process. It does not open sockets and does not talk to real
network hardware.