"""Behaviour of a single node on the token ring."""

from __future__ import annotations

from .model import FRAME_BYTE, TOKEN_BYTE, FrameState, Ring


def send_pkt(ring: Ring, num: int) -> bool:
    """Send the next byte of node ``num``'s packet, then the token.

    Returns True once the packet is complete and the token has been
    passed on.
    """
    packet = ring.nodes[num].to_send
    state = ring.snd_state

    if state is FrameState.TOKEN_FLAG:
        ring.send_byte(num, packet.token_flag)
        ring.snd_state = FrameState.TO
    elif state is FrameState.TO:
        ring.send_byte(num, packet.to)
        ring.snd_state = FrameState.FROM
    elif state is FrameState.FROM:
        ring.send_byte(num, packet.source)
        ring.snd_state = FrameState.LEN
    elif state is FrameState.LEN:
        ring.snd_len = packet.length
        ring.snd_pos = 0
        ring.send_byte(num, packet.length)
        ring.snd_state = FrameState.DATA
    elif state is FrameState.DATA:
        ring.send_byte(num, packet.data[ring.snd_pos])
        ring.snd_pos += 1
        if ring.snd_pos == ring.snd_len:
            ring.snd_state = FrameState.DONE
    else:
        ring.snd_pos = 0
        ring.snd_len = 0
        packet.length = 0
        ring.nodes[num].sent += 1
        ring.snd_state = FrameState.TOKEN_FLAG
        packet.token_flag = TOKEN_BYTE
        ring.send_byte(num, TOKEN_BYTE)
        ring.ready[num].release()
        return True
    return False


def token_node(ring: Ring, num: int) -> None:
    """Run node ``num``: relay bytes, send its packets, count deliveries.

    Node 0 creates the first token. The loop ends when the node relays a
    byte at a frame boundary after being told to terminate.
    """
    node = ring.nodes[num]
    rcv_state = FrameState.TOKEN_FLAG
    sending = False
    remaining = 0

    if num == 0:
        ring.send_byte(num, TOKEN_BYTE)
        ring.snd_state = FrameState.TOKEN_FLAG

    while True:
        byte = ring.rcv_byte(num)

        if rcv_state is FrameState.TOKEN_FLAG:
            if sending:
                if send_pkt(ring, num):
                    sending = False
                continue
            with ring.crit:
                has_frame = (
                    byte == TOKEN_BYTE and node.to_send.token_flag == FRAME_BYTE
                )
            if has_frame:
                sending = True
                ring.snd_state = FrameState.TOKEN_FLAG
                send_pkt(ring, num)
                continue
            ring.send_byte(num, byte)
            if node.terminate:
                return
            if byte == FRAME_BYTE:
                rcv_state = FrameState.TO
        elif rcv_state is FrameState.TO:
            ring.send_byte(num, byte)
            rcv_state = FrameState.FROM
            if byte == num:
                node.received += 1
        elif rcv_state is FrameState.FROM:
            ring.send_byte(num, byte)
            rcv_state = FrameState.LEN
        elif rcv_state is FrameState.LEN:
            remaining = byte
            ring.send_byte(num, byte)
            rcv_state = FrameState.DATA
        elif rcv_state is FrameState.DATA:
            ring.send_byte(num, byte)
            if remaining > 0:
                remaining -= 1
            else:
                rcv_state = FrameState.TOKEN_FLAG