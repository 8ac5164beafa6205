import socket
import struct
import time

import pytest

from drawguess.protocol import (
    Chat,
    Color,
    Ellipse,
    FrameReader,
    Line,
    Point,
    Winner,
    encode,
)
from drawguess.server import RelayServer


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def join(server):
    before = server.client_count
    sock = socket.create_connection(("127.0.0.1", server.port))
    assert wait_for(lambda: server.client_count == before + 1)
    return sock


def receive(sock, count, timeout=5.0):
    reader = FrameReader()
    messages = []
    sock.settimeout(timeout)
    while len(messages) < count:
        data = sock.recv(4096)
        if not data:
            break
        messages += reader.feed(data)
    return messages


@pytest.fixture
def server():
    with RelayServer(host="127.0.0.1") as relay:
        yield relay


def test_start_assigns_port(server):
    assert 0 < server.port <= 65535


def test_drawing_goes_to_guests_but_not_host(server):
    host = join(server)
    guest = join(server)
    try:
        dot = Ellipse(Point(10, 20), Color.BLUE)
        chat = Chat("host: hello")
        host.sendall(encode(dot) + encode(chat))
        assert receive(guest, 2) == [dot, chat]
        assert receive(host, 1) == [chat]
    finally:
        host.close()
        guest.close()


def test_chat_from_guest_reaches_everyone(server):
    host = join(server)
    guest = join(server)
    other = join(server)
    try:
        chat = Chat("guest: cat")
        guest.sendall(encode(chat))
        assert receive(host, 1) == [chat]
        assert receive(guest, 1) == [chat]
        assert receive(other, 1) == [chat]
    finally:
        for sock in (host, guest, other):
            sock.close()


def test_line_and_winner_relayed_in_order(server):
    host = join(server)
    guest = join(server)
    try:
        stroke = Line(Point(1, 1), Point(2, 3), Color.YELLOW)
        winner = Winner("bob")
        frames = encode(stroke) + encode(winner)
        host.sendall(frames[:7])
        time.sleep(0.05)
        host.sendall(frames[7:])
        assert receive(guest, 2) == [stroke, winner]
    finally:
        host.close()
        guest.close()


def test_bad_frame_drops_sender(server):
    host = join(server)
    try:
        bad = struct.pack(">IB", 17, 1) + struct.pack(">dd", 0.0, 0.0) + bytes([24])
        host.sendall(bad)
        host.settimeout(5)
        assert host.recv(4096) == b""
        assert wait_for(lambda: server.client_count == 0)
    finally:
        host.close()


def test_disconnect_removes_client(server):
    host = join(server)
    assert server.client_count == 1
    host.close()
    wait_for(lambda: server.client_count == 0)
    assert server.client_count == 0


def test_close_disconnects_and_stops_listening():
    relay = RelayServer(host="127.0.0.1").start()
    sock = join(relay)
    port = relay.port
    relay.close()
    sock.settimeout(5)
    assert sock.recv(4096) == b""
    assert relay.client_count == 0
    sock.close()
    with pytest.raises(ConnectionRefusedError):
        socket.create_connection(("127.0.0.1", port), timeout=2)


def test_start_twice_fails(server):
    with pytest.raises(RuntimeError):
        server.start()