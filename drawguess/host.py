"""The drawing player's side of a game: relay server, canvas and judging."""

from __future__ import annotations

import ipaddress
import random
import select
import socket

from drawguess.canvas import Canvas
from drawguess.game import (
    generate_port_code,
    is_winning_guess,
    sender_name,
    validate_puzzle_word,
)
from drawguess.protocol import Chat, Ellipse, FrameReader, Line, Message, Winner, encode
from drawguess.server import RelayServer

_LOOPBACK = "127.0.0.1"
_CHUNK = 4096


def local_ipv4_address() -> str:
    """Return the first non-loopback IPv4 address of this machine, or loopback."""
    try:
        infos = socket.getaddrinfo(socket.gethostname(), None, socket.AF_INET)
    except OSError:
        infos = []
    for info in infos:
        address = info[4][0]
        try:
            if not ipaddress.ip_address(address).is_loopback:
                return address
        except ValueError:
            continue
    return _LOOPBACK


class HostSession:
    """The player who picks the word, draws it and runs the relay.

    Guesses arrive as chat lines; a line whose word matches the puzzle
    makes its sender the winner, and the winner is announced to everyone.
    """

    def __init__(
        self,
        puzzle_word: str,
        port: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.puzzle_word = validate_puzzle_word(puzzle_word)
        self.port = generate_port_code(rng) if port is None else port
        self.canvas = Canvas()
        self.chat: list[str] = []
        self.winner: str | None = None
        self.server: RelayServer | None = None
        self._sock: socket.socket | None = None
        self._reader = FrameReader()

    @property
    def connection_code(self) -> str:
        """The 'address:port' code that guessing players type in."""
        return f"{local_ipv4_address()}:{self.port}"

    def start(self) -> HostSession:
        """Start the relay and join it as its first connection."""
        if self.server is not None:
            raise RuntimeError("session already started")
        server = RelayServer(self.port).start()
        self.server = server
        self.port = server.port
        try:
            self._sock = socket.create_connection((_LOOPBACK, self.port))
        except OSError:
            server.close()
            self.server = None
            raise
        self._reader = FrameReader()
        return self

    def send_drawing(self, message: Ellipse | Line) -> None:
        """Send a dot or stroke made on the canvas to the guessing players."""
        if not isinstance(message, (Ellipse, Line)):
            raise TypeError(f"not a drawing: {type(message).__name__}")
        self._require_socket().sendall(encode(message))

    def poll(self) -> list[Message]:
        """Read the guesses that have arrived, judging each one."""
        sock = self._require_socket()
        messages: list[Message] = []
        while True:
            readable, _, _ = select.select([sock], [], [], 0)
            if not readable:
                break
            try:
                data = sock.recv(_CHUNK)
            except OSError:
                data = b""
            if not data:
                self._close_socket()
                break
            messages += self._reader.feed(data)
        for message in messages:
            if isinstance(message, Chat):
                self._judge(message.text)
        return messages

    def close(self) -> None:
        self._close_socket()
        if self.server is not None:
            self.server.close()
            self.server = None

    def __enter__(self) -> HostSession:
        return self.start()

    def __exit__(self, *args) -> None:
        self.close()

    def _judge(self, line: str) -> None:
        self.chat.append(line)
        if is_winning_guess(line, self.puzzle_word):
            name = sender_name(line)
            self.winner = name
            if self._sock is not None:
                self._sock.sendall(encode(Winner(name)))

    def _close_socket(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise ConnectionError("session is not running")
        return self._sock