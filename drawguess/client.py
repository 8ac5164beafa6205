"""Guessing player's connection to the game."""

from __future__ import annotations

import select
import socket

from drawguess.canvas import Canvas
from drawguess.game import format_chat, validate_nickname
from drawguess.protocol import Chat, Ellipse, FrameReader, Line, Message, Winner, encode

_CHUNK = 4096


class GameClient:
    """A player who watches the drawing and sends guesses to the chat."""

    def __init__(self, name: str, host: str, port: int) -> None:
        self.name = validate_nickname(name)
        self.host = host
        self.port = port
        self.canvas = Canvas()
        self.chat: list[str] = []
        self.winner: str | None = None
        self._sock: socket.socket | None = None
        self._reader = FrameReader()

    @property
    def connected(self) -> bool:
        return self._sock is not None

    def connect(self) -> GameClient:
        if self._sock is not None:
            raise RuntimeError("already connected")
        self._sock = socket.create_connection((self.host, self.port))
        self._reader = FrameReader()
        return self

    def send(self, message: Message) -> None:
        self._require_socket().sendall(encode(message))

    def send_chat(self, text: str) -> None:
        """Send a guess or remark, signed with the player's name."""
        self.send(Chat(format_chat(self.name, text)))

    def poll(self) -> list[Message]:
        """Read whatever has arrived without waiting and apply it."""
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
                self.close()
                break
            messages += self._reader.feed(data)
        for message in messages:
            self._apply(message)
        return messages

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> GameClient:
        return self.connect()

    def __exit__(self, *args) -> None:
        self.close()

    def _require_socket(self) -> socket.socket:
        if self._sock is None:
            raise ConnectionError("not connected")
        return self._sock

    def _apply(self, message: Message) -> None:
        if isinstance(message, (Ellipse, Line)):
            self.canvas.add(message)
        elif isinstance(message, Chat):
            self.chat.append(message.text)
        elif isinstance(message, Winner):
            self.winner = message.name