"""Wire format of the drawing game.

Every frame starts with a big-endian 32-bit length followed by a one-byte
message type and the message body, encoded the way a Qt data stream
(version 6.2) encodes points, brushes and strings.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, Union


class ProtocolError(ValueError):
    """Raised when bytes on the wire cannot be decoded."""


class MessageType(IntEnum):
    ELLIPSE = 1
    LINE = 2
    CHAT = 3
    WINNER = 4


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Color:
    """An 8-bit-per-channel RGBA colour, sent as a solid brush."""

    red: int
    green: int
    blue: int
    alpha: int = 255

    RED: ClassVar[Color]
    GREEN: ClassVar[Color]
    YELLOW: ClassVar[Color]
    BLUE: ClassVar[Color]
    WHITE: ClassVar[Color]

    def __post_init__(self) -> None:
        for channel in (self.red, self.green, self.blue, self.alpha):
            if not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel}")


Color.RED = Color(255, 0, 0)
Color.GREEN = Color(0, 255, 0)
Color.YELLOW = Color(255, 255, 0)
Color.BLUE = Color(0, 0, 255)
Color.WHITE = Color(255, 255, 255)


@dataclass(frozen=True)
class Ellipse:
    """A dot drawn where the pen touched the canvas."""

    center: Point
    color: Color


@dataclass(frozen=True)
class Line:
    """A stroke segment between two pen positions."""

    start: Point
    end: Point
    color: Color


@dataclass(frozen=True)
class Chat:
    text: str


@dataclass(frozen=True)
class Winner:
    name: str


Message = Union[Ellipse, Line, Chat, Winner]

_SOLID_PATTERN = 1
_TEXTURE_PATTERN = 24
_GRADIENT_STYLES = frozenset({15, 16, 17})
_SPEC_RGB = 1
_NULL_STRING = 0xFFFFFFFF
_IDENTITY_TRANSFORM = (1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)
_KNOWN_TYPES = frozenset(int(kind) for kind in MessageType)


def _pack_point(point: Point) -> bytes:
    return struct.pack(">dd", point.x, point.y)


def _pack_brush(color: Color) -> bytes:
    head = struct.pack(
        ">BbHHHHH",
        _SOLID_PATTERN,
        _SPEC_RGB,
        color.alpha * 0x101,
        color.red * 0x101,
        color.green * 0x101,
        color.blue * 0x101,
        0,
    )
    return head + struct.pack(">9d", *_IDENTITY_TRANSFORM)


def _utf16(text: str) -> bytes:
    return text.encode("utf-16-be", "surrogatepass")


def _pack_string(text: str) -> bytes:
    data = _utf16(text)
    return struct.pack(">I", len(data)) + data


def encode(message: Message) -> bytes:
    """Return the complete frame, length prefix included, for a message."""
    if isinstance(message, Chat):
        # Chat frames carry the character count rather than the byte count.
        units = len(_utf16(message.text)) // 2
        return struct.pack(">IB", 1 + units, MessageType.CHAT) + _pack_string(message.text)
    if isinstance(message, Ellipse):
        payload = bytes([MessageType.ELLIPSE]) + _pack_point(message.center) + _pack_brush(message.color)
    elif isinstance(message, Line):
        payload = (
            bytes([MessageType.LINE])
            + _pack_point(message.start)
            + _pack_point(message.end)
            + _pack_brush(message.color)
        )
    elif isinstance(message, Winner):
        payload = bytes([MessageType.WINNER]) + _pack_string(message.name)
    else:
        raise TypeError(f"cannot encode {type(message).__name__}")
    return struct.pack(">I", len(payload)) + payload


class _Incomplete(Exception):
    pass


class _Cursor:
    def __init__(self, data: bytes | bytearray, pos: int = 0) -> None:
        self.data = data
        self.pos = pos

    def take(self, fmt: str) -> tuple:
        size = struct.calcsize(fmt)
        if self.pos + size > len(self.data):
            raise _Incomplete
        values = struct.unpack_from(fmt, self.data, self.pos)
        self.pos += size
        return values

    def point(self) -> Point:
        x, y = self.take(">dd")
        return Point(x, y)

    def brush(self) -> Color:
        (style,) = self.take(">B")
        if style == _TEXTURE_PATTERN or style in _GRADIENT_STYLES:
            raise ProtocolError(f"unsupported brush style {style}")
        spec, alpha, red, green, blue, _pad = self.take(">bHHHHH")
        if spec != _SPEC_RGB:
            raise ProtocolError(f"unsupported colour spec {spec}")
        self.take(">9d")
        return Color(red >> 8, green >> 8, blue >> 8, alpha >> 8)

    def string(self) -> str:
        (length,) = self.take(">I")
        if length == _NULL_STRING:
            return ""
        if length % 2:
            raise ProtocolError("string byte length is odd")
        if self.pos + length > len(self.data):
            raise _Incomplete
        raw = bytes(self.data[self.pos : self.pos + length])
        self.pos += length
        return raw.decode("utf-16-be", "surrogatepass")


def _read_body(cursor: _Cursor, kind: MessageType) -> Message:
    if kind is MessageType.ELLIPSE:
        center = cursor.point()
        return Ellipse(center, cursor.brush())
    if kind is MessageType.LINE:
        start = cursor.point()
        end = cursor.point()
        return Line(start, end, cursor.brush())
    if kind is MessageType.CHAT:
        return Chat(cursor.string())
    return Winner(cursor.string())


def decode_payload(payload: bytes) -> Message:
    """Decode a frame body: the type byte and what follows it."""
    cursor = _Cursor(payload)
    try:
        (kind,) = cursor.take(">B")
        if kind not in _KNOWN_TYPES:
            raise ProtocolError(f"unknown message type {kind}")
        return _read_body(cursor, MessageType(kind))
    except _Incomplete:
        raise ProtocolError("payload is truncated") from None


class FrameReader:
    """Collects bytes from a stream and yields the complete messages in it.

    Frames of unknown type are skipped using their length prefix.
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    def feed(self, data: bytes) -> list[Message]:
        self._buffer += data
        messages: list[Message] = []
        while len(self._buffer) >= 5:
            size, kind = struct.unpack_from(">IB", self._buffer)
            if kind not in _KNOWN_TYPES:
                end = 4 + max(size, 1)
                if len(self._buffer) < end:
                    break
                del self._buffer[:end]
                continue
            cursor = _Cursor(self._buffer, 5)
            try:
                message = _read_body(cursor, MessageType(kind))
            except _Incomplete:
                break
            except ProtocolError:
                self._buffer.clear()
                raise
            del self._buffer[: cursor.pos]
            messages.append(message)
        return messages