import struct

import pytest

from drawguess.protocol import (
    Chat,
    Color,
    Ellipse,
    FrameReader,
    Line,
    MessageType,
    Point,
    ProtocolError,
    Winner,
    decode_payload,
    encode,
)

SAMPLES = [
    Ellipse(Point(25.5, 70.0), Color.RED),
    Line(Point(20.0, 60.0), Point(470.25, 510.0), Color.BLUE),
    Line(Point(-1.0, 0.0), Point(3.0, 4.0), Color(10, 20, 30, 40)),
    Chat("alice: cat"),
    Chat("игрок: кошка"),
    Winner("bob"),
]


@pytest.mark.parametrize("message", SAMPLES)
def test_decode_payload_round_trip(message):
    assert decode_payload(encode(message)[4:]) == message


@pytest.mark.parametrize("message", SAMPLES)
def test_reader_round_trip(message):
    reader = FrameReader()
    assert reader.feed(encode(message)) == [message]


def test_reader_handles_byte_by_byte_input():
    reader = FrameReader()
    stream = b"".join(encode(m) for m in SAMPLES)
    received = []
    for byte in stream:
        received.extend(reader.feed(bytes([byte])))
    assert received == SAMPLES


def test_reader_returns_several_messages_from_one_chunk():
    reader = FrameReader()
    assert reader.feed(b"".join(encode(m) for m in SAMPLES)) == SAMPLES


def test_reader_holds_partial_frame_until_complete():
    reader = FrameReader()
    frame = encode(Line(Point(1.0, 2.0), Point(3.0, 4.0), Color.GREEN))
    assert reader.feed(frame[:30]) == []
    assert reader.feed(frame[30:]) == [Line(Point(1.0, 2.0), Point(3.0, 4.0), Color.GREEN)]


def test_chat_wire_bytes():
    assert encode(Chat("hi")) == b"\x00\x00\x00\x03\x03\x00\x00\x00\x04\x00h\x00i"


def test_chat_header_counts_utf16_units():
    (size,) = struct.unpack(">I", encode(Chat("\U0001F600"))[:4])
    assert size == 3


@pytest.mark.parametrize("message", [m for m in SAMPLES if not isinstance(m, Chat)])
def test_length_prefix_matches_payload(message):
    frame = encode(message)
    (size,) = struct.unpack(">I", frame[:4])
    assert size == len(frame) - 4
    assert frame[4] == MessageType[type(message).__name__.upper()]


def test_null_string_decodes_as_empty():
    assert decode_payload(bytes([4]) + b"\xff\xff\xff\xff") == Winner("")


def test_reader_skips_unknown_type():
    reader = FrameReader()
    junk = struct.pack(">IB", 3, 9) + b"xy"
    assert reader.feed(junk + encode(Chat("ok"))) == [Chat("ok")]


def test_decode_payload_rejects_unknown_type():
    with pytest.raises(ProtocolError):
        decode_payload(bytes([9, 0, 0]))


def test_decode_payload_rejects_truncated():
    payload = encode(Line(Point(0.0, 0.0), Point(1.0, 1.0), Color.WHITE))[4:-1]
    with pytest.raises(ProtocolError):
        decode_payload(payload)


def test_decode_payload_rejects_empty():
    with pytest.raises(ProtocolError):
        decode_payload(b"")


def test_gradient_brush_is_rejected():
    payload = bytes([1]) + struct.pack(">dd", 0.0, 0.0) + bytes([15]) + bytes(83)
    with pytest.raises(ProtocolError):
        decode_payload(payload)


def test_odd_string_length_is_rejected_and_reader_recovers():
    reader = FrameReader()
    bad = struct.pack(">IB", 4, 3) + struct.pack(">I", 3) + b"abc"
    with pytest.raises(ProtocolError):
        reader.feed(bad)
    assert reader.feed(encode(Winner("bob"))) == [Winner("bob")]


def test_color_channel_range():
    with pytest.raises(ValueError):
        Color(256, 0, 0)
    with pytest.raises(ValueError):
        Color(0, 0, 0, -1)


def test_named_colors():
    assert Color.RED == Color(255, 0, 0)
    assert Color.WHITE.alpha == 255


def test_encode_rejects_other_objects():
    with pytest.raises(TypeError):
        encode("not a message")