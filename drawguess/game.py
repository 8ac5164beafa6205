"""Game rules: guesses, winners, connection codes and input checks."""

from __future__ import annotations

import ipaddress
import random
import re

WINNER_PREFIX = "Победу одержал игрок: "
_MIN_PORT = 1000
_MAX_PORT = 65535
_PORT_RE = re.compile(r"\s*[+-]?\d+\s*")


class InvalidInput(ValueError):
    """Raised when text typed by a player is not acceptable."""


def guessed_word(line: str) -> str:
    """Return the guess in a chat line of the form 'name: word'."""
    return line[line.find(":") + 2 :]


def sender_name(line: str) -> str:
    """Return the name in a chat line; the whole line when it has no colon."""
    index = line.find(":")
    return line if index < 0 else line[:index]


def is_winning_guess(line: str, puzzle_word: str) -> bool:
    return guessed_word(line) == puzzle_word


def format_chat(name: str, text: str) -> str:
    return f"{name}: {text}"


def winner_announcement(name: str) -> str:
    return WINNER_PREFIX + name


def parse_connection_code(text: str) -> tuple[str, int]:
    """Split an 'address:port' code into an IP address and a port."""
    parts = text.strip().split(":")
    if len(parts) != 2:
        raise InvalidInput(f"expected address:port, got {text!r}")
    host, port_text = parts
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        raise InvalidInput(f"invalid address {host!r}") from None
    port = int(port_text) if _PORT_RE.fullmatch(port_text) else 0
    if not _MIN_PORT <= port <= _MAX_PORT:
        raise InvalidInput(f"port must be between {_MIN_PORT} and {_MAX_PORT}")
    return str(address), port


def validate_nickname(text: str) -> str:
    if not text:
        raise InvalidInput("nickname is empty")
    return text


def validate_puzzle_word(text: str) -> str:
    if not text:
        raise InvalidInput("puzzle word is empty")
    return text


def generate_port_code(rng: random.Random | None = None) -> int:
    """Pick a random port of at least 1000 and below 65535."""
    rng = rng if rng is not None else random.Random()
    while True:
        port = rng.randrange(_MAX_PORT)
        if port >= _MIN_PORT:
            return port