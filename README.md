# drawguess

A small multiplayer draw-and-guess game played over a local network.

One player hosts a lobby: they pick a secret word, get a connection code
(`address:port`) to share, and draw on a canvas with four colours and a white
"eraser". Other players join with that code and a nickname, watch the drawing
appear as it is made, and type guesses into the chat. Chat lines have the form
`name: text`; the first line whose text is exactly the secret word makes its
sender the winner, and the host's and the players' windows then show
`Победу одержал игрок: <name>`.

## Installing

```
pip install .
```

The windows use Tkinter from the standard library; no other packages are
needed. If Python was built without Tk, the `drawguess` command exits with a
message saying so.

## Playing

Start the lobby window:

```
drawguess
```

Options:

- `--width N`, `--height N` — initial size of the lobby window (default
  800×500). Widgets scale with the window when it is resized.

In the lobby:

- **Создать лобби** (create lobby) asks for the word to be guessed, then opens
  the host window. It starts a relay server on a random port between 1000 and
  65534 and shows the connection code at the top. Draw by clicking and
  dragging; the colour buttons (red, green, yellow, blue, white) change the
  brush. If the server cannot be started, you are returned to the lobby.
- **Подключится** (connect) asks for a nickname and a connection code such as
  `192.168.1.20:41873`. The address must be an IP address and the port between
  1000 and 65535; the form stays open until both are valid. Type guesses into
  the box under the chat and press `->` or Enter.

Closing a game window returns to the lobby.

## Using the pieces from Python

- `drawguess.protocol` — the wire format. `encode(message)` turns an
  `Ellipse`, `Line`, `Chat` or `Winner` message into a length-prefixed frame,
  `decode_payload(payload)` reads back a frame body (type byte and contents),
  and `FrameReader.feed(data)` returns the complete messages found so far in a
  stream of bytes, skipping frames of unknown type. Malformed input raises
  `ProtocolError`. Colours are `Color` values; `Color.RED`, `Color.GREEN`,
  `Color.YELLOW`, `Color.BLUE` and `Color.WHITE` are provided.
- `drawguess.server` — `RelayServer(port, host)`. The first connection is
  treated as the host: drawings and the winner are sent to everyone else, chat
  to everyone. `start()`/`close()`, or use it as a context manager;
  `client_count` gives the number of connections.
- `drawguess.client` — `GameClient(name, host, port)`, a guessing player:
  `connect()`, `send(message)`, `send_chat(text)` (signed with the name),
  `poll()` to read what has arrived without waiting (updating `canvas`, `chat`
  and `winner`), and `close()`.
- `drawguess.host` — `HostSession(puzzle_word, port=None, rng=None)`, the
  drawing player: `start()` runs the relay and joins it, `send_drawing(message)`
  sends a dot or stroke, `poll()` reads guesses, records them in `chat` and, on
  a winning guess, sets `winner` and announces it. `connection_code` gives the
  code to share; `local_ipv4_address()` finds the address used in it.
- `drawguess.game` — rules and input checks: `parse_connection_code`,
  `validate_nickname`, `validate_puzzle_word`, `guessed_word`, `sender_name`,
  `is_winning_guess`, `format_chat`, `winner_announcement` and
  `generate_port_code`. Invalid input raises `InvalidInput`.
- `drawguess.canvas` — `Canvas`: `press(x, y)` records a dot, `move(x, y)` a
  stroke from the last pen position, `set_color(color)`, and `add(item)` for
  shapes received from elsewhere.
- `drawguess.layout` — `LayoutSpec.place(window_width, window_height, x, y)`,
  which scales a widget's position and size with the window and returns a
  `Rect`.
- `drawguess.gui` — the Tk windows (`MainWindow`, `HostWindow`,
  `ClientWindow`, `LoginDialog`, `PuzzleDialog`), `parse_args(argv)` and
  `main(argv=None)`.

```python
from drawguess.protocol import Chat, FrameReader, encode

frame = encode(Chat("alice: banana"))
reader = FrameReader()
messages = reader.feed(frame)   # [Chat(text='alice: banana')]
```

## What it does not do

- The relay keeps no history: a player who joins late sees only what is drawn
  after joining.
- A lobby plays a single round; for a new word, create a new lobby.
- Drawings are not saved anywhere.

## Running the tests

```
pip install .[test]
pytest
```