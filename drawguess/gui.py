"""Desktop windows of the drawing game: lobby, host and guessing player."""

from __future__ import annotations

import argparse
from collections.abc import Callable, Sequence

try:
    import tkinter as tk
except ImportError:  # Python built without Tk support
    tk = None

from drawguess.canvas import Canvas
from drawguess.client import GameClient
from drawguess.game import (
    InvalidInput,
    parse_connection_code,
    validate_nickname,
    validate_puzzle_word,
    winner_announcement,
)
from drawguess.host import HostSession
from drawguess.layout import (
    LAYOUT_30_45,
    LAYOUT_30_200,
    LAYOUT_40_90,
    LAYOUT_40_220,
    LAYOUT_40_350,
    LAYOUT_45_110,
    LAYOUT_410_250,
    LAYOUT_450_250,
    LAYOUT_450_450,
    LayoutSpec,
)
from drawguess.protocol import Chat, Color, Ellipse, Line, Winner

BACKGROUND = "#FFE6F2"
_TEXT_COLOR = "#555555"
_TITLE_FONT = ("TkDefaultFont", 18, "bold")
_WINNER_FONT = ("TkDefaultFont", 24, "bold")
_POLL_MS = 50
_SCENE_X = 20.0
_SCENE_Y = 60.0
_SCENE_SIZE = 450.0
_DOT_RADIUS = 5.0
_STROKE_WIDTH = 10.0
_PALETTE = (Color.RED, Color.GREEN, Color.YELLOW, Color.BLUE, Color.WHITE)


def color_hex(color: Color) -> str:
    """Return the colour as '#rrggbb', ignoring its alpha."""
    return f"#{color.red:02x}{color.green:02x}{color.blue:02x}"


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {text}")
    return value


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="drawguess",
        description="Draw a word for others to guess, or guess what is drawn.",
    )
    parser.add_argument("--width", type=_positive_int, default=800, help="lobby window width")
    parser.add_argument("--height", type=_positive_int, default=500, help="lobby window height")
    return parser.parse_args(argv)


class _Window:
    """A top-level window whose widgets scale with its size."""

    def __init__(self, window, width: int, height: int) -> None:
        self.window = window
        self._size = (width, height)
        self._placements: list[tuple[object, LayoutSpec, float, float]] = []
        window.configure(background=BACKGROUND)
        window.geometry(f"{width}x{height}")
        window.bind("<Configure>", self._on_configure)

    def _arrange(self, widget, spec: LayoutSpec, x: float, y: float) -> None:
        self._placements.append((widget, spec, x, y))
        self._place(widget, spec, x, y)

    def _place(self, widget, spec: LayoutSpec, x: float, y: float) -> None:
        rect = spec.place(self._size[0], self._size[1], x, y)
        widget.place(x=rect.x, y=rect.y, width=max(rect.width, 1), height=max(rect.height, 1))

    def _on_configure(self, event) -> None:
        if event.widget is not self.window:
            return
        size = (event.width, event.height)
        if size == self._size:
            return
        self._size = size
        for widget, spec, x, y in self._placements:
            self._place(widget, spec, x, y)

    def _title_label(self, text: str):
        return tk.Label(self.window, text=text, font=_TITLE_FONT, fg=_TEXT_COLOR, bg=BACKGROUND)

    def _show_winner(self, name: str) -> None:
        for widget, *_ in self._placements:
            widget.place_forget()
        self._placements.clear()
        label = tk.Label(
            self.window,
            text=winner_announcement(name),
            font=_WINNER_FONT,
            fg=_TEXT_COLOR,
            bg=BACKGROUND,
        )
        label.place(relx=0.5, rely=0.5, anchor="center")


class _Board:
    """Shows a drawing, fitted into its widget with the aspect ratio kept."""

    def __init__(self, parent, model: Canvas) -> None:
        self.model = model
        self.widget = tk.Canvas(parent, background="white", highlightthickness=0)
        self.widget.bind("<Configure>", lambda _event: self.redraw())

    def _fit(self) -> tuple[float, float, float]:
        width = max(self.widget.winfo_width(), 1)
        height = max(self.widget.winfo_height(), 1)
        scale = min(width, height) / _SCENE_SIZE
        offset_x = (width - _SCENE_SIZE * scale) / 2
        offset_y = (height - _SCENE_SIZE * scale) / 2
        return scale, offset_x, offset_y

    def to_scene(self, x: float, y: float) -> tuple[float, float]:
        scale, offset_x, offset_y = self._fit()
        return _SCENE_X + (x - offset_x) / scale, _SCENE_Y + (y - offset_y) / scale

    def _to_view(self, x: float, y: float) -> tuple[float, float]:
        scale, offset_x, offset_y = self._fit()
        return (x - _SCENE_X) * scale + offset_x, (y - _SCENE_Y) * scale + offset_y

    def draw(self, item: Ellipse | Line) -> None:
        scale = self._fit()[0]
        fill = color_hex(item.color)
        if isinstance(item, Ellipse):
            cx, cy = self._to_view(item.center.x, item.center.y)
            radius = _DOT_RADIUS * scale
            self.widget.create_oval(
                cx - radius, cy - radius, cx + radius, cy + radius, fill=fill, outline=""
            )
        else:
            x1, y1 = self._to_view(item.start.x, item.start.y)
            x2, y2 = self._to_view(item.end.x, item.end.y)
            self.widget.create_line(
                x1, y1, x2, y2, fill=fill, width=_STROKE_WIDTH * scale, capstyle="round"
            )

    def redraw(self) -> None:
        self.widget.delete("all")
        for item in self.model.items:
            self.draw(item)


class _ChatView:
    def __init__(self, parent) -> None:
        self.widget = tk.Text(parent, state="disabled", wrap="word")

    def append(self, line: str) -> None:
        self.widget.configure(state="normal")
        self.widget.insert("end", line + "\n")
        self.widget.configure(state="disabled")
        self.widget.see("end")


class LoginDialog(_Window):
    """Asks a guessing player for a nickname and the host's connection code."""

    def __init__(
        self,
        parent,
        on_success: Callable[[str, str, int], None],
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(tk.Toplevel(parent), 400, 300)
        self._on_success = on_success
        self._on_cancel = on_cancel
        self.name_entry = tk.Entry(self.window)
        self.code_entry = tk.Entry(self.window)
        button = tk.Button(self.window, text="Подключиться", command=self.submit)
        self._arrange(self._title_label("Введите ваш ник"), LAYOUT_40_220, 100, 10)
        self._arrange(self.name_entry, LAYOUT_40_220, 100, 50)
        self._arrange(self._title_label("Код подключения"), LAYOUT_40_220, 100, 90)
        self._arrange(self.code_entry, LAYOUT_40_220, 100, 130)
        self._arrange(button, LAYOUT_40_220, 100, 190)
        self.window.protocol("WM_DELETE_WINDOW", self.cancel)
        self.window.grab_set()

    def submit(self) -> None:
        """Accept the form when both fields are valid; otherwise keep it open."""
        try:
            name = validate_nickname(self.name_entry.get())
            address, port = parse_connection_code(self.code_entry.get())
        except InvalidInput:
            return
        self.window.destroy()
        self._on_success(name, address, port)

    def cancel(self) -> None:
        self.window.destroy()
        if self._on_cancel is not None:
            self._on_cancel()


class PuzzleDialog(_Window):
    """Asks the host for the word that the others will have to guess."""

    def __init__(
        self,
        parent,
        on_ready: Callable[[str], None],
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(tk.Toplevel(parent), 400, 300)
        self._on_ready = on_ready
        self._on_cancel = on_cancel
        self.word_entry = tk.Entry(self.window)
        button = tk.Button(self.window, text="Подтвердить", command=self.submit)
        self._arrange(self._title_label("Загадайте слово"), LAYOUT_40_220, 90, 60)
        self._arrange(self.word_entry, LAYOUT_40_220, 90, 110)
        self._arrange(button, LAYOUT_40_220, 90, 160)
        self.window.protocol("WM_DELETE_WINDOW", self.cancel)
        self.window.grab_set()

    def submit(self) -> None:
        try:
            word = validate_puzzle_word(self.word_entry.get())
        except InvalidInput:
            return
        self.word_entry.delete(0, "end")
        self.window.destroy()
        self._on_ready(word)

    def cancel(self) -> None:
        self.window.destroy()
        if self._on_cancel is not None:
            self._on_cancel()


class _GameWindow(_Window):
    """Common part of the host and player windows: board, chat and polling."""

    def __init__(self, parent, model: Canvas, on_close: Callable[[], None] | None) -> None:
        super().__init__(tk.Toplevel(parent), 800, 600)
        self._on_close = on_close
        self._finished = False
        self.board = _Board(self.window, model)
        self.chat = _ChatView(self.window)
        self.window.protocol("WM_DELETE_WINDOW", self.close)
        self._job = None

    def _schedule(self) -> None:
        self._job = self.window.after(_POLL_MS, self._tick)

    def _tick(self) -> None:
        self._job = None
        self._poll()
        if self.window.winfo_exists():
            self._schedule()

    def _poll(self) -> None:
        raise NotImplementedError

    def _finish(self, name: str) -> None:
        if not self._finished:
            self._finished = True
            self._show_winner(name)

    def _shutdown(self) -> None:
        raise NotImplementedError

    def close(self) -> None:
        if self._job is not None:
            self.window.after_cancel(self._job)
            self._job = None
        self._shutdown()
        self.window.destroy()
        if self._on_close is not None:
            self._on_close()


class HostWindow(_GameWindow):
    """The drawing player's window: canvas, palette, connection code and chat."""

    def __init__(self, parent, session: HostSession, on_close: Callable[[], None] | None = None) -> None:
        super().__init__(parent, session.canvas, on_close)
        self.session = session
        code_label = tk.Label(
            self.window,
            text=f"Код для подключения: {session.connection_code}",
            font=_TITLE_FONT,
            fg=_TEXT_COLOR,
            bg=BACKGROUND,
            anchor="w",
        )
        self._arrange(code_label, LAYOUT_40_350, 20, 10)
        self._arrange(self.board.widget, LAYOUT_450_450, 20, 60)
        self._arrange(self.chat.widget, LAYOUT_450_250, 510, 60)
        for x, color in zip((20, 110, 200, 290, 380), _PALETTE):
            swatch = tk.Button(
                self.window,
                bg=color_hex(color),
                activebackground=color_hex(color),
                command=lambda chosen=color: session.canvas.set_color(chosen),
            )
            self._arrange(swatch, LAYOUT_40_90, x, 525)
        self.board.widget.bind("<ButtonPress-1>", self._on_press)
        self.board.widget.bind("<B1-Motion>", self._on_move)
        self._schedule()

    def _send(self, item: Ellipse | Line) -> None:
        self.board.draw(item)
        try:
            self.session.send_drawing(item)
        except OSError:
            pass

    def _on_press(self, event) -> None:
        self._send(self.session.canvas.press(*self.board.to_scene(event.x, event.y)))

    def _on_move(self, event) -> None:
        self._send(self.session.canvas.move(*self.board.to_scene(event.x, event.y)))

    def _poll(self) -> None:
        try:
            messages = self.session.poll()
        except OSError:
            return
        for message in messages:
            if isinstance(message, Chat):
                self.chat.append(message.text)
        if self.session.winner is not None:
            self._finish(self.session.winner)

    def _shutdown(self) -> None:
        self.session.close()


class ClientWindow(_GameWindow):
    """A guessing player's window: the drawing, the chat and a guess field."""

    def __init__(self, parent, client: GameClient, on_close: Callable[[], None] | None = None) -> None:
        super().__init__(parent, client.canvas, on_close)
        self.client = client
        self.entry = tk.Entry(self.window)
        button = tk.Button(self.window, text="->", command=self.send_guess)
        self._arrange(self.board.widget, LAYOUT_450_450, 20, 60)
        self._arrange(self.chat.widget, LAYOUT_410_250, 510, 60)
        self._arrange(self.entry, LAYOUT_30_200, 510, 480)
        self._arrange(button, LAYOUT_30_45, 715, 480)
        self.entry.bind("<Return>", lambda _event: self.send_guess())
        self._schedule()

    def send_guess(self) -> None:
        text = self.entry.get()
        self.entry.delete(0, "end")
        try:
            self.client.send_chat(text)
        except OSError:
            pass

    def _poll(self) -> None:
        if not self.client.connected:
            return
        try:
            messages = self.client.poll()
        except OSError:
            return
        for message in messages:
            if isinstance(message, (Ellipse, Line)):
                self.board.draw(message)
            elif isinstance(message, Chat):
                self.chat.append(message.text)
            elif isinstance(message, Winner):
                self._finish(message.name)

    def _shutdown(self) -> None:
        self.client.close()


class MainWindow(_Window):
    """The lobby: create a game as the drawer or join one as a guesser."""

    def __init__(self, root, width: int = 800, height: int = 500) -> None:
        super().__init__(root, width, height)
        root.title("drawguess")
        create = tk.Button(root, text="Создать лобби", command=self.create_lobby)
        join = tk.Button(root, text="Подключится", command=self.connect_lobby)
        self._arrange(create, LAYOUT_45_110, 350, 300)
        self._arrange(join, LAYOUT_45_110, 350, 350)

    def show(self) -> None:
        self.window.deiconify()

    def create_lobby(self) -> None:
        self.window.withdraw()
        PuzzleDialog(self.window, on_ready=self._open_host, on_cancel=self.show)

    def connect_lobby(self) -> None:
        self.window.withdraw()
        LoginDialog(self.window, on_success=self._open_client, on_cancel=self.show)

    def _open_host(self, word: str) -> None:
        session = HostSession(word)
        try:
            session.start()
        except OSError:
            self.show()
            return
        HostWindow(self.window, session, on_close=self.show)

    def _open_client(self, name: str, address: str, port: int) -> None:
        client = GameClient(name, address, port)
        try:
            client.connect()
        except OSError:
            pass
        ClientWindow(self.window, client, on_close=self.show)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    if tk is None:
        raise SystemExit("drawguess: Tk is not available in this Python")
    root = tk.Tk()
    MainWindow(root, args.width, args.height)
    root.mainloop()
    return 0