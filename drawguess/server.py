"""TCP relay that forwards drawings and chat between players."""

from __future__ import annotations

import logging
import socket
import threading

from drawguess.protocol import Chat, FrameReader, Message, ProtocolError, encode

_log = logging.getLogger(__name__)
_ACCEPT_INTERVAL = 0.2
_CHUNK = 4096


class RelayServer:
    """Accepts players and relays their messages.

    The first connection is the host, who draws and picks the word.
    Drawings and the winner go to everyone but the host; chat goes to all.
    """

    def __init__(self, port: int = 0, host: str = "0.0.0.0") -> None:
        self.host = host
        self.port = port
        self._listener: socket.socket | None = None
        self._stop = threading.Event()
        self._lock = threading.Lock()
        self._connections: list[socket.socket] = []
        self._host_connection: socket.socket | None = None
        self._threads: list[threading.Thread] = []

    @property
    def client_count(self) -> int:
        with self._lock:
            return len(self._connections)

    def start(self) -> RelayServer:
        if self._listener is not None:
            raise RuntimeError("server already started")
        listener = socket.create_server((self.host, self.port))
        listener.settimeout(_ACCEPT_INTERVAL)
        self._listener = listener
        self.port = listener.getsockname()[1]
        self._stop.clear()
        self._spawn(self._accept_loop)
        _log.debug("relay listening on %s:%d", self.host, self.port)
        return self

    def close(self) -> None:
        self._stop.set()
        if self._listener is not None:
            self._listener.close()
            self._listener = None
        with self._lock:
            connections = list(self._connections)
        for conn in connections:
            try:
                conn.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            conn.close()
        for thread in self._threads:
            if thread is not threading.current_thread():
                thread.join(timeout=2)
        self._threads.clear()

    def __enter__(self) -> RelayServer:
        return self.start()

    def __exit__(self, *args) -> None:
        self.close()

    def _spawn(self, target, *args) -> None:
        thread = threading.Thread(target=target, args=args, daemon=True)
        self._threads.append(thread)
        thread.start()

    def _accept_loop(self) -> None:
        listener = self._listener
        while not self._stop.is_set() and listener is not None:
            try:
                conn, _ = listener.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            conn.settimeout(None)
            with self._lock:
                self._connections.append(conn)
                if self._host_connection is None:
                    self._host_connection = conn
            _log.debug("client connected")
            self._spawn(self._serve, conn)

    def _serve(self, conn: socket.socket) -> None:
        reader = FrameReader()
        try:
            while True:
                data = conn.recv(_CHUNK)
                if not data:
                    break
                for message in reader.feed(data):
                    self._relay(message)
        except ProtocolError as exc:
            _log.debug("dropping client: %s", exc)
        except OSError:
            pass
        finally:
            with self._lock:
                if conn in self._connections:
                    self._connections.remove(conn)
            conn.close()

    def _relay(self, message: Message) -> None:
        frame = encode(message)
        with self._lock:
            if isinstance(message, Chat):
                targets = list(self._connections)
            else:
                targets = [c for c in self._connections if c is not self._host_connection]
            for conn in targets:
                try:
                    conn.sendall(frame)
                except OSError:
                    pass