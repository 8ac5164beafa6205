"""A networked draw-and-guess game: wire protocol, relay server, host and player sessions, and Tk windows."""

__version__ = "0.1.0"