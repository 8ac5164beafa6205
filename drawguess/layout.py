"""Proportional placement of widgets in a resizable window."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class LayoutSpec:
    """A widget of fixed nominal size in a window of nominal size.

    When the window is resized, position and size scale with it.
    """

    width: int
    height: int
    base_width: int
    base_height: int

    def __post_init__(self) -> None:
        if self.base_width <= 0 or self.base_height <= 0:
            raise ValueError("base window size must be positive")

    def place(self, window_width: float, window_height: float, x: float, y: float) -> Rect:
        """Return the widget geometry for the given window size and nominal position."""
        width_factor = window_width / self.base_width
        height_factor = window_height / self.base_height
        return Rect(
            x=int(x * width_factor),
            y=int(y * height_factor),
            width=int(self.width * width_factor),
            height=int(self.height * height_factor),
        )


LAYOUT_45_110 = LayoutSpec(width=110, height=45, base_width=800, base_height=500)
LAYOUT_450_450 = LayoutSpec(width=450, height=450, base_width=800, base_height=600)
LAYOUT_40_90 = LayoutSpec(width=90, height=40, base_width=800, base_height=600)
LAYOUT_40_220 = LayoutSpec(width=220, height=40, base_width=400, base_height=300)
LAYOUT_40_350 = LayoutSpec(width=350, height=40, base_width=800, base_height=600)
LAYOUT_410_250 = LayoutSpec(width=250, height=410, base_width=800, base_height=600)
LAYOUT_450_250 = LayoutSpec(width=250, height=450, base_width=800, base_height=600)
LAYOUT_30_200 = LayoutSpec(width=200, height=30, base_width=800, base_height=600)
LAYOUT_30_45 = LayoutSpec(width=45, height=30, base_width=800, base_height=600)