"""
Draw Surface

Headless drawing target. Painters record rectangles and lines; a GUI host
replays ``commands`` onto its real canvas (a Qt painter, a GL batch, an HTML
canvas over a websocket...). Tests inspect the recorded commands directly.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Tuple, Union

RGBA = Tuple[float, float, float, float]


@dataclass(frozen=True)
class DrawRect:
    x: float
    y: float
    w: float
    h: float
    color: RGBA


@dataclass(frozen=True)
class DrawLine:
    x0: float
    y0: float
    x1: float
    y1: float
    color: RGBA
    width: float = 1.0


DrawCommand = Union[DrawRect, DrawLine]


@dataclass
class DrawSurface:
    width: float
    height: float
    commands: List[DrawCommand] = field(default_factory=list)
    clear_count: int = 0

    def clear(self):
        self.commands.clear()
        self.clear_count += 1

    def draw_rect(self, x: float, y: float, w: float, h: float, color: RGBA):
        if w <= 0 or h <= 0:
            return
        self.commands.append(DrawRect(x, y, w, h, color))

    def draw_line(self, x0: float, y0: float, x1: float, y1: float, color: RGBA, width: float = 1.0):
        self.commands.append(DrawLine(x0, y0, x1, y1, color, width))

    @property
    def lines(self) -> List[DrawLine]:
        return [c for c in self.commands if isinstance(c, DrawLine)]

    @property
    def rects(self) -> List[DrawRect]:
        return [c for c in self.commands if isinstance(c, DrawRect)]
