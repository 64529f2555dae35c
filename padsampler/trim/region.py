# padsampler/trim/region.py
"""
TrimRegion - The played sub-interval of one sound, edited by dragging markers.

Markers live in pixel space (the overlay canvas); playback asks for seconds.
The pointer handlers below are the only code that moves a marker:

    Idle ──near marker──▶ Hovering(m) ──pointer_down──▶ Dragging(m)
      ▲                       │                             │
      └──────moved away───────┘◀────────pointer_up──────────┘
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from ..core.mathutil import clamp, remap


class Marker(Enum):
    LEFT = auto()
    RIGHT = auto()


class DragPhase(Enum):
    IDLE = auto()
    HOVERING = auto()
    DRAGGING = auto()


@dataclass(frozen=True)
class DragState:
    phase: DragPhase
    marker: Optional[Marker] = None

    @staticmethod
    def idle() -> DragState:
        return DragState(DragPhase.IDLE)

    @staticmethod
    def hovering(marker: Marker) -> DragState:
        return DragState(DragPhase.HOVERING, marker)

    @staticmethod
    def dragging(marker: Marker) -> DragState:
        return DragState(DragPhase.DRAGGING, marker)

    @property
    def is_idle(self) -> bool:
        return self.phase is DragPhase.IDLE

    @property
    def is_dragging(self) -> bool:
        return self.phase is DragPhase.DRAGGING


class TrimRegion:
    """
    Trim markers for one sound over a canvas ``canvas_width`` pixels wide.

    Invariant, after construction and after every handler call:
        0 <= left_px < right_px <= canvas_width
    and, while dragging, the markers keep at least ``min_separation_px``
    between them.
    """

    def __init__(self, total_duration: float, canvas_width: float,
                 proximity_px: float = 10.0, min_separation_px: float = 1.0):
        if canvas_width <= 0:
            raise ValueError(f"canvas_width must be positive, got {canvas_width}")
        if total_duration < 0:
            raise ValueError(f"total_duration must be >= 0, got {total_duration}")
        if min_separation_px <= 0:
            raise ValueError(f"min_separation_px must be positive, got {min_separation_px}")

        self._total_duration = float(total_duration)
        self._canvas_width = float(canvas_width)
        self.proximity_px = float(proximity_px)
        self._min_separation_req = float(min_separation_px)

        # Full-length trim
        self._left_px = 0.0
        self._right_px = self._canvas_width
        self._state = DragState.idle()

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def total_duration(self) -> float:
        return self._total_duration

    @property
    def canvas_width(self) -> float:
        return self._canvas_width

    @property
    def left_px(self) -> float:
        return self._left_px

    @property
    def right_px(self) -> float:
        return self._right_px

    @property
    def drag_state(self) -> DragState:
        return self._state

    @property
    def min_separation_px(self) -> float:
        return min(self._min_separation_req, self._canvas_width)

    def marker_px(self, marker: Marker) -> float:
        return self._left_px if marker is Marker.LEFT else self._right_px

    # -------------------------------------------------------------------------
    # Pixel <-> time
    # -------------------------------------------------------------------------

    def pixel_to_time(self, px: float) -> float:
        return remap(px, 0.0, self._canvas_width, 0.0, self._total_duration)

    def time_to_pixel(self, t: float) -> float:
        # Zero-length sounds map every time to the left edge
        return remap(t, 0.0, self._total_duration, 0.0, self._canvas_width)

    @property
    def trim_start(self) -> float:
        return self.pixel_to_time(self._left_px)

    @property
    def trim_end(self) -> float:
        return self.pixel_to_time(self._right_px)

    def trim_times(self) -> Tuple[float, float]:
        return self.trim_start, self.trim_end

    # -------------------------------------------------------------------------
    # Drag state machine
    # -------------------------------------------------------------------------

    def marker_near(self, x: float) -> Optional[Marker]:
        """Marker within ``proximity_px`` of x; the nearer one, LEFT on a tie."""
        d_left = abs(x - self._left_px)
        d_right = abs(x - self._right_px)
        best, dist = (Marker.LEFT, d_left) if d_left <= d_right else (Marker.RIGHT, d_right)
        return best if dist <= self.proximity_px else None

    def pointer_move(self, x: float) -> DragState:
        if self._state.is_dragging:
            self._move_marker(self._state.marker, x)
            return self._state

        marker = self.marker_near(x)
        self._state = DragState.hovering(marker) if marker else DragState.idle()
        return self._state

    def pointer_down(self, x: Optional[float] = None) -> bool:
        """Start dragging the hovered marker. Returns True if a drag began.

        Passing ``x`` refreshes the hover test first, for hosts that deliver
        a press without a preceding move.
        """
        if x is not None and not self._state.is_dragging:
            self.pointer_move(x)
        if self._state.phase is DragPhase.HOVERING:
            self._state = DragState.dragging(self._state.marker)
            return True
        return False

    def pointer_up(self) -> bool:
        """End a drag. Returns True if one was in progress."""
        if self._state.is_dragging:
            self._state = DragState.idle()
            return True
        return False

    def pointer_leave(self):
        self.cancel_drag()

    def cancel_drag(self) -> bool:
        """Drop any hover or drag without a pointer event. Returns True if a drag ended."""
        was_dragging = self._state.is_dragging
        self._state = DragState.idle()
        return was_dragging

    def _move_marker(self, marker: Marker, x: float):
        sep = self.min_separation_px
        if marker is Marker.LEFT:
            self._left_px = clamp(x, 0.0, self._right_px - sep)
        else:
            self._right_px = clamp(x, self._left_px + sep, self._canvas_width)

    # -------------------------------------------------------------------------
    # Surface changes
    # -------------------------------------------------------------------------

    def resize(self, canvas_width: float):
        """Change the canvas width, keeping the trim times where they were."""
        if canvas_width <= 0:
            raise ValueError(f"canvas_width must be positive, got {canvas_width}")
        scale = canvas_width / self._canvas_width
        self._canvas_width = float(canvas_width)

        sep = self.min_separation_px
        left = clamp(self._left_px * scale, 0.0, self._canvas_width - sep)
        right = clamp(self._right_px * scale, left + sep, self._canvas_width)
        self._left_px, self._right_px = left, right

    def __repr__(self) -> str:
        return (f"TrimRegion({self.trim_start:.3f}s..{self.trim_end:.3f}s, "
                f"px={self._left_px:.1f}..{self._right_px:.1f}/{self._canvas_width:.0f}, "
                f"{self._state.phase.name.lower()})")
