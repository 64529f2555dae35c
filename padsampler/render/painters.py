"""
Painters for the two canvases of the sampler.

- waveform canvas: the active sound's peak envelope, repainted on change
- overlay canvas: trim markers and shading, repainted every frame
"""

from __future__ import annotations
from dataclasses import dataclass
import numpy as np

from ..audio.buffer import PCMBuffer
from ..audio.waveform import compute_peaks
from ..trim.region import DragPhase, Marker, TrimRegion
from .surface import DrawSurface, RGBA

WAVE_COLOR: RGBA = (0.51, 0.91, 0.24, 1.0)          # #83E83E
MARKER_COLOR: RGBA = (1.0, 1.0, 1.0, 0.9)
MARKER_HOVER_COLOR: RGBA = (1.0, 0.8, 0.2, 1.0)
MARKER_DRAG_COLOR: RGBA = (1.0, 0.45, 0.25, 1.0)
OUTSIDE_TRIM_SHADE: RGBA = (0.0, 0.0, 0.0, 0.5)


@dataclass(frozen=True)
class WaveformDisplay:
    """Precomputed peaks for one sound at one canvas width."""
    mins: np.ndarray
    maxs: np.ndarray
    color: RGBA = WAVE_COLOR

    @classmethod
    def from_buffer(cls, buffer: PCMBuffer, width: float, color: RGBA = WAVE_COLOR) -> WaveformDisplay:
        mins, maxs = compute_peaks(buffer, int(width))
        return cls(mins, maxs, color)

    @property
    def columns(self) -> int:
        return self.mins.shape[0]


def render_waveform(source, surface: DrawSurface):
    """Draw the envelope, one 1px column per peak pair, centred vertically.

    ``source`` is a WaveformDisplay, or a PCMBuffer whose peaks are computed
    at the surface width.
    """
    display = source
    if isinstance(source, PCMBuffer):
        display = WaveformDisplay.from_buffer(source, surface.width)

    center_y = surface.height / 2
    half_h = surface.height / 2

    for px in range(min(display.columns, int(surface.width))):
        top = center_y - float(display.maxs[px]) * half_h
        bottom = center_y - float(display.mins[px]) * half_h
        surface.draw_rect(px, top, 1, max(1.0, bottom - top), display.color)


def draw_markers(region: TrimRegion, surface: DrawSurface):
    """Shade outside the trim and draw both markers; hovered/dragged one is highlighted."""
    # Surface may differ from the region's canvas until the host resizes it
    scale = surface.width / region.canvas_width
    left = region.left_px * scale
    right = region.right_px * scale
    h = surface.height

    surface.draw_rect(0, 0, left, h, OUTSIDE_TRIM_SHADE)
    surface.draw_rect(right, 0, surface.width - right, h, OUTSIDE_TRIM_SHADE)

    state = region.drag_state
    for marker, x in ((Marker.LEFT, left), (Marker.RIGHT, right)):
        color = MARKER_COLOR
        if state.marker is marker:
            color = MARKER_DRAG_COLOR if state.phase is DragPhase.DRAGGING else MARKER_HOVER_COLOR
        surface.draw_line(x, 0, x, h, color, width=2.0 if color is not MARKER_COLOR else 1.0)
