"""
Rendering: headless draw surfaces, painters and the frame loop.
"""

from .surface import DrawSurface, DrawRect, DrawLine, DrawCommand
from .painters import WaveformDisplay, render_waveform, draw_markers
from .loop import RenderLoop, FrameState

__all__ = [
    'DrawSurface', 'DrawRect', 'DrawLine', 'DrawCommand',
    'WaveformDisplay', 'render_waveform', 'draw_markers',
    'RenderLoop', 'FrameState',
]
