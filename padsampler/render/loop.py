"""
RenderLoop - Per-frame repaint of the trim overlay.

    loop = RenderLoop(bank, overlay, waveform_surface, signals=signals)
    task = loop.start()          # inside a running event loop
    ...
    loop.stop()

Each tick clears the overlay and, when the active slot holds a Sound, draws
its trim markers where they are right now. The waveform canvas is repainted
only when the active sound changes. The loop reads the bank and the trim
regions but never writes to them.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional
import asyncio
import logging
import time

from ..core.signal import SignalBridge, SIGNAL_ACTIVE_CHANGED, SIGNAL_BANK_REBUILT
from ..pads.bank import PadBank
from .painters import draw_markers, render_waveform
from .surface import DrawSurface

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameState:
    """Immutable per-tick timing."""
    frame_id: int   # Monotonically increasing frame counter
    dt: float       # Seconds since the previous tick
    t: float        # Clock time of this tick

    @property
    def fps(self) -> float:
        return 1.0 / max(1e-6, self.dt)


FrameCallback = Callable[[FrameState], None]


class RenderLoop:

    def __init__(self, bank: PadBank, overlay: DrawSurface,
                 waveform_surface: Optional[DrawSurface] = None,
                 fps: float = 60.0, signals: SignalBridge = None,
                 clock: Callable[[], float] = time.perf_counter):
        self.bank = bank
        self.overlay = overlay
        self.waveform_surface = waveform_surface
        self.fps = fps
        self._clock = clock

        self.frame_callbacks: List[FrameCallback] = []

        self._frame_id = 0
        self._last_t: Optional[float] = None
        self._waveform_dirty = True
        self._running = False
        self._task: Optional[asyncio.Task] = None

        if signals:
            signals.connect(SIGNAL_ACTIVE_CHANGED, lambda slot: self.request_waveform_redraw())
            signals.connect(SIGNAL_BANK_REBUILT, lambda filled: self.request_waveform_redraw())

    @property
    def frame_interval(self) -> float:
        return 1.0 / max(1e-6, self.fps)

    @property
    def running(self) -> bool:
        return self._running

    @property
    def frame_id(self) -> int:
        return self._frame_id

    def request_waveform_redraw(self):
        self._waveform_dirty = True

    def tick(self) -> FrameState:
        """Paint one frame. Safe to call directly (tests, hosts with their own loop)."""
        now = self._clock()
        dt = self.frame_interval if self._last_t is None else max(1e-6, now - self._last_t)
        self._last_t = now
        self._frame_id += 1
        frame = FrameState(frame_id=self._frame_id, dt=dt, t=now)

        # One read of the bank per frame
        sound = self.bank.active_sound

        if self._waveform_dirty and self.waveform_surface is not None:
            self._waveform_dirty = False
            try:
                self.waveform_surface.clear()
                if sound is not None:
                    render_waveform(sound.display if sound.display is not None else sound.buffer,
                                    self.waveform_surface)
            except Exception as e:
                logger.error("Waveform repaint failed on frame %d: %s", frame.frame_id, e)

        try:
            self.overlay.clear()
            if sound is not None:
                draw_markers(sound.trim_region, self.overlay)
        except Exception as e:
            logger.error("Overlay repaint failed on frame %d: %s", frame.frame_id, e)

        for callback in list(self.frame_callbacks):
            try:
                callback(frame)
            except Exception as e:
                logger.error("Frame callback failed: %s", e)

        return frame

    async def run(self):
        """Tick until ``stop()``; sleeps off whatever is left of each frame."""
        self._running = True
        await self._run_frames()

    async def _run_frames(self):
        logger.debug("Render loop started at %.0f fps", self.fps)
        try:
            while self._running:
                started = self._clock()
                self.tick()
                elapsed = self._clock() - started
                await asyncio.sleep(max(0.0, self.frame_interval - elapsed))
        finally:
            self._running = False
            logger.debug("Render loop stopped after %d frames", self._frame_id)

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._running = True
            self._task = asyncio.get_running_loop().create_task(self._run_frames())
        return self._task

    def stop(self):
        self._running = False
