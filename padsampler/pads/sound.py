"""
Sound - One decoded buffer bound to its trim region and waveform display.
"""

from __future__ import annotations
from typing import Any, Optional, Protocol, Tuple
import logging

from ..audio.buffer import PCMBuffer
from ..trim.region import TrimRegion

logger = logging.getLogger(__name__)


class AudioOutput(Protocol):
    def play(self, buffer: PCMBuffer, start: float, end: float) -> Any:
        ...


class Sound:
    """
    A playable pad.

    The TrimRegion is created with the Sound and belongs to it alone; a bank
    rebuild discards both together.
    """

    def __init__(self, buffer: PCMBuffer, trim_region: TrimRegion, display: Any = None,
                 name: Optional[str] = None, source_url: Optional[str] = None):
        self.buffer = buffer
        self.trim_region = trim_region
        self.display = display
        self.name = name
        self.source_url = source_url

    @classmethod
    def create(cls, buffer: PCMBuffer, canvas_width: float, display: Any = None,
               proximity_px: float = 10.0, min_separation_px: float = 1.0,
               name: Optional[str] = None, source_url: Optional[str] = None) -> Sound:
        """New Sound with a full-length TrimRegion over ``canvas_width`` pixels."""
        region = TrimRegion(buffer.duration, canvas_width,
                            proximity_px=proximity_px, min_separation_px=min_separation_px)
        return cls(buffer, region, display=display, name=name, source_url=source_url)

    @property
    def duration(self) -> float:
        return self.buffer.duration

    def playback_bounds(self) -> Tuple[float, float]:
        """Trim start/end clamped to the buffer."""
        start, end = self.trim_region.trim_times()
        return max(0.0, start), min(end, self.buffer.duration)

    def play(self, output: AudioOutput) -> bool:
        """Play the trimmed range. Returns False (and plays nothing) if it is empty."""
        start, end = self.playback_bounds()
        if end <= start:
            logger.debug("Skipping playback of %s: empty trim %.4f..%.4f", self.name, start, end)
            return False
        output.play(self.buffer, start, end)
        return True

    def __repr__(self) -> str:
        return f"Sound({self.name!r}, {self.buffer!r}, {self.trim_region!r})"
