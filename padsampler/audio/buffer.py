"""
PCMBuffer - Decoded, immutable audio.
"""

from __future__ import annotations
from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True, eq=False)
class PCMBuffer:
    """Decoded audio frames.

    ``data`` is float32 with shape ``(frames,)`` for mono or
    ``(frames, channels)``. The array is made read-only on construction so a
    buffer can be shared by the bank, the renderer and the audio thread.
    """
    data: np.ndarray
    sample_rate: int

    def __post_init__(self):
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        data = np.asarray(self.data, dtype=np.float32)
        if data.ndim not in (1, 2):
            raise ValueError(f"PCM data must be 1-D or 2-D, got shape {data.shape}")
        if data.flags.writeable:
            data = data.copy()
            data.setflags(write=False)
        object.__setattr__(self, "data", data)

    @property
    def num_frames(self) -> int:
        return self.data.shape[0]

    @property
    def channels(self) -> int:
        return 1 if self.data.ndim == 1 else self.data.shape[1]

    @property
    def duration(self) -> float:
        """Length in seconds."""
        return self.num_frames / self.sample_rate

    def frame_at(self, seconds: float) -> int:
        """Frame index for a time, clamped to ``[0, num_frames]``."""
        frame = int(round(seconds * self.sample_rate))
        return max(0, min(self.num_frames, frame))

    def slice(self, start: float, end: float) -> np.ndarray:
        """Frames in ``[start, end)`` seconds (a read-only view)."""
        return self.data[self.frame_at(start):self.frame_at(end)]

    def mono(self) -> np.ndarray:
        if self.data.ndim == 1:
            return self.data
        return self.data.mean(axis=1)

    @classmethod
    def silence(cls, duration: float, sample_rate: int = 44100, channels: int = 1) -> PCMBuffer:
        frames = int(duration * sample_rate)
        shape = (frames,) if channels == 1 else (frames, channels)
        return cls(np.zeros(shape, dtype=np.float32), sample_rate)

    def __repr__(self) -> str:
        return f"PCMBuffer(frames={self.num_frames}, sr={self.sample_rate}, ch={self.channels}, {self.duration:.3f}s)"
