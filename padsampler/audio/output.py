"""
SoundDeviceOutput - Plays PCM sub-ranges through a sounddevice stream.

One-shot voices are mixed in the stream callback, which runs on the audio
thread; the voice list is the only state shared with the event loop and is
guarded by a lock.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional
import logging
import threading

import numpy as np
import sounddevice as sd

from .buffer import PCMBuffer
from .decode import resample_linear

logger = logging.getLogger(__name__)


@dataclass
class PlayingVoice:
    """A trimmed region currently playing."""
    frames: np.ndarray  # (n, 2) float32, already at the output rate
    position: int = 0

    @property
    def done(self) -> bool:
        return self.position >= self.frames.shape[0]


class SoundDeviceOutput:
    """
    Audio output capability: ``play(buffer, start, end)``.

    Usage:
        out = SoundDeviceOutput()
        out.start()
        out.play(buffer, 0.0, buffer.duration)
    """

    def __init__(self, sample_rate: int = 44100, buffer_size: int = 256,
                 max_voices: int = 32, device=None):
        self.sample_rate = sample_rate
        self.buffer_size = buffer_size
        self.max_voices = max_voices
        self.device = device

        self._voices: List[PlayingVoice] = []
        self._lock = threading.Lock()
        self._stream: Optional[sd.OutputStream] = None

    def start(self) -> bool:
        """Open the output stream. Returns False if the device refuses."""
        if self._stream is not None:
            return True
        try:
            self._stream = sd.OutputStream(
                samplerate=self.sample_rate,
                blocksize=self.buffer_size,
                channels=2,
                dtype='float32',
                device=self.device,
                callback=self._audio_callback,
            )
            self._stream.start()
        except sd.PortAudioError as e:
            logger.error("Audio output failed to start: %s", e)
            self._stream = None
            return False
        logger.info("Audio output started (sr=%d, buf=%d)", self.sample_rate, self.buffer_size)
        return True

    def stop(self):
        if self._stream is not None:
            self._stream.stop()
            self._stream.close()
            self._stream = None
        with self._lock:
            self._voices.clear()

    def play(self, buffer: PCMBuffer, start: float, end: float):
        """Queue frames ``[start, end)`` of ``buffer`` as a new voice."""
        frames = buffer.slice(start, end)
        if frames.shape[0] == 0:
            return
        if buffer.sample_rate != self.sample_rate:
            frames = resample_linear(frames, buffer.sample_rate, self.sample_rate)
        voice = PlayingVoice(frames=_to_stereo(frames))

        with self._lock:
            # Oldest voice is stolen at capacity
            if len(self._voices) >= self.max_voices:
                self._voices.pop(0)
            self._voices.append(voice)

    @property
    def voice_count(self) -> int:
        with self._lock:
            return len(self._voices)

    def mix(self, num_frames: int) -> np.ndarray:
        """Render the next ``num_frames`` of all voices into a stereo block."""
        output = np.zeros((num_frames, 2), dtype=np.float32)
        with self._lock:
            for voice in self._voices:
                chunk = voice.frames[voice.position:voice.position + num_frames]
                output[:chunk.shape[0]] += chunk
                voice.position += chunk.shape[0]
            self._voices = [v for v in self._voices if not v.done]

        np.clip(output, -1.0, 1.0, out=output)
        return output

    def _audio_callback(self, outdata: np.ndarray, frames: int, time_info, status):
        if status:
            logger.debug("Audio callback status: %s", status)
        outdata[:] = self.mix(frames)


def _to_stereo(frames: np.ndarray) -> np.ndarray:
    if frames.ndim == 1:
        return np.column_stack([frames, frames]).astype(np.float32)
    if frames.shape[1] == 1:
        return np.repeat(frames, 2, axis=1).astype(np.float32)
    return np.ascontiguousarray(frames[:, :2], dtype=np.float32)
