"""
Decoders - bytes to PCMBuffer.
"""

from __future__ import annotations
import io
from typing import Protocol

import numpy as np
import soundfile as sf

from .buffer import PCMBuffer
from ..acquisition.errors import DecodeError


class Decoder(Protocol):
    async def decode(self, data: bytes) -> PCMBuffer:
        ...


class SoundfileDecoder:
    """
    Decode WAV/FLAC/OGG/AIFF bytes with libsndfile.

    Decoding runs on the event loop thread: the acquisition model has exactly
    one thread doing compute, and an awaited call is the suspension point.
    MP3 support depends on the libsndfile build.
    """

    def __init__(self, target_sample_rate: int = None):
        self.target_sample_rate = target_sample_rate

    async def decode(self, data: bytes) -> PCMBuffer:
        if not data:
            raise DecodeError("empty payload")
        try:
            frames, sr = sf.read(io.BytesIO(data), dtype='float32', always_2d=False)
        except (RuntimeError, TypeError, ValueError) as e:
            raise DecodeError(f"undecodable audio: {e}") from e

        if frames.size == 0:
            raise DecodeError("decoded stream has no frames")

        if self.target_sample_rate and sr != self.target_sample_rate:
            frames = resample_linear(frames, sr, self.target_sample_rate)
            sr = self.target_sample_rate

        return PCMBuffer(frames, sr)


def resample_linear(data: np.ndarray, src_rate: int, dst_rate: int) -> np.ndarray:
    """Simple linear resampling."""
    if src_rate == dst_rate or len(data) == 0:
        return data

    ratio = dst_rate / src_rate
    new_length = max(1, int(len(data) * ratio))
    old_idx = np.arange(len(data))
    new_idx = np.linspace(0, len(data) - 1, new_length)

    if data.ndim == 1:
        return np.interp(new_idx, old_idx, data).astype(np.float32)

    return np.column_stack([
        np.interp(new_idx, old_idx, data[:, ch]) for ch in range(data.shape[1])
    ]).astype(np.float32)
