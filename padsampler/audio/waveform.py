"""
Waveform utilities - Peak envelopes for display.
"""

from __future__ import annotations
from typing import Tuple
import numpy as np

from .buffer import PCMBuffer


def compute_peaks(buffer: PCMBuffer, columns: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Min/max envelope of a buffer, one pair per pixel column.

    Args:
        buffer: Decoded audio (mixed down to mono)
        columns: Output resolution, usually the canvas width in pixels

    Returns:
        (mins, maxs) float32 arrays of length ``columns``; columns past the
        end of a very short buffer are zero.
    """
    columns = int(columns)
    if columns <= 0:
        return np.zeros(0, dtype=np.float32), np.zeros(0, dtype=np.float32)

    mono = buffer.mono()
    mins = np.zeros(columns, dtype=np.float32)
    maxs = np.zeros(columns, dtype=np.float32)
    if mono.shape[0] == 0:
        return mins, maxs

    # Column i covers frames [edges[i], edges[i+1])
    edges = np.linspace(0, mono.shape[0], columns + 1).astype(np.int64)
    for i in range(columns):
        start, end = edges[i], edges[i + 1]
        if end <= start:
            continue
        chunk = mono[start:end]
        mins[i] = chunk.min()
        maxs[i] = chunk.max()

    return mins, maxs
