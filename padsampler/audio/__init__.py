"""
Audio System
============

Decoded buffers, decoding and waveform extraction.

The sounddevice-backed output lives in ``padsampler.audio.output`` and is not
imported here, so headless use never needs PortAudio.

Quick Start:
    from padsampler.audio import SoundfileDecoder
    from padsampler.audio.output import SoundDeviceOutput

    buffer = await SoundfileDecoder().decode(wav_bytes)
    out = SoundDeviceOutput()
    out.start()
    out.play(buffer, 0.0, buffer.duration)
"""

from .buffer import PCMBuffer
from .decode import Decoder, SoundfileDecoder, resample_linear
from .waveform import compute_peaks

__all__ = [
    'PCMBuffer',
    'Decoder',
    'SoundfileDecoder',
    'resample_linear',
    'compute_peaks',
]
