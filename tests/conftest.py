import asyncio
import logging

import numpy as np
import pytest

from padsampler.audio.buffer import PCMBuffer
from padsampler.acquisition.errors import DecodeError
from padsampler.acquisition.models import Preset, SampleRef


def make_buffer(duration=1.0, sample_rate=1000, channels=1, freq=5.0):
    """Sine buffer; small sample rate keeps the arrays tiny."""
    t = np.arange(int(duration * sample_rate)) / sample_rate
    wave = (0.8 * np.sin(2 * np.pi * freq * t)).astype(np.float32)
    if channels > 1:
        wave = np.column_stack([wave] * channels)
    return PCMBuffer(wave, sample_rate)


def make_preset(urls, name="kit"):
    return Preset(name=name, samples=tuple(SampleRef(url=u) for u in urls))


class FakeFetcher:
    """
    In-memory ByteFetcher.

    payloads: url -> bytes, or an exception instance to raise
    delays:   url -> seconds spread over the chunks
    """

    def __init__(self, payloads=None, delays=None, chunks=4, known_total=True, default=b"AUDIO" * 20):
        self.payloads = payloads or {}
        self.delays = delays or {}
        self.chunks = chunks
        self.known_total = known_total
        self.default = default
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0
        self.closed = False

    async def fetch(self, url, on_chunk=None):
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            payload = self.payloads.get(url, self.default)
            if isinstance(payload, Exception):
                await asyncio.sleep(self.delays.get(url, 0.0))
                raise payload

            step = max(1, len(payload) // self.chunks)
            received = 0
            while received < len(payload):
                await asyncio.sleep(self.delays.get(url, 0.0) / self.chunks)
                received = min(len(payload), received + step)
                if on_chunk is not None:
                    on_chunk(received, len(payload) if self.known_total else None)
            return payload
        finally:
            self.in_flight -= 1

    async def aclose(self):
        self.closed = True


class FakeDecoder:
    """Bytes starting with BAD fail; anything else decodes to a short sine."""

    def __init__(self, duration=0.5, sample_rate=1000):
        self.duration = duration
        self.sample_rate = sample_rate
        self.decoded = []

    async def decode(self, data):
        await asyncio.sleep(0)
        if data.startswith(b"BAD"):
            raise DecodeError("not audio")
        self.decoded.append(data)
        return make_buffer(self.duration, self.sample_rate)


class RecordingOutput:

    def __init__(self):
        self.played = []

    def play(self, buffer, start, end):
        self.played.append((buffer, start, end))


class FakeCatalog:

    def __init__(self, presets):
        self.presets = list(presets)

    async def fetch(self):
        return list(self.presets)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    before, level = set(root.handlers), root.level
    httpx_level = logging.getLogger("httpx").level
    yield
    # Drop the stderr handler configure_logging installed
    for handler in root.handlers[:]:
        if handler not in before and type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)
    logging.getLogger("httpx").setLevel(httpx_level)
