"""
Progress scale for one acquisition.

    0 .. 70   download (bytes received / declared total)
    80        decoding started
    100       decoded
    -1        failed (terminal, may follow any value)
"""

from __future__ import annotations
from typing import Callable, Optional
import logging

logger = logging.getLogger(__name__)

DOWNLOAD_MAX = 70.0
DECODE_STARTED = 80.0
DONE = 100.0
FAILED = -1.0

ProgressSink = Callable[[float], None]
SlotProgressSink = Callable[[int, float], None]


def download_percent(received: int, total: Optional[int], unknown_total_scale: float = 100_000.0) -> float:
    """Map bytes received onto ``[0, DOWNLOAD_MAX]``.

    With a declared total the mapping is proportional. Without one the curve
    ``received / (received + scale)`` approaches but never reaches the cap, so
    only transfer completion reports the full download share.
    """
    if received <= 0:
        return 0.0
    if total:
        return min(DOWNLOAD_MAX, DOWNLOAD_MAX * received / total)
    return DOWNLOAD_MAX * received / (received + unknown_total_scale)


class ProgressReporter:
    """
    Forwards one locator's progress to a sink, enforcing the scale's rules.

    - values never go backwards; -1 is the only exception and ends the stream
    - nothing is forwarded after 100 or -1
    - download events closer than ``step`` percent to the last one are
      dropped; checkpoints are always forwarded
    - a raising sink is logged, never propagated
    """

    def __init__(self, sink: Optional[ProgressSink], step: float = 0.0, label: str = ""):
        self._sink = sink
        self._step = max(0.0, step)
        self._label = label
        self._last: Optional[float] = None
        self._finished = False

    @property
    def last(self) -> Optional[float]:
        return self._last

    @property
    def finished(self) -> bool:
        return self._finished

    def download(self, received: int, total: Optional[int], unknown_total_scale: float = 100_000.0):
        value = download_percent(received, total, unknown_total_scale)
        if self._last is not None and value - self._last < self._step:
            return
        self._report(value)

    def transfer_complete(self):
        self._report(DOWNLOAD_MAX)

    def decode_started(self):
        self._report(DECODE_STARTED)

    def done(self):
        self._report(DONE)
        self._finished = True

    def failed(self):
        if self._finished:
            return
        self._finished = True
        self._last = FAILED
        self._send(FAILED)

    def _report(self, value: float):
        if self._finished:
            return
        if self._last is not None and value <= self._last:
            return
        self._last = value
        self._send(value)

    def _send(self, value: float):
        if self._sink is None:
            return
        try:
            self._sink(value)
        except Exception as e:
            logger.error("Progress sink failed for %s: %s", self._label or "<sample>", e)
