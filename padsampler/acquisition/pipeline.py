"""
SampleAcquisitionPipeline - Fan-out/fan-in loading of a whole preset.

    results = await pipeline.load(preset, lambda slot, pct: print(slot, pct))

Every sample (up to NUM_SLOTS) is acquired concurrently; ``load`` returns
only after all of them have settled, with one SlotResult per sample in the
preset's order. Completion order never shows in the result order, and one
broken sample never affects its siblings.
"""

from __future__ import annotations
from typing import Callable, List, Optional
import asyncio
import logging

from ..config import NUM_SLOTS
from .client import AudioDecodeClient
from .models import Preset, SampleRef
from .progress import SlotProgressSink
from .results import Decoded, SlotResult

logger = logging.getLogger(__name__)

UrlResolverFn = Callable[[Optional[str]], Optional[str]]


def _identity(url: Optional[str]) -> Optional[str]:
    return url or None


class SampleAcquisitionPipeline:

    def __init__(self, client: AudioDecodeClient, resolve_url: UrlResolverFn = None,
                 max_concurrency: int = 0, max_slots: int = NUM_SLOTS):
        self.client = client
        self.resolve_url = resolve_url or _identity
        self.max_concurrency = max_concurrency
        self.max_slots = max_slots

    async def load(self, preset: Optional[Preset],
                   progress_sink: Optional[SlotProgressSink] = None) -> List[SlotResult]:
        samples = list(preset.samples) if preset is not None and preset.samples else []
        if not samples:
            return []

        if len(samples) > self.max_slots:
            logger.info("Preset '%s' has %d samples; only the first %d are loaded",
                        preset.name, len(samples), self.max_slots)
            samples = samples[:self.max_slots]

        limiter = asyncio.Semaphore(self.max_concurrency) if self.max_concurrency > 0 else None

        # gather() returns in argument order, whatever order the tasks finish in
        results = await asyncio.gather(*(
            self._acquire_slot(index, sample, progress_sink, limiter)
            for index, sample in enumerate(samples)
        ))

        decoded = sum(1 for r in results if isinstance(r.outcome, Decoded))
        logger.info("Preset '%s': %d decoded, %d failed", preset.name, decoded, len(results) - decoded)
        return list(results)

    async def _acquire_slot(self, index: int, sample: SampleRef,
                            progress_sink: Optional[SlotProgressSink],
                            limiter: Optional[asyncio.Semaphore]) -> SlotResult:
        sink = None
        if progress_sink is not None:
            def sink(percent: float):
                progress_sink(index, percent)

        locator = self.resolve_url(sample.url)
        name = sample.display_name if sample.url or sample.name else None

        if limiter is None:
            outcome = await self.client.acquire(locator, sink, name)
        else:
            async with limiter:
                outcome = await self.client.acquire(locator, sink, name)

        return SlotResult(slot_index=index, outcome=outcome)
