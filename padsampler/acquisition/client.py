"""
AudioDecodeClient - One locator in, one Decoded/Failed out.
"""

from __future__ import annotations
from typing import Optional, TYPE_CHECKING
import logging

from .errors import AcquisitionError, EmptyLocatorError, FailureReason
from .fetch import ByteFetcher
from .progress import ProgressReporter, ProgressSink
from .results import Decoded, Failed, Outcome

if TYPE_CHECKING:
    from ..audio.decode import Decoder

logger = logging.getLogger(__name__)


class AudioDecodeClient:
    """
    Fetches and decodes a single sample.

    ``acquire`` never raises for transfer or decode problems: each failure
    path resolves to a ``Failed`` carrying the exception, the locator and the
    display name, and reports -1 to the progress sink.

    Progress for one locator:
        download 0..70 -> 70 on completion -> 80 decode started -> 100
    """

    def __init__(self, fetcher: ByteFetcher, decoder: Decoder,
                 progress_step: float = 0.0, unknown_total_scale: float = 100_000.0):
        self.fetcher = fetcher
        self.decoder = decoder
        self.progress_step = progress_step
        self.unknown_total_scale = unknown_total_scale

    async def acquire(self, locator: Optional[str], progress_sink: Optional[ProgressSink] = None,
                      name: Optional[str] = None) -> Outcome:
        reporter = ProgressReporter(progress_sink, step=self.progress_step, label=locator or name or "")

        if not locator:
            return self._fail(reporter, FailureReason.EMPTY_LOCATOR, None, name, EmptyLocatorError())

        decoding = False
        try:
            data = await self.fetcher.fetch(
                locator,
                lambda received, total: reporter.download(received, total, self.unknown_total_scale),
            )
            reporter.transfer_complete()

            decoding = True
            reporter.decode_started()
            buffer = await self.decoder.decode(data)
        except AcquisitionError as e:
            return self._fail(reporter, e.reason, locator, name, e)
        except Exception as e:
            # Fetchers and decoders are injected; anything they leak is still a per-slot failure
            reason = FailureReason.DECODE if decoding else FailureReason.TRANSFER
            return self._fail(reporter, reason, locator, name, e)

        reporter.done()
        logger.debug("Decoded %s: %r", locator, buffer)
        return Decoded(buffer=buffer, source_url=locator, name=name)

    def _fail(self, reporter: ProgressReporter, reason: FailureReason, locator: Optional[str],
              name: Optional[str], error: BaseException) -> Failed:
        logger.warning("Sample %s failed (%s): %s", name or locator, reason.value, error)
        reporter.failed()
        return Failed(reason, locator, name, error)

