"""
Sample acquisition: catalog, fetch, decode, and the per-preset pipeline.
"""

from .errors import (
    FailureReason,
    AcquisitionError,
    EmptyLocatorError,
    TransferError,
    DecodeError,
    CatalogError,
)
from .models import Preset, SampleRef
from .results import Decoded, Failed, Outcome, SlotResult
from .progress import (
    ProgressReporter,
    download_percent,
    DOWNLOAD_MAX,
    DECODE_STARTED,
    DONE,
    FAILED,
)
from .fetch import ByteFetcher, HttpByteFetcher
from .client import AudioDecodeClient
from .pipeline import SampleAcquisitionPipeline
from .catalog import PresetCatalog, UrlResolver

__all__ = [
    'FailureReason', 'AcquisitionError', 'EmptyLocatorError',
    'TransferError', 'DecodeError', 'CatalogError',
    'Preset', 'SampleRef',
    'Decoded', 'Failed', 'Outcome', 'SlotResult',
    'ProgressReporter', 'download_percent',
    'DOWNLOAD_MAX', 'DECODE_STARTED', 'DONE', 'FAILED',
    'ByteFetcher', 'HttpByteFetcher',
    'AudioDecodeClient',
    'SampleAcquisitionPipeline',
    'PresetCatalog', 'UrlResolver',
]
