"""
Acquisition failures.

These are raised inside the fetch/decode steps and caught by
AudioDecodeClient, which turns them into ``Failed`` results. Nothing here
crosses the pipeline boundary.
"""

from __future__ import annotations
from enum import Enum


class FailureReason(Enum):
    EMPTY_LOCATOR = "no-url"
    TRANSFER = "transfer"
    DECODE = "decode"


class AcquisitionError(Exception):
    reason: FailureReason = FailureReason.TRANSFER

    def __init__(self, message: str, locator: str = None):
        super().__init__(message)
        self.locator = locator


class EmptyLocatorError(AcquisitionError):
    reason = FailureReason.EMPTY_LOCATOR

    def __init__(self, locator: str = None):
        super().__init__("no-url", locator)


class TransferError(AcquisitionError):
    reason = FailureReason.TRANSFER

    def __init__(self, message: str, locator: str = None, status_code: int = None):
        super().__init__(message, locator)
        self.status_code = status_code


class DecodeError(AcquisitionError):
    reason = FailureReason.DECODE


class CatalogError(Exception):
    """The preset catalog could not be fetched or parsed."""
