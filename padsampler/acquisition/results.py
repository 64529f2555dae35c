"""
Per-slot acquisition outcomes.

An outcome is either ``Decoded`` or ``Failed``; consumers match on the type
rather than probing attributes:

    for result in results:
        if isinstance(result.outcome, Decoded):
            ...
        else:
            ...
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from ..audio.buffer import PCMBuffer
from .errors import FailureReason


@dataclass(frozen=True)
class Decoded:
    buffer: PCMBuffer
    source_url: str
    name: Optional[str] = None

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failed:
    reason: FailureReason
    source_url: Optional[str]
    name: Optional[str] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def message(self) -> str:
        if self.error is not None:
            return str(self.error)
        return self.reason.value


Outcome = Union[Decoded, Failed]


@dataclass(frozen=True)
class SlotResult:
    slot_index: int
    outcome: Outcome

    @property
    def ok(self) -> bool:
        return self.outcome.ok
