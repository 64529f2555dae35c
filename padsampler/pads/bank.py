"""
PadBank - Sixteen fixed slots, the active slot, and trigger routing.
"""

from __future__ import annotations
from typing import Callable, Iterable, Iterator, Optional, Tuple
import logging

from ..config import NUM_SLOTS
from ..core.signal import (
    SignalBridge, SignalEmitter,
    SIGNAL_PAD_TRIGGERED, SIGNAL_ACTIVE_CHANGED, SIGNAL_BANK_REBUILT,
)
from ..acquisition.results import Decoded, SlotResult
from .sound import AudioOutput, Sound

logger = logging.getLogger(__name__)

SoundFactory = Callable[[Decoded], Sound]


class PadBank(SignalEmitter):
    """
    Owner of the slot array and ``active_index``.

    ``rebuild`` and ``trigger`` are the only mutators and neither awaits, so
    under asyncio a render tick sees either the old bank or the new one.
    ``rebuild`` assembles the complete new slot tuple before assigning it.

    Signals (on the bound bridge):
        SIGNAL_PAD_TRIGGERED(slot, played)
        SIGNAL_ACTIVE_CHANGED(slot)        after every trigger and rebuild
        SIGNAL_BANK_REBUILT(filled_count)
    """

    def __init__(self, output: AudioOutput, sound_factory: SoundFactory,
                 signals: SignalBridge = None, num_slots: int = NUM_SLOTS):
        self.output = output
        self.sound_factory = sound_factory
        self.num_slots = num_slots
        self._slots: Tuple[Optional[Sound], ...] = (None,) * num_slots
        self._active_index = 0
        if signals:
            self.bind_bridge(signals)

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def slots(self) -> Tuple[Optional[Sound], ...]:
        return self._slots

    @property
    def active_index(self) -> int:
        return self._active_index

    @property
    def active_sound(self) -> Optional[Sound]:
        return self._slots[self._active_index]

    def sound_at(self, slot: int) -> Optional[Sound]:
        if 0 <= slot < self.num_slots:
            return self._slots[slot]
        return None

    def filled_count(self) -> int:
        return sum(1 for s in self._slots if s is not None)

    def __iter__(self) -> Iterator[Tuple[int, Optional[Sound]]]:
        return iter(enumerate(self._slots))

    def __len__(self) -> int:
        return self.num_slots

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def trigger(self, slot: int) -> bool:
        """Make ``slot`` active and play it. No-op for empty or unknown slots."""
        sound = self.sound_at(slot)
        if sound is None:
            return False

        previous = self.active_sound
        if previous is not None and previous is not sound:
            # Only the active region receives pointer events
            previous.trim_region.cancel_drag()

        self._active_index = slot
        played = sound.play(self.output)
        self.emit(SIGNAL_PAD_TRIGGERED, slot, played)
        self.emit(SIGNAL_ACTIVE_CHANGED, slot)
        return played

    def rebuild(self, results: Iterable[SlotResult]):
        """Replace every slot from a load's results and reset the active slot.

        Decoded results get a fresh Sound (and so a full-length trim);
        failed, missing and out-of-range entries leave the slot empty. If the
        factory raises, the previous contents stay in place.
        """
        new_slots = [None] * self.num_slots
        for result in results:
            if not 0 <= result.slot_index < self.num_slots:
                logger.debug("Ignoring result for slot %d", result.slot_index)
                continue
            if isinstance(result.outcome, Decoded):
                new_slots[result.slot_index] = self.sound_factory(result.outcome)

        self._slots = tuple(new_slots)
        self._active_index = 0

        filled = self.filled_count()
        logger.info("Pad bank rebuilt: %d/%d slots filled", filled, self.num_slots)
        self.emit(SIGNAL_BANK_REBUILT, filled)
        self.emit(SIGNAL_ACTIVE_CHANGED, 0)

    def clear(self):
        self.rebuild(())
