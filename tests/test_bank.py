import pytest

from padsampler.acquisition.errors import FailureReason
from padsampler.acquisition.results import Decoded, Failed, SlotResult
from padsampler.core.signal import (
    SignalBridge, SIGNAL_PAD_TRIGGERED, SIGNAL_ACTIVE_CHANGED, SIGNAL_BANK_REBUILT,
)
from padsampler.pads.bank import PadBank
from padsampler.pads.sound import Sound

from conftest import RecordingOutput, make_buffer


def _factory(decoded):
    return Sound.create(decoded.buffer, 800, name=decoded.name, source_url=decoded.source_url)


def _results(*ok_flags):
    results = []
    for i, ok in enumerate(ok_flags):
        url = f"http://x/{i}.wav"
        outcome = Decoded(make_buffer(0.25), url, f"s{i}") if ok else Failed(FailureReason.TRANSFER, url)
        results.append(SlotResult(i, outcome))
    return results


def _bank(signals=None):
    output = RecordingOutput()
    return PadBank(output, _factory, signals=signals), output


def test_new_bank_is_empty():
    bank, _ = _bank()
    assert len(bank) == 16
    assert bank.filled_count() == 0
    assert bank.active_sound is None
    assert not bank.trigger(0)

def test_rebuild_fills_decoded_slots_only():
    bank, _ = _bank()
    bank.rebuild(_results(True, False, True))

    assert [i for i, s in bank if s is not None] == [0, 2]
    assert bank.sound_at(2).name == "s2"
    assert bank.filled_count() == 2
    assert bank.active_index == 0

def test_rebuild_ignores_out_of_range_slots():
    bank, _ = _bank()
    bank.rebuild([SlotResult(16, Decoded(make_buffer(), "u")), SlotResult(-1, Decoded(make_buffer(), "v"))])
    assert bank.filled_count() == 0

def test_trigger_plays_and_activates():
    bridge = SignalBridge()
    events = []
    bridge.connect(SIGNAL_PAD_TRIGGERED, lambda slot, played: events.append(("trig", slot, played)))
    bridge.connect(SIGNAL_ACTIVE_CHANGED, lambda slot: events.append(("active", slot)))

    bank, output = _bank(bridge)
    bank.rebuild(_results(True, True, True))
    events.clear()

    assert bank.trigger(2)
    assert bank.trigger(2)
    assert bank.active_index == 2
    assert bank.active_sound is bank.sound_at(2)
    assert len(output.played) == 2
    assert events == [("trig", 2, True), ("active", 2), ("trig", 2, True), ("active", 2)]

def test_trigger_empty_or_unknown_slot_is_noop():
    bank, output = _bank()
    bank.rebuild(_results(True, False))
    bank.trigger(0)

    assert not bank.trigger(1)
    assert not bank.trigger(16)
    assert not bank.trigger(-1)
    assert bank.active_index == 0
    assert len(output.played) == 1

def test_rebuild_resets_trim_and_active():
    bank, _ = _bank()
    bank.rebuild(_results(True, True))
    bank.trigger(1)
    region = bank.active_sound.trim_region
    region.pointer_down(0.0)
    region.pointer_move(300.0)
    region.pointer_up()

    bank.rebuild(_results(True, True))

    assert bank.active_index == 0
    assert bank.sound_at(1).trim_region is not region
    assert bank.sound_at(1).trim_region.left_px == 0.0

def test_rebuild_swaps_slots_in_one_step():
    bank, _ = _bank()
    bank.rebuild(_results(True))
    before = bank.slots
    seen = []

    def factory(decoded):
        # What a render tick would read while the new bank is being built
        seen.append((bank.slots is before, bank.active_sound))
        return _factory(decoded)

    bank.sound_factory = factory
    bank.rebuild(_results(True, True, True))

    assert all(same for same, _ in seen)
    assert all(active is before[0] for _, active in seen)
    assert bank.slots is not before
    assert bank.filled_count() == 3

def test_failed_factory_keeps_previous_slots():
    bank, _ = _bank()
    bank.rebuild(_results(True))
    before = bank.slots

    def factory(decoded):
        raise MemoryError("no room")

    bank.sound_factory = factory
    with pytest.raises(MemoryError):
        bank.rebuild(_results(True, True))
    assert bank.slots is before

def test_switching_pads_ends_a_drag_on_the_old_pad():
    bank, _ = _bank()
    bank.rebuild(_results(True, True))
    first = bank.sound_at(0).trim_region

    first.pointer_move(0.0)
    assert first.pointer_down()
    bank.trigger(1)
    # The release lands on the now active pad
    assert not bank.sound_at(1).trim_region.pointer_up()
    bank.trigger(0)
    first.pointer_move(50.0)

    assert first.drag_state.is_idle
    assert first.left_px == 0.0

def test_retrigger_keeps_drag_on_same_pad():
    bank, _ = _bank()
    bank.rebuild(_results(True))
    region = bank.sound_at(0).trim_region
    region.pointer_down(0.0)
    bank.trigger(0)
    region.pointer_move(50.0)
    assert region.left_px == 50.0

def test_rebuild_signal_and_clear():
    bridge = SignalBridge()
    filled = []
    bridge.connect(SIGNAL_BANK_REBUILT, filled.append)

    bank, _ = _bank(bridge)
    bank.rebuild(_results(True, True, False))
    bank.clear()

    assert filled == [2, 0]
    assert bank.active_sound is None


if __name__ == "__main__":
    test_new_bank_is_empty()
    test_rebuild_fills_decoded_slots_only()
    test_rebuild_ignores_out_of_range_slots()
    test_trigger_plays_and_activates()
    test_trigger_empty_or_unknown_slot_is_noop()
    test_rebuild_resets_trim_and_active()
    test_rebuild_swaps_slots_in_one_step()
    test_failed_factory_keeps_previous_slots()
    test_switching_pads_ends_a_drag_on_the_old_pad()
    test_retrigger_keeps_drag_on_same_pad()
    test_rebuild_signal_and_clear()
