import asyncio
import random
from collections import defaultdict

from padsampler.acquisition.catalog import UrlResolver
from padsampler.acquisition.client import AudioDecodeClient
from padsampler.acquisition.errors import FailureReason, TransferError
from padsampler.acquisition.models import Preset, SampleRef
from padsampler.acquisition.pipeline import SampleAcquisitionPipeline
from padsampler.acquisition.progress import DONE, FAILED
from padsampler.acquisition.results import Decoded, Failed
from padsampler.pads.bank import PadBank
from padsampler.pads.sound import Sound

from conftest import FakeFetcher, FakeDecoder, RecordingOutput, make_preset


def _pipeline(fetcher, **kwargs):
    return SampleAcquisitionPipeline(AudioDecodeClient(fetcher, FakeDecoder()), **kwargs)


def _load(pipeline, preset):
    progress = defaultdict(list)
    results = asyncio.run(pipeline.load(preset, lambda slot, pct: progress[slot].append(pct)))
    return results, progress


def test_results_keep_input_order_under_shuffled_latency():
    urls = [f"http://x/{i}.wav" for i in range(12)]
    rng = random.Random(7)
    delays = {u: rng.uniform(0.0, 0.05) for u in urls}
    # Make the first sample the slowest for good measure
    delays[urls[0]] = 0.08

    results, _ = _load(_pipeline(FakeFetcher(delays=delays)), make_preset(urls))

    assert [r.slot_index for r in results] == list(range(12))
    assert [r.outcome.source_url for r in results] == urls

def test_only_first_sixteen_samples_are_fetched():
    urls = [f"http://x/{i}.wav" for i in range(20)]
    fetcher = FakeFetcher()
    results, progress = _load(_pipeline(fetcher), make_preset(urls))

    assert len(results) == 16
    assert sorted(fetcher.calls) == sorted(urls[:16])
    assert set(progress) == set(range(16))

def test_one_failure_does_not_affect_siblings():
    urls = [f"http://x/{i}.wav" for i in range(6)]
    fetcher = FakeFetcher(
        payloads={urls[3]: TransferError("connection reset", locator=urls[3])},
        delays={urls[3]: 0.0, urls[5]: 0.03},
    )
    results, progress = _load(_pipeline(fetcher), make_preset(urls))

    assert [r.ok for r in results] == [True, True, True, False, True, True]
    assert results[3].outcome.reason is FailureReason.TRANSFER
    assert progress[3] == [FAILED]
    assert progress[5][-1] == DONE

def test_progress_per_slot_is_monotone_and_terminal():
    urls = ["http://x/a.wav", "http://x/bad.wav", "http://x/c.wav"]
    fetcher = FakeFetcher(payloads={"http://x/bad.wav": b"BAD" * 40})
    _, progress = _load(_pipeline(fetcher), make_preset(urls))

    for slot, events in progress.items():
        assert events[-1] in (DONE, FAILED)
        body = events[:-1] if events[-1] == FAILED else events
        assert body == sorted(body)
    assert progress[1][-1] == FAILED

def test_empty_preset_has_no_side_effects():
    fetcher = FakeFetcher()
    pipeline = _pipeline(fetcher)
    calls = []

    assert asyncio.run(pipeline.load(Preset(name="empty"), lambda *a: calls.append(a))) == []
    assert asyncio.run(pipeline.load(None)) == []
    assert fetcher.calls == []
    assert calls == []

def test_concurrency_limit():
    urls = [f"http://x/{i}.wav" for i in range(8)]
    fetcher = FakeFetcher(delays={u: 0.01 for u in urls})
    results, _ = _load(_pipeline(fetcher, max_concurrency=2), make_preset(urls))

    assert all(r.ok for r in results)
    assert fetcher.max_in_flight <= 2

def test_unlimited_concurrency_overlaps_fetches():
    urls = [f"http://x/{i}.wav" for i in range(8)]
    fetcher = FakeFetcher(delays={u: 0.01 for u in urls})
    _load(_pipeline(fetcher), make_preset(urls))
    assert fetcher.max_in_flight == 8

def test_urls_are_resolved_before_fetching():
    fetcher = FakeFetcher()
    pipeline = _pipeline(fetcher, resolve_url=UrlResolver("http://api:3000"))
    preset = Preset(name="808", samples=(
        SampleRef("./808/Kick 01.wav", name="Kick"),
        SampleRef("https://cdn.example/hat.wav"),
    ))
    results, _ = _load(pipeline, preset)

    assert sorted(fetcher.calls) == ["http://api:3000/presets/808/Kick%2001.wav", "https://cdn.example/hat.wav"]
    assert results[0].outcome.name == "Kick"
    assert results[1].outcome.name == "hat.wav"

def test_a_empty_b_end_to_end():
    preset = make_preset(["http://x/a.wav", "", "http://x/b.wav"])
    fetcher = FakeFetcher(delays={"http://x/a.wav": 0.02})
    results, progress = _load(_pipeline(fetcher), preset)

    assert isinstance(results[0].outcome, Decoded)
    assert isinstance(results[1].outcome, Failed)
    assert results[1].outcome.reason is FailureReason.EMPTY_LOCATOR
    assert isinstance(results[2].outcome, Decoded)
    assert progress[0][-1] == DONE
    assert progress[1] == [FAILED]
    assert progress[2][-1] == DONE
    assert sorted(fetcher.calls) == ["http://x/a.wav", "http://x/b.wav"]

    output = RecordingOutput()
    bank = PadBank(output, lambda d: Sound.create(d.buffer, 800, name=d.name, source_url=d.source_url))
    bank.rebuild(results)

    assert bank.sound_at(0).source_url == "http://x/a.wav"
    assert bank.sound_at(1) is None
    assert bank.sound_at(2).source_url == "http://x/b.wav"
    assert all(bank.sound_at(i) is None for i in range(3, 16))
    assert bank.active_index == 0

    assert bank.trigger(2)
    assert not bank.trigger(1)
    assert len(output.played) == 1
    _, start, end = output.played[0]
    assert (start, end) == (0.0, bank.sound_at(2).duration)


if __name__ == "__main__":
    test_results_keep_input_order_under_shuffled_latency()
    test_only_first_sixteen_samples_are_fetched()
    test_one_failure_does_not_affect_siblings()
    test_progress_per_slot_is_monotone_and_terminal()
    test_empty_preset_has_no_side_effects()
    test_concurrency_limit()
    test_unlimited_concurrency_overlaps_fetches()
    test_urls_are_resolved_before_fetching()
    test_a_empty_b_end_to_end()
