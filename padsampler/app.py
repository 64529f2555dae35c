"""
SamplerApp - The surface a GUI binds to.

Wires catalog -> pipeline -> pad bank -> render loop and exposes the
handlers a front end calls:

    app.on_pad_pressed(slot)
    app.on_key_pressed(key)        -> slot or None
    app.pointer_move(x) / pointer_down(x) / pointer_up() / pointer_leave()

plus ``pad_views`` (what each pad button should show) and progress callbacks
``on_progress(slot, percent)``, percent -1 meaning that slot failed.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, Union
import logging

from .config import NUM_SLOTS, SamplerConfig
from .core.signal import (
    SignalBridge,
    SIGNAL_LOAD_STARTED, SIGNAL_LOAD_PROGRESS, SIGNAL_LOAD_FINISHED, SIGNAL_PRESETS_CHANGED,
)
from .acquisition.catalog import PresetCatalog, UrlResolver
from .acquisition.client import AudioDecodeClient
from .acquisition.fetch import ByteFetcher, HttpByteFetcher
from .acquisition.models import Preset
from .acquisition.pipeline import SampleAcquisitionPipeline
from .acquisition.progress import FAILED
from .acquisition.results import Decoded, SlotResult
from .audio.decode import Decoder, SoundfileDecoder
from .pads.bank import PadBank
from .pads.keymap import KeyMap
from .pads.sound import AudioOutput, Sound
from .render.loop import RenderLoop
from .render.painters import WaveformDisplay
from .render.surface import DrawSurface

logger = logging.getLogger(__name__)


class PadState(Enum):
    EMPTY = auto()
    LOADING = auto()
    READY = auto()
    ERROR = auto()


@dataclass
class PadView:
    slot: int
    state: PadState = PadState.EMPTY
    progress: float = 0.0
    label: str = ""
    key: Optional[str] = None

    @property
    def enabled(self) -> bool:
        return self.state is PadState.READY


ProgressCallback = Callable[[int, float], None]


class SamplerApp:

    def __init__(self, output: AudioOutput, config: SamplerConfig = None,
                 fetcher: ByteFetcher = None, decoder: Decoder = None,
                 catalog: PresetCatalog = None, signals: SignalBridge = None,
                 on_progress: ProgressCallback = None):
        self.config = config or SamplerConfig()
        self.signals = signals or SignalBridge()
        self.on_progress = on_progress

        acq = self.config.acquisition
        self._fetcher = fetcher or HttpByteFetcher(timeout=acq.request_timeout, chunk_size=acq.chunk_size)
        self.catalog = catalog or PresetCatalog(acq.api_base, acq.catalog_path, timeout=acq.request_timeout)
        self.client = AudioDecodeClient(
            self._fetcher, decoder or SoundfileDecoder(),
            progress_step=acq.progress_step,
            unknown_total_scale=acq.unknown_total_scale,
        )
        self.pipeline = SampleAcquisitionPipeline(
            self.client,
            resolve_url=UrlResolver(acq.api_base, acq.presets_path),
            max_concurrency=acq.max_concurrency,
        )

        render = self.config.render
        self.waveform_surface = DrawSurface(render.canvas_width, render.canvas_height)
        self.overlay = DrawSurface(render.canvas_width, render.canvas_height)
        self.bank = PadBank(output, self._make_sound, signals=self.signals)
        self.render_loop = RenderLoop(self.bank, self.overlay, self.waveform_surface,
                                      fps=render.fps, signals=self.signals)
        self.keymap = KeyMap(self.config.keymap)

        self.presets: List[Preset] = []
        self.current_preset: Optional[Preset] = None
        self._generation = 0
        self._views = [self._empty_view(i) for i in range(NUM_SLOTS)]

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def refresh_presets(self) -> List[Preset]:
        self.presets = await self.catalog.fetch()
        self.signals.emit(SIGNAL_PRESETS_CHANGED, self.presets)
        return self.presets

    async def load_preset(self, preset: Union[Preset, int]) -> Optional[List[SlotResult]]:
        """Load a preset into the bank.

        Returns the slot results, or None when a newer load was requested
        while this one was in flight (its results are dropped).
        """
        if isinstance(preset, int):
            if not 0 <= preset < len(self.presets):
                raise IndexError(f"no preset #{preset} (have {len(self.presets)})")
            preset = self.presets[preset]

        self._generation += 1
        generation = self._generation
        count = min(NUM_SLOTS, len(preset.samples))
        self._views = [
            PadView(i, PadState.LOADING, 0.0, "", self.keymap.key_for(i)) if i < count else self._empty_view(i)
            for i in range(NUM_SLOTS)
        ]
        self.signals.emit(SIGNAL_LOAD_STARTED, generation, preset.name)
        logger.info("Loading preset '%s' (%d samples, generation %d)", preset.name, len(preset.samples), generation)

        results = await self.pipeline.load(
            preset, lambda slot, pct: self._handle_progress(generation, slot, pct))

        if generation != self._generation:
            logger.info("Discarding results of superseded load '%s' (generation %d)", preset.name, generation)
            return None

        self.bank.rebuild(results)
        self.current_preset = preset
        for result in results:
            view = self._views[result.slot_index]
            if isinstance(result.outcome, Decoded):
                view.state = PadState.READY
                view.progress = 100.0
                view.label = result.outcome.name or f"Sample {result.slot_index + 1}"
            else:
                view.state = PadState.ERROR
                view.label = "Error"
        self.signals.emit(SIGNAL_LOAD_FINISHED, generation, results)
        return results

    def _handle_progress(self, generation: int, slot: int, percent: float):
        if generation != self._generation:
            return
        view = self._views[slot]
        if percent == FAILED:
            view.state = PadState.ERROR
            view.progress = 100.0
        else:
            view.progress = max(0.0, min(100.0, percent))
        logger.debug("slot %d: %.0f%%", slot, percent)

        self.signals.emit(SIGNAL_LOAD_PROGRESS, slot, percent)
        if self.on_progress is not None:
            self.on_progress(slot, percent)

    def _make_sound(self, decoded: Decoded) -> Sound:
        width = self.config.render.canvas_width
        return Sound.create(
            decoded.buffer, width,
            display=WaveformDisplay.from_buffer(decoded.buffer, width),
            proximity_px=self.config.trim.proximity_px,
            min_separation_px=self.config.trim.min_separation_px,
            name=decoded.name,
            source_url=decoded.source_url,
        )

    def _empty_view(self, slot: int) -> PadView:
        return PadView(slot, PadState.EMPTY, 0.0, "", self.keymap.key_for(slot))

    # -------------------------------------------------------------------------
    # Triggers
    # -------------------------------------------------------------------------

    def on_pad_pressed(self, slot: int) -> bool:
        return self.bank.trigger(slot)

    def on_key_pressed(self, key: str) -> Optional[int]:
        """Trigger the pad mapped to ``key``; returns its slot, or None if unmapped."""
        slot = self.keymap.slot_for(key)
        if slot is not None:
            self.bank.trigger(slot)
        return slot

    @property
    def pad_views(self) -> List[PadView]:
        return list(self._views)

    # -------------------------------------------------------------------------
    # Trim overlay pointer events (active sound only)
    # -------------------------------------------------------------------------

    def pointer_move(self, x: float):
        sound = self.bank.active_sound
        if sound is not None:
            sound.trim_region.pointer_move(x)

    def pointer_down(self, x: Optional[float] = None) -> bool:
        sound = self.bank.active_sound
        return sound.trim_region.pointer_down(x) if sound is not None else False

    def pointer_up(self) -> bool:
        sound = self.bank.active_sound
        return sound.trim_region.pointer_up() if sound is not None else False

    def pointer_leave(self):
        sound = self.bank.active_sound
        if sound is not None:
            sound.trim_region.pointer_leave()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self):
        """Start the render loop on the running event loop."""
        return self.render_loop.start()

    async def aclose(self):
        self.render_loop.stop()
        aclose = getattr(self._fetcher, "aclose", None)
        if aclose is not None:
            await aclose()
