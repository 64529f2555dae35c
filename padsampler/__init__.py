# padsampler/__init__.py
"""
padsampler - Core of a 16-pad drum sampler.

Core components:
- SampleAcquisitionPipeline: Concurrent fetch + decode of a preset's samples
- AudioDecodeClient: One locator -> decoded buffer, with coarse progress
- PadBank: 16 slots, active pad, trigger routing
- TrimRegion: Trim markers and their drag state machine
- RenderLoop: Frame loop repainting the active pad's trim overlay
- SamplerApp: Wiring plus the handlers a front end binds to
"""

from .config import (
    NUM_SLOTS,
    SamplerConfig,
    AcquisitionConfig,
    TrimConfig,
    RenderConfig,
)

from .acquisition import (
    Preset,
    SampleRef,
    Decoded,
    Failed,
    SlotResult,
    FailureReason,
    AudioDecodeClient,
    SampleAcquisitionPipeline,
    PresetCatalog,
)

from .audio import PCMBuffer, SoundfileDecoder
from .trim import TrimRegion
from .pads import Sound, PadBank, KeyMap
from .render import RenderLoop, DrawSurface
from .app import SamplerApp, PadState, PadView

__version__ = '0.1.0'

__all__ = [
    # Config
    'NUM_SLOTS',
    'SamplerConfig',
    'AcquisitionConfig',
    'TrimConfig',
    'RenderConfig',

    # Acquisition
    'Preset',
    'SampleRef',
    'Decoded',
    'Failed',
    'SlotResult',
    'FailureReason',
    'AudioDecodeClient',
    'SampleAcquisitionPipeline',
    'PresetCatalog',

    # Audio
    'PCMBuffer',
    'SoundfileDecoder',

    # Pads / trim / render
    'TrimRegion',
    'Sound',
    'PadBank',
    'KeyMap',
    'RenderLoop',
    'DrawSurface',

    # App
    'SamplerApp',
    'PadState',
    'PadView',
]
