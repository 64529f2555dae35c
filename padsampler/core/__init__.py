"""
Core plumbing: signal routing and scalar math.
"""

from .signal import (
    SignalBridge,
    SignalEmitter,
    Connection,
    SIGNAL_PAD_TRIGGERED,
    SIGNAL_ACTIVE_CHANGED,
    SIGNAL_BANK_REBUILT,
    SIGNAL_LOAD_STARTED,
    SIGNAL_LOAD_PROGRESS,
    SIGNAL_LOAD_FINISHED,
    SIGNAL_PRESETS_CHANGED,
)
from .mathutil import clamp, lerp, inverse_lerp, remap

__all__ = [
    'SignalBridge',
    'SignalEmitter',
    'Connection',
    'SIGNAL_PAD_TRIGGERED',
    'SIGNAL_ACTIVE_CHANGED',
    'SIGNAL_BANK_REBUILT',
    'SIGNAL_LOAD_STARTED',
    'SIGNAL_LOAD_PROGRESS',
    'SIGNAL_LOAD_FINISHED',
    'SIGNAL_PRESETS_CHANGED',
    'clamp', 'lerp', 'inverse_lerp', 'remap',
]
