"""
Pads: sounds, the 16-slot bank and keyboard layouts.
"""

from .sound import Sound, AudioOutput
from .bank import PadBank, SoundFactory
from .keymap import KeyMap, pad_grid_order, KEYCODE_TO_SLOT, QWERTY, AZERTY

__all__ = [
    'Sound', 'AudioOutput',
    'PadBank', 'SoundFactory',
    'KeyMap', 'pad_grid_order', 'KEYCODE_TO_SLOT', 'QWERTY', 'AZERTY',
]
