"""
Keyboard layouts for the 4x4 pad grid.

Slots are numbered bottom-left to top-right, like an MPC:

    12 13 14 15
     8  9 10 11
     4  5  6  7
     0  1  2  3
"""

from __future__ import annotations
from typing import Dict, List, Optional

GRID_ROWS = 4
GRID_COLS = 4

# Physical key codes (layout independent)
KEYCODE_TO_SLOT: Dict[str, int] = {
    'Digit1': 12, 'Digit2': 13, 'Digit3': 14, 'Digit4': 15,
    'KeyQ': 8, 'KeyW': 9, 'KeyE': 10, 'KeyR': 11,
    'KeyA': 4, 'KeyS': 5, 'KeyD': 6, 'KeyF': 7,
    'KeyZ': 0, 'KeyX': 1, 'KeyC': 2, 'KeyV': 3,
}

QWERTY: Dict[str, int] = {
    '1': 12, '2': 13, '3': 14, '4': 15,
    'q': 8, 'w': 9, 'e': 10, 'r': 11,
    'a': 4, 's': 5, 'd': 6, 'f': 7,
    'z': 0, 'x': 1, 'c': 2, 'v': 3,
}

# French keyboards: the digit row types & é " ' unshifted
AZERTY: Dict[str, int] = {
    '&': 12, 'é': 13, '"': 14, "'": 15,
    'a': 8, 'z': 9, 'e': 10, 'r': 11,
    'q': 4, 's': 5, 'd': 6, 'f': 7,
    'w': 0, 'x': 1, 'c': 2, 'v': 3,
}

LAYOUTS: Dict[str, Dict[str, int]] = {
    'qwerty': QWERTY,
    'azerty': AZERTY,
}


class KeyMap:
    """Maps key names (characters or ``KeyQ``-style codes) to slots."""

    def __init__(self, layout: str = 'qwerty'):
        try:
            self._chars = LAYOUTS[layout.lower()]
        except KeyError:
            raise ValueError(f"unknown keymap layout {layout!r}; choose from {sorted(LAYOUTS)}") from None
        self.layout = layout.lower()

    def slot_for(self, key: str) -> Optional[int]:
        if not key:
            return None
        if key in KEYCODE_TO_SLOT:
            return KEYCODE_TO_SLOT[key]
        return self._chars.get(key.lower())

    def key_for(self, slot: int) -> Optional[str]:
        for key, s in self._chars.items():
            if s == slot:
                return key
        return None


def pad_grid_order() -> List[int]:
    """Slot indices in on-screen order, top row first."""
    return [row * GRID_COLS + col for row in reversed(range(GRID_ROWS)) for col in range(GRID_COLS)]
