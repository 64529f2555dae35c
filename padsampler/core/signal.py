# padsampler/core/signal.py
"""
SignalBridge - Observer hub routing sampler events between components.

The bank, the render loop and the app layer never hold references to each
other's internals; they talk through named signals on one shared bridge.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Optional
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)

# =============================================================================
# Signal Types
# =============================================================================

SIGNAL_PAD_TRIGGERED = 'pad_triggered'      # (slot_index, played)
SIGNAL_ACTIVE_CHANGED = 'active_changed'    # (slot_index,) - waveform must be redrawn
SIGNAL_BANK_REBUILT = 'bank_rebuilt'        # (filled_slot_count,)
SIGNAL_LOAD_STARTED = 'load_started'        # (generation, preset_name)
SIGNAL_LOAD_PROGRESS = 'load_progress'      # (slot_index, percent) - percent -1 means failed
SIGNAL_LOAD_FINISHED = 'load_finished'      # (generation, results)
SIGNAL_PRESETS_CHANGED = 'presets_changed'  # (presets,)


# =============================================================================
# Connection Handle
# =============================================================================

@dataclass
class Connection:
    """Handle to a signal connection."""
    signal: str
    callback_id: int
    bridge: SignalBridge = None

    def disconnect(self):
        if self.bridge:
            self.bridge._remove_connection(self.signal, self.callback_id)
            self.bridge = None


# =============================================================================
# Signal Bridge
# =============================================================================

class SignalBridge:
    """Central hub for signal routing."""

    def __init__(self):
        self._connections: Dict[str, Dict[int, Callable]] = {}
        self._next_id: int = 0
        self._emit_depth: int = 0
        self._pending_removes: List[tuple] = []

    def connect(self, signal: str, handler: Callable) -> Connection:
        if signal not in self._connections:
            self._connections[signal] = {}

        callback_id = self._next_id
        self._next_id += 1

        self._connections[signal][callback_id] = handler

        return Connection(signal=signal, callback_id=callback_id, bridge=self)

    def emit(self, signal: str, *args, **kwargs):
        """Call every handler of ``signal``; a raising handler is logged and skipped."""
        handlers = self._connections.get(signal, {})
        if not handlers:
            return

        self._emit_depth += 1

        try:
            for callback_id, handler in list(handlers.items()):
                try:
                    handler(*args, **kwargs)
                except Exception as e:
                    logger.error(f"Signal handler error [{signal}]: {e}")
        finally:
            self._emit_depth -= 1

            if self._emit_depth == 0 and self._pending_removes:
                for sig, cid in self._pending_removes:
                    self._do_remove(sig, cid)
                self._pending_removes.clear()

    def is_connected(self, signal: str) -> bool:
        return bool(self._connections.get(signal))

    def _remove_connection(self, signal: str, callback_id: int):
        if self._emit_depth > 0:
            self._pending_removes.append((signal, callback_id))
        else:
            self._do_remove(signal, callback_id)

    def _do_remove(self, signal: str, callback_id: int):
        if signal in self._connections:
            self._connections[signal].pop(callback_id, None)


# =============================================================================
# Convenience
# =============================================================================

class SignalEmitter:
    """Mixin class for objects that emit signals."""

    _bridge: SignalBridge = None

    def bind_bridge(self, bridge: SignalBridge):
        self._bridge = bridge

    def emit(self, signal: str, *args, **kwargs):
        if self._bridge:
            self._bridge.emit(signal, *args, **kwargs)

    def connect(self, signal: str, handler: Callable) -> Optional[Connection]:
        if self._bridge:
            return self._bridge.connect(signal, handler)
        return None
