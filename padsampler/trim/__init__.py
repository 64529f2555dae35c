"""
Trim regions and their drag state machine.
"""

from .region import TrimRegion, Marker, DragState, DragPhase

__all__ = ['TrimRegion', 'Marker', 'DragState', 'DragPhase']
