"""
Race playback: engine state machine, color table and frame compositing.
"""
from playback.colors import RGB, ColorTable, DEFAULT_DRIVER_COLORS, default_color_table
from playback.engine import PlaybackEngine, PlaybackState
from playback.compositor import Bounds, DrawInstruction, FrameCompositor, compute_lit_state, normalize, quantize

__all__ = [
    'RGB', 'ColorTable', 'DEFAULT_DRIVER_COLORS', 'default_color_table',
    'PlaybackEngine', 'PlaybackState',
    'Bounds', 'DrawInstruction', 'FrameCompositor', 'compute_lit_state', 'normalize', 'quantize',
]
