"""
Matplotlib canvas widgets for the LED circuit.
"""
from ui.canvases.led_map import LedMapCanvas

__all__ = ['LedMapCanvas']
