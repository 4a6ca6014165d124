"""
Frame compositing: which LEDs are lit, in which color, and where to draw them.

Every frame is a full recompute from the consumed part of the event log;
nothing here holds state between frames.
"""
from dataclasses import dataclass
from typing import Dict, List, NamedTuple, Sequence, Tuple

import numpy as np

from telemetry.model import GridPoint, TelemetryEvent
from playback.colors import BLACK, RGB, ColorTable


# Coordinates are compared as scaled, truncated integers, never as floats
COORD_SCALE = 1_000_000

CoordKey = Tuple[int, int]
LitState = Dict[CoordKey, RGB]


def quantize(x: float, y: float, scale: int = COORD_SCALE) -> CoordKey:
    return int(x * scale), int(y * scale)


def compute_lit_state(
    events: Sequence[TelemetryEvent],
    cursor: int,
    colors: ColorTable,
) -> LitState:
    """
    Color of the latest consumed event at each track position.

    Only events[0..cursor) are considered. Later events overwrite earlier
    ones at the same quantized coordinate, whatever their timestamps say.
    """
    lit: LitState = {}
    for event in events[:cursor]:
        lit[quantize(event.x, event.y)] = colors.color_for(event.entity_id)
    return lit


@dataclass(frozen=True)
class Bounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @classmethod
    def from_points(cls, points: Sequence[GridPoint]) -> "Bounds":
        if not points:
            raise ValueError("cannot compute bounds of an empty layout")
        xs = np.array([p.x for p in points], dtype=float)
        ys = np.array([p.y for p in points], dtype=float)
        return cls(float(xs.min()), float(xs.max()), float(ys.min()), float(ys.max()))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


def _fraction(values: np.ndarray, lo: float, span: float) -> np.ndarray:
    # Zero-extent axis: every point sits at fraction 0
    if span == 0:
        return np.zeros_like(values)
    return (values - lo) / span


def normalize(
    xs: np.ndarray,
    ys: np.ndarray,
    bounds: Bounds,
    width: float,
    height: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Map track-space coordinates to canvas pixels.

    Track Y grows upward, canvas Y grows downward, so the vertical axis is
    flipped: min_y lands on the bottom edge and max_y on the top edge.
    """
    xs = np.asarray(xs, dtype=float)
    ys = np.asarray(ys, dtype=float)
    px = _fraction(xs, bounds.min_x, bounds.width) * width
    py = height - _fraction(ys, bounds.min_y, bounds.height) * height
    return px, py


class DrawInstruction(NamedTuple):
    x: float       # left edge in canvas pixels
    y: float       # top edge in canvas pixels
    size: float    # square edge length in pixels
    color: RGB


class FrameCompositor:
    """
    Turns (event log, cursor) into draw instructions for every LED.

    Args:
        points: LED layout; bounds are taken from it once
        colors: Driver color table
        base_color: Color of unlit LEDs
        led_size: Edge length of each drawn square in pixels
    """

    def __init__(
        self,
        points: Sequence[GridPoint],
        colors: ColorTable,
        base_color: RGB = BLACK,
        led_size: float = 20.0,
    ):
        self.points: Tuple[GridPoint, ...] = tuple(points)
        self.bounds = Bounds.from_points(self.points)
        self.colors = colors
        self.base_color = base_color
        self.led_size = led_size

        self._xs = np.array([p.x for p in self.points], dtype=float)
        self._ys = np.array([p.y for p in self.points], dtype=float)
        self._keys = [quantize(p.x, p.y) for p in self.points]

    def lit_state(self, events: Sequence[TelemetryEvent], cursor: int) -> LitState:
        return compute_lit_state(events, cursor, self.colors)

    def compose(
        self,
        events: Sequence[TelemetryEvent],
        cursor: int,
        width: float,
        height: float,
    ) -> List[DrawInstruction]:
        """
        Build one draw instruction per LED, in layout order.

        Args:
            events: Event log
            cursor: Number of consumed events
            width: Drawable canvas width in pixels
            height: Drawable canvas height in pixels
        """
        lit = self.lit_state(events, cursor)
        px, py = normalize(self._xs, self._ys, self.bounds, width, height)

        return [
            DrawInstruction(float(x), float(y), self.led_size, lit.get(key, self.base_color))
            for x, y, key in zip(px, py, self._keys)
        ]
