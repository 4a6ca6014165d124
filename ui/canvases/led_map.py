"""
LED map canvas: draws the track as a grid of filled squares.
"""
from typing import Sequence, Tuple

from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.collections import PatchCollection
from matplotlib.figure import Figure
from matplotlib.patches import Rectangle

from playback.compositor import DrawInstruction
from ui.styles import CANVAS_BG


class LedMapCanvas(FigureCanvas):
    """
    Matplotlib canvas that paints one square per LED.

    The axes cover the whole figure and use widget pixels as data units,
    with Y growing downward, so DrawInstruction coordinates are used as-is.
    """

    def __init__(self, parent=None, width=8, height=6, dpi=100):
        """
        Initialize LED map canvas.

        Args:
            parent: Parent QWidget
            width: Figure width in inches
            height: Figure height in inches
            dpi: Dots per inch resolution
        """
        self.fig = Figure(figsize=(width, height), dpi=dpi)
        self.ax = self.fig.add_axes([0.0, 0.0, 1.0, 1.0])
        super().__init__(self.fig)
        self.setParent(parent)

        self.fig.patch.set_facecolor(CANVAS_BG)
        self.ax.set_facecolor(CANVAS_BG)
        self.ax.set_axis_off()

        self.collection = None

    def drawable_size(self, led_size: float) -> Tuple[float, float]:
        """Canvas area available to LED top-left corners, so every square fits."""
        return (
            max(self.width() - led_size, 0.0),
            max(self.height() - led_size, 0.0),
        )

    def draw_leds(self, instructions: Sequence[DrawInstruction]):
        """
        Replace the current frame with the given squares.

        Args:
            instructions: One DrawInstruction per LED
        """
        if self.collection is not None:
            self.collection.remove()
            self.collection = None

        self.ax.set_xlim(0, max(self.width(), 1))
        self.ax.set_ylim(max(self.height(), 1), 0)

        if instructions:
            squares = [Rectangle((i.x, i.y), i.size, i.size) for i in instructions]
            self.collection = PatchCollection(
                squares,
                facecolors=[i.color.hex for i in instructions],
                edgecolors="none",
            )
            self.ax.add_collection(self.collection)

        self.draw_idle()
