"""
Main window for the F1 LED circuit simulation.
"""
import logging

from PyQt5 import QtCore
from PyQt5.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from playback.compositor import FrameCompositor
from playback.engine import PlaybackEngine
from ui.canvases import LedMapCanvas
from ui.styles import DARK_STYLESHEET, TIMESTAMP_PLACEHOLDER


logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Host window for race playback.

    Displays:
    - Timestamp of the next event to be replayed
    - START / STOP controls
    - LED map of the track

    A QTimer drives the frame loop: each timeout ticks the engine,
    composes the current frame and repaints the LED map.
    """

    def __init__(
        self,
        engine: PlaybackEngine,
        compositor: FrameCompositor,
        frame_interval_ms: int = 16,
    ):
        super().__init__()

        self.engine = engine
        self.compositor = compositor

        self.setWindowTitle("F1-LED-CIRCUIT SIMULATION")
        self.resize(1200, 800)

        central = QWidget()
        self.setCentralWidget(central)

        root_layout = QVBoxLayout()
        root_layout.setContentsMargins(0, 0, 0, 0)
        root_layout.setSpacing(0)
        central.setLayout(root_layout)

        root_layout.addWidget(self._build_top_bar())

        self.led_canvas = LedMapCanvas(self)
        root_layout.addWidget(self.led_canvas, 1)

        self.setStyleSheet(DARK_STYLESHEET)

        self.frame_timer = QtCore.QTimer(self)
        self.frame_timer.setInterval(frame_interval_ms)
        self.frame_timer.timeout.connect(self.on_frame)
        self.frame_timer.start()

    def _build_top_bar(self):
        """Build top bar: timestamp label + START/STOP buttons."""
        bar = QFrame()
        bar.setObjectName("topBar")
        layout = QHBoxLayout()
        layout.setContentsMargins(8, 4, 8, 4)
        bar.setLayout(layout)

        self.timestamp_label = QLabel(TIMESTAMP_PLACEHOLDER)
        self.timestamp_label.setObjectName("timestampLabel")

        self.status_label = QLabel("⏸️ IDLE")

        self.start_button = QPushButton("START")
        self.start_button.setObjectName("startButton")
        self.start_button.clicked.connect(self.on_start)

        self.stop_button = QPushButton("STOP")
        self.stop_button.setObjectName("stopButton")
        self.stop_button.clicked.connect(self.on_stop)

        layout.addWidget(self.timestamp_label)
        layout.addWidget(self.status_label)
        layout.addStretch()
        layout.addWidget(self.start_button)
        layout.addWidget(self.stop_button)

        return bar

    # ==========================================================================
    # Controls
    # ==========================================================================

    def on_start(self):
        self.engine.start()
        self.on_frame()

    def on_stop(self):
        self.engine.reset()
        self.on_frame()

    # ==========================================================================
    # Frame loop
    # ==========================================================================

    def on_frame(self):
        """Tick the engine and repaint the current frame."""
        self.engine.tick()
        self.engine.check_invariants()

        self._update_labels()

        width, height = self.led_canvas.drawable_size(self.compositor.led_size)
        instructions = self.compositor.compose(
            self.engine.events, self.engine.cursor, width, height
        )
        self.led_canvas.draw_leds(instructions)

    def _update_labels(self):
        event = self.engine.current_event()
        if event is None:
            self.timestamp_label.setText(TIMESTAMP_PLACEHOLDER)
        else:
            # milliseconds only
            self.timestamp_label.setText(event.timestamp.strftime("%H:%M:%S.%f")[:-3])

        if not self.engine.running:
            self.status_label.setText("⏸️ IDLE")
        elif self.engine.is_finished:
            self.status_label.setText("🏁 FINISHED")
        else:
            self.status_label.setText(f"🏎️ RUNNING {self.engine.cursor}/{len(self.engine.events)}")

    def closeEvent(self, event):
        self.frame_timer.stop()
        logger.info("Window closed, frame loop stopped")
        super().closeEvent(event)
