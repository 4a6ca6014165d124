#!/usr/bin/env python3
"""
F1 LED Circuit Simulation - Main Entry Point

Replays a recorded race onto an LED map of the track, in sync with the
wall clock after START is pressed.

Usage:
    python main.py                              # Default CSV files
    python main.py --coords leds.csv --race race.csv
    python main.py --catch-up                   # Consume every due event each frame
"""
import sys
import logging

from dotenv import load_dotenv

# Load environment variables from .env file before reading settings
load_dotenv()

from config import ConfigError, apply_args, load_settings

try:
    _settings = load_settings()
except ConfigError:
    _settings = None

# Configure logging before the app modules are imported
logging.basicConfig(
    level=_settings.log_level if _settings else logging.INFO,
    format='[%(levelname)s] %(name)s: %(message)s',
    stream=sys.stdout
)

from PyQt5 import QtWidgets

from telemetry.loader import load_events, load_grid_points
from playback.colors import default_color_table
from playback.compositor import FrameCompositor
from playback.engine import PlaybackEngine
from ui.main_window import MainWindow


logger = logging.getLogger(__name__)


def main(argv=None):
    """
    Entry point for the LED circuit simulation.

    Args:
        argv: Command line (defaults to sys.argv)
    """
    if argv is None:
        argv = sys.argv

    print("="*60)
    print("🚀 F1 LED CIRCUIT SIMULATION STARTING...")
    print("="*60)

    settings = apply_args(load_settings(), argv)
    logger.info("Settings: %s", settings)

    # Load data up front; any error here is fatal
    print(f"📂 Loading LED layout from {settings.coords_csv}...")
    points = load_grid_points(settings.coords_csv)
    print(f"📂 Loading race data from {settings.race_csv}...")
    events = load_events(settings.race_csv)
    print(f"✅ {len(points)} LEDs, {len(events)} events")

    engine = PlaybackEngine(
        events,
        catch_up=settings.catch_up,
        max_steps_per_tick=settings.max_steps_per_tick,
    )
    compositor = FrameCompositor(
        points,
        default_color_table(),
        led_size=settings.led_size_px,
    )

    print("🔧 Creating Qt application...")
    app = QtWidgets.QApplication(argv)

    print("🖥️  Creating main window...")
    window = MainWindow(engine, compositor, frame_interval_ms=settings.frame_interval_ms)
    window.show()

    print("\n" + "="*60)
    print("✅ READY - press START to replay the race")
    print("="*60 + "\n")

    result = app.exec_()

    print("\n👋 Goodbye!")
    return result


def run():
    try:
        sys.exit(main())
    except Exception as e:
        print("\n" + "="*60)
        print("❌ FATAL ERROR:")
        print("="*60)
        print(f"Error type: {type(e).__name__}")
        print(f"Error message: {e}")
        import traceback
        print("\nFull traceback:")
        traceback.print_exc()
        print("="*60)
        sys.exit(1)


if __name__ == "__main__":
    run()
