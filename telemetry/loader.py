# telemetry/loader.py
"""
CSV ingestion for the LED layout and the recorded race.

Both loaders are all-or-nothing: any missing file, missing column or
malformed value raises LoadError and nothing is returned.
"""
import logging
from pathlib import Path
from typing import List, Sequence, Union

import numpy as np
import pandas as pd

from telemetry.model import GridPoint, TelemetryEvent


logger = logging.getLogger(__name__)

GEOMETRY_COLUMNS = ("x_led", "y_led")
EVENT_COLUMNS = ("date", "driver_number", "x_led", "y_led", "time_delta")

PathLike = Union[str, Path]


class LoadError(ValueError):
    """Raised when an input table cannot be loaded completely."""

    def __init__(self, path: PathLike, message: str):
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


def _line(df: pd.DataFrame, mask) -> int:
    """File line number of the first row flagged in mask."""
    # index counts data lines including blank ones; +2 for header and 1-based numbering
    return int(df.index[np.asarray(mask).argmax()]) + 2


def _read_table(path: PathLike, columns: Sequence[str]) -> pd.DataFrame:
    """Read a CSV as strings and check that every required cell is present."""
    path = Path(path)
    if not path.is_file():
        raise LoadError(path, "file not found")

    try:
        df = pd.read_csv(path, dtype=str, skipinitialspace=True, skip_blank_lines=False)
    except pd.errors.EmptyDataError as e:
        raise LoadError(path, "file is empty") from e
    except (pd.errors.ParserError, UnicodeDecodeError) as e:
        raise LoadError(path, f"malformed CSV ({e})") from e

    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise LoadError(path, f"missing column(s): {', '.join(missing)}")

    # Blank lines come through as all-NaN rows; drop them but keep the index
    df = df.dropna(how="all")
    df = df[list(columns)]
    blanks = df.isna().any(axis=1)
    if blanks.any():
        raise LoadError(path, f"row {_line(df, blanks)}: empty value")

    return df


def _floats(path: Path, df: pd.DataFrame, column: str) -> List[float]:
    try:
        values = pd.to_numeric(df[column], errors="raise").astype(float)
    except (ValueError, TypeError) as e:
        raise LoadError(path, f"column '{column}': {e}") from e

    bad = ~np.isfinite(values.to_numpy())
    if bad.any():
        pos = int(bad.argmax())
        raise LoadError(
            path,
            f"row {_line(df, bad)}: '{column}' must be finite, got {df[column].iloc[pos]!r}",
        )
    return values.tolist()


def _unsigned_ints(path: Path, df: pd.DataFrame, column: str) -> List[int]:
    try:
        values = pd.to_numeric(df[column], errors="raise")
    except (ValueError, TypeError) as e:
        raise LoadError(path, f"column '{column}': {e}") from e

    bad = (values < 0) | (values % 1 != 0)
    if bad.any():
        pos = int(bad.to_numpy().argmax())
        raise LoadError(
            path,
            f"row {_line(df, bad)}: '{column}' must be an unsigned integer, got {df[column].iloc[pos]!r}",
        )
    return [int(v) for v in values]


def load_grid_points(path: PathLike) -> List[GridPoint]:
    """
    Load the LED layout.

    Args:
        path: CSV with columns x_led, y_led (one row per LED, any order)

    Returns:
        List of GridPoint in file order
    """
    path = Path(path)
    df = _read_table(path, GEOMETRY_COLUMNS)
    if df.empty:
        raise LoadError(path, "no grid points")

    xs = _floats(path, df, "x_led")
    ys = _floats(path, df, "y_led")
    points = [GridPoint(x, y) for x, y in zip(xs, ys)]

    logger.info("Loaded %d grid points from %s", len(points), path)
    return points


def load_events(path: PathLike) -> List[TelemetryEvent]:
    """
    Load the recorded race. Row order is playback order and is kept as read.

    Args:
        path: CSV with columns date, driver_number, x_led, y_led, time_delta

    Returns:
        List of TelemetryEvent in file order
    """
    path = Path(path)
    df = _read_table(path, EVENT_COLUMNS)

    try:
        stamps = pd.to_datetime(df["date"], utc=True, format="ISO8601")
    except (ValueError, TypeError) as e:
        raise LoadError(path, f"column 'date': {e}") from e

    drivers = _unsigned_ints(path, df, "driver_number")
    xs = _floats(path, df, "x_led")
    ys = _floats(path, df, "y_led")
    delays = _unsigned_ints(path, df, "time_delta")

    events = [
        TelemetryEvent(
            timestamp=stamp.to_pydatetime(),
            entity_id=driver,
            x=x,
            y=y,
            delay_ms=delay,
        )
        for stamp, driver, x, y, delay in zip(stamps, drivers, xs, ys, delays)
    ]

    if not events:
        logger.warning("No events in %s, playback will show an empty track", path)
    else:
        logger.info("Loaded %d events from %s", len(events), path)
    return events
