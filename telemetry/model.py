# telemetry/model.py
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class GridPoint:
    x: float           # track-space X of the LED
    y: float           # track-space Y of the LED (increases upward)


@dataclass(frozen=True)
class TelemetryEvent:
    timestamp: datetime  # recorded time, display only
    entity_id: int       # driver number
    x: float             # track-space X, matches a GridPoint
    y: float             # track-space Y
    delay_ms: int        # gap since the previous event in the log
