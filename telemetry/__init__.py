"""
Telemetry data types and CSV ingestion.
"""
from telemetry.model import GridPoint, TelemetryEvent
from telemetry.loader import LoadError, load_grid_points, load_events

__all__ = ['GridPoint', 'TelemetryEvent', 'LoadError', 'load_grid_points', 'load_events']
