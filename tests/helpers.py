from datetime import datetime, timedelta, timezone

from telemetry.model import GridPoint, TelemetryEvent


T0 = datetime(2023, 3, 5, 15, 0, 0, tzinfo=timezone.utc)


def ms(n):
    return timedelta(milliseconds=n)


def make_event(entity_id, x, y, delay_ms, timestamp=None):
    return TelemetryEvent(
        timestamp=timestamp or T0,
        entity_id=entity_id,
        x=float(x),
        y=float(y),
        delay_ms=delay_ms,
    )


def make_points(*coords):
    return [GridPoint(float(x), float(y)) for x, y in coords]


class FakeClock:
    """Callable clock whose time is set by the test."""

    def __init__(self, now=T0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, millis):
        self.now = self.now + ms(millis)
