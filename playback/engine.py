"""
Time-synchronized playback of a recorded race.

The engine owns the play state (idle/running), the cursor into the event
log and the wall-clock deadline at which the next event becomes due.
The host calls tick() once per frame; the cursor only moves forward while
running and is rewound by start() and reset().

Deadline invariant, for cursor < len(events):

    next_deadline == race_start + sum(delay_ms of events[0..=cursor])

Once the cursor reaches len(events) playback holds on the final frame
until reset() or start().
"""
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Sequence, Tuple

from telemetry.model import TelemetryEvent


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


# Wall clock is sampled once at import; afterwards "now" advances only with time.monotonic()
_WALL_ANCHOR = datetime.now(timezone.utc)
_MONOTONIC_ANCHOR = time.monotonic()


def monotonic_utc_now() -> datetime:
    return _WALL_ANCHOR + timedelta(seconds=time.monotonic() - _MONOTONIC_ANCHOR)


@dataclass(frozen=True)
class PlaybackState:
    running: bool
    cursor: int
    race_start: datetime
    next_deadline: datetime


class PlaybackEngine:
    """
    Replays an event log against the wall clock.

    Args:
        events: Event log in playback order (copied, never mutated)
        clock: Returns "now" (monotonic UTC by default); used when start/reset/tick get no explicit time
        catch_up: If False (default) a tick advances at most one event even
                  when several deadlines have passed. If True, a tick keeps
                  advancing while due, up to max_steps_per_tick events.
        max_steps_per_tick: Upper bound on events consumed by a single tick
                            in catch-up mode
    """

    def __init__(
        self,
        events: Sequence[TelemetryEvent],
        clock: Optional[Clock] = None,
        catch_up: bool = False,
        max_steps_per_tick: int = 50,
    ):
        if max_steps_per_tick < 1:
            raise ValueError("max_steps_per_tick must be >= 1")

        self._events: Tuple[TelemetryEvent, ...] = tuple(events)
        self._clock: Clock = clock or monotonic_utc_now
        self.catch_up = catch_up
        self.max_steps_per_tick = max_steps_per_tick

        self.running = False
        self.cursor = 0
        self.race_start: datetime = self._clock()
        self.next_deadline: datetime = self.race_start
        # Running prefix sum of delay_ms over events[0..=cursor]
        self._elapsed_ms = 0

        self._rewind(self.race_start)

    # ------------------ Read-only views ------------------ #

    @property
    def events(self) -> Tuple[TelemetryEvent, ...]:
        return self._events

    @property
    def is_finished(self) -> bool:
        return self.cursor >= len(self._events)

    @property
    def state(self) -> PlaybackState:
        return PlaybackState(
            running=self.running,
            cursor=self.cursor,
            race_start=self.race_start,
            next_deadline=self.next_deadline,
        )

    def current_event(self) -> Optional[TelemetryEvent]:
        """The next event to be consumed, or None once the log is exhausted."""
        if self.is_finished:
            return None
        return self._events[self.cursor]

    # ------------------ Controls ------------------ #

    def start(self, now: Optional[datetime] = None) -> None:
        """Start (or restart) playback from the first event."""
        if now is None:
            now = self._clock()
        if self.running:
            logger.info("Restarting playback at cursor %d", self.cursor)
        self._rewind(now)
        self.running = True
        logger.info("Playback started: %d events", len(self._events))

    def reset(self, now: Optional[datetime] = None) -> None:
        """Stop playback and rewind to the first event."""
        if now is None:
            now = self._clock()
        self.running = False
        self._rewind(now)
        logger.info("Playback reset")

    stop = reset

    def tick(self, now: Optional[datetime] = None) -> int:
        """
        Advance the cursor if the next event is due.

        Args:
            now: Current wall-clock time (defaults to the engine clock)

        Returns:
            Number of events consumed by this tick
        """
        if not self.running:
            return 0
        if now is None:
            now = self._clock()

        limit = self.max_steps_per_tick if self.catch_up else 1
        steps = 0
        while steps < limit and not self.is_finished and now >= self.next_deadline:
            self._advance()
            steps += 1
        return steps

    # ------------------ Internals ------------------ #

    def _rewind(self, now: datetime) -> None:
        self.cursor = 0
        self.race_start = now
        self._elapsed_ms = self._events[0].delay_ms if self._events else 0
        self.next_deadline = now + timedelta(milliseconds=self._elapsed_ms)

    def _advance(self) -> None:
        self.cursor = min(self.cursor + 1, len(self._events))

        if self.cursor < len(self._events):
            self._elapsed_ms += self._events[self.cursor].delay_ms
            self.next_deadline = self.race_start + timedelta(milliseconds=self._elapsed_ms)
            logger.debug("Advanced to event %d, next due at %s", self.cursor, self.next_deadline)
        else:
            logger.info("Reached end of race log (%d events), holding final frame", len(self._events))

    def check_invariants(self, full: bool = False) -> None:
        """
        Assert that cursor and deadline are consistent. Stripped under -O.

        Args:
            full: Also recompute the delay prefix sum from scratch (O(n));
                  the default check is O(1) and safe to run every frame
        """
        n = len(self._events)
        assert 0 <= self.cursor <= n, f"cursor {self.cursor} out of bounds [0, {n}]"
        assert self.next_deadline == self.race_start + timedelta(milliseconds=self._elapsed_ms), (
            f"deadline {self.next_deadline} inconsistent with cursor {self.cursor}"
        )

        if full:
            last = min(self.cursor, n - 1)
            expected_ms = sum(e.delay_ms for e in self._events[:last + 1])
            assert self._elapsed_ms == expected_ms, (
                f"running delay total {self._elapsed_ms} != {expected_ms}"
            )
