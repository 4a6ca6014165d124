import pytest

from playback.engine import PlaybackEngine
from tests.helpers import T0, FakeClock, make_event, ms


def make_log(*delays):
    return [make_event(44, i, 0, d) for i, d in enumerate(delays)]


def expected_deadline(start, events, cursor):
    return start + ms(sum(e.delay_ms for e in events[:cursor + 1]))


def test_new_engine_is_idle():
    events = make_log(100, 50)
    engine = PlaybackEngine(events, clock=FakeClock())

    assert engine.running is False
    assert engine.cursor == 0
    assert engine.next_deadline == T0 + ms(100)
    engine.check_invariants(full=True)


def test_tick_before_start_is_noop():
    engine = PlaybackEngine(make_log(100), clock=FakeClock())

    assert engine.tick(T0 + ms(10_000)) == 0
    assert engine.cursor == 0
    assert engine.running is False


def test_start_sets_first_deadline():
    engine = PlaybackEngine(make_log(100, 50), clock=FakeClock())

    engine.start(T0)

    assert engine.running is True
    assert engine.cursor == 0
    assert engine.race_start == T0
    assert engine.next_deadline == T0 + ms(100)


def test_start_uses_clock_when_no_time_given():
    clock = FakeClock(T0 + ms(5000))
    engine = PlaybackEngine(make_log(100), clock=clock)

    engine.start()

    assert engine.race_start == T0 + ms(5000)
    assert engine.next_deadline == T0 + ms(5100)


def test_tick_before_deadline_leaves_cursor():
    engine = PlaybackEngine(make_log(100, 50), clock=FakeClock())
    engine.start(T0)

    assert engine.tick(T0 + ms(99)) == 0
    assert engine.cursor == 0


def test_tick_at_deadline_advances_exactly_once():
    engine = PlaybackEngine(make_log(100, 50), clock=FakeClock())
    engine.start(T0)

    assert engine.tick(T0 + ms(100)) == 1
    assert engine.cursor == 1
    assert engine.next_deadline == T0 + ms(150)

    # Same instant again: next event not due yet
    assert engine.tick(T0 + ms(100)) == 0
    assert engine.cursor == 1


def test_one_step_per_tick_when_several_deadlines_passed():
    engine = PlaybackEngine(make_log(100, 50, 50, 50), clock=FakeClock())
    engine.start(T0)

    late = T0 + ms(10_000)
    assert engine.tick(late) == 1
    assert engine.cursor == 1
    assert engine.tick(late) == 1
    assert engine.cursor == 2


def test_deadline_invariant_for_every_cursor():
    events = make_log(100, 0, 250, 30, 1, 75)
    engine = PlaybackEngine(events, clock=FakeClock())
    engine.start(T0)

    now = T0
    while not engine.is_finished:
        assert engine.next_deadline == expected_deadline(T0, events, engine.cursor)
        engine.check_invariants(full=True)
        now = engine.next_deadline
        engine.tick(now)

    assert engine.cursor == len(events)
    engine.check_invariants(full=True)


def test_cursor_never_decreases_with_irregular_ticks():
    events = make_log(40, 40, 40, 40, 40)
    engine = PlaybackEngine(events, clock=FakeClock())
    engine.start(T0)

    seen = []
    for offset in (3, 17, 41, 42, 95, 96, 130, 400, 401, 402, 900):
        engine.tick(T0 + ms(offset))
        seen.append(engine.cursor)

    assert seen == sorted(seen)
    assert seen[-1] == len(events)


def test_holds_final_state_at_end_of_log():
    events = make_log(10, 10)
    engine = PlaybackEngine(events, clock=FakeClock())
    engine.start(T0)
    engine.tick(T0 + ms(10))
    engine.tick(T0 + ms(20))

    assert engine.is_finished
    final_deadline = engine.next_deadline

    for _ in range(5):
        assert engine.tick(T0 + ms(60_000)) == 0

    assert engine.cursor == len(events)
    assert engine.running is True
    assert engine.next_deadline == final_deadline
    assert engine.current_event() is None


@pytest.mark.parametrize("consumed", [0, 1, 2, 3])
def test_reset_at_any_cursor(consumed):
    events = make_log(10, 10, 10)
    engine = PlaybackEngine(events, clock=FakeClock())
    engine.start(T0)
    for i in range(consumed):
        engine.tick(T0 + ms(10 * (i + 1)))
    assert engine.cursor == consumed

    later = T0 + ms(5000)
    engine.reset(later)

    assert engine.cursor == 0
    assert engine.running is False
    assert engine.race_start == later
    engine.check_invariants(full=True)

    # Ticks before the next start() do nothing
    assert engine.tick(later + ms(60_000)) == 0
    assert engine.cursor == 0


def test_stop_is_reset():
    engine = PlaybackEngine(make_log(10), clock=FakeClock())
    engine.start(T0)
    engine.tick(T0 + ms(10))

    engine.stop(T0 + ms(20))

    assert engine.cursor == 0
    assert engine.running is False


def test_start_while_running_restarts():
    events = make_log(100, 100, 100)
    engine = PlaybackEngine(events, clock=FakeClock())
    engine.start(T0)
    engine.tick(T0 + ms(100))
    engine.tick(T0 + ms(200))
    assert engine.cursor == 2

    restart = T0 + ms(1000)
    engine.start(restart)

    assert engine.running is True
    assert engine.cursor == 0
    assert engine.next_deadline == restart + ms(100)
    assert engine.tick(restart + ms(50)) == 0


def test_advancement_follows_sequence_order_not_timestamps():
    events = [
        make_event(1, 0, 0, 10, timestamp=T0 + ms(500)),
        make_event(16, 1, 0, 10, timestamp=T0),
    ]
    engine = PlaybackEngine(events, clock=FakeClock())
    engine.start(T0)

    assert engine.current_event() is events[0]
    engine.tick(T0 + ms(10))
    assert engine.current_event() is events[1]


def test_catch_up_consumes_all_due_events():
    events = make_log(100, 50, 50, 50)
    engine = PlaybackEngine(events, clock=FakeClock(), catch_up=True)
    engine.start(T0)

    assert engine.tick(T0 + ms(200)) == 3
    assert engine.cursor == 3
    assert engine.next_deadline == T0 + ms(250)
    engine.check_invariants(full=True)


def test_catch_up_is_bounded_per_tick():
    events = make_log(*([10] * 20))
    engine = PlaybackEngine(events, clock=FakeClock(), catch_up=True, max_steps_per_tick=4)
    engine.start(T0)

    late = T0 + ms(60_000)
    assert engine.tick(late) == 4
    assert engine.tick(late) == 4
    assert engine.cursor == 8


def test_invalid_max_steps_rejected():
    with pytest.raises(ValueError):
        PlaybackEngine(make_log(10), max_steps_per_tick=0)


def test_empty_log_is_finished_immediately():
    engine = PlaybackEngine([], clock=FakeClock())
    engine.start(T0)

    assert engine.is_finished
    assert engine.next_deadline == T0
    assert engine.tick(T0 + ms(1000)) == 0
    assert engine.current_event() is None
    engine.check_invariants(full=True)


def test_state_snapshot():
    engine = PlaybackEngine(make_log(100), clock=FakeClock())
    engine.start(T0)

    state = engine.state

    assert state.running is True
    assert state.cursor == 0
    assert state.race_start == T0
    assert state.next_deadline == T0 + ms(100)


def test_default_clock_follows_monotonic_time(monkeypatch):
    from playback import engine as engine_module

    anchor = engine_module._MONOTONIC_ANCHOR
    monkeypatch.setattr(engine_module.time, "monotonic", lambda: anchor + 1.5)

    assert engine_module.monotonic_utc_now() == engine_module._WALL_ANCHOR + ms(1500)


def test_default_clock_drives_engine(monkeypatch):
    from playback import engine as engine_module

    offset = [0.0]
    anchor = engine_module._MONOTONIC_ANCHOR
    monkeypatch.setattr(engine_module.time, "monotonic", lambda: anchor + offset[0])

    engine = PlaybackEngine(make_log(100, 50))
    engine.start()
    assert engine.tick() == 0

    offset[0] = 0.2
    assert engine.tick() == 1
    assert engine.cursor == 1


def test_frame_check_is_constant_time_and_full_check_recomputes():
    events = make_log(100, 50, 25)
    engine = PlaybackEngine(events, clock=FakeClock())
    engine.start(T0)
    engine.tick(T0 + ms(100))

    # Corrupt the running total consistently with the deadline
    engine._elapsed_ms += 7
    engine.next_deadline += ms(7)

    engine.check_invariants()
    with pytest.raises(AssertionError):
        engine.check_invariants(full=True)


def test_frame_check_catches_inconsistent_deadline():
    engine = PlaybackEngine(make_log(100), clock=FakeClock())
    engine.start(T0)
    engine.next_deadline += ms(1)

    with pytest.raises(AssertionError):
        engine.check_invariants()
