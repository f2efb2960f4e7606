import time
from datetime import datetime, timedelta, timezone

import pytest

from core.countdown_engine import CountdownEngine, seconds_between
from core.cycle_store import CycleStore
from domain.models import utc_now


def _engine(store, scheduler, clock):
    return CountdownEngine(store, scheduler, clock=clock, tick_ms=1000)


def test_seconds_between_truncates():
    start = datetime(2026, 1, 1, 12, 0, 0)
    assert seconds_between(start, start + timedelta(seconds=65.9)) == 65
    assert seconds_between(start, start) == 0


def test_start_schedules_single_tick(store, scheduler, clock):
    engine = _engine(store, scheduler, clock)
    cycle_id = store.create_and_activate("A", 5)

    engine.start(cycle_id)

    assert engine.is_running
    assert len(scheduler.pending) == 1
    delay, _ = next(iter(scheduler.pending.values()))
    assert delay == 1000


def test_elapsed_recomputed_from_start_date(store, scheduler, clock, advance_and_tick):
    engine = _engine(store, scheduler, clock)
    engine.start(store.create_and_activate("A", 5))

    # timer fires late twice: 7 s then 58 s
    advance_and_tick(7)
    assert store.elapsed_seconds == 7
    advance_and_tick(58)
    assert store.elapsed_seconds == 65
    assert len(scheduler.pending) == 1


def test_completion_clamps_marks_finished_and_stops(store, scheduler, clock, advance_and_tick):
    engine = _engine(store, scheduler, clock)
    finished = []
    engine.set_on_finish(finished.append)
    cycle_id = store.create_and_activate("A", 5)
    engine.start(cycle_id)

    advance_and_tick(312)

    assert store.elapsed_seconds == 300
    assert store.get(cycle_id).finished_date == clock.now
    assert store.active_cycle_id is None
    assert not engine.is_running
    assert scheduler.pending == {}
    assert [c.id for c in finished] == [cycle_id]


def test_tick_after_finish_changes_nothing(store, scheduler, clock, advance_and_tick):
    engine = _engine(store, scheduler, clock)
    cycle_id = store.create_and_activate("A", 5)
    engine.start(cycle_id)
    advance_and_tick(300)
    finished_at = store.get(cycle_id).finished_date

    clock.advance(30)
    assert engine.tick() is False

    assert store.get(cycle_id).finished_date == finished_at
    assert store.elapsed_seconds == 300


def test_stale_tick_after_interrupt_is_dropped(store, scheduler, clock):
    engine = _engine(store, scheduler, clock)
    cycle_id = store.create_and_activate("A", 5)
    engine.start(cycle_id)
    clock.advance(10)
    engine.tick()
    store.interrupt()

    clock.advance(10)
    scheduler.fire_next()

    assert store.elapsed_seconds == 10
    assert store.get(cycle_id).finished_date is None
    assert not engine.is_running
    assert scheduler.pending == {}


def test_start_cancels_previous_binding(store, scheduler, clock):
    engine = _engine(store, scheduler, clock)
    first = store.create_and_activate("A", 5)
    engine.start(first)
    first_handle = next(iter(scheduler.pending))
    store.interrupt()

    second = store.create_and_activate("B", 5)
    engine.start(second)

    assert first_handle in scheduler.cancelled
    assert len(scheduler.pending) == 1
    assert engine.cycle_id == second


def test_context_exit_cancels_pending_tick(store, scheduler, clock):
    with _engine(store, scheduler, clock) as engine:
        engine.start(store.create_and_activate("A", 5))
        assert scheduler.pending

    assert scheduler.pending == {}
    assert not engine.is_running


def test_clock_going_backwards_never_decreases_elapsed(store, scheduler, clock, advance_and_tick):
    engine = _engine(store, scheduler, clock)
    engine.start(store.create_and_activate("A", 5))

    advance_and_tick(20)
    advance_and_tick(-15)

    assert store.elapsed_seconds == 20


def test_on_tick_stop_prevents_reschedule(store, scheduler, clock, advance_and_tick):
    engine = _engine(store, scheduler, clock)
    engine.set_on_tick(lambda snap: engine.stop())
    engine.start(store.create_and_activate("A", 5))

    advance_and_tick(1)

    assert scheduler.pending == {}


@pytest.fixture
def new_york_local_time(monkeypatch):
    """Process local time set to America/New_York for the test."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


class LocalWallClock:
    """Naive local datetimes from a POSIX timestamp, like datetime.now()."""

    def __init__(self, ts: float):
        self.ts = ts

    def __call__(self) -> datetime:
        return datetime.fromtimestamp(self.ts)


@pytest.mark.parametrize(
    "start_utc",
    [
        # 01:59:55 EST, clocks jump to 03:00 ten seconds later
        datetime(2026, 3, 8, 6, 59, 55, tzinfo=timezone.utc),
        # 01:59:55 EDT, clocks fall back to 01:00 ten seconds later
        datetime(2026, 11, 1, 5, 59, 55, tzinfo=timezone.utc),
    ],
    ids=["spring-forward", "fall-back"],
)
def test_dst_change_does_not_skew_elapsed(new_york_local_time, scheduler, start_utc):
    wall = LocalWallClock(start_utc.timestamp())
    store = CycleStore(clock=wall)
    engine = CountdownEngine(store, scheduler, clock=wall, tick_ms=1000)
    cycle_id = store.create_and_activate("Night shift", 25)
    engine.start(cycle_id)

    wall.ts += 10
    scheduler.fire_next()

    assert store.get(cycle_id).finished_date is None
    assert store.elapsed_seconds == 10
    assert engine.is_running


def test_shared_zoneinfo_across_dst():
    zoneinfo = pytest.importorskip("zoneinfo")
    try:
        zone = zoneinfo.ZoneInfo("America/New_York")
    except zoneinfo.ZoneInfoNotFoundError:
        pytest.skip("no tz database")
    start = datetime(2026, 3, 8, 1, 59, 55, tzinfo=zone)
    later = datetime(2026, 3, 8, 3, 0, 5, tzinfo=zone)

    assert seconds_between(start, later) == 10


def test_default_clock_is_utc():
    now = utc_now()
    assert now.tzinfo is timezone.utc
    assert abs(now.timestamp() - time.time()) < 5
