from datetime import datetime, timedelta
from itertools import count

import pytest

from core.cycle_store import CycleStore
from services.cycle_service import CycleService


class FakeClock:
    """Manually advanced wall clock."""

    def __init__(self, start: datetime = datetime(2026, 1, 5, 9, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakeScheduler:
    """Collects delayed calls; tests fire them explicitly."""

    def __init__(self):
        self.pending = {}
        self.cancelled = []
        self._ids = count(1)

    def call_later(self, delay_ms, fn):
        handle = next(self._ids)
        self.pending[handle] = (delay_ms, fn)
        return handle

    def cancel(self, handle):
        self.cancelled.append(handle)
        self.pending.pop(handle, None)

    def fire_next(self) -> bool:
        if not self.pending:
            return False
        handle = min(self.pending)
        _, fn = self.pending.pop(handle)
        fn()
        return True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def store(clock):
    ids = count(1)
    return CycleStore(clock=clock, id_factory=lambda: f"cycle-{next(ids)}")


@pytest.fixture
def service(store, scheduler, clock):
    return CycleService(store, scheduler, clock=clock, tick_ms=1000)


@pytest.fixture
def advance_and_tick(clock, scheduler):
    """Move the clock forward and fire the pending tick, like a late timer."""

    def _run(seconds: float) -> bool:
        clock.advance(seconds)
        return scheduler.fire_next()

    return _run
