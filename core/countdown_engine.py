# -*- coding: utf-8 -*-

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional, Protocol

from core.cycle_store import CycleStore
from domain.models import Cycle, utc_now
from utils.logging import get_logger

logger = get_logger(__name__)


class Scheduler(Protocol):
    """One-shot delayed calls, e.g. Tk's after/after_cancel."""

    def call_later(self, delay_ms: int, fn: Callable[[], None]) -> Any:
        ...

    def cancel(self, handle: Any) -> None:
        ...


@dataclass(frozen=True)
class EngineSnapshot:
    cycle_id: Optional[str]
    elapsed_seconds: int
    is_running: bool


def seconds_between(start: datetime, now: datetime) -> int:
    # POSIX timestamps, so DST shifts and shared tzinfo never skew the delta;
    # negative when the clock went backwards
    return int(now.timestamp() - start.timestamp())


class CountdownEngine:
    """
    Drift-corrected countdown (no Tkinter).

    Elapsed time is recomputed from the cycle's start_date on every tick, so
    late or skipped ticks never make the count wrong. The engine holds at
    most one pending tick; the next one is scheduled from inside the current.
    """

    def __init__(
        self,
        store: CycleStore,
        scheduler: Scheduler,
        clock: Callable[[], datetime] = utc_now,
        tick_ms: int = 1000,
    ):
        self.store = store
        self.scheduler = scheduler
        self.clock = clock
        self.tick_ms = int(tick_ms)

        self._cycle_id: Optional[str] = None
        self._tick_job: Any = None

        self._on_tick: Optional[Callable[[EngineSnapshot], None]] = None
        self._on_finish: Optional[Callable[[Cycle], None]] = None

    # ----- Callbacks -----
    def set_on_tick(self, fn: Callable[[EngineSnapshot], None]) -> None:
        self._on_tick = fn

    def set_on_finish(self, fn: Callable[[Cycle], None]) -> None:
        self._on_finish = fn

    # ----- State -----
    @property
    def cycle_id(self) -> Optional[str]:
        return self._cycle_id

    @property
    def is_running(self) -> bool:
        return self._cycle_id is not None

    # ----- Lifecycle -----
    def start(self, cycle_id: str) -> None:
        # previous binding is always released first
        self.stop()
        self._cycle_id = cycle_id
        self._tick_job = self.scheduler.call_later(self.tick_ms, self._tick_once)
        logger.debug("Countdown started", extra={"tick_ms": self.tick_ms})

    def stop(self) -> None:
        if self._tick_job is not None:
            self.scheduler.cancel(self._tick_job)
            self._tick_job = None
        if self._cycle_id is not None:
            logger.debug("Countdown stopped", extra={"target": self._cycle_id})
        self._cycle_id = None

    def __enter__(self) -> "CountdownEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # ----- Tick -----
    def _tick_once(self) -> None:
        self._tick_job = None
        cycle_id = self._cycle_id
        keep_going = self.tick()
        # callbacks may have stopped or rebound the engine during the tick
        if keep_going and self._cycle_id == cycle_id and self._tick_job is None:
            self._tick_job = self.scheduler.call_later(self.tick_ms, self._tick_once)

    def tick(self) -> bool:
        """
        Recompute elapsed seconds for the bound cycle.
        Returns True while the countdown should keep ticking.
        """
        cycle_id = self._cycle_id
        if cycle_id is None:
            return False

        cycle = self.store.get(cycle_id)
        if cycle is None or cycle.is_terminal or self.store.active_cycle_id != cycle_id:
            # interrupted (or replaced) since the last tick
            logger.debug("Stale tick dropped", extra={"target": cycle_id})
            self.stop()
            return False

        total = cycle.total_seconds
        elapsed = seconds_between(cycle.start_date, self.clock())

        if elapsed >= total:
            self.store.set_elapsed_seconds(cycle_id, total)
            finished = self.store.mark_finished(cycle_id)
            self.stop()
            self._emit_tick(cycle_id)
            if finished is not None and self._on_finish:
                self._on_finish(finished)
            return False

        self.store.set_elapsed_seconds(cycle_id, elapsed)
        self._emit_tick(cycle_id)
        return True

    def _emit_tick(self, cycle_id: str) -> None:
        if self._on_tick:
            self._on_tick(
                EngineSnapshot(
                    cycle_id=cycle_id,
                    elapsed_seconds=self.store.elapsed_seconds,
                    is_running=self.is_running,
                )
            )
