# -*- coding: utf-8 -*-

from datetime import datetime
from typing import Callable, Iterable, List, Optional

from core.countdown_engine import CountdownEngine, EngineSnapshot, Scheduler
from core.cycle_store import CycleStore
from core.display import CountdownDisplay, derive_display
from domain.models import Cycle, utc_now
from utils.logging import get_logger

logger = get_logger(__name__)


class CycleService:
    """
    Orchestrates:
    - CycleStore transitions (create / interrupt / finish)
    - CountdownEngine bound to the active cycle
    - Callbacks for UI
    """

    def __init__(
        self,
        store: CycleStore,
        scheduler: Scheduler,
        clock: Callable[[], datetime] = utc_now,
        tick_ms: int = 1000,
        default_suggestions: Iterable[str] = (),
    ):
        self.store = store
        self.default_suggestions = list(default_suggestions)

        self.engine = CountdownEngine(store, scheduler, clock=clock, tick_ms=tick_ms)
        self.engine.set_on_tick(self._handle_tick)
        self.engine.set_on_finish(self._handle_finish)

        self._on_tick: Optional[Callable[[CountdownDisplay], None]] = None
        self._on_state_change: Optional[Callable[[CountdownDisplay], None]] = None
        self._on_finish: Optional[Callable[[Cycle], None]] = None

    # ----- Callbacks -----
    def set_on_tick(self, fn: Callable[[CountdownDisplay], None]) -> None:
        self._on_tick = fn

    def set_on_state_change(self, fn: Callable[[CountdownDisplay], None]) -> None:
        self._on_state_change = fn

    def set_on_finish(self, fn: Callable[[Cycle], None]) -> None:
        self._on_finish = fn

    def _emit_tick(self) -> None:
        if self._on_tick:
            self._on_tick(self.snapshot())

    def _emit_state_change(self) -> None:
        if self._on_state_change:
            self._on_state_change(self.snapshot())

    # ----- Public API -----
    def snapshot(self) -> CountdownDisplay:
        return derive_display(self.store.active_cycle(), self.store.elapsed_seconds)

    def history(self) -> List[Cycle]:
        return list(self.store.cycles)

    def task_suggestions(self) -> List[str]:
        out = self.store.task_suggestions()
        for name in self.default_suggestions:
            if name not in out:
                out.append(name)
        return out

    def create_cycle(self, task: str, minutes_amount: int) -> Cycle:
        # raises CycleAlreadyActive; nothing changes in that case
        cycle_id = self.store.create_and_activate(task, minutes_amount)
        self._bind_engine()
        self._emit_state_change()
        self._emit_tick()
        return self.store.get(cycle_id)

    def interrupt_cycle(self) -> Optional[Cycle]:
        cycle = self.store.interrupt()
        self._bind_engine()
        self._emit_state_change()
        self._emit_tick()
        return cycle

    def shutdown(self) -> None:
        self.engine.stop()

    # ----- Engine binding -----
    def _bind_engine(self) -> None:
        """
        Keep the engine attached to the active cycle reference: the old
        binding is cancelled before a new one starts.
        """
        active_id = self.store.active_cycle_id
        if self.engine.cycle_id == active_id:
            return
        self.engine.stop()
        if active_id is not None:
            self.engine.start(active_id)

    def _handle_tick(self, snap: EngineSnapshot) -> None:
        logger.debug("Tick", extra={"elapsed_seconds": snap.elapsed_seconds})
        self._emit_tick()

    def _handle_finish(self, cycle: Cycle) -> None:
        self._bind_engine()
        self._emit_state_change()
        if self._on_finish:
            self._on_finish(cycle)
