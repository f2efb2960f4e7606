# -*- coding: utf-8 -*-

import uuid
from dataclasses import replace
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from domain.errors import CycleAlreadyActive
from domain.models import Cycle, utc_now
from utils.logging import get_logger, set_cycle_context

logger = get_logger(__name__)


def _new_cycle_id() -> str:
    return uuid.uuid4().hex


class CycleStore:
    """
    Owns the session's cycles, the active-cycle pointer and the
    elapsed-seconds counter of the active cycle.

    Cycles are never removed; updates replace the entry by id.
    """

    def __init__(
        self,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = _new_cycle_id,
    ):
        self._clock = clock
        self._id_factory = id_factory

        self._cycles: List[Cycle] = []
        self._active_cycle_id: Optional[str] = None
        self._elapsed_seconds = 0

    # ----- Read -----
    @property
    def cycles(self) -> Tuple[Cycle, ...]:
        return tuple(self._cycles)

    @property
    def active_cycle_id(self) -> Optional[str]:
        return self._active_cycle_id

    @property
    def elapsed_seconds(self) -> int:
        return self._elapsed_seconds

    def get(self, cycle_id: str) -> Optional[Cycle]:
        for cycle in self._cycles:
            if cycle.id == cycle_id:
                return cycle
        return None

    def active_cycle(self) -> Optional[Cycle]:
        if self._active_cycle_id is None:
            return None
        return self.get(self._active_cycle_id)

    def task_suggestions(self) -> List[str]:
        seen = set()
        out: List[str] = []
        for cycle in reversed(self._cycles):
            if cycle.task not in seen:
                seen.add(cycle.task)
                out.append(cycle.task)
        return out

    # ----- Transitions -----
    def create_and_activate(self, task: str, minutes_amount: int) -> str:
        # task/minutes arrive validated from the form
        if self._active_cycle_id is not None:
            logger.warning(
                "Rejected new cycle while another is active",
                extra={"active_cycle_id": self._active_cycle_id, "cycle_task": task},
            )
            raise CycleAlreadyActive(self._active_cycle_id)

        cycle = Cycle(
            id=self._id_factory(),
            task=task,
            minutes_amount=int(minutes_amount),
            start_date=self._clock(),
        )
        self._cycles.append(cycle)
        self._active_cycle_id = cycle.id
        self._elapsed_seconds = 0

        set_cycle_context(cycle.id)
        logger.info(
            "Cycle started",
            extra={
                "cycle_task": cycle.task,
                "minutes_amount": cycle.minutes_amount,
                "start_date": cycle.start_date.isoformat(),
            },
        )
        return cycle.id

    def interrupt(self) -> Optional[Cycle]:
        active = self.active_cycle()
        if active is None:
            logger.warning("Interrupt requested with no active cycle")
            return None

        updated = replace(active, interrupted_date=self._clock())
        self._replace(updated)
        self._active_cycle_id = None

        logger.info(
            "Cycle interrupted",
            extra={"elapsed_seconds": self._elapsed_seconds},
        )
        set_cycle_context(None)
        return updated

    def mark_finished(self, cycle_id: str) -> Optional[Cycle]:
        cycle = self.get(cycle_id)
        if cycle is None:
            logger.warning("Finish requested for unknown cycle", extra={"target": cycle_id})
            return None
        if cycle.is_terminal:
            logger.debug(
                "Finish ignored, cycle already ended",
                extra={"target": cycle_id, "status": cycle.status},
            )
            return None

        updated = replace(cycle, finished_date=self._clock())
        self._replace(updated)
        if self._active_cycle_id == cycle_id:
            self._active_cycle_id = None
            set_cycle_context(None)

        logger.info(
            "Cycle finished",
            extra={"target": cycle_id, "minutes_amount": updated.minutes_amount},
        )
        return updated

    def set_elapsed_seconds(self, cycle_id: str, seconds: int) -> bool:
        """
        Update the counter for the active cycle.

        Ignored (returns False) when cycle_id is not the active cycle. The
        value is clamped to [0, total_seconds] and never moves backwards.
        """
        if cycle_id != self._active_cycle_id:
            return False
        cycle = self.get(cycle_id)
        if cycle is None:
            return False

        clamped = min(max(int(seconds), 0), cycle.total_seconds)
        if clamped > self._elapsed_seconds:
            self._elapsed_seconds = clamped
        return True

    def _replace(self, updated: Cycle) -> None:
        self._cycles = [updated if c.id == updated.id else c for c in self._cycles]
