# -*- coding: utf-8 -*-

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

MIN_MINUTES = 5
MAX_MINUTES = 60


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Cycle:
    id: str
    task: str
    minutes_amount: int
    start_date: datetime
    interrupted_date: Optional[datetime] = None
    finished_date: Optional[datetime] = None

    @property
    def total_seconds(self) -> int:
        return self.minutes_amount * 60

    @property
    def status(self) -> str:
        # running | interrupted | finished
        if self.finished_date is not None:
            return "finished"
        if self.interrupted_date is not None:
            return "interrupted"
        return "running"

    @property
    def is_terminal(self) -> bool:
        return self.status != "running"


@dataclass(frozen=True)
class NewCycleData:
    task: str
    minutes_amount: int
