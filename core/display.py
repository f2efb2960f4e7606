# -*- coding: utf-8 -*-

from dataclasses import dataclass
from typing import Optional, Tuple

from domain.models import Cycle


@dataclass(frozen=True)
class CountdownDisplay:
    minutes_digits: Tuple[str, str]
    seconds_digits: Tuple[str, str]
    has_active_cycle: bool

    @property
    def minutes(self) -> str:
        return "".join(self.minutes_digits)

    @property
    def seconds(self) -> str:
        return "".join(self.seconds_digits)

    @property
    def text(self) -> str:
        return f"{self.minutes}:{self.seconds}"


def remaining_seconds(active_cycle: Optional[Cycle], elapsed_seconds: int) -> int:
    if active_cycle is None:
        return 0
    return max(0, active_cycle.total_seconds - max(0, elapsed_seconds))


def format_time(seconds: int) -> str:
    m = max(0, seconds) // 60
    s = max(0, seconds) % 60
    return f"{m:02d}:{s:02d}"


def derive_display(active_cycle: Optional[Cycle], elapsed_seconds: int) -> CountdownDisplay:
    minutes, seconds = format_time(remaining_seconds(active_cycle, elapsed_seconds)).split(":")
    return CountdownDisplay(
        minutes_digits=(minutes[0], minutes[1]),
        seconds_digits=(seconds[0], seconds[1]),
        has_active_cycle=active_cycle is not None,
    )


def can_start(display: CountdownDisplay, task_value: Optional[str]) -> bool:
    return not display.has_active_cycle and bool((task_value or "").strip())


def can_interrupt(display: CountdownDisplay) -> bool:
    return display.has_active_cycle


def window_title(display: CountdownDisplay, default_title: str) -> str:
    # countdown while active, back to the app name otherwise
    if display.has_active_cycle:
        return display.text
    return default_title
