"""Application settings"""
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from utils.env_loader import load_env

DEFAULT_TASK_SUGGESTIONS = ("Project 1", "Project 2", "Project 3", "Project 4")


@dataclass(frozen=True)
class Settings:
    tick_ms: int = 1000
    log_level: str = "INFO"
    window_title: str = "Focus Timer"
    task_suggestions: Tuple[str, ...] = field(default=DEFAULT_TASK_SUGGESTIONS)


def _parse_tick_ms(raw: Optional[str]) -> int:
    if raw is None or raw.strip() == "":
        return 1000
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"FOCUS_TICK_MS must be an integer, got {raw!r}")
    if value <= 0:
        raise ValueError(f"FOCUS_TICK_MS must be positive, got {value}")
    return value


def _parse_log_level(raw: Optional[str]) -> str:
    level = (raw or "INFO").strip().upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ValueError(f"FOCUS_LOG_LEVEL is not a logging level: {raw!r}")
    return level


def _parse_suggestions(raw: Optional[str]) -> Tuple[str, ...]:
    if raw is None:
        return DEFAULT_TASK_SUGGESTIONS
    return tuple(s.strip() for s in raw.split(",") if s.strip())


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment (.env is loaded first when environ is None)."""
    if environ is None:
        load_env()
        environ = os.environ

    return Settings(
        tick_ms=_parse_tick_ms(environ.get("FOCUS_TICK_MS")),
        log_level=_parse_log_level(environ.get("FOCUS_LOG_LEVEL")),
        window_title=(environ.get("FOCUS_WINDOW_TITLE") or "").strip() or "Focus Timer",
        task_suggestions=_parse_suggestions(environ.get("FOCUS_TASK_SUGGESTIONS")),
    )
