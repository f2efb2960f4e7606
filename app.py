#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from config import load_settings
from core.cycle_store import CycleStore
from ui.main_window import MainWindow
from utils.logging import get_logger, setup_logging


def main():
    settings = load_settings()
    setup_logging(settings.log_level)
    get_logger(__name__).info("Focus timer starting", extra={"tick_ms": settings.tick_ms})

    app = MainWindow(settings, CycleStore())
    app.run()


if __name__ == "__main__":
    main()
