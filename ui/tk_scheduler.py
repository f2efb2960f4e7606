# -*- coding: utf-8 -*-

import tkinter as tk
from typing import Callable


class TkScheduler:
    """Scheduler backed by a widget's after/after_cancel."""

    def __init__(self, widget: tk.Misc):
        self.widget = widget

    def call_later(self, delay_ms: int, fn: Callable[[], None]) -> str:
        return self.widget.after(delay_ms, fn)

    def cancel(self, handle: str) -> None:
        try:
            self.widget.after_cancel(handle)
        except tk.TclError:
            # widget already destroyed; its pending calls died with it
            pass
