# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import ttk
from typing import Callable, Iterable

from domain.errors import FocusCycleError
from domain.models import MAX_MINUTES, MIN_MINUTES
from domain.validation import validate_new_cycle
from utils.logging import get_logger

logger = get_logger(__name__)


class NewCycleForm(ttk.Frame):
    """
    "I will work on [task] for [minutes] minutes."

    Validates on submit and hands the clean pair to on_submit. Errors are
    shown inline; on_submit is never called with bad input.
    """

    def __init__(
        self,
        master,
        on_submit: Callable[[str, int], None],
        on_task_change: Callable[[], None],
    ):
        super().__init__(master)
        self.on_submit = on_submit
        self.on_task_change = on_task_change

        self._build_ui()

    def _build_ui(self):
        self.columnconfigure(1, weight=1)

        self.task_var = tk.StringVar(value="")
        self.minutes_var = tk.StringVar(value="")
        self.err_var = tk.StringVar(value="")

        ttk.Label(self, text="I will work on").grid(row=0, column=0, sticky="w")

        self.task_entry = ttk.Combobox(self, textvariable=self.task_var)
        self.task_entry.grid(row=0, column=1, sticky="ew", padx=6)

        ttk.Label(self, text="for").grid(row=0, column=2, sticky="w")

        self.minutes_entry = ttk.Spinbox(
            self,
            textvariable=self.minutes_var,
            from_=MIN_MINUTES,
            to=MAX_MINUTES,
            increment=5,
            width=5,
        )
        self.minutes_entry.grid(row=0, column=3, padx=6)

        ttk.Label(self, text="minutes.").grid(row=0, column=4, sticky="w")

        ttk.Label(self, textvariable=self.err_var, foreground="red").grid(
            row=1, column=0, columnspan=5, sticky="w", pady=(6, 0)
        )

        self.task_var.trace_add("write", lambda *_: self.on_task_change())
        self.task_entry.bind("<Return>", lambda e: self.submit())
        self.minutes_entry.bind("<Return>", lambda e: self.submit())

    # ----- Input contract -----
    def submit(self) -> bool:
        try:
            data = validate_new_cycle(self.task_var.get(), self.minutes_var.get())
            self.on_submit(data.task, data.minutes_amount)
        except FocusCycleError as e:
            logger.info("New cycle rejected", extra={"reason": str(e)})
            self.err_var.set(str(e))
            return False

        self.err_var.set("")
        self.reset()
        return True

    def reset(self) -> None:
        self.task_var.set("")
        self.minutes_var.set("")

    def current_task_value(self) -> str:
        return self.task_var.get()

    # ----- Display hooks -----
    def set_locked(self, locked: bool) -> None:
        state = ["disabled"] if locked else ["!disabled"]
        self.task_entry.state(state)
        self.minutes_entry.state(state)

    def set_suggestions(self, names: Iterable[str]) -> None:
        self.task_entry.configure(values=list(names))
