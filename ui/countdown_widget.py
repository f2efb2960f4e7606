# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import ttk
from typing import Callable, Optional

from core.display import CountdownDisplay, can_interrupt, can_start
from services.cycle_service import CycleService


class CountdownWidget(ttk.Frame):
    def __init__(
        self,
        master,
        cycle_service: CycleService,
        get_task_value: Callable[[], str],
        on_start: Callable[[], None],
        on_display_change: Callable[[CountdownDisplay], None],
    ):
        super().__init__(master)

        self.cycle_service = cycle_service
        self.get_task_value = get_task_value
        self.on_start = on_start
        self.on_display_change = on_display_change

        self._build_ui()

        # initial render
        self.render(self.cycle_service.snapshot())

    def _build_ui(self):
        self.columnconfigure(0, weight=1)

        digits = ttk.Frame(self)
        digits.grid(row=0, column=0, pady=(12, 12))

        # MM:SS, one label per digit
        self.digit_vars = [tk.StringVar(value="0") for _ in range(4)]
        font = ("Sans", 48, "bold")
        for i, var in enumerate(self.digit_vars[:2]):
            ttk.Label(digits, textvariable=var, font=font, width=2, anchor="center").grid(
                row=0, column=i, padx=2
            )
        ttk.Label(digits, text=":", font=font).grid(row=0, column=2, padx=4)
        for i, var in enumerate(self.digit_vars[2:]):
            ttk.Label(digits, textvariable=var, font=font, width=2, anchor="center").grid(
                row=0, column=3 + i, padx=2
            )

        btns = ttk.Frame(self)
        btns.grid(row=1, column=0)

        self.start_btn = ttk.Button(btns, text="Start", command=self._start)
        self.interrupt_btn = ttk.Button(btns, text="Interrupt", command=self._interrupt)

        self.start_btn.grid(row=0, column=0, padx=(0, 6))
        self.interrupt_btn.grid(row=0, column=1)

    def update_buttons(self, display: Optional[CountdownDisplay] = None):
        display = display or self.cycle_service.snapshot()

        if can_start(display, self.get_task_value()):
            self.start_btn.state(["!disabled"])
        else:
            self.start_btn.state(["disabled"])

        if can_interrupt(display):
            self.interrupt_btn.state(["!disabled"])
        else:
            self.interrupt_btn.state(["disabled"])

    def _start(self):
        self.on_start()

    def _interrupt(self):
        self.cycle_service.interrupt_cycle()

    def render(self, display: CountdownDisplay):
        m0, m1 = display.minutes_digits
        s0, s1 = display.seconds_digits
        for var, d in zip(self.digit_vars, (m0, m1, s0, s1)):
            var.set(d)
        self.update_buttons(display)
        self.on_display_change(display)
