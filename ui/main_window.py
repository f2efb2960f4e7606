# -*- coding: utf-8 -*-

import tkinter as tk
from tkinter import ttk

from config import Settings
from core.cycle_store import CycleStore
from core.display import CountdownDisplay, window_title
from domain.errors import CycleAlreadyActive
from domain.models import Cycle
from services.cycle_service import CycleService
from ui.countdown_widget import CountdownWidget
from ui.cycle_form import NewCycleForm
from ui.history_view import HistoryView
from ui.markdown_renderer import MarkdownRenderer
from ui.tk_scheduler import TkScheduler
from utils.logging import get_logger

logger = get_logger(__name__)


class MainWindow:
    def __init__(self, settings: Settings, store: CycleStore):
        self.settings = settings

        self.root = tk.Tk()
        self.root.title(settings.window_title)
        self.root.geometry("640x560")

        self.cycle_service = CycleService(
            store,
            TkScheduler(self.root),
            tick_ms=settings.tick_ms,
            default_suggestions=settings.task_suggestions,
        )

        self._build_ui()

        # wire callbacks from service -> UI
        self.cycle_service.set_on_tick(self._on_tick)
        self.cycle_service.set_on_state_change(self._on_state_change)
        self.cycle_service.set_on_finish(self._on_finish)

        self._on_state_change(self.cycle_service.snapshot())
        self.root.protocol("WM_DELETE_WINDOW", self._on_close)

    def _build_ui(self):
        outer = ttk.Frame(self.root, padding=16)
        outer.pack(fill="both", expand=True)
        outer.columnconfigure(0, weight=1)
        outer.rowconfigure(2, weight=1)

        self.form = NewCycleForm(
            outer,
            on_submit=self._create_cycle,
            on_task_change=self._on_task_change,
        )
        self.form.grid(row=0, column=0, sticky="ew")

        self.countdown = CountdownWidget(
            outer,
            cycle_service=self.cycle_service,
            get_task_value=self.form.current_task_value,
            on_start=self.form.submit,
            on_display_change=self._apply_title,
        )
        self.countdown.grid(row=1, column=0, sticky="ew")

        self.history = HistoryView(outer, MarkdownRenderer())
        self.history.grid(row=2, column=0, sticky="nsew", pady=(12, 0))

    def run(self):
        self.root.mainloop()

    # ----- UI actions -----
    def _create_cycle(self, task: str, minutes_amount: int) -> None:
        try:
            self.cycle_service.create_cycle(task, minutes_amount)
        except CycleAlreadyActive:
            # start is disabled while a cycle runs; keep the form as-is
            logger.warning("Start pressed while a cycle is active")
            raise

    def _on_task_change(self):
        self.countdown.update_buttons()

    # ----- Service callbacks -----
    def _on_tick(self, display: CountdownDisplay):
        self.countdown.render(display)

    def _on_state_change(self, display: CountdownDisplay):
        self.countdown.render(display)
        self.form.set_locked(display.has_active_cycle)
        self.form.set_suggestions(self.cycle_service.task_suggestions())
        self.history.show(self.cycle_service.history())

    def _on_finish(self, cycle: Cycle):
        self.root.bell()

    def _apply_title(self, display: CountdownDisplay):
        title = window_title(display, self.settings.window_title)
        if self.root.title() != title:
            self.root.title(title)

    def _on_close(self):
        self.cycle_service.shutdown()
        self.root.destroy()
