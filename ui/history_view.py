# -*- coding: utf-8 -*-

from tkinter import ttk
from typing import Iterable

from tkinterweb import HtmlFrame

from domain.models import Cycle
from ui.markdown_renderer import MarkdownRenderer, history_markdown


class HistoryView(ttk.Labelframe):
    def __init__(self, master, renderer: MarkdownRenderer):
        super().__init__(master, text="History", padding=6)
        self._md = renderer

        self.view = HtmlFrame(self, horizontal_scrollbar="auto")
        self.view.pack(fill="both", expand=True)

    def show(self, cycles: Iterable[Cycle]) -> None:
        self.view.load_html(self._md.to_html(history_markdown(cycles)))
