# ui/markdown_renderer.py
# -*- coding: utf-8 -*-

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from markdown import markdown

from domain.models import Cycle

STATUS_LABELS = {
    "running": "In progress",
    "interrupted": "Interrupted",
    "finished": "Finished",
}


@dataclass(frozen=True)
class MarkdownTheme:
    text: str = "#111827"
    muted: str = "#6B7280"
    border: str = "#E5E7EB"
    panel: str = "#FFFFFF"
    running: str = "#F59E0B"
    interrupted: str = "#EF4444"
    finished: str = "#10B981"


def _escape_cell(text: str) -> str:
    # pipes would split the table cell; angle brackets would become HTML
    return (
        text.replace("\\", "\\\\")
        .replace("|", "\\|")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def history_markdown(cycles: Iterable[Cycle], stamp_fmt: str = "%H:%M") -> str:
    """
    Session history as a Markdown table, newest cycle first.
    """
    rows = list(cycles)
    if not rows:
        return "## History\n\n_No cycles yet._\n"

    out: List[str] = [
        "## History",
        "",
        "| Task | Duration | Started | Status |",
        "| --- | --- | --- | --- |",
    ]
    for c in reversed(rows):
        label = STATUS_LABELS[c.status]
        out.append(
            f"| {_escape_cell(c.task)} | {c.minutes_amount} min | "
            f"{c.start_date.astimezone().strftime(stamp_fmt)} | "
            f'<span class="status-{c.status}">{label}</span> |'
        )
    return "\n".join(out) + "\n"


class MarkdownRenderer:
    """
    Single responsibility:
    - Convert MD -> HTML
    - Provide CSS

    tkinterweb (tkhtml) renders limited HTML, so only plain tables and
    spans with classes are used.
    """

    def __init__(self, theme: Optional[MarkdownTheme] = None):
        self.theme = theme or MarkdownTheme()

    def extensions(self) -> Tuple[List[str], Dict]:
        return ["extra", "sane_lists", "tables"], {}

    def css(self) -> str:
        t = self.theme
        return f"""
        body {{
          font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Arial, sans-serif;
          margin: 14px;
          color: {t.text};
          background: {t.panel};
          font-size: 14px;
          line-height: 1.55;
        }}

        h2 {{ font-size: 1.20em; margin: 0 0 0.5em; }}
        em {{ color: {t.muted}; }}

        table {{
          border-collapse: collapse;
          width: 100%;
          font-size: 0.95em;
        }}
        th, td {{
          border: 1px solid {t.border};
          padding: 8px 10px;
          vertical-align: top;
        }}
        th {{ font-weight: 700; }}

        .status-running {{ color: {t.running}; font-weight: 700; }}
        .status-interrupted {{ color: {t.interrupted}; font-weight: 700; }}
        .status-finished {{ color: {t.finished}; font-weight: 700; }}
        """

    def to_html(self, md_text: str) -> str:
        exts, cfg = self.extensions()
        body = markdown(
            md_text or "",
            extensions=exts,
            extension_configs=cfg,
            output_format="html5",
        )
        return f"""
        <html>
          <head>
            <meta charset="utf-8"/>
            <style>{self.css()}</style>
          </head>
          <body>{body}</body>
        </html>
        """
