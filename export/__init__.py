"""Export-Modul: Terminal-Darstellung von Stundenplänen."""

from export.tui_renderer import render_teacher_rows, render_week_rows

__all__ = ["render_week_rows", "render_teacher_rows"]
