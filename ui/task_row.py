# simpletodo/ui/task_row.py
from __future__ import annotations

from datetime import datetime

import flet as ft

from core.settings import UI
from models.task import Task
from services.session import RowState


class TaskRow:
    """One task line: completion toggle, editable title, time and delete.

    Rows live as long as their task stays on screen; refreshes go through
    :meth:`update` so the title field keeps focus and caret.
    """

    def __init__(self, shell, task: Task, *, pending: bool):
        self.shell = shell
        self.task_id = task.id
        self.pending = pending
        self._date: datetime = task.date
        ctrl = shell.controller
        tid = task.id

        self.toggle_btn = ft.IconButton(
            icon_color=ft.Colors.BLUE,
            tooltip="Toggle completed",
            on_click=lambda e: ctrl.on_toggle_completed(tid),
        )

        editing = ctrl.state_of(tid) is RowState.EDITING
        self.title_tf = ft.TextField(
            value=task.title,
            hint_text=UI.title_hint,
            border=ft.InputBorder.NONE,
            dense=True,
            # an empty row opens focused, ready for typing
            autofocus=editing and not task.title,
            on_focus=lambda e: ctrl.on_focus_gained(tid),
            on_change=lambda e: ctrl.on_title_changed(tid, e.control.value),
            on_submit=lambda e: ctrl.on_submit(tid),
            on_blur=lambda e: ctrl.on_focus_lost(tid),
        )

        self.time_btn = ft.TextButton(
            style=ft.ButtonStyle(color=ft.Colors.GREY, padding=ft.padding.all(0)),
            on_click=lambda e: shell.open_time_picker(tid, self._date),
        )

        self.delete_btn = ft.IconButton(
            icon=ft.Icons.DELETE_OUTLINE,
            icon_color=ft.Colors.RED_400,
            tooltip="Delete",
            on_click=lambda e: ctrl.on_delete_requested(tid),
        )

        self.view = ft.Container(
            content=ft.Row(
                [
                    self.toggle_btn,
                    ft.Column([self.title_tf, self.time_btn], spacing=0, expand=True),
                    self.delete_btn,
                ],
                spacing=12,
                vertical_alignment=ft.CrossAxisAlignment.CENTER,
            ),
            padding=ft.padding.symmetric(horizontal=8, vertical=4),
        )
        self.update(task, pending=pending)

    def update(self, task: Task, *, pending: bool) -> None:
        """Apply the task's current state to the existing controls."""
        self.pending = pending
        self._date = task.date
        self.toggle_btn.icon = ft.Icons.CIRCLE_OUTLINED if pending else ft.Icons.CHECK_CIRCLE
        # rewriting an unchanged value would move the caret while typing
        if (self.title_tf.value or "") != (task.title or ""):
            self.title_tf.value = task.title
        self.title_tf.color = None if pending else ft.Colors.GREY
        self.title_tf.text_style = None if pending else ft.TextStyle(decoration=ft.TextDecoration.LINE_THROUGH)
        self.time_btn.text = task.date.strftime("%H:%M")


__all__ = ["TaskRow"]
