# ui/app_shell.py
from __future__ import annotations

from datetime import date, datetime, time
from typing import Dict, Optional

import flet as ft

from core.logging_setup import get_logger
from core.settings import UI
from services.session import SessionController
from services.task_split import TaskGroups
from storage.store import StoreError, TaskStore
from utils.datetime_utils import with_time

from .task_row import TaskRow


logger = get_logger("ui")

_ACTIVE_STATES = {ft.AppLifecycleState.RESUME, ft.AppLifecycleState.SHOW}


def _picked_date(value) -> Optional[date]:
    # depending on the flet build the picker hands back a datetime or an ISO string
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value) >= 10:
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def _picked_time(value) -> Optional[time]:
    if isinstance(value, time):
        return value
    if isinstance(value, str) and value:
        try:
            return time.fromisoformat(value[:8])
        except ValueError:
            return None
    return None


class AppShell:
    def __init__(self, page: ft.Page, store: TaskStore):
        self.page = page
        self.controller = SessionController(store, on_error=self._on_store_error)
        self.controller.day_filter.subscribe("after_refresh", self._render)
        self._rows: Dict[str, TaskRow] = {}

        self.page.title = UI.app_title
        self.page.horizontal_alignment = ft.CrossAxisAlignment.STRETCH
        self.page.vertical_alignment = ft.MainAxisAlignment.START

        selected = self.controller.day_filter.selected_date
        self.date_picker = ft.DatePicker(
            first_date=date(2000, 1, 1),
            last_date=date(2100, 12, 31),
            value=selected,
            on_change=lambda e: self._on_date_picked(e.data or e.control.value),
        )
        self.time_picker = ft.TimePicker(help_text="Task time")
        self.time_picker.on_change = lambda e: self._on_time_picked(e.data or self.time_picker.value)
        for p in (self.date_picker, self.time_picker):
            if p not in self.page.overlay:
                self.page.overlay.append(p)

        self.date_btn = ft.TextButton(
            text=self._date_caption(selected),
            icon=ft.Icons.CALENDAR_MONTH,
            on_click=lambda e: self.page.open(self.date_picker),
        )

        self._show_pending = True
        self._show_completed = True
        self.pending_header = ft.TextButton(on_click=lambda e: self._toggle_section(pending=True))
        self.completed_header = ft.TextButton(on_click=lambda e: self._toggle_section(pending=False))
        self.pending_list = ft.Column(spacing=0)
        self.completed_list = ft.Column(spacing=0)

        self.add_btn = ft.TextButton(
            text="New Task",
            icon=ft.Icons.ADD_CIRCLE,
            on_click=self._on_add,
        )

        self.root = ft.Column(
            [
                self.date_btn,
                self.pending_header,
                self.pending_list,
                self.completed_header,
                self.completed_list,
                self.add_btn,
            ],
            expand=True,
            scroll=ft.ScrollMode.AUTO,
        )
        self._apply_sections()

    def mount(self):
        self.page.on_app_lifecycle_state_change = self._on_lifecycle
        self.page.add(self.root)
        self.controller.refresh()

    # ---------- Rendering ----------
    def _date_caption(self, value: datetime) -> str:
        return value.strftime("%d.%m.%Y")

    def _apply_sections(self):
        for header, column, label, shown in (
            (self.pending_header, self.pending_list, UI.pending_label, self._show_pending),
            (self.completed_header, self.completed_list, UI.completed_label, self._show_completed),
        ):
            header.text = label
            header.icon = ft.Icons.EXPAND_LESS if shown else ft.Icons.EXPAND_MORE
            column.visible = shown

    def _group_controls(self, tasks, rows: Dict[str, TaskRow], *, pending: bool):
        if not tasks:
            return [ft.Text(UI.empty_placeholder, size=12, color=ft.Colors.GREY)]
        views = []
        for task in tasks:
            row = self._rows.get(task.id)
            if row is None:
                row = TaskRow(self, task, pending=pending)
            else:
                row.update(task, pending=pending)
            rows[task.id] = row
            views.append(row.view)
        return views

    def _render(self, groups: TaskGroups):
        rows: Dict[str, TaskRow] = {}
        self.pending_list.controls = self._group_controls(groups.pending, rows, pending=True)
        self.completed_list.controls = self._group_controls(groups.completed, rows, pending=False)
        vanished = set(self._rows) - set(rows)
        self._rows = rows
        self.date_btn.text = self._date_caption(self.controller.day_filter.selected_date)
        self.page.update()

        # rows that left the screen close their edit sessions
        for task_id in vanished:
            self.controller.on_row_disappeared(task_id)

    # ---------- Events ----------
    def _toggle_section(self, *, pending: bool):
        if pending:
            self._show_pending = not self._show_pending
        else:
            self._show_completed = not self._show_completed
        self._apply_sections()
        self.page.update()

    def _on_add(self, e=None):
        # a new task always lands in an open pending section
        self._show_pending = True
        self._apply_sections()
        self.controller.on_add_task()

    def _on_date_picked(self, value):
        picked = _picked_date(value)
        if picked is None:
            return
        current = self.controller.day_filter.selected_date
        self.controller.on_filter_date_changed(with_time(picked, current.time()))

    def open_time_picker(self, task_id: str, current: datetime):
        self.time_picker.data = {"task_id": task_id, "date": current}
        self.time_picker.value = current.time()
        self.page.open(self.time_picker)

    def _on_time_picked(self, value):
        data = self.time_picker.data or {}
        picked = _picked_time(value)
        if not data or picked is None:
            return
        self.time_picker.data = None
        self.controller.on_date_changed(data["task_id"], with_time(data["date"], picked))

    def _on_lifecycle(self, e: ft.AppLifecycleStateChangeEvent):
        logger.debug("Lifecycle -> %s", e.state)
        self.controller.foreground_state_changed(e.state in _ACTIVE_STATES)

    def _on_store_error(self, exc: StoreError):
        self.page.open(ft.SnackBar(ft.Text(f"Could not save changes: {exc}")))
