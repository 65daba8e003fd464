from datetime import timedelta

import flet as ft
import pytest

from ui.app_shell import AppShell


class FakePage:
    def __init__(self):
        self.overlay = []
        self.opened = []
        self.updates = 0

    def update(self):
        self.updates += 1

    def open(self, control):
        self.opened.append(control)

    def add(self, *controls):
        pass


@pytest.fixture()
def shell(store):
    return AppShell(FakePage(), store)


def _holds(column, row):
    return any(view is row.view for view in column.controls)


def test_rows_are_reused_across_refreshes(shell):
    ctrl = shell.controller
    task = ctrl.on_add_task()
    row = shell._rows[task.id]
    ctrl.on_title_changed(task.id, "Milk")
    row.title_tf.value = "Milk"
    ctrl.on_submit(task.id)

    other = ctrl.on_add_task()
    assert shell._rows[task.id] is row
    assert set(shell._rows) == {task.id, other.id}
    assert row.title_tf.value == "Milk"

    ctrl.on_toggle_completed(task.id)
    assert shell._rows[task.id] is row
    assert row.toggle_btn.icon == ft.Icons.CHECK_CIRCLE
    assert _holds(shell.completed_list, row)
    assert not _holds(shell.pending_list, row)

    ctrl.on_delete_requested(task.id)
    assert task.id not in shell._rows


def test_vanished_empty_row_closes_its_session(shell):
    ctrl = shell.controller
    task = ctrl.on_add_task()
    ctrl.on_filter_date_changed(task.date + timedelta(days=1))

    assert shell._rows == {}
    assert ctrl.editing == []
    assert ctrl.store.get(task.id) is None


def test_adding_task_opens_pending_section(shell):
    shell._toggle_section(pending=True)
    assert shell.pending_list.visible is False

    shell._on_add()

    assert shell.pending_list.visible is True
    assert len(shell._rows) == 1
    assert shell.completed_list.visible is True
