# simpletodo/services/session.py
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from core.logging_setup import get_logger
from models.task import Task
from services.day_filter import DayFilter
from services.editor import ErrorHandler, TaskEditor
from services.task_split import TaskGroups
from storage.store import TaskStore
from utils.datetime_utils import DateLike


logger = get_logger("session")


class RowState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"


class SessionController:
    """Turns host UI events into edits, cleanups and saves.

    Each task row is either idle or editing. Leaving the editing state, for
    whatever reason, removes the task if its title is blank and then saves.
    """

    def __init__(
        self,
        store: TaskStore,
        day_filter: Optional[DayFilter] = None,
        *,
        on_error: Optional[ErrorHandler] = None,
    ):
        self.store = store
        self.day_filter = day_filter or DayFilter(store)
        self.editor = TaskEditor(store, on_error=on_error)
        self._states: Dict[str, RowState] = {}

    # ---------- state ----------
    def state_of(self, task_id: str) -> RowState:
        return self._states.get(task_id, RowState.IDLE)

    @property
    def editing(self) -> List[str]:
        return [tid for tid, state in self._states.items() if state is RowState.EDITING]

    def refresh(self) -> TaskGroups:
        return self.day_filter.refresh()

    def _task(self, task_id: str) -> Optional[Task]:
        task = self.store.get(task_id)
        if task is None:
            logger.warning("Unknown task %s", task_id)
            self._states.pop(task_id, None)
        return task

    # ---------- edit sessions ----------
    def on_focus_gained(self, task_id: str) -> None:
        if self._task(task_id) is None:
            return
        self._states[task_id] = RowState.EDITING
        logger.debug("Editing %s", task_id)

    def on_title_changed(self, task_id: str, text: Optional[str]) -> None:
        task = self._task(task_id)
        if task is None:
            return
        # keystrokes imply focus
        self._states[task_id] = RowState.EDITING
        self.editor.set_title(task, text)

    def on_submit(self, task_id: str) -> bool:
        return self._end_session(task_id, "submit")

    def on_row_disappeared(self, task_id: str) -> bool:
        return self._end_session(task_id, "disappeared")

    def on_focus_lost(self, task_id: str) -> bool:
        return self._end_session(task_id, "focus lost")

    def foreground_state_changed(self, is_active: bool) -> None:
        if is_active:
            return
        active = self.editing
        if not active:
            return
        logger.info("App left foreground with %d open edit session(s)", len(active))
        for task_id in active:
            self._end_session(task_id, "background", refresh=False)
        self.refresh()

    def _end_session(self, task_id: str, reason: str, *, refresh: bool = True) -> bool:
        if self.state_of(task_id) is not RowState.EDITING:
            return False
        self._states[task_id] = RowState.IDLE
        task = self._task(task_id)
        if task is not None:
            # cleanup first so an empty record never survives the save
            if self.editor.remove_if_empty(task):
                self._states.pop(task_id, None)
            self.editor.commit()
        logger.debug("Session for %s ended (%s)", task_id, reason)
        if refresh:
            self.refresh()
        return True

    # ---------- immediate edits ----------
    def on_toggle_completed(self, task_id: str) -> None:
        task = self._task(task_id)
        if task is None:
            return
        self.editor.toggle_completed(task)
        self.refresh()

    def on_date_changed(self, task_id: str, new_date: DateLike) -> None:
        task = self._task(task_id)
        if task is None:
            return
        self.editor.set_date(task, new_date)
        self.refresh()

    def on_delete_requested(self, task_id: str) -> None:
        task = self._task(task_id)
        if task is None:
            return
        self._states.pop(task_id, None)
        self.editor.delete(task)
        self.refresh()

    def on_add_task(self, for_date: Optional[DateLike] = None) -> Task:
        task = self.editor.create(for_date or self.day_filter.selected_date)
        # a new empty row opens with the keyboard up
        self._states[task.id] = RowState.EDITING
        self.refresh()
        return task

    def on_filter_date_changed(self, new_date: DateLike) -> TaskGroups:
        return self.day_filter.set_date(new_date)


__all__ = ["RowState", "SessionController"]
