# simpletodo/services/editor.py
from __future__ import annotations

from typing import Callable, Optional

from core.logging_setup import get_logger
from core.settings import TASKS
from models.task import Task
from storage.store import StoreError, TaskStore
from utils.datetime_utils import DateLike, local_now, to_local_naive


logger = get_logger("editor")

ErrorHandler = Callable[[StoreError], None]


def is_blank_title(title: Optional[str], *, trim: bool = TASKS.trim_whitespace_titles) -> bool:
    text = title or ""
    if trim:
        text = text.strip()
    return not text


class TaskEditor:
    """Applies user edits to single task records."""

    def __init__(self, store: TaskStore, on_error: Optional[ErrorHandler] = None):
        self.store = store
        self.on_error = on_error

    # ---------- edits ----------
    def create(self, for_date: DateLike) -> Task:
        task = Task(title="", date=to_local_naive(for_date), is_completed=False)
        self.store.insert(task)
        logger.info("Task %s created for %s", task.id, task.date.date().isoformat())
        self.commit()
        return task

    def set_title(self, task: Task, value: Optional[str]) -> None:
        # raw text, empty included; validated only when the session ends
        task.title = value or ""
        task.updated_at = local_now()

    def toggle_completed(self, task: Task) -> bool:
        task.is_completed = not task.is_completed
        task.updated_at = local_now()
        return self.commit()

    def set_date(self, task: Task, value: DateLike) -> bool:
        task.date = to_local_naive(value)
        task.updated_at = local_now()
        return self.commit()

    def remove_if_empty(self, task: Task) -> bool:
        """Mark ``task`` deleted when its title is blank.

        Safe to call repeatedly; returns ``True`` only when a deletion was
        recorded by this call.
        """

        if self.store.is_deleted(task) or not is_blank_title(task.title):
            return False
        removed = self.store.delete(task)
        if removed:
            logger.info("Empty task %s removed", task.id)
        return removed

    def delete(self, task: Task) -> bool:
        if not self.store.delete(task):
            return False
        logger.info("Task %s deleted", task.id)
        return self.commit()

    # ---------- persistence ----------
    def commit(self) -> bool:
        try:
            self.store.save()
        except StoreError as exc:
            logger.error("Save failed: %s", exc)
            if self.on_error is not None:
                self.on_error(exc)
            return False
        return True


__all__ = ["ErrorHandler", "TaskEditor", "is_blank_title"]
