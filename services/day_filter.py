# simpletodo/services/day_filter.py
from __future__ import annotations

from datetime import datetime
from typing import Callable, Dict, List, Optional, Set

from core.logging_setup import get_logger
from models.task import Task
from services.task_split import TaskGroups, split_tasks
from storage.store import TaskStore
from utils.datetime_utils import DateLike, day_bounds, local_now, same_day, to_local_naive


logger = get_logger("day_filter")


class DayFilter:
    """Observable result set holding the tasks of one selected day.

    Listeners of ``after_refresh`` receive the fresh :class:`TaskGroups`;
    listeners of ``date_changed`` receive the new selected datetime.
    """

    def __init__(self, store: TaskStore, selected_date: Optional[DateLike] = None):
        self.store = store
        self._selected = to_local_naive(selected_date) or local_now()
        self._results: List[Task] = []
        self._groups = TaskGroups()
        self._listeners: Dict[str, Set[Callable]] = {
            "after_refresh": set(),
            "date_changed": set(),
        }

    # ---------- events ----------
    def subscribe(self, event: str, callback: Callable) -> None:
        if event not in self._listeners:
            raise ValueError(f"Unsupported event: {event}")
        self._listeners[event].add(callback)

    def unsubscribe(self, event: str, callback: Callable) -> None:
        if event not in self._listeners:
            return
        self._listeners[event].discard(callback)

    def _emit(self, event: str, payload) -> None:
        for listener in list(self._listeners.get(event, [])):
            try:
                listener(payload)
            except Exception:
                logger.exception("Listener for %s failed", event)

    # ---------- state ----------
    @property
    def selected_date(self) -> datetime:
        return self._selected

    @property
    def bounds(self):
        return day_bounds(self._selected)

    @property
    def results(self) -> List[Task]:
        return list(self._results)

    @property
    def groups(self) -> TaskGroups:
        return self._groups

    @property
    def pending(self) -> List[Task]:
        return self._groups.pending

    @property
    def completed(self) -> List[Task]:
        return self._groups.completed

    # ---------- queries ----------
    def set_date(self, value: DateLike) -> TaskGroups:
        if value is None:
            raise ValueError("Filter date is required")
        new_value = to_local_naive(value)
        changed = not same_day(new_value, self._selected)
        self._selected = new_value
        if changed:
            logger.debug("Filter date -> %s", new_value.date().isoformat())
            self._emit("date_changed", new_value)
        return self.refresh()

    def refresh(self) -> TaskGroups:
        start, end = self.bounds
        # replaced wholesale, never merged with the previous day
        self._results = self.store.query(start, end)
        self._groups = split_tasks(self._results)
        self._emit("after_refresh", self._groups)
        return self._groups


__all__ = ["DayFilter"]
