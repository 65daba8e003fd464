"""Unit-of-work store for task records."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from sqlalchemy import and_, inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from core.logging_setup import get_logger
from models.task import Task
from storage.db import get_session


logger = get_logger("store")

_COLUMNS = [attr.key for attr in sa_inspect(Task).column_attrs if attr.key != "id"]


class StoreError(RuntimeError):
    """Pending changes could not be committed."""


def _contains(items: List[Task], obj: Task) -> bool:
    return any(item is obj for item in items)


def _drop(items: List[Task], obj: Task) -> None:
    items[:] = [item for item in items if item is not obj]


class TaskStore:
    """Persistent collection of :class:`Task` records.

    Inserts, updates and deletes stay pending in one long-lived session until
    :meth:`save` commits them together. Queries see pending changes.
    """

    def __init__(self, session_factory: Callable[[], Session] = get_session):
        self._session = session_factory()
        self._inserted: List[Task] = []
        self._deleted: List[Task] = []
        self._discarded: set[str] = set()

    # ----- reads -----
    def query(self, start: datetime, end: datetime) -> List[Task]:
        stmt = (
            select(Task)
            .where(and_(Task.date >= start, Task.date <= end))
            .order_by(Task.date.desc(), Task.created_at.desc(), Task.id)
        )
        return list(self._session.exec(stmt))

    def get(self, task_id: str) -> Optional[Task]:
        if not task_id or task_id in self._discarded:
            return None
        task = self._session.get(Task, task_id)
        if task is None or self.is_deleted(task):
            return None
        return task

    def is_deleted(self, task: Task) -> bool:
        state = sa_inspect(task)
        if state.deleted or state.was_deleted or task in self._session.deleted:
            return True
        return state.transient and task.id in self._discarded

    # ----- writes -----
    def insert(self, task: Task) -> Task:
        self._discarded.discard(task.id)
        self._session.add(task)
        self._inserted.append(task)
        return task

    def delete(self, task: Task) -> bool:
        """Mark ``task`` for removal. Returns ``False`` when nothing changed."""

        if self.is_deleted(task):
            return False
        state = sa_inspect(task)
        if state.pending:
            # never flushed: forgetting it is enough
            self._session.expunge(task)
            _drop(self._inserted, task)
            self._discarded.add(task.id)
            return True
        if not state.persistent:
            return False
        self._session.delete(task)
        if _contains(self._inserted, task):
            _drop(self._inserted, task)
        else:
            self._deleted.append(task)
        return True

    def save(self) -> None:
        """Commit every pending change, or raise :class:`StoreError`.

        A failed commit leaves the database untouched and puts the in-memory
        objects back in the state they had before the attempt.
        """

        snapshot = self._snapshot()
        inserted, deleted = list(self._inserted), list(self._deleted)
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            logger.error("Commit failed: %s", exc)
            self._rollback()
            self._restore(snapshot, inserted, deleted)
            raise StoreError(str(exc)) from exc
        self._inserted.clear()
        self._deleted.clear()
        logger.debug("Committed %d insert(s), %d delete(s)", len(inserted), len(deleted))

    def close(self) -> None:
        self._session.close()

    # ----- helpers -----
    def _snapshot(self) -> List[Tuple[Task, Dict[str, Any]]]:
        tracked = list(self._session.identity_map.values())
        tracked.extend(obj for obj in self._session.new if not _contains(tracked, obj))
        result = []
        for obj in tracked:
            loaded = sa_inspect(obj).dict
            result.append((obj, {key: loaded[key] for key in _COLUMNS if key in loaded}))
        return result

    def _rollback(self) -> None:
        try:
            self._session.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback failed")

    def _restore(
        self,
        snapshot: List[Tuple[Task, Dict[str, Any]]],
        inserted: List[Task],
        deleted: List[Task],
    ) -> None:
        for obj in inserted:
            if sa_inspect(obj).transient:
                self._session.add(obj)
        for obj, values in snapshot:
            for key, value in values.items():
                setattr(obj, key, value)
        for obj in deleted:
            if sa_inspect(obj).persistent:
                self._session.delete(obj)


__all__ = ["StoreError", "TaskStore"]
