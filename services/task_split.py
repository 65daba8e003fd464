# simpletodo/services/task_split.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, List

from core.settings import UI
from models.task import Task


@dataclass(frozen=True)
class TaskGroups:
    pending: List[Task] = field(default_factory=list)
    completed: List[Task] = field(default_factory=list)

    def __iter__(self) -> Iterator[List[Task]]:
        yield self.pending
        yield self.completed

    def __len__(self) -> int:
        return len(self.pending) + len(self.completed)

    @property
    def pending_label(self) -> str:
        return _label(UI.pending_label, len(self.pending))

    @property
    def completed_label(self) -> str:
        return _label(UI.completed_label, len(self.completed))


def _label(base: str, count: int) -> str:
    return f"{base} ({count})" if count else base


def split_tasks(results: Iterable[Task]) -> TaskGroups:
    """Split ``results`` by completion, keeping the input order in each group."""

    pending: List[Task] = []
    completed: List[Task] = []
    for task in results:
        (completed if task.is_completed else pending).append(task)
    return TaskGroups(pending=pending, completed=completed)


__all__ = ["TaskGroups", "split_tasks"]
