from datetime import datetime, timedelta

from models.task import Task
from services.task_split import TaskGroups, split_tasks


def _tasks(flags):
    base = datetime(2024, 1, 5, 20, 0)
    return [
        Task(title=f"t{i}", date=base - timedelta(hours=i), is_completed=flag)
        for i, flag in enumerate(flags)
    ]


def test_split_partitions_and_keeps_order():
    results = _tasks([False, True, True, False, False, True])
    pending, completed = split_tasks(results)

    assert [t.title for t in pending] == ["t0", "t3", "t4"]
    assert [t.title for t in completed] == ["t1", "t2", "t5"]
    assert {t.id for t in pending} | {t.id for t in completed} == {t.id for t in results}
    assert not {t.id for t in pending} & {t.id for t in completed}


def test_split_of_empty_result_is_two_empty_groups():
    groups = split_tasks([])
    assert groups == TaskGroups()
    assert len(groups) == 0
    assert groups.pending_label == "Pending Task's"
    assert groups.completed_label == "Completed Task's"


def test_group_labels_show_counts():
    groups = split_tasks(_tasks([False, False, True]))
    assert len(groups) == 3
    assert groups.pending_label == "Pending Task's (2)"
    assert groups.completed_label == "Completed Task's (1)"
