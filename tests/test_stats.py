import datetime as dt

from todolist import crud
from todolist.services.stats import TaskStatistics, build_task_statistics

NOW = dt.datetime(2024, 1, 1, 10, 0)


def test_completion_rate():
    assert TaskStatistics().completion_rate == 0.0
    assert TaskStatistics(total=3, completed=1).completion_rate == 33.3
    assert TaskStatistics(total=4, completed=4).completion_rate == 100.0


def test_counts_follow_overdue_rule(session_factory):
    with session_factory() as db:
        # A deadline equal to now is overdue, like in the reminder checker.
        crud.create_task(db, title="Due now", deadline=NOW, category="work")
        crud.create_task(db, title="Tonight", deadline=dt.datetime(2024, 1, 1, 23, 59), category="work")
        crud.create_task(db, title="Tomorrow", deadline=dt.datetime(2024, 1, 2, 0, 0))
        crud.create_task(db, title="Done late", deadline=dt.datetime(2023, 12, 1, 9, 0), is_done=True, completed_at=NOW)

        stats = build_task_statistics(db, NOW)

    assert stats.total == 4
    assert stats.completed == 1
    assert stats.pending == 3
    assert stats.overdue == 1
    assert stats.due_today == 2
    assert stats.categories == {"other": 2, "work": 2}
    assert stats.completion_rate == 25.0
