from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from todolist.crud import day_bounds
from todolist.models.task import Task


@dataclass
class TaskStatistics:
    total: int = 0
    completed: int = 0
    pending: int = 0
    overdue: int = 0
    due_today: int = 0
    categories: dict[str, int] = field(default_factory=dict)

    @property
    def completion_rate(self) -> float:
        """Completed share of all tasks, in percent."""
        return round(self.completed / self.total * 100, 1) if self.total else 0.0


def build_task_statistics(db: Session, now: dt.datetime) -> TaskStatistics:
    start, end = day_bounds(now.date())
    is_open = Task.is_done.is_(False)

    def _count_if(condition):
        return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)

    total, completed, overdue, due_today = db.execute(
        select(
            func.count(Task.id),
            _count_if(Task.is_done.is_(True)),
            _count_if(is_open & Task.deadline.is_not(None) & (Task.deadline <= now)),
            _count_if(is_open & (Task.deadline >= start) & (Task.deadline < end)),
        )
    ).one()

    categories = {
        category: int(count)
        for category, count in db.execute(
            select(Task.category, func.count(Task.id)).group_by(Task.category).order_by(Task.category)
        )
    }

    return TaskStatistics(
        total=int(total),
        completed=int(completed),
        pending=int(total) - int(completed),
        overdue=int(overdue),
        due_today=int(due_today),
        categories=categories,
    )
