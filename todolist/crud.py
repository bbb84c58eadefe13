from __future__ import annotations

import datetime as dt

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from todolist.models.task import Task


def create_task(
    db: Session,
    *,
    title: str,
    details: str | None = None,
    deadline: dt.datetime | None = None,
    category: str = "other",
    priority: int = 2,
    is_done: bool = False,
    created_at: dt.datetime | None = None,
    completed_at: dt.datetime | None = None,
    commit: bool = True,
) -> Task:
    task = Task(
        title=title.strip(),
        details=details,
        deadline=deadline,
        category=category,
        priority=priority,
        is_done=is_done,
        completed_at=completed_at if is_done else None,
    )
    if created_at is not None:
        task.created_at = created_at
    db.add(task)
    if commit:
        db.commit()
        db.refresh(task)
    return task


def get_task(db: Session, task_id: int) -> Task | None:
    return db.execute(select(Task).where(Task.id == task_id)).scalar_one_or_none()


TASK_STATUS_VALUES = {"all", "completed", "pending", "overdue", "today"}
TASK_SORT_VALUES = {"deadline", "priority", "category", "created", "title"}

# Columns that may not be cleared through an update.
_NOT_NULL_FIELDS = {"title", "category", "priority", "is_done"}


def day_bounds(day: dt.date) -> tuple[dt.datetime, dt.datetime]:
    start = dt.datetime.combine(day, dt.time.min)
    end = start + dt.timedelta(days=1)
    return start, end


def _status_condition(status: str, now: dt.datetime):
    if status == "completed":
        return Task.is_done.is_(True)
    if status == "pending":
        return Task.is_done.is_(False)
    if status == "overdue":
        return and_(Task.is_done.is_(False), Task.deadline.is_not(None), Task.deadline <= now)
    if status == "today":
        start, end = day_bounds(now.date())
        return and_(Task.is_done.is_(False), Task.deadline >= start, Task.deadline < end)
    return None


def _sort_columns(sort: str, descending: bool) -> list:
    if sort == "priority":
        # Urgent first unless reversed.
        return [Task.priority.asc() if descending else Task.priority.desc()]
    if sort == "category":
        return [Task.category.desc() if descending else Task.category.asc()]
    if sort == "created":
        return [Task.created_at.desc() if descending else Task.created_at.asc()]
    if sort == "title":
        title = func.lower(Task.title)
        return [title.desc() if descending else title.asc()]
    # Tasks without a deadline sort last either way.
    return [Task.deadline.is_(None), Task.deadline.desc() if descending else Task.deadline.asc()]


def list_tasks(
    db: Session,
    include_done: bool = True,
    *,
    search: str | None = None,
    category: str | None = None,
    priority: int | None = None,
    status: str = "all",
    sort: str = "deadline",
    descending: bool = False,
    now: dt.datetime | None = None,
) -> list[Task]:
    now = now or dt.datetime.now()
    stmt = select(Task)
    if not include_done:
        stmt = stmt.where(Task.is_done.is_(False))
    if search and search.strip():
        needle = search.strip().lower()
        stmt = stmt.where(
            or_(
                func.lower(Task.title).contains(needle, autoescape=True),
                func.lower(func.coalesce(Task.details, "")).contains(needle, autoescape=True),
            )
        )
    if category:
        stmt = stmt.where(Task.category == category)
    if priority is not None:
        stmt = stmt.where(Task.priority == priority)
    condition = _status_condition(status, now)
    if condition is not None:
        stmt = stmt.where(condition)
    stmt = stmt.order_by(*_sort_columns(sort, descending), Task.id.asc())
    return list(db.execute(stmt).scalars())


def update_task(db: Session, task_id: int, data: dict, now: dt.datetime | None = None) -> Task | None:
    task = get_task(db, task_id)
    if not task:
        return None
    # An explicit null on a required column means "leave as is".
    data = {k: v for k, v in data.items() if not (v is None and k in _NOT_NULL_FIELDS)}
    if "is_done" in data:
        done = bool(data.pop("is_done"))
        if done and not task.is_done:
            task.completed_at = now or dt.datetime.now().replace(microsecond=0)
        elif not done:
            task.completed_at = None
        task.is_done = done
    if "deadline" in data and data["deadline"] != task.deadline:
        # A moved deadline deserves a fresh reminder.
        task.notified_at = None
    for k, v in data.items():
        setattr(task, k, v)
    db.add(task)
    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, task_id: int) -> bool:
    task = get_task(db, task_id)
    if not task:
        return False
    db.delete(task)
    db.commit()
    return True


def list_due_tasks(db: Session, now: dt.datetime, window: dt.timedelta, only_unnotified: bool = False) -> list[Task]:
    """Open tasks that are overdue or due before now + window."""
    conditions = [
        Task.is_done.is_(False),
        Task.deadline.is_not(None),
        Task.deadline < now + window,
    ]
    if only_unnotified:
        conditions.append(Task.notified_at.is_(None))
    return list(
        db.execute(
            select(Task).where(and_(*conditions)).order_by(Task.deadline.asc(), Task.id.asc())
        ).scalars()
    )


def mark_notified(db: Session, task: Task, now: dt.datetime) -> None:
    task.notified_at = now
    db.add(task)
