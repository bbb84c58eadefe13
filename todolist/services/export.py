from __future__ import annotations

import csv
import datetime as dt
import io
import json
import logging
from typing import Iterable

from sqlalchemy.orm import Session

from todolist import crud
from todolist.models.task import Task, format_deadline, parse_deadline
from todolist.parsing import fallback
from todolist.schemas.tasks import PRIORITY_NAMES, PRIORITY_VALUES, TASK_CATEGORY_VALUES, TaskRecord

logger = logging.getLogger("todolist.export")

CSV_HEADER = [
    "ID",
    "Title",
    "Details",
    "Deadline",
    "Category",
    "Priority",
    "Completed",
    "Created Date",
    "Completed Date",
]

# CSV column order, by record field.
_RECORD_FIELDS = (
    "id",
    "title",
    "details",
    "deadline",
    "category",
    "priority",
    "is_done",
    "created_at",
    "completed_at",
)


def export_csv(tasks: Iterable[Task]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf)
    writer.writerow(CSV_HEADER)
    for t in tasks:
        writer.writerow(
            [
                t.id,
                t.title,
                t.details or "",
                format_deadline(t.deadline),
                t.category.upper(),
                PRIORITY_NAMES.get(t.priority, "MEDIUM"),
                "true" if t.is_done else "false",
                format_deadline(t.created_at),
                format_deadline(t.completed_at),
            ]
        )
    return buf.getvalue()


def export_json(tasks: Iterable[Task]) -> str:
    records = [TaskRecord.model_validate(t).model_dump(mode="json") for t in tasks]
    return json.dumps(records, indent=2, ensure_ascii=False)


def _optional_datetime(value) -> dt.datetime | None:
    if value is None or not str(value).strip():
        return None
    try:
        return parse_deadline(str(value))
    except ValueError:
        return None


def _text(value) -> str:
    return "" if value is None else str(value)


def _priority(value) -> int:
    text = _text(value).strip().lower()
    if text.isdigit() and int(text) in PRIORITY_NAMES:
        return int(text)
    return PRIORITY_VALUES.get(text, 2)


def _add_task(db: Session, fields: dict, now: dt.datetime, where: str) -> Task | None:
    """Create one imported task from loosely typed fields; None if it has no title."""
    title = _text(fields.get("title")).strip()
    if not title:
        logger.warning("Skipping %s: missing title", where)
        return None

    deadline_text = _text(fields.get("deadline"))
    deadline = None
    if deadline_text.strip():
        deadline = _optional_datetime(deadline_text)
        if deadline is None:
            logger.info("%s: unreadable deadline %r, using default", where, deadline_text)
            deadline = fallback(now)

    category = _text(fields.get("category")).strip().lower()
    if category not in TASK_CATEGORY_VALUES:
        category = "other"

    return crud.create_task(
        db,
        title=title,
        details=_text(fields.get("details")) or None,
        deadline=deadline,
        category=category,
        priority=_priority(fields.get("priority")),
        is_done=_text(fields.get("is_done")).strip().lower() == "true",
        created_at=_optional_datetime(fields.get("created_at")) or now,
        completed_at=_optional_datetime(fields.get("completed_at")),
        commit=False,
    )


def _commit_all(db: Session, created: list[Task]) -> list[Task]:
    db.commit()
    for task in created:
        db.refresh(task)
    return created


def _cell(row: list[str], idx: int) -> str:
    return row[idx] if len(row) > idx else ""


def import_csv(db: Session, content: str, now: dt.datetime) -> list[Task]:
    """Create tasks from a CSV export. IDs in the file are ignored.

    Raises ValueError when the content has no header row.
    """
    reader = csv.reader(io.StringIO(content))
    header = next(reader, None)
    if not header:
        raise ValueError("CSV file is empty or invalid")

    created: list[Task] = []
    for line_no, row in enumerate(reader, start=2):
        if not any(cell.strip() for cell in row):
            continue
        fields = {name: _cell(row, idx) for idx, name in enumerate(_RECORD_FIELDS)}
        task = _add_task(db, fields, now, f"CSV line {line_no}")
        if task is not None:
            created.append(task)
    return _commit_all(db, created)


def import_json(db: Session, content: str, now: dt.datetime) -> list[Task]:
    """Create tasks from a JSON export (a list of task objects). IDs are ignored.

    Raises ValueError for malformed JSON or a top level that is not a list.
    """
    try:
        items = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ValueError(f"JSON file is invalid: {exc.msg}") from exc
    if not isinstance(items, list):
        raise ValueError("JSON export must be a list of tasks")

    created: list[Task] = []
    for idx, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning("Skipping JSON item %s: not an object", idx)
            continue
        task = _add_task(db, item, now, f"JSON item {idx}")
        if task is not None:
            created.append(task)
    return _commit_all(db, created)
