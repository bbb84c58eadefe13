from __future__ import annotations

import datetime as dt
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse

from sqlalchemy.orm import Session

from todolist import crud
from todolist.api.deps import get_now, require_api_key
from todolist.db import get_db
from todolist.schemas.tasks import (
    TASK_CATEGORY_VALUES,
    DueTaskOut,
    ImportResult,
    TaskCreate,
    TaskOut,
    TaskStatsOut,
    TaskUpdate,
)
from todolist.services.export import export_csv, export_json, import_csv, import_json
from todolist.services.reminders import classify
from todolist.services.stats import build_task_statistics
from todolist.services.task_entry import resolve_entry
from todolist.settings import settings

router = APIRouter(prefix="/tasks", tags=["tasks"], dependencies=[Depends(require_api_key)])

logger = logging.getLogger("todolist.api")


def _check_choice(value: str, allowed: set[str], name: str) -> str:
    v = value.strip().lower()
    if v not in allowed:
        raise HTTPException(status_code=422, detail=f"{name} must be one of: {sorted(allowed)}")
    return v


@router.post("", response_model=TaskOut)
def create_task(payload: TaskCreate, db: Session = Depends(get_db), now: dt.datetime = Depends(get_now)):
    entry = resolve_entry(payload.title, payload.when, payload.deadline, now)
    if not entry.title:
        raise HTTPException(status_code=422, detail="title must not be empty")
    task = crud.create_task(
        db,
        title=entry.title,
        details=payload.details,
        deadline=entry.deadline,
        category=payload.category,
        priority=payload.priority,
    )
    logger.info("Created task id=%s deadline=%s", task.id, task.deadline)
    return task


@router.get("", response_model=list[TaskOut])
def list_tasks(
    include_done: bool = Query(default=True),
    search: str | None = Query(default=None, max_length=300),
    category: str | None = Query(default=None),
    priority: int | None = Query(default=None, ge=1, le=4),
    status: str = Query(default="all", description="all|completed|pending|overdue|today"),
    sort: str = Query(default="deadline", description="deadline|priority|category|created|title"),
    descending: bool = Query(default=False),
    db: Session = Depends(get_db),
    now: dt.datetime = Depends(get_now),
):
    if category is not None:
        category = _check_choice(category, TASK_CATEGORY_VALUES, "category")
    return crud.list_tasks(
        db,
        include_done=include_done,
        search=search,
        category=category,
        priority=priority,
        status=_check_choice(status, crud.TASK_STATUS_VALUES, "status"),
        sort=_check_choice(sort, crud.TASK_SORT_VALUES, "sort"),
        descending=descending,
        now=now,
    )


@router.get("/stats", response_model=TaskStatsOut)
def task_stats(db: Session = Depends(get_db), now: dt.datetime = Depends(get_now)):
    return TaskStatsOut.model_validate(build_task_statistics(db, now))


@router.get("/due", response_model=list[DueTaskOut])
def list_due(db: Session = Depends(get_db), now: dt.datetime = Depends(get_now)):
    window = dt.timedelta(minutes=settings.DUE_SOON_MIN)
    tasks = crud.list_due_tasks(db, now, window)
    return [DueTaskOut(status=classify(t, now, window), task=TaskOut.model_validate(t)) for t in tasks]


@router.get("/export.csv", response_class=PlainTextResponse)
def export_tasks(db: Session = Depends(get_db)):
    return PlainTextResponse(export_csv(crud.list_tasks(db)), media_type="text/csv")


@router.get("/export.json", response_class=PlainTextResponse)
def export_tasks_json(db: Session = Depends(get_db)):
    return PlainTextResponse(export_json(crud.list_tasks(db)), media_type="application/json")


@router.post("/import", response_model=ImportResult)
async def import_tasks(request: Request, db: Session = Depends(get_db), now: dt.datetime = Depends(get_now)):
    """Import a CSV or JSON export; JSON is chosen by the Content-Type header."""
    is_json = "json" in request.headers.get("content-type", "").lower()
    try:
        content = (await request.body()).decode("utf-8-sig")
        created = import_json(db, content, now) if is_json else import_csv(db, content, now)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    logger.info("Imported %s tasks (%s)", len(created), "json" if is_json else "csv")
    return ImportResult(imported=len(created))


@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: int, db: Session = Depends(get_db)):
    t = crud.get_task(db, task_id)
    if not t:
        raise HTTPException(status_code=404, detail="Task not found")
    return t


@router.patch("/{task_id}", response_model=TaskOut)
def patch_task(
    task_id: int,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    now: dt.datetime = Depends(get_now),
):
    t = crud.get_task(db, task_id)
    if not t:
        raise HTTPException(status_code=404, detail="Task not found")

    data = payload.model_dump(exclude_unset=True)
    # A blank "when" leaves the deadline alone.
    when = (data.pop("when", None) or "").strip()
    if when:
        entry = resolve_entry(t.title, when, data.get("deadline"), now)
        data["deadline"] = entry.deadline
    return crud.update_task(db, task_id, data, now=now)


@router.delete("/{task_id}")
def delete_task(task_id: int, db: Session = Depends(get_db)):
    ok = crud.delete_task(db, task_id)
    if not ok:
        raise HTTPException(status_code=404, detail="Task not found")
    return {"ok": True}
