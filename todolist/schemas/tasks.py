from __future__ import annotations

import datetime as dt
from pydantic import BaseModel, Field, field_serializer, field_validator

from todolist.models.task import DEADLINE_FORMAT


TASK_CATEGORY_VALUES = {"work", "personal", "shopping", "health", "education", "other"}
PRIORITY_VALUES = {"low": 1, "medium": 2, "high": 3, "urgent": 4}
PRIORITY_NAMES = {v: k.upper() for k, v in PRIORITY_VALUES.items()}


def _validate_enum_str(value: str | None, allowed: set[str], field_name: str) -> str | None:
    if value is None:
        return None
    v = value.strip().lower()
    if v not in allowed:
        raise ValueError(f"{field_name} must be one of: {sorted(allowed)}")
    return v


class TaskCreate(BaseModel):
    # Either title or when must carry text; a blank title is filled from when.
    title: str | None = Field(default=None, max_length=300)
    details: str | None = Field(default=None, max_length=2000)

    when: str | None = Field(default=None, max_length=300, description="e.g. 'call mom tomorrow at 6pm'")
    deadline: dt.datetime | None = None

    category: str = Field(default="other", description="work|personal|shopping|health|education|other")
    priority: int = Field(default=2, ge=1, le=4)

    @field_validator("title")
    @classmethod
    def _title(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else None

    @field_validator("category")
    @classmethod
    def _category(cls, v: str) -> str:
        return _validate_enum_str(v, TASK_CATEGORY_VALUES, "category")


class TaskUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=300)
    details: str | None = Field(default=None, max_length=2000)

    when: str | None = Field(default=None, max_length=300)
    deadline: dt.datetime | None = None

    category: str | None = None
    priority: int | None = Field(default=None, ge=1, le=4)
    is_done: bool | None = None

    @field_validator("category")
    @classmethod
    def _category(cls, v: str | None) -> str | None:
        return _validate_enum_str(v, TASK_CATEGORY_VALUES, "category")


class TaskOut(BaseModel):
    id: int
    title: str
    details: str | None

    deadline: dt.datetime | None
    category: str
    priority: int

    is_done: bool
    created_at: dt.datetime
    completed_at: dt.datetime | None

    class Config:
        from_attributes = True


class DueTaskOut(BaseModel):
    status: str
    task: TaskOut


class ImportResult(BaseModel):
    imported: int


class TaskRecord(BaseModel):
    """One task as written to a JSON export; datetimes use the storage text format."""

    id: int
    title: str
    details: str | None
    deadline: dt.datetime | None
    category: str
    priority: int
    is_done: bool
    created_at: dt.datetime
    completed_at: dt.datetime | None

    class Config:
        from_attributes = True

    @field_serializer("category")
    def _category_name(self, v: str) -> str:
        return v.upper()

    @field_serializer("priority")
    def _priority_name(self, v: int) -> str:
        return PRIORITY_NAMES.get(v, "MEDIUM")

    @field_serializer("deadline", "created_at", "completed_at")
    def _storage_format(self, v: dt.datetime | None) -> str | None:
        return v.strftime(DEADLINE_FORMAT) if v else None


class TaskStatsOut(BaseModel):
    total: int
    completed: int
    pending: int
    overdue: int
    due_today: int
    completion_rate: float
    categories: dict[str, int]

    class Config:
        from_attributes = True
