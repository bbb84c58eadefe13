import datetime as dt
from sqlalchemy import Boolean, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


# Textual form of every stored datetime in exports and API payloads.
DEADLINE_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_deadline(value: dt.datetime | None) -> str:
    return value.strftime(DEADLINE_FORMAT) if value else ""


def parse_deadline(value: str) -> dt.datetime:
    return dt.datetime.strptime(value.strip(), DEADLINE_FORMAT)


class Task(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        Index("ix_tasks_open_deadline", "is_done", "deadline"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Core fields
    title: Mapped[str] = mapped_column(String(300))
    details: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    deadline: Mapped[dt.datetime | None] = mapped_column(DateTime, nullable=True)

    # category: work | personal | shopping | health | education | other
    category: Mapped[str] = mapped_column(String(20), default="other", index=True)
    # Priority 1..4 (4 = urgent)
    priority: Mapped[int] = mapped_column(Integer, default=2)

    is_done: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[dt.datetime] = mapped_column(DateTime, default=lambda: dt.datetime.now().replace(microsecond=0))
    completed_at: Mapped[dt.datetime | None] = mapped_column(DateTime, nullable=True)
    # Set once the reminder worker has announced the task.
    notified_at: Mapped[dt.datetime | None] = mapped_column(DateTime, nullable=True)
