from __future__ import annotations

import datetime as dt
from dataclasses import dataclass

from todolist.parsing import extract_task_description, parse_date_time


@dataclass(frozen=True)
class TaskEntry:
    title: str
    deadline: dt.datetime | None


def resolve_entry(
    title: str | None,
    when: str | None,
    deadline: dt.datetime | None,
    now: dt.datetime,
) -> TaskEntry:
    """Turn what was typed into the edit form into a title and a deadline.

    An explicit deadline wins over the free-text `when`. The title is only
    taken from `when` when the title field is blank.
    """
    title = (title or "").strip()
    when = (when or "").strip()

    if deadline is None and when:
        deadline = parse_date_time(when, now)
    if not title and when:
        title = extract_task_description(when)
    return TaskEntry(title=title, deadline=deadline)
