from __future__ import annotations

import datetime as dt

OVERDUE = "overdue"
DUE_SOON = "due_soon"

PRIORITY_LABELS = {1: "Low", 2: "Medium", 3: "High", 4: "Urgent"}


def classify(task, now: dt.datetime, window: dt.timedelta) -> str | None:
    if task.is_done or task.deadline is None:
        return None
    if task.deadline <= now:
        return OVERDUE
    if task.deadline < now + window:
        return DUE_SOON
    return None


def format_reminder_message(tasks: list, now: dt.datetime) -> str:
    lines = ["Upcoming tasks:"]
    for t in tasks:
        when_str = t.deadline.strftime("%b %d, %Y at %H:%M") if t.deadline else "soon"
        prefix = "OVERDUE " if t.deadline and t.deadline <= now else ""
        priority = PRIORITY_LABELS.get(t.priority, "Medium")
        lines.append(f"- {prefix}{t.title} due {when_str} [{priority}] (id={t.id})")
    return "\n".join(lines)
