from __future__ import annotations

import asyncio
import datetime as dt
import logging

from todolist.crud import list_due_tasks, mark_notified
from todolist.db import SessionLocal, init_db
from todolist.logging_utils import configure_logging
from todolist.services.reminders import OVERDUE, classify, format_reminder_message
from todolist.settings import settings

logger = logging.getLogger("todolist_worker")


def run_once(session_factory=SessionLocal, now: dt.datetime | None = None) -> int:
    """Announce every open task that became due soon or overdue since the last pass."""
    now = now or dt.datetime.now().replace(microsecond=0)
    window = dt.timedelta(minutes=settings.DUE_SOON_MIN)
    processed = 0
    with session_factory() as db:
        tasks = list_due_tasks(db, now, window, only_unnotified=True)
        for task in tasks:
            status = classify(task, now, window)
            if status == OVERDUE:
                logger.warning("Task overdue: %s (id=%s, due %s)", task.title, task.id, task.deadline)
            else:
                logger.info("Task due soon: %s (id=%s, due %s)", task.title, task.id, task.deadline)
            mark_notified(db, task, now)
            processed += 1
        if tasks:
            logger.info("%s", format_reminder_message(tasks, now))
            db.commit()
    return processed


async def run_loop() -> None:
    configure_logging(settings.LOG_LEVEL)
    if not settings.NOTIFICATIONS_ENABLED:
        logger.info("Notifications disabled; reminder worker not started")
        return
    init_db()
    logger.info("Reminder worker started")
    tick = 0
    while True:
        try:
            processed = run_once()
            tick += 1
            if tick % 12 == 0:
                logger.info("Reminder worker heartbeat (processed=%s)", processed)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Reminder worker error: %s", exc)
        await asyncio.sleep(settings.REMINDER_POLL_SEC)


def main() -> None:
    asyncio.run(run_loop())


if __name__ == "__main__":
    main()
