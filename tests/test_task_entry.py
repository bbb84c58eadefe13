import datetime as dt

from todolist.services.task_entry import resolve_entry

NOW = dt.datetime(2024, 1, 1, 10, 0)


def test_blank_title_is_prefilled():
    entry = resolve_entry("  ", "call mom tomorrow at 6pm", None, NOW)
    assert entry.title == "call mom"
    assert entry.deadline == dt.datetime(2024, 1, 2, 18, 0)


def test_title_kept_when_present():
    entry = resolve_entry("Ring mother", "call mom tomorrow at 6pm", None, NOW)
    assert entry.title == "Ring mother"


def test_no_when_means_no_deadline():
    entry = resolve_entry("Someday", None, None, NOW)
    assert entry.deadline is None


def test_explicit_deadline_is_not_reparsed():
    deadline = dt.datetime(2024, 6, 1, 8, 0)
    entry = resolve_entry(None, "in 3 days", deadline, NOW)
    assert entry.deadline == deadline
    assert entry.title == ""
