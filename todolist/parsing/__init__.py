from .description import extract_task_description
from .fragments import (
    ExplicitDate,
    Fragment,
    InDays,
    NextWeekday,
    StandardFormat,
    TimeOnly,
    TimeText,
    Today,
    Tomorrow,
    Unmatched,
)
from .recognizers import RECOGNIZERS, Recognizer, build_recognizers
from .resolve import fallback, iter_fragments, parse_date_time, resolve_date, resolve_fragment, resolve_time

__all__ = [
    "extract_task_description",
    "parse_date_time",
    "resolve_time",
    "resolve_date",
    "resolve_fragment",
    "iter_fragments",
    "fallback",
    "Recognizer",
    "RECOGNIZERS",
    "build_recognizers",
    "Fragment",
    "TimeText",
    "Tomorrow",
    "Today",
    "InDays",
    "NextWeekday",
    "ExplicitDate",
    "TimeOnly",
    "StandardFormat",
    "Unmatched",
]
