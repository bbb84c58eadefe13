from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from typing import Callable

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
)


WEEKDAY_MAP = {
    "monday": 0,
    "tuesday": 1,
    "wednesday": 2,
    "thursday": 3,
    "friday": 4,
    "saturday": 5,
    "sunday": 6,
}

WEEKDAY_NAMES = "|".join(WEEKDAY_MAP)

# Optional " at H[:MM][am|pm]" tail shared by the relative-day patterns.
AT_TIME = r"(?:\s+at\s+(\d{1,2})(?::(\d{2}))?(\s*[ap]m)?)?"

TOMORROW_RE = re.compile(r"tomorrow" + AT_TIME)
TODAY_RE = re.compile(r"today" + AT_TIME)
IN_DAYS_RE = re.compile(r"in\s+(\d+)\s+days?" + AT_TIME)
NEXT_WEEKDAY_RE = re.compile(rf"next\s+({WEEKDAY_NAMES})" + AT_TIME)
EXPLICIT_DATE_RE = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")
AT_CLOCK_RE = re.compile(r"\bat\s+(\d{1,2})(?::(\d{2}))?(\s*[ap]m)?\b")
BARE_CLOCK_RE = re.compile(r"(\d{1,2})(?::(\d{2}))?(\s*[ap]m)?")
MERIDIEM_CLOCK_RE = re.compile(r"\b(\d{1,2})(?::(\d{2}))?(\s*[ap]m)\b")

# Loose time lookup used on whatever follows an explicit M/D/YYYY date.
TRAILING_TIME_RE = re.compile(r"(\d{1,2})(?::(\d{2}))?(\s*[ap]m)?")

STANDARD_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%m/%d/%Y %H:%M",
)


def _time_text(m: re.Match, first: int) -> TimeText:
    hour, minute, meridiem = m.group(first, first + 1, first + 2)
    return TimeText(hour=hour, minute=minute, meridiem=meridiem.strip() if meridiem else None)


def _build_tomorrow(m: re.Match, text: str) -> Fragment:
    return Tomorrow(_time_text(m, 1))


def _build_today(m: re.Match, text: str) -> Fragment:
    return Today(_time_text(m, 1))


def _build_in_days(m: re.Match, text: str) -> Fragment:
    return InDays(int(m.group(1)), _time_text(m, 2))


def _build_next_weekday(m: re.Match, text: str) -> Fragment:
    return NextWeekday(WEEKDAY_MAP[m.group(1)], _time_text(m, 2))


def _build_explicit_date(m: re.Match, text: str) -> Fragment:
    month, day, year = (int(x) for x in m.group(1, 2, 3))
    trailing = TRAILING_TIME_RE.search(text, m.end())
    time = _time_text(trailing, 1) if trailing else TimeText()
    return ExplicitDate(month=month, day=day, year=year, time=time)


def _build_time_only(m: re.Match, text: str) -> Fragment:
    return TimeOnly(_time_text(m, 1))


@dataclass(frozen=True)
class Recognizer:
    name: str
    pattern: re.Pattern
    build: Callable[[re.Match, str], Fragment]
    whole: bool = False

    def match(self, text: str) -> Fragment | None:
        m = self.pattern.fullmatch(text) if self.whole else self.pattern.search(text)
        if not m:
            return None
        return self.build(m, text)


def build_recognizers() -> tuple[Recognizer, ...]:
    """Recognizers in priority order. Relative keywords go before the clock
    patterns so "next friday at 6pm" is not read as a plain 6pm."""
    return (
        Recognizer("tomorrow", TOMORROW_RE, _build_tomorrow),
        Recognizer("today", TODAY_RE, _build_today),
        Recognizer("in_days", IN_DAYS_RE, _build_in_days),
        Recognizer("next_weekday", NEXT_WEEKDAY_RE, _build_next_weekday),
        Recognizer("explicit_date", EXPLICIT_DATE_RE, _build_explicit_date),
        Recognizer("at_time", AT_CLOCK_RE, _build_time_only),
        Recognizer("bare_time", BARE_CLOCK_RE, _build_time_only, whole=True),
        Recognizer("meridiem_time", MERIDIEM_CLOCK_RE, _build_time_only),
    )


RECOGNIZERS = build_recognizers()


def match_standard_format(text: str) -> StandardFormat | None:
    for fmt in STANDARD_FORMATS:
        try:
            dt.datetime.strptime(text, fmt)
        except ValueError:
            continue
        return StandardFormat(text=text, fmt=fmt)
    return None
