from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class TimeText:
    """Raw hour/minute/meridiem text as captured; any part may be missing."""

    hour: str | None = None
    minute: str | None = None
    meridiem: str | None = None


NO_TIME = TimeText()


@dataclass(frozen=True)
class Tomorrow:
    time: TimeText = NO_TIME


@dataclass(frozen=True)
class Today:
    time: TimeText = NO_TIME


@dataclass(frozen=True)
class InDays:
    days: int
    time: TimeText = NO_TIME


@dataclass(frozen=True)
class NextWeekday:
    # Monday == 0, same as datetime.date.weekday()
    weekday: int
    time: TimeText = NO_TIME


@dataclass(frozen=True)
class ExplicitDate:
    month: int
    day: int
    year: int
    time: TimeText = NO_TIME


@dataclass(frozen=True)
class TimeOnly:
    time: TimeText


@dataclass(frozen=True)
class StandardFormat:
    text: str
    fmt: str


@dataclass(frozen=True)
class Unmatched:
    pass


Fragment = Union[Tomorrow, Today, InDays, NextWeekday, ExplicitDate, TimeOnly, StandardFormat, Unmatched]
