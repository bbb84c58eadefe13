from __future__ import annotations

import datetime as dt
import logging
from typing import Iterator, Sequence

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
from .recognizers import RECOGNIZERS, Recognizer, match_standard_format


logger = logging.getLogger("todolist.parsing")

DEFAULT_TIME = dt.time(9, 0)

# Inherited business rule: a bare hour below 8 with no am/pm means evening
# ("tomorrow at 6" -> 18:00). The threshold has no further rationale.
AMBIGUOUS_PM_BEFORE = 8


def resolve_time(hour: str | None, minute: str | None = None, meridiem: str | None = None) -> dt.time:
    if hour is None:
        return DEFAULT_TIME

    hh = int(hour)
    mm = int(minute) if minute is not None else 0

    if meridiem:
        meridiem = meridiem.strip().lower()
        if "pm" in meridiem and hh != 12:
            hh += 12
        elif "am" in meridiem and hh == 12:
            hh = 0
    elif hh < AMBIGUOUS_PM_BEFORE:
        hh += 12

    hh = min(max(hh, 0), 23)
    mm = min(max(mm, 0), 59)
    return dt.time(hh, mm)


def _resolve_time_text(time: TimeText) -> dt.time:
    return resolve_time(time.hour, time.minute, time.meridiem)


def next_weekday(day: dt.date, target: int) -> dt.date:
    days_ahead = (target - day.weekday() + 7) % 7
    days_ahead = 7 if days_ahead == 0 else days_ahead
    return day + dt.timedelta(days=days_ahead)


def resolve_date(fragment: Fragment, anchor: dt.datetime) -> dt.date:
    """Calendar date for a relative or explicit fragment.

    Raises ValueError/OverflowError when the fragment names a date that does
    not exist or cannot be represented; parse_date_time treats that as no match.
    """
    today = anchor.date()
    if isinstance(fragment, Tomorrow):
        return today + dt.timedelta(days=1)
    if isinstance(fragment, Today):
        return today
    if isinstance(fragment, InDays):
        return today + dt.timedelta(days=fragment.days)
    if isinstance(fragment, NextWeekday):
        return next_weekday(today, fragment.weekday)
    if isinstance(fragment, ExplicitDate):
        return dt.date(fragment.year, fragment.month, fragment.day)
    if isinstance(fragment, TimeOnly):
        return today
    raise ValueError(f"{type(fragment).__name__} has no calendar date of its own")


def _combine(day: dt.date, time: dt.time, anchor: dt.datetime) -> dt.datetime:
    return dt.datetime.combine(day, time, tzinfo=anchor.tzinfo)


def fallback(anchor: dt.datetime) -> dt.datetime:
    try:
        day = anchor.date() + dt.timedelta(days=1)
    except OverflowError:
        day = anchor.date()
    return _combine(day, DEFAULT_TIME, anchor)


def resolve_fragment(fragment: Fragment, anchor: dt.datetime) -> dt.datetime:
    if isinstance(fragment, Unmatched):
        return fallback(anchor)

    if isinstance(fragment, StandardFormat):
        parsed = dt.datetime.strptime(fragment.text, fragment.fmt)
        return parsed.replace(second=0, microsecond=0, tzinfo=anchor.tzinfo)

    time = _resolve_time_text(fragment.time)
    day = resolve_date(fragment, anchor)
    if isinstance(fragment, TimeOnly) and time <= anchor.time():
        # Already passed (or is right now): use the same time tomorrow.
        day = day + dt.timedelta(days=1)
    return _combine(day, time, anchor)


def iter_fragments(text: str, recognizers: Sequence[Recognizer] = RECOGNIZERS) -> Iterator[Fragment]:
    """Yield candidate fragments in priority order, always ending with Unmatched."""
    for recognizer in recognizers:
        try:
            fragment = recognizer.match(text)
        except ValueError as exc:
            # e.g. a day count too long for int()
            logger.debug("Recognizer %s could not build a fragment: %s", recognizer.name, exc)
            continue
        if fragment is not None:
            logger.debug("Recognizer %s matched %r", recognizer.name, text)
            yield fragment

    standard = match_standard_format(text)
    if standard is not None:
        yield standard

    yield Unmatched()


def parse_date_time(
    text: str | None,
    anchor: dt.datetime,
    recognizers: Sequence[Recognizer] = RECOGNIZERS,
) -> dt.datetime:
    """Resolve conversational text ("tomorrow at 6pm", "next friday") against anchor.

    Never raises: anything unrecognized or unresolvable ends at the fallback,
    the day after the anchor at 09:00.
    """
    normalized = (text or "").strip().lower()
    if not normalized:
        return fallback(anchor)

    for fragment in iter_fragments(normalized, recognizers):
        try:
            return resolve_fragment(fragment, anchor)
        except (ValueError, OverflowError) as exc:
            logger.debug("Rejected %s for %r: %s", fragment, normalized, exc)
    return fallback(anchor)
