from __future__ import annotations

import re

from .recognizers import WEEKDAY_NAMES


# A phrase is removed when it starts the text or follows whitespace.
_LEAD = r"(?:^|\s+)"
_CLOCK = r"\d{1,2}(?::\d{2})?(?:\s*[ap]m)?"
_AT_CLOCK = rf"(?:\s+at\s+{_CLOCK})?"

TEMPORAL_PHRASES = (
    re.compile(rf"{_LEAD}(?:tomorrow|today){_AT_CLOCK}\b", re.IGNORECASE),
    re.compile(rf"{_LEAD}in\s+\d+\s+days?{_AT_CLOCK}\b", re.IGNORECASE),
    re.compile(rf"{_LEAD}next\s+(?:{WEEKDAY_NAMES}){_AT_CLOCK}\b", re.IGNORECASE),
    re.compile(rf"{_LEAD}at\s+{_CLOCK}\b", re.IGNORECASE),
    re.compile(rf"{_LEAD}\d{{1,2}}/\d{{1,2}}/\d{{4}}(?:\s+\d{{1,2}}:\d{{2}}(?:\s*[ap]m)?)?\b", re.IGNORECASE),
)


def extract_task_description(text: str | None) -> str:
    """Strip the date/time phrases from text, leaving what the task is about.

    "call mom tomorrow at 6pm" -> "call mom". Text with no temporal phrase
    comes back unchanged apart from surrounding whitespace.
    """
    if not text or not text.strip():
        return ""
    cleaned = text.strip()
    for pattern in TEMPORAL_PHRASES:
        cleaned = pattern.sub("", cleaned)
    return cleaned.strip()
