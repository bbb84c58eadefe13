from __future__ import annotations

import datetime as dt
from fastapi import APIRouter, Depends

from todolist.api.deps import get_now, require_api_key
from todolist.models.task import format_deadline
from todolist.parsing import extract_task_description, parse_date_time
from todolist.schemas.parse import ParseIn, ParseOut

router = APIRouter(prefix="/parse", tags=["parse"], dependencies=[Depends(require_api_key)])


@router.post("", response_model=ParseOut)
def parse_text(payload: ParseIn, now: dt.datetime = Depends(get_now)):
    anchor = payload.anchor or now
    resolved = parse_date_time(payload.text, anchor)
    return ParseOut(
        text=payload.text,
        anchor=anchor,
        resolved=resolved,
        deadline=format_deadline(resolved),
        description=extract_task_description(payload.text),
    )
