from __future__ import annotations

import datetime as dt
from pydantic import BaseModel, Field


class ParseIn(BaseModel):
    text: str = Field(max_length=500)
    anchor: dt.datetime | None = Field(default=None, description="Defaults to the server's current time")


class ParseOut(BaseModel):
    text: str
    anchor: dt.datetime
    resolved: dt.datetime
    # resolved, in the yyyy-MM-dd HH:mm:ss storage format
    deadline: str
    description: str
