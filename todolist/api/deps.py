import datetime as dt

from fastapi import Header, HTTPException

from todolist.settings import settings


def require_api_key(x_api_key: str | None = Header(default=None, alias="X-API-Key")) -> None:
    if settings.API_KEY and x_api_key != settings.API_KEY:
        raise HTTPException(status_code=401, detail="Invalid API key")


def get_now() -> dt.datetime:
    """Wall-clock anchor for one request; overridden in tests."""
    return dt.datetime.now().replace(microsecond=0)
