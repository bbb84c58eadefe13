from contextlib import asynccontextmanager

from fastapi import FastAPI

from todolist.api.routers.parse import router as parse_router
from todolist.api.routers.tasks import router as tasks_router
from todolist.db import init_db
from todolist.logging_utils import configure_logging
from todolist.settings import settings


def create_app(init_storage: bool = True) -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        if init_storage:
            init_db()
        yield

    app = FastAPI(title="To-Do List API", lifespan=lifespan)

    app.include_router(tasks_router)
    app.include_router(parse_router)

    @app.get("/health")
    def health():
        return {"ok": True}

    return app
