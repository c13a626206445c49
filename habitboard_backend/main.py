from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from habitboard_backend.db import dispose_engine
from habitboard_backend.db_init import init_db
from habitboard_backend.settings import get_settings
from habitboard_backend.routes import (
    bootstrap,
    habits,
    habit_logs,
    notes,
    todos,
    shortcuts,
    goals,
    focus,
    sleep,
    water,
)


def create_app() -> FastAPI:
    logging.basicConfig(
        level=os.getenv("BACKEND_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    app = FastAPI(title="Habitboard API", version="0.1.0")

    app.include_router(bootstrap.router)
    app.include_router(habits.router)
    app.include_router(habit_logs.router)
    app.include_router(notes.router)
    app.include_router(todos.router)
    app.include_router(shortcuts.router)
    app.include_router(goals.router)
    app.include_router(focus.router)
    app.include_router(sleep.router)
    app.include_router(water.router)

    @app.on_event("startup")
    async def _startup():
        if os.getenv("BACKEND_DEBUG_SETTINGS"):
            logging.getLogger("habitboard_backend").info("Settings: %s", get_settings().redacted())
        await init_db()

    @app.on_event("shutdown")
    async def _shutdown():
        await dispose_engine()

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logging.getLogger("habitboard_backend").exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Internal error"})

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app


app = create_app()
