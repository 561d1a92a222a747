from __future__ import annotations
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from emojidict.config import Settings, settings as default_settings
from emojidict.data.entry_repo import EntryRepo
from emojidict.observability import setup_logging
from emojidict.service.entry_store import EntryStore
from emojidict.web.routers import entries, home

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
        # One store per process, shared by every request.
        app.state.store = EntryStore(EntryRepo(settings.DATA_PATH))
        yield

    app = FastAPI(title="Emoji Dictionary", lifespan=lifespan)
    app.state.settings = settings
    app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")

    app.include_router(home.router)
    app.include_router(entries.router)
    return app

app = create_app()
