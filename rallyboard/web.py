import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Callable, Optional

import aiohttp
from fastapi import FastAPI, Request
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from rallyboard.config import Settings
from rallyboard.scoreboard import Scoreboard
from rallyboard.state import parse_json
from rallyboard.store import ScoreboardStore
from rallyboard.sync import RemoteSync

logger = logging.getLogger(__name__)

PUBLIC_DIR = Path(__file__).resolve().parent / "public"
PAGES = ("controller", "singlebar", "doublebar")


def _page_route(name: str):
    page = PUBLIC_DIR / f"{name}.html"

    async def serve_page():
        return FileResponse(page, media_type="text/html")

    serve_page.__name__ = f"{name}_page"
    return serve_page


# === FastAPI Application ===
def create_app(
    settings: Optional[Settings] = None,
    session_factory: Callable[[], aiohttp.ClientSession] = aiohttp.ClientSession,
) -> FastAPI:
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # 1. The document must exist before the first request is served
        store = ScoreboardStore(settings.data_file)
        store.ensure_initialized()
        app.state.scoreboard = Scoreboard(store)
        app.state.remote_sync = None

        # 2. Remote polling, only when a source is configured
        session = None
        if settings.remote_url:
            session = session_factory()
            app.state.remote_sync = RemoteSync(
                app.state.scoreboard, session, settings.remote_url, settings.poll_interval
            )
            app.state.remote_sync.start()
        else:
            logger.info("REMOTE_SOURCE_URL not set, remote polling disabled")

        try:
            yield
        finally:
            if app.state.remote_sync is not None:
                await app.state.remote_sync.stop()
            if session is not None:
                await session.close()

    app = FastAPI(title="rallyboard", lifespan=lifespan)

    @app.get("/api/state")
    async def get_state(request: Request):
        return request.app.state.scoreboard.read()

    @app.post("/api/state")
    async def post_state(request: Request):
        # Bad bodies count as an empty update, the controller always gets the record back
        try:
            payload = parse_json(await request.body())
        except ValueError:
            payload = {}
        return request.app.state.scoreboard.update(payload)

    for name in PAGES:
        app.get(f"/{name}", include_in_schema=False)(_page_route(name))

    app.mount("/static", StaticFiles(directory=PUBLIC_DIR), name="static")
    return app
