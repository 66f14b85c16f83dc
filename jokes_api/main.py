from contextlib import asynccontextmanager
from typing import AsyncGenerator

import redis
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse

from jokes_api import schemas
from jokes_api.config import Settings, settings as default_settings
from jokes_api.core.errors import IndexPageMissing, register_exception_handlers
from jokes_api.core.middleware import add_request_logging, add_request_timeout
from jokes_api.logging_config import get_logger
from jokes_api.routers import jokes
from jokes_api.store import JokeStore, get_store

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Refuse to start without the index page or a reachable store."""
    settings: Settings = app.state.settings
    store: JokeStore = app.state.store
    logger.info(
        "application_starting",
        app_name=settings.app_name,
        redis_host=settings.redis_host,
        redis_port=settings.redis_port,
    )

    if not settings.index_page.is_file():
        logger.error("index_page_missing", path=str(settings.index_page))
        raise IndexPageMissing(f"Index page not found at {settings.index_page}")

    try:
        store.ping()
    except redis.RedisError as exc:
        logger.error("store_unreachable", error=str(exc), exc_info=True)
        raise
    logger.info("store_connected")

    try:
        yield
    finally:
        logger.info("application_shutting_down")
        store.close()
        logger.info("application_shutdown_complete")


def create_app(store: JokeStore | None = None, settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store or JokeStore.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    add_request_timeout(app, settings.request_timeout)
    add_request_logging(app)
    register_exception_handlers(app)

    @app.get("/", include_in_schema=False)
    def serve_index():
        # Read from disk on every call so edits show up without a restart
        if not settings.index_page.is_file():
            raise IndexPageMissing()
        return FileResponse(settings.index_page, media_type="text/html")

    app.include_router(jokes.router)

    @app.get("/health", response_model=schemas.HealthRead)
    def health(store: JokeStore = Depends(get_store)):
        store.ping()
        return {"status": "ok", "app": settings.app_name}

    return app


app = create_app()
