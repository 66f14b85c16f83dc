import sys

import uvicorn
from fastapi import FastAPI

from jokes_api.config import Settings, settings as default_settings
from jokes_api.logging_config import configure_logging, get_logger
from jokes_api.main import create_app

logger = get_logger(__name__)

STARTUP_FAILURE = 3


def build_server(app: FastAPI, settings: Settings) -> uvicorn.Server:
    """uvicorn stops accepting connections on SIGINT/SIGTERM and gives
    in-flight requests ``shutdown_grace_period`` seconds before exiting."""
    config = uvicorn.Config(
        app,
        host=settings.app_host,
        port=settings.app_port,
        lifespan="on",
        timeout_graceful_shutdown=settings.shutdown_grace_period,
        log_config=None,
        log_level=settings.log_level.lower(),
        access_log=False,
    )
    return uvicorn.Server(config)


def run(settings: Settings | None = None) -> None:
    settings = settings or default_settings
    configure_logging(settings.log_level, settings.json_logs, app_name=settings.app_name)

    server = build_server(create_app(settings=settings), settings)
    logger.info("starting_server", host=settings.app_host, port=settings.app_port)
    server.run()

    if not server.started:
        logger.error("server_startup_failed")
        sys.exit(STARTUP_FAILURE)
    logger.info("server_stopped")


if __name__ == "__main__":
    run()
