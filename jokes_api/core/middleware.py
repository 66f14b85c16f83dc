import asyncio
import time

from fastapi import FastAPI, Request, status

from jokes_api.core.errors import error_response
from jokes_api.logging_config import get_logger

logger = get_logger(__name__)


def add_request_logging(app: FastAPI) -> None:
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            logger.info(
                "request_completed",
                method=request.method,
                path=request.url.path,
                status_code=status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )


def add_request_timeout(app: FastAPI, timeout: float) -> None:
    """Answer 504 once a request has run for ``timeout`` seconds.

    Sync handlers keep running in their worker thread; only the response is
    abandoned.
    """

    @app.middleware("http")
    async def enforce_timeout(request: Request, call_next):
        try:
            return await asyncio.wait_for(call_next(request), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("request_timeout", method=request.method, path=request.url.path, timeout=timeout)
            return error_response(status.HTTP_504_GATEWAY_TIMEOUT, "Request timed out")
