"""Error responses shared by every route.

All failures are answered with a ``NoJoke`` body whose ``status`` field
repeats the HTTP status code, e.g.::

    {"status": "503", "error": "Service Unavailable", "message": "Joke store unavailable"}
"""

from http import HTTPStatus

import redis
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from jokes_api import schemas
from jokes_api.logging_config import get_logger

logger = get_logger(__name__)

# Clients match on this exact text, typo included.
JOKE_NOT_AVAILABLE = "Joke not availale"


class JokeAPIError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class JokeNotAvailable(JokeAPIError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = JOKE_NOT_AVAILABLE


class NoJokesStored(JokeAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "No jokes available"


class IndexPageMissing(JokeAPIError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Index page not available"


def error_body(status_code: int, message: str) -> schemas.NoJoke:
    return schemas.NoJoke(
        status=str(status_code),
        error=HTTPStatus(status_code).phrase,
        message=message,
    )


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error_body(status_code, message).model_dump())


async def joke_api_error_handler(request: Request, exc: JokeAPIError):
    logger.warning("joke_api_error", path=request.url.path, status_code=exc.status_code, message=exc.message)
    return error_response(exc.status_code, exc.message)


async def store_error_handler(request: Request, exc: redis.RedisError):
    logger.error("store_error", path=request.url.path, error=str(exc), error_type=type(exc).__name__)
    return error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "Joke store unavailable")


async def general_exception_handler(request: Request, exc: Exception):
    logger.error("unexpected_exception", path=request.url.path, error=str(exc), exc_info=True)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(JokeAPIError, joke_api_error_handler)
    app.add_exception_handler(redis.RedisError, store_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
