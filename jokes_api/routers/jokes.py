from fastapi import APIRouter, Depends, status

from jokes_api import schemas
from jokes_api.core.errors import JokeNotAvailable, NoJokesStored
from jokes_api.store import JokeStore, get_store

router = APIRouter(tags=["jokes"])


@router.get("/list", response_model=list[schemas.Joke])
def list_jokes(store: JokeStore = Depends(get_store)):
    jokes = []
    for key in store.keys("*"):
        value = store.get(key)
        # Deleted between KEYS and GET
        if value is None:
            continue
        jokes.append(schemas.Joke(id=key, joke=value))
    return jokes


@router.get(
    "/joke/{joke_id}",
    response_model=schemas.Joke,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": schemas.NoJoke}},
)
def get_joke(joke_id: str, store: JokeStore = Depends(get_store)):
    value = store.get(joke_id)
    if value is None:
        raise JokeNotAvailable()
    return schemas.Joke(id=joke_id, joke=value)


@router.get(
    "/rand",
    response_model=schemas.Joke,
    responses={status.HTTP_404_NOT_FOUND: {"model": schemas.NoJoke}},
)
def random_joke(store: JokeStore = Depends(get_store)):
    key = store.random_key()
    if key is None:
        raise NoJokesStored()
    value = store.get(key)
    if value is None:
        raise NoJokesStored()
    return schemas.Joke(id=key, joke=value)
