from pydantic import BaseModel


class Joke(BaseModel):
    id: str
    joke: str


class NoJoke(BaseModel):
    status: str
    error: str
    message: str


class HealthRead(BaseModel):
    status: str
    app: str
