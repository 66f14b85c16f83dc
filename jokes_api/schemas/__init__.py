from jokes_api.schemas.schemas import HealthRead, Joke, NoJoke

__all__ = ["HealthRead", "Joke", "NoJoke"]
