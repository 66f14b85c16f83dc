from typing import List, Optional

import redis
from fastapi import Request

from jokes_api.config import Settings


class JokeStore:
    """Read-only view of the jokes kept in redis, one string value per key."""

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "JokeStore":
        client = redis.Redis(
            host=settings.redis_host,
            port=settings.redis_port,
            password=settings.redis_password or None,
            db=settings.redis_db,
            socket_timeout=settings.request_timeout,
            socket_connect_timeout=settings.request_timeout,
            decode_responses=True,
        )
        return cls(client)

    def get(self, key: str) -> Optional[str]:
        return self.client.get(key)

    def keys(self, pattern: str = "*") -> List[str]:
        return list(self.client.keys(pattern))

    def random_key(self) -> Optional[str]:
        return self.client.randomkey()

    def ping(self) -> bool:
        return bool(self.client.ping())

    def close(self) -> None:
        self.client.close()


def get_store(request: Request) -> JokeStore:
    return request.app.state.store
