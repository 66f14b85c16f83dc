import fakeredis
import pytest
from httpx import ASGITransport, AsyncClient

from jokes_api.config import Settings
from jokes_api.main import create_app
from jokes_api.store import JokeStore, get_store


JOKES = {
    "1": "Why don't scientists trust atoms? Because they make up everything!",
    "2": "What do you call a fake noodle? An impasta!",
    "3": "Why can't a bicycle stand up by itself? It's two tired!",
}


@pytest.fixture
def jokes():
    return dict(JOKES)


@pytest.fixture
def settings():
    return Settings(request_timeout=2.0)


@pytest.fixture
def redis_client():
    client = fakeredis.FakeRedis(decode_responses=True)
    client.mset(JOKES)
    yield client
    client.flushall()


@pytest.fixture
def store(redis_client):
    return JokeStore(redis_client)


@pytest.fixture
def down_store():
    server = fakeredis.FakeServer()
    server.connected = False
    return JokeStore(fakeredis.FakeRedis(server=server, decode_responses=True))


@pytest.fixture
def app(store, settings):
    return create_app(store=store, settings=settings)


@pytest.fixture
def store_down(app, down_store):
    app.dependency_overrides[get_store] = lambda: down_store
    yield down_store
    app.dependency_overrides.pop(get_store, None)


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
