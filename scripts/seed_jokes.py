"""Load jokes into redis, either from the public Official Joke API or from a
JSON file holding a list of strings."""

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable, List

import requests

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from jokes_api.config import settings
from jokes_api.store import JokeStore

API_URL = "https://official-joke-api.appspot.com/jokes/random"


def fetch_random_joke() -> str:
    """Call the public API and join the setup and punchline into one line."""
    response = requests.get(API_URL, timeout=5)
    response.raise_for_status()
    joke_data = response.json()
    setup = joke_data.get("setup", "").strip()
    punchline = joke_data.get("punchline", "").strip()
    return f"{setup} {punchline}".strip()


def fetch_jokes(count: int) -> List[str]:
    jokes: List[str] = []
    for _ in range(count):
        try:
            joke = fetch_random_joke()
        except requests.RequestException as exc:
            print(f"Skipping joke: {exc}", file=sys.stderr)
            continue
        if joke and joke not in jokes:
            jokes.append(joke)
    return jokes


def load_jokes_file(path: Path) -> List[str]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise ValueError(f"{path} must contain a JSON array of strings")
    return data


def seed(store: JokeStore, jokes: Iterable[str], flush: bool = False) -> int:
    client = store.client
    if flush:
        client.flushdb()
    start = max((int(key) for key in store.keys("*") if key.isdigit()), default=0) + 1
    count = 0
    with client.pipeline() as pipe:
        for offset, joke in enumerate(jokes):
            pipe.set(str(start + offset), joke)
            count += 1
        pipe.execute()
    return count


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--count", type=int, default=10, help="number of jokes to fetch from the API")
    parser.add_argument("--file", type=Path, help="JSON array of jokes to load instead of calling the API")
    parser.add_argument("--flush", action="store_true", help="empty the redis database first")
    args = parser.parse_args(argv)

    jokes = load_jokes_file(args.file) if args.file else fetch_jokes(args.count)
    store = JokeStore.from_settings(settings)
    try:
        stored = seed(store, jokes, flush=args.flush)
    finally:
        store.close()
    print(f"Stored {stored} jokes in redis at {settings.redis_host}:{settings.redis_port}")


if __name__ == "__main__":
    main()
