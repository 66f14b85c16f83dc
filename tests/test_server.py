import signal
import socket
import subprocess
import sys
import threading
import time
from pathlib import Path

import httpx
import pytest

from jokes_api import server
from jokes_api.config import Settings


def test_build_server_listens_on_8080_with_grace_period(app):
    uv_server = server.build_server(app, Settings(_env_file=None))
    assert uv_server.config.port == 8080
    assert uv_server.config.host == "0.0.0.0"
    assert uv_server.config.timeout_graceful_shutdown == 10
    assert uv_server.config.lifespan == "on"


def test_run_exits_when_startup_fails(monkeypatch):
    monkeypatch.setattr(server, "configure_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(server.uvicorn.Server, "run", lambda self, sockets=None: None)

    with pytest.raises(SystemExit) as excinfo:
        server.run(Settings(_env_file=None))
    assert excinfo.value.code == server.STARTUP_FAILURE


def test_run_returns_after_clean_shutdown(monkeypatch):
    def fake_run(self, sockets=None):
        self.started = True

    monkeypatch.setattr(server, "configure_logging", lambda *args, **kwargs: None)
    monkeypatch.setattr(server.uvicorn.Server, "run", fake_run)

    server.run(Settings(_env_file=None))


ROOT_DIR = Path(__file__).resolve().parents[1]

SLOW_SERVER = """
import sys
import time

import fakeredis

from jokes_api.config import Settings
from jokes_api.main import create_app
from jokes_api.server import build_server
from jokes_api.store import JokeStore


class SlowStore(JokeStore):
    def get(self, key):
        time.sleep(30)
        return super().get(key)


client = fakeredis.FakeRedis(decode_responses=True)
client.set("1", "A slow joke")
settings = Settings(_env_file=None, app_host="127.0.0.1", app_port=int(sys.argv[1]), request_timeout=60)
build_server(create_app(store=SlowStore(client), settings=settings), settings).run()
"""


def free_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def wait_until_listening(port: int, proc: subprocess.Popen, deadline: float = 15.0) -> None:
    started = time.monotonic()
    while time.monotonic() - started < deadline:
        if proc.poll() is not None:
            pytest.fail(f"server exited early with code {proc.returncode}")
        try:
            with socket.create_connection(("127.0.0.1", port), timeout=0.2):
                return
        except OSError:
            time.sleep(0.1)
    pytest.fail("server did not start listening")


@pytest.mark.skipif(sys.platform == "win32", reason="needs POSIX signals")
def test_sigterm_exits_within_grace_period_with_request_in_flight():
    port = free_port()
    proc = subprocess.Popen([sys.executable, "-c", SLOW_SERVER, str(port)], cwd=ROOT_DIR)
    try:
        wait_until_listening(port, proc)

        def slow_request():
            try:
                httpx.get(f"http://127.0.0.1:{port}/joke/1", timeout=60)
            except httpx.HTTPError:
                pass

        threading.Thread(target=slow_request, daemon=True).start()
        time.sleep(0.5)

        sent = time.monotonic()
        proc.send_signal(signal.SIGTERM)
        proc.wait(timeout=20)
        elapsed = time.monotonic() - sent
    finally:
        if proc.poll() is None:
            proc.kill()
            proc.wait()

    assert elapsed < 11.5
