from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from core.app import App
from core.config import AppSettings
from core.domain.models import Identity

BASE_URL = "http://api.test"
TOKEN = "Bearer test-token"


class FakeBackend:
    """In-memory REST backend for `httpx.MockTransport`.

    Unregistered routes answer 404. Every request is recorded.
    """

    def __init__(self) -> None:
        self._responses: dict[tuple[str, str], tuple[int, Any]] = {}
        self._failures: set[tuple[str, str]] = set()
        self.requests: list[httpx.Request] = []

    def on(self, method: str, path: str, *, status: int = 200, json: Any = None) -> None:
        self._responses[(method, path)] = (status, json)

    def fail_network(self, method: str, path: str) -> None:
        self._failures.add((method, path))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key in self._failures:
            raise httpx.ConnectError("connection refused", request=request)
        if key not in self._responses:
            return httpx.Response(404, json={"error": "not found"})
        status, body = self._responses[key]
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def sent(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content)


class RecordingNotifier:
    def __init__(self) -> None:
        self.infos: list[str] = []
        self.errors: list[str] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(base_url=BASE_URL, _env_file=None)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def client(backend: FakeBackend) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=BASE_URL, transport=httpx.MockTransport(backend))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def app(client: httpx.AsyncClient, notifier: RecordingNotifier, settings: AppSettings) -> App:
    return App(client=client, notifier=notifier, settings=settings)


@pytest.fixture
def identity() -> Identity:
    return Identity(id=1, display_name="Ana", login_name="ana@example.com", photo_url="")


@pytest.fixture
def logged_app(app: App, identity: Identity) -> App:
    app.session.login(identity, TOKEN)
    return app
