from __future__ import annotations

from typing import Any, Awaitable, Callable

import httpx
import pytest

from adapters.access_layer import AccessLayer, RequestOptions
from core.domain.models import Identity
from core.errors import NETWORK_ERROR_STATUS, RequestError
from core.services.error_classifier import Classification, ErrorClassifier
from core.services.session_store import SessionStore
from tests.conftest import TOKEN, FakeBackend, RecordingNotifier


@pytest.fixture
def session() -> SessionStore:
    store = SessionStore()
    store.login(Identity(id=1, login_name="ana"), TOKEN)
    return store


@pytest.fixture
def classifier(session: SessionStore, notifier: RecordingNotifier) -> ErrorClassifier:
    return ErrorClassifier(session, notifier)


def _error(status: int) -> RequestError:
    return RequestError(status, method="GET", url="http://api.test/temas")


def test_unauthorized_forces_logout_without_message(
    classifier: ErrorClassifier, session: SessionStore, notifier: RecordingNotifier
) -> None:
    outcome = classifier.classify(_error(401), "Failed to load the themes.")

    assert outcome is Classification.LOGGED_OUT
    assert session.is_authenticated is False
    assert notifier.errors == []


@pytest.mark.parametrize("status", [400, 403, 404, 409, 500, 503, NETWORK_ERROR_STATUS])
def test_other_failures_notify_and_keep_session(
    classifier: ErrorClassifier, session: SessionStore, notifier: RecordingNotifier, status: int
) -> None:
    outcome = classifier.classify(_error(status), "Failed to update the theme.")

    assert outcome is Classification.NOTIFIED
    assert session.is_authenticated is True
    assert session.token == TOKEN
    assert notifier.errors == ["Failed to update the theme."]


Operation = Callable[[AccessLayer, str], Awaitable[None]]


async def _fetch(api: AccessLayer, path: str) -> None:
    await api.fetch_into(path, lambda _: None, RequestOptions.authorized(TOKEN), model=Any)


async def _create(api: AccessLayer, path: str) -> None:
    await api.create_into(path, {}, lambda _: None, RequestOptions.authorized(TOKEN), model=Any)


async def _update(api: AccessLayer, path: str) -> None:
    await api.update_into(path, {}, lambda _: None, RequestOptions.authorized(TOKEN), model=Any)


@pytest.mark.parametrize("operation", [_fetch, _create, _update], ids=["fetch", "create", "update"])
@pytest.mark.parametrize("path", ["/postagens", "/temas", "/usuarios/cadastrar"])
@pytest.mark.parametrize("status", [401, 404, 500])
async def test_every_operation_and_entity_is_classified_alike(
    client: httpx.AsyncClient,
    backend: FakeBackend,
    classifier: ErrorClassifier,
    session: SessionStore,
    operation: Operation,
    path: str,
    status: int,
) -> None:
    for method in ("GET", "POST", "PUT"):
        backend.on(method, path, status=status, json={"error": "x"})
    api = AccessLayer(client)

    with pytest.raises(RequestError) as info:
        await operation(api, path)
    classifier.classify(info.value, "Failed.")

    assert session.is_authenticated is (status != 401)
