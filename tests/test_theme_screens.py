from __future__ import annotations

from core.app import App
from core.domain.loadable import Loaded
from core.domain.models import Theme
from core.screens import ThemeFormScreen, ThemeListScreen
from tests.conftest import FakeBackend, RecordingNotifier


async def test_theme_list_renders_none_found(logged_app: App, backend: FakeBackend) -> None:
    backend.on("GET", "/temas", json=[])

    await logged_app.go("/temas")
    screen = logged_app.screen

    assert isinstance(screen, ThemeListScreen)
    assert screen.view().empty is True
    assert screen.empty_notice == "No themes found!"


async def test_theme_list_cards(logged_app: App, backend: FakeBackend) -> None:
    backend.on("GET", "/temas", json=[{"id": 4, "descricao": "Tech"}, {"id": 9, "descricao": "Art"}])

    await logged_app.go("/temas")

    assert [key for key, _ in logged_app.screen.view().cards] == [4, 9]


async def test_create_theme(logged_app: App, backend: FakeBackend, notifier: RecordingNotifier) -> None:
    backend.on("POST", "/temas", status=201, json={"id": 12, "descricao": "Music"})
    backend.on("GET", "/temas", json=[{"id": 12, "descricao": "Music"}])

    await logged_app.go("/cadastrartema")
    form = logged_app.screen
    assert isinstance(form, ThemeFormScreen)
    assert form.title == "New theme"

    form.change("description", "Music")
    assert await form.submit() is True

    assert FakeBackend.body(backend.sent("POST", "/temas")[0]) == {"descricao": "Music"}
    assert notifier.infos == ["The theme was created successfully!"]
    assert logged_app.router.current_path == "/temas"


async def test_edit_theme_updates_collection_path(logged_app: App, backend: FakeBackend) -> None:
    backend.on("GET", "/temas/2", json={"id": 2, "descricao": "Tech"})
    backend.on("PUT", "/temas", json={"id": 2, "descricao": "Technology"})
    backend.on("GET", "/temas", json=[])

    await logged_app.go("/editartema/2")
    form = logged_app.screen
    assert form.title == "Edit theme"
    assert form.record == Loaded(Theme(id=2, description="Tech"))

    form.change("description", "Technology")
    await form.submit()

    assert FakeBackend.body(backend.sent("PUT", "/temas")[0]) == {"id": 2, "descricao": "Technology"}


async def test_create_failure_names_the_operation(
    logged_app: App, backend: FakeBackend, notifier: RecordingNotifier
) -> None:
    backend.on("POST", "/temas", status=400)

    await logged_app.go("/cadastrartema")
    form = logged_app.screen
    form.change("description", "x")

    assert await form.submit() is False
    assert notifier.errors == ["Failed to create the theme."]
    assert form.value("description") == "x"


async def test_unauthorized_load_logs_out(logged_app: App, backend: FakeBackend, notifier: RecordingNotifier) -> None:
    backend.on("GET", "/temas/2", status=401)

    await logged_app.go("/editartema/2")

    assert logged_app.session.is_authenticated is False
    assert logged_app.router.current_path == "/"
    assert notifier.errors == ["You need to be logged in!"]


async def test_delete_failure_returns_to_list(
    logged_app: App, backend: FakeBackend, notifier: RecordingNotifier
) -> None:
    backend.on("GET", "/temas/2", json={"id": 2, "descricao": "Tech"})
    backend.on("DELETE", "/temas/2", status=500)
    backend.on("GET", "/temas", json=[{"id": 2, "descricao": "Tech"}])

    await logged_app.go("/deletartema/2")
    assert await logged_app.screen.confirm() is False

    assert notifier.errors == ["Failed to delete the theme."]
    assert logged_app.router.current_path == "/temas"
    assert logged_app.session.is_authenticated is True
