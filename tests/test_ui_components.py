from __future__ import annotations

from datetime import datetime

from rich.console import Console

from adapters.console_notifier import ConsoleNotifier
from cli.ui_components import build_delete_panel, build_post_card, format_date, render_list
from core.app import App
from core.domain.models import Identity, Post, Theme
from core.screens import PostDeleteScreen, ThemeListScreen
from tests.conftest import FakeBackend


def _console() -> Console:
    return Console(record=True, width=120)


def test_format_date_handles_missing_value() -> None:
    assert format_date(None) == "-"
    assert "2024" in format_date(datetime(2024, 3, 1, 10, 30))


def test_post_card_tolerates_missing_theme_and_author() -> None:
    console = _console()
    console.print(build_post_card(Post(id=3, title="hello", body="world")))

    text = console.export_text()
    assert "HELLO" in text
    assert "world" in text


def test_post_card_shows_author_and_theme() -> None:
    post = Post(
        id=3,
        title="hello",
        body="world",
        theme=Theme(id=1, description="Tech"),
        author=Identity(id=1, display_name="Ana"),
    )
    console = _console()
    console.print(build_post_card(post))

    text = console.export_text()
    assert "ANA" in text
    assert "Tech" in text


async def test_render_list_empty_notice(logged_app: App, backend: FakeBackend) -> None:
    backend.on("GET", "/temas", json=[])
    await logged_app.go("/temas")
    console = _console()

    render_list(console, logged_app.screen)

    assert "No themes found!" in console.export_text()


async def test_render_list_cards(logged_app: App, backend: FakeBackend) -> None:
    backend.on("GET", "/temas", json=[{"id": 1, "descricao": "Tech"}, {"id": 2, "descricao": "Art"}])
    await logged_app.go("/temas")
    console = _console()

    render_list(console, logged_app.screen)

    text = console.export_text()
    assert "Tech" in text
    assert "Art" in text
    assert "No themes found!" not in text


async def test_render_list_after_failure_shows_nothing(logged_app: App, backend: FakeBackend) -> None:
    backend.on("GET", "/temas", status=500)
    await logged_app.go("/temas")
    assert isinstance(logged_app.screen, ThemeListScreen)
    console = _console()

    render_list(console, logged_app.screen)

    assert console.export_text().strip() == ""


async def test_delete_panel_before_load(logged_app: App) -> None:
    screen = PostDeleteScreen(logged_app.ctx)
    console = _console()

    console.print(build_delete_panel(screen))

    assert "Record not available." in console.export_text()


def test_console_notifier_prints_each_notice() -> None:
    console = _console()
    notifier = ConsoleNotifier(console)

    notifier.info("The theme was created successfully!")
    notifier.error("Failed to load the posts.")

    lines = console.export_text().splitlines()
    assert lines[0].endswith("The theme was created successfully!")
    assert lines[1].endswith("Failed to load the posts.")
