from __future__ import annotations

import asyncio
import threading

import pytest
from rich.console import Console

from cli import shell as shell_module
from cli.shell import Shell
from core.app import App
from tests.conftest import FakeBackend


@pytest.fixture
def console() -> Console:
    return Console(record=True, width=120)


def _scripted(answers: list[str], threads: list[threading.Thread]):
    def prompt(text: str, **kwargs: object) -> str:
        threads.append(threading.current_thread())
        return answers.pop(0)

    return prompt


async def test_prompts_run_off_the_event_loop(
    app: App, console: Console, monkeypatch: pytest.MonkeyPatch
) -> None:
    threads: list[threading.Thread] = []
    monkeypatch.setattr(shell_module.typer, "prompt", _scripted(["q"], threads))

    await Shell(app, console).run()

    assert threads
    assert all(thread is not threading.main_thread() for thread in threads)


async def test_login_then_quit(
    app: App, backend: FakeBackend, console: Console, monkeypatch: pytest.MonkeyPatch
) -> None:
    backend.on("POST", "/usuarios/logar", json={"id": 1, "nome": "Ana", "usuario": "ana", "token": "Bearer t"})
    backend.on("GET", "/postagens", json=[])
    threads: list[threading.Thread] = []
    monkeypatch.setattr(shell_module.typer, "prompt", _scripted(["l", "ana", "abcdefgh", "quit"], threads))

    await asyncio.wait_for(Shell(app, console).run(), timeout=5)

    assert app.session.is_authenticated is True
    assert app.router.current_path == "/postagens"
    assert "No posts found!" in console.export_text()
