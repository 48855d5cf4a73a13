"""Interactive shell.

One process, one event loop, one session: the shell renders the active
screen, reads a command and calls the screen's actions. Screen state lives in
`core.screens`; this module only draws it and collects input.
"""

from __future__ import annotations

import asyncio
from typing import Any

import typer
from rich.console import Console

from cli.ui_components import (
    build_delete_panel,
    build_post_form_table,
    build_profile_panel,
    build_theme_options_table,
    render_list,
)
from core.app import App
from core.domain.loadable import Loaded
from core.errors import RouteNotFoundError
from core.screens import (
    DeleteScreen,
    ListScreen,
    LoginScreen,
    PostFormScreen,
    PostListScreen,
    ProfileScreen,
    RegistrationScreen,
    Screen,
    ThemeFormScreen,
    logout,
)


NAV_COMMANDS = {
    "posts": "/postagens",
    "themes": "/temas",
    "profile": "/perfil",
    "new-post": "/cadastrarpostagem",
    "new-theme": "/cadastrartema",
}

HELP_TEXT = (
    "Commands: posts, themes, profile, new-post, new-theme, "
    "edit <id>, delete <id>, refresh, go <path>, logout, quit"
)


class Shell:
    def __init__(self, app: App, console: Console) -> None:
        self.app = app
        self.console = console
        self.running = True

    async def run(self) -> None:
        await self.app.start()
        while self.running:
            await self.app.enforce_guard()
            screen = self.app.screen
            if screen is None:
                break
            self.console.rule(f"[bold]{screen.title}[/bold] [dim]{self.app.router.current_path}[/dim]")
            await self.step(screen)

    async def _prompt(self, text: str, **kwargs: Any) -> str:
        """`typer.prompt` run off the event loop."""

        return await asyncio.to_thread(typer.prompt, text, **kwargs)

    async def _confirm(self, text: str, **kwargs: Any) -> bool:
        return await asyncio.to_thread(typer.confirm, text, **kwargs)

    async def step(self, screen: Screen) -> None:
        if isinstance(screen, LoginScreen):
            await self._login(screen)
        elif isinstance(screen, RegistrationScreen):
            await self._register(screen)
        elif isinstance(screen, PostFormScreen):
            await self._post_form(screen)
        elif isinstance(screen, ThemeFormScreen):
            await self._theme_form(screen)
        elif isinstance(screen, DeleteScreen):
            await self._delete(screen)
        else:
            if isinstance(screen, ListScreen):
                render_list(self.console, screen)
            elif isinstance(screen, ProfileScreen):
                self.console.print(build_profile_panel(screen.identity))
            await self._command(screen)

    async def _command(self, screen: Screen) -> None:
        self.console.print(f"[dim]{HELP_TEXT}[/dim]")
        raw = (await self._prompt(">", default="", show_default=False)).strip()
        if not raw:
            return

        name, _, arg = raw.partition(" ")
        arg = arg.strip()
        if name == "quit":
            self.running = False
        elif name == "logout":
            await logout(self.app.ctx)
        elif name in NAV_COMMANDS:
            await self._go(NAV_COMMANDS[name])
        elif name == "refresh" and isinstance(screen, ListScreen):
            await screen.load()
        elif name in ("edit", "delete") and arg and isinstance(screen, ListScreen):
            prefix = "postagem" if isinstance(screen, PostListScreen) else "tema"
            verb = "editar" if name == "edit" else "deletar"
            await self._go(f"/{verb}{prefix}/{arg}")
        elif name == "go" and arg:
            await self._go(arg)
        else:
            self.console.print(f"[yellow]Unknown command:[/yellow] {raw}")

    async def _go(self, path: str) -> None:
        try:
            await self.app.go(path)
        except RouteNotFoundError as exc:
            self.console.print(f"[yellow]{exc}[/yellow]")

    async def _login(self, screen: LoginScreen) -> None:
        choice = (await self._prompt("[l]ogin, [s]ign up or [q]uit", default="l")).strip().lower()
        if choice.startswith("q"):
            self.running = False
            return
        if choice.startswith("s"):
            await self._go("/cadastro")
            return

        screen.change("login_name", await self._prompt("User"))
        screen.change("password", await self._prompt("Password", hide_input=True))
        await screen.submit()

    async def _register(self, screen: RegistrationScreen) -> None:
        if not await self._confirm("Create a new account?", default=True):
            await screen.cancel()
            return

        screen.change("display_name", await self._prompt("Name", default=screen.value("display_name") or None))
        screen.change("login_name", await self._prompt("User", default=screen.value("login_name") or None))
        photo = await self._prompt("Photo URL", default=screen.value("photo_url"), show_default=False)
        screen.change("photo_url", photo)
        screen.change("password", await self._prompt("Password", hide_input=True))
        screen.change_confirmation(await self._prompt("Confirm password", hide_input=True))
        await screen.submit()

    async def _post_form(self, screen: PostFormScreen) -> None:
        if not isinstance(screen.record, Loaded):
            self.console.print("[yellow]The post could not be loaded.[/yellow]")
            await screen.cancel()
            return

        screen.change("title", await self._prompt("Title", default=screen.value("title") or None))
        screen.change("body", await self._prompt("Text", default=screen.value("body") or None))

        themes = screen.theme_options
        if themes:
            self.console.print(build_theme_options_table(themes))
            current = screen.selected_theme
            default = str(current.id) if current and current.id is not None else None
            theme_id = (await self._prompt("Theme id", default=default)).strip()
            if theme_id and (current is None or str(current.id) != theme_id):
                await screen.select_theme(theme_id)
                if not self.app.session.is_authenticated:
                    return

        self.console.print(build_post_form_table(screen))
        if not screen.can_submit:
            self.console.print("[yellow]Select a theme before submitting.[/yellow]")
            if not await self._confirm("Keep editing?", default=True):
                await screen.cancel()
            return

        if await self._confirm("Submit?", default=True):
            await screen.submit()
        else:
            await screen.cancel()

    async def _theme_form(self, screen: ThemeFormScreen) -> None:
        if not isinstance(screen.record, Loaded):
            self.console.print("[yellow]The theme could not be loaded.[/yellow]")
            await screen.cancel()
            return

        description = await self._prompt("Theme description", default=screen.value("description") or None)
        screen.change("description", description)
        if await self._confirm("Submit?", default=True):
            await screen.submit()
        else:
            await screen.cancel()

    async def _delete(self, screen: DeleteScreen) -> None:
        self.console.print(build_delete_panel(screen))
        if await self._confirm("Confirm?", default=False):
            await screen.confirm()
        else:
            await screen.cancel()
