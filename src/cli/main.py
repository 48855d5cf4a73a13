"""CLI principal (Typer).

Comandos:
- `shell` (por defecto): cliente interactivo con sesión en memoria.
- `doctor`: diagnóstico de configuración y conectividad con el backend.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from adapters.console_notifier import ConsoleNotifier
from cli import doctor
from cli.shell import Shell
from cli.ui_components import print_banner
from core.app import App
from core.config import AppSettings

app = typer.Typer(help="Terminal client for the Blog Pessoal REST API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


async def _run_shell(settings: AppSettings) -> None:
    session_app = App.create(notifier=ConsoleNotifier(_console), settings=settings)
    try:
        await Shell(session_app, _console).run()
    finally:
        await session_app.aclose()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override BLOGPESSOAL_BASE_URL."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
) -> None:
    overrides = {
        key: value for key, value in (("base_url", base_url), ("log_level", log_level)) if value is not None
    }
    try:
        settings = AppSettings(**overrides)
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from None
    configure_logging(settings.log_level)
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        shell(ctx)


@app.command()
def shell(ctx: typer.Context) -> None:
    """Start the interactive client (the default command)."""

    settings = ctx.obj if isinstance(ctx.obj, AppSettings) else AppSettings()
    print_banner(_console)
    _console.print(f"[dim]API: {settings.base_url}[/dim]")
    try:
        asyncio.run(_run_shell(settings))
    except (KeyboardInterrupt, typer.Abort):
        _console.print("\n[dim]Bye.[/dim]")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
