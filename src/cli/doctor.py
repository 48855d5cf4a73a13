"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

# Any of these means the API answered; 401/403 only say we are not logged in.
_REACHABLE_STATUSES = {200, 401, 403}


async def check_api(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[bool, str]:
    try:
        async with build_async_client(settings, transport=transport) as client:
            response = await client.get("/temas")
    except httpx.HTTPError as exc:
        return False, f"{exc.__class__.__name__}: {exc}"
    return response.status_code in _REACHABLE_STATUSES, f"HTTP {response.status_code}"


def _current_settings(ctx: typer.Context) -> AppSettings:
    parent = ctx.find_root().obj
    return parent if isinstance(parent, AppSettings) else AppSettings()


@app.command()
def run(ctx: typer.Context) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = _current_settings(ctx)

    table = Table(title="Blog Pessoal Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:.1f}s")
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "OPTIONAL", str(env_file))

    ok_api, detail_api = asyncio.run(check_api(settings))
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)

    if not ok_api:
        _console.print(
            "\n[yellow]Note:[/yellow] run `blogpessoal doctor configure` to point the client at your backend."
        )


@app.command()
def configure() -> None:
    """Interactive setup (stores the backend URL in the user config .env)."""

    base_url = typer.prompt(
        "API base URL",
        default=AppSettings().base_url,
        show_default=True,
    ).strip()

    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base_url must start with http:// or https://")

    timeout = typer.prompt("HTTP timeout (seconds)", default="20", show_default=True).strip()
    try:
        if float(timeout) <= 0:
            raise ValueError(timeout)
    except ValueError:
        raise typer.BadParameter("timeout must be a positive number") from None

    env_path = write_user_env_vars(
        {
            "BLOGPESSOAL_BASE_URL": base_url.rstrip("/"),
            "BLOGPESSOAL_HTTP_TIMEOUT_SECONDS": timeout,
        }
    )

    _console.print(f"[green]Saved API config to:[/green] {env_path}")
