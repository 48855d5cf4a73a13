"""Componentes de UI para CLI (Rich).

Separan los detalles visuales de la shell: cada función recibe un modelo o
una pantalla y devuelve un renderable (o imprime directamente).

Nota: los registros pueden venir incompletos (tema o autor aún `None`);
nada aquí debe asumir que están poblados.
"""

from __future__ import annotations

from datetime import datetime

from rich.align import Align
from rich.columns import Columns
from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.loadable import Loading, loaded_value
from core.domain.models import Identity, Post, Theme
from core.screens.base import DeleteScreen, ListScreen
from core.screens.posts import PostFormScreen

DEFAULT_AVATAR = "(no photo)"


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("Blog Pessoal", style="bold cyan")
    subtitle = Text("Posts • Themes • Terminal client", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def format_date(value: datetime | None) -> str:
    if value is None:
        return "-"
    return value.strftime("%A, %d %B %Y %H:%M:%S")


def build_post_card(post: Post) -> Panel:
    """Tarjeta de una postagem (autor, título, texto, tema y fecha)."""

    author = post.author
    author_name = author.display_name if author else ""
    photo = (author.photo_url if author else None) or DEFAULT_AVATAR

    body = Text()
    body.append(post.title.upper() + "\n", style="bold")
    body.append(post.body + "\n\n")
    body.append("Theme: ", style="dim")
    body.append((post.theme.description if post.theme else "") + "\n")
    body.append("Date: ", style="dim")
    body.append(format_date(post.created_at))

    title = Text(author_name.upper() or "-", style="bold")
    subtitle = Text(f"#{post.id} • {photo}", style="dim")
    return Panel(body, title=title, subtitle=subtitle, border_style="bright_blue", width=48)


def build_theme_card(theme: Theme) -> Panel:
    title = Text(f"Theme #{theme.id}", style="bold")
    return Panel(Text(theme.description), title=title, border_style="magenta", width=36)


def build_card(record: Post | Theme) -> Panel:
    if isinstance(record, Post):
        return build_post_card(record)
    return build_theme_card(record)


def render_list(console: Console, screen: ListScreen) -> None:
    """Lista como grilla de tarjetas, con indicador de carga y estado vacío."""

    view = screen.view()
    if view.loading:
        console.print("[dim]Loading...[/dim]")
        return
    if view.empty:
        console.print(Align.center(Text(screen.empty_notice, style="bold")))
        return
    if view.cards:
        console.print(Columns([build_card(record) for _, record in view.cards]))


def build_post_form_table(form: PostFormScreen) -> Table:
    table = Table(title=form.title, show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    if isinstance(form.record, Loading):
        table.add_row("", "Loading...")
        return table

    theme = form.selected_theme
    table.add_row("Title", str(form.value("title")))
    table.add_row("Text", str(form.value("body")))
    table.add_row("Theme", theme.description if theme and theme.description else "(select a theme)")
    table.add_row("Submit", "[green]enabled[/green]" if form.can_submit else "[red]disabled[/red]")
    return table


def build_theme_options_table(themes: list[Theme]) -> Table:
    table = Table(title="Themes")
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("Description", style="white")
    for theme in themes:
        table.add_row(str(theme.id), theme.description)
    return table


def build_delete_panel(screen: DeleteScreen) -> RenderableType:
    record = loaded_value(screen.record)
    if record is None:
        return Text("Loading..." if isinstance(screen.record, Loading) else "Record not available.")
    question = Text(f"Delete this {screen.entity_label}?", style="bold red")
    return Panel(build_card(record), title=question, border_style="red")


def build_profile_panel(identity: Identity) -> Panel:
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Name", identity.display_name)
    table.add_row("Login", identity.login_name)
    table.add_row("Photo", identity.photo_url or DEFAULT_AVATAR)
    return Panel(table, title=Text("Profile", style="bold"), border_style="cyan")
