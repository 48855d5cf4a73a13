"""Avisos al usuario en consola (Rich).

Implementa `core.interfaces.notifier.Notifier`: cada aviso se imprime al
momento, antes de que la shell redibuje la pantalla activa.
"""

from __future__ import annotations

from rich.console import Console


class ConsoleNotifier:
    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    def info(self, message: str) -> None:
        self._console.print(f"[green]✔[/green] {message}")

    def error(self, message: str) -> None:
        self._console.print(f"[red]✘[/red] {message}")
