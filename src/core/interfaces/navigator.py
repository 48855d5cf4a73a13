"""Contrato mínimo de navegación.

El Core solo necesita dos capacidades: "ir a la ruta X" y saber en qué ruta
está. Los parámetros de ruta (`:id`) llegan a cada pantalla en `activate`.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Navigator(Protocol):
    @property
    def current_path(self) -> str | None:
        ...

    async def go(self, path: str) -> None:
        """Desactiva la pantalla actual y activa la que corresponde a `path`."""

        ...
