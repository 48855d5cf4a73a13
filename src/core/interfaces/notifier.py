"""Contrato para avisos visibles al usuario.

Reglas de diseño:
- Un aviso es una línea de texto; la capa de presentación decide cómo se ve.
- `error` se usa para fallos de operaciones remotas y validaciones.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Notifier(Protocol):
    def info(self, message: str) -> None:
        """Aviso informativo (p.ej. 'Theme created')."""

        ...

    def error(self, message: str) -> None:
        """Aviso de fallo (p.ej. 'Failed to update the theme')."""

        ...
