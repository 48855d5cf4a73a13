"""Estado de carga explícito para registros y colecciones remotas.

Un formulario o lista nunca lee campos de un registro que aún no llegó:
primero pregunta en qué variante está.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class NotLoaded:
    pass


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class Loaded(Generic[T]):
    value: T


Loadable = Union[NotLoaded, Loading, Loaded[T]]


def loaded_value(state: "Loadable[T]") -> T | None:
    """Devuelve el valor si está cargado; `None` en cualquier otro caso."""

    if isinstance(state, Loaded):
        return state.value
    return None
