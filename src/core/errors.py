"""Errores tipados del cliente.

Reglas:
- `RequestError` solo lo construye la capa de acceso (`adapters.access_layer`).
- El status viaja como entero: nadie debe inferirlo del texto del error.
"""

from __future__ import annotations

NETWORK_ERROR_STATUS = 0
UNAUTHORIZED_STATUS = 401


class RequestError(Exception):
    """Fallo de una llamada remota (status no-2xx o fallo de red)."""

    def __init__(
        self,
        status: int,
        *,
        method: str,
        url: str,
        detail: str | None = None,
        decode_failed: bool = False,
    ) -> None:
        self.status = status
        self.method = method
        self.url = url
        self.detail = detail
        self.decode_failed = decode_failed
        label = "network error" if status == NETWORK_ERROR_STATUS else f"HTTP {status}"
        message = f"{method} {url} failed: {label}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)

    @property
    def is_unauthorized(self) -> bool:
        return self.status == UNAUTHORIZED_STATUS

    @property
    def is_network_error(self) -> bool:
        return self.status == NETWORK_ERROR_STATUS


class RouteNotFoundError(LookupError):
    """No existe ninguna ruta registrada para el path pedido."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No route matches {path!r}")
