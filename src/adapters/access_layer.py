"""Capa de acceso genérica al backend REST.

Responsabilidad:
- Una única ruta de datos para todas las pantallas: serializa el cuerpo,
  hace la llamada, decodifica el JSON al tipo pedido y lo entrega al `sink`.
- Convierte cualquier fallo (red, status no-2xx, cuerpo inválido) en
  `RequestError` con el status numérico. En fallo nunca se llama al `sink`.

Nota:
- La capa no conoce la sesión: el token llega ya dentro de `RequestOptions`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Callable, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from core.domain.models import to_wire
from core.errors import NETWORK_ERROR_STATUS, RequestError

logger = logging.getLogger(__name__)

T = TypeVar("T")
Sink = Callable[[T], None]


@dataclass
class RequestOptions:
    """Opciones por request (hoy solo headers)."""

    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def authorized(cls, token: str) -> "RequestOptions":
        """Header `Authorization` con el token tal cual lo dio el backend."""

        return cls(headers={"Authorization": token})


class StaleGuard:
    """Contador de generaciones para descartar respuestas tardías.

    Cada `bind` captura la generación actual; tras `invalidate` los sinks
    ligados antes ignoran el resultado.
    """

    def __init__(self) -> None:
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def invalidate(self) -> None:
        self._generation += 1

    def bind(self, sink: Sink[T]) -> Sink[T]:
        generation = self._generation

        def guarded(value: T) -> None:
            if generation != self._generation:
                logger.debug("Dropping stale response (generation %s < %s)", generation, self._generation)
                return
            sink(value)

        return guarded


@lru_cache(maxsize=None)
def _adapter(model: Any) -> TypeAdapter[Any]:
    return TypeAdapter(model)


class AccessLayer:
    """Operaciones `fetch_into` / `create_into` / `update_into` / `delete_at`."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    async def fetch_into(
        self,
        path: str,
        sink: Sink[T],
        options: RequestOptions | None = None,
        *,
        model: Any,
    ) -> None:
        response = await self._send("GET", path, options=options)
        sink(self._decode(response, model))

    async def create_into(
        self,
        path: str,
        body: Any,
        sink: Sink[T],
        options: RequestOptions | None = None,
        *,
        model: Any,
    ) -> None:
        response = await self._send("POST", path, body=body, options=options)
        sink(self._decode(response, model))

    async def update_into(
        self,
        path: str,
        body: Any,
        sink: Sink[T],
        options: RequestOptions | None = None,
        *,
        model: Any,
    ) -> None:
        response = await self._send("PUT", path, body=body, options=options)
        sink(self._decode(response, model))

    async def delete_at(self, path: str, options: RequestOptions | None = None) -> None:
        await self._send("DELETE", path, options=options)

    async def _send(
        self,
        method: str,
        path: str,
        *,
        body: Any = None,
        options: RequestOptions | None = None,
    ) -> httpx.Response:
        headers = dict(options.headers) if options else {}
        payload = to_wire(body) if body is not None else None
        request = self._client.build_request(method, path, json=payload, headers=headers)
        url = str(request.url)

        logger.debug("%s %s", method, url)
        try:
            response = await self._client.send(request)
        except httpx.TransportError as exc:
            logger.warning("%s %s: network failure (%s)", method, url, exc.__class__.__name__)
            raise RequestError(NETWORK_ERROR_STATUS, method=method, url=url, detail=str(exc)) from exc

        if not response.is_success:
            logger.warning("%s %s: HTTP %s", method, url, response.status_code)
            raise RequestError(response.status_code, method=method, url=url)
        return response

    def _decode(self, response: httpx.Response, model: Any) -> Any:
        request = response.request
        try:
            data = response.json()
            return _adapter(model).validate_python(data)
        except (ValueError, ValidationError) as exc:
            logger.warning("%s %s: undecodable response body", request.method, request.url)
            raise RequestError(
                response.status_code,
                method=request.method,
                url=str(request.url),
                detail="invalid response body",
                decode_failed=True,
            ) from exc
