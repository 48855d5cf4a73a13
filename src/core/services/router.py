"""Route table and navigation.

Patterns use `:name` segments (`/editarpostagem/:id`). `go` deactivates the
current screen, builds a fresh one from the route factory and activates it
with the captured params. Navigation is re-entrant: a screen may redirect
from inside its own `activate` (the auth guard does).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from core.errors import RouteNotFoundError

if TYPE_CHECKING:
    from core.screens.base import Screen

logger = logging.getLogger(__name__)

ScreenFactory = Callable[[], "Screen"]


@dataclass(frozen=True)
class Route:
    pattern: str
    factory: ScreenFactory

    @property
    def segments(self) -> list[str]:
        return [s for s in self.pattern.split("/") if s]

    def match(self, path: str) -> dict[str, str] | None:
        parts = [s for s in path.split("/") if s]
        segments = self.segments
        if len(parts) != len(segments):
            return None

        params: dict[str, str] = {}
        for segment, part in zip(segments, parts):
            if segment.startswith(":"):
                params[segment[1:]] = part
            elif segment != part:
                return None
        return params


class Router:
    def __init__(self) -> None:
        self._routes: list[Route] = []
        self._current: Screen | None = None
        self._current_path: str | None = None

    @property
    def current_path(self) -> str | None:
        return self._current_path

    @property
    def current_screen(self) -> Screen | None:
        return self._current

    @property
    def patterns(self) -> list[str]:
        return [route.pattern for route in self._routes]

    def add(self, pattern: str, factory: ScreenFactory) -> None:
        self._routes.append(Route(pattern=pattern, factory=factory))

    def resolve(self, path: str) -> tuple[Route, dict[str, str]]:
        for route in self._routes:
            params = route.match(path)
            if params is not None:
                return route, params
        raise RouteNotFoundError(path)

    async def go(self, path: str) -> None:
        route, params = self.resolve(path)

        if self._current is not None:
            self._current.deactivate()

        screen = route.factory()
        self._current = screen
        self._current_path = path
        logger.debug("Navigating to %s (%s)", path, route.pattern)
        await screen.activate(params)
