"""Application wiring.

Builds the single session store, the access layer over one shared
`httpx.AsyncClient`, the router and the screens' context. The CLI only talks
to `App`.
"""

from __future__ import annotations

import logging

import httpx

from adapters.access_layer import AccessLayer
from adapters.http_client import build_async_client
from core.config import AppSettings
from core.interfaces.notifier import Notifier
from core.screens import Screen, ScreenContext, register_routes
from core.services.auth_guard import LANDING_ROUTE, AuthGuard
from core.services.error_classifier import ErrorClassifier
from core.services.router import Router
from core.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class App:
    def __init__(
        self,
        *,
        client: httpx.AsyncClient,
        notifier: Notifier,
        settings: AppSettings | None = None,
    ) -> None:
        self.settings = settings or AppSettings()
        self.client = client
        self.notifier = notifier
        self.session = SessionStore()
        self.router = Router()
        self.ctx = ScreenContext(
            api=AccessLayer(client),
            session=self.session,
            navigator=self.router,
            notifier=notifier,
            classifier=ErrorClassifier(self.session, notifier),
            guard=AuthGuard(self.session, self.router, notifier),
            settings=self.settings,
        )
        register_routes(self.router, self.ctx)
        self._session_changed = False
        self.session.subscribe(self._on_session_change)

    @classmethod
    def create(
        cls,
        *,
        notifier: Notifier,
        settings: AppSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "App":
        settings = settings or AppSettings()
        client = build_async_client(settings, transport=transport)
        return cls(client=client, notifier=notifier, settings=settings)

    @property
    def screen(self) -> Screen | None:
        return self.router.current_screen

    async def start(self) -> None:
        await self.router.go(LANDING_ROUTE)

    async def go(self, path: str) -> None:
        await self.router.go(path)
        await self.enforce_guard()

    def _on_session_change(self, session: SessionStore) -> None:
        self._session_changed = True

    async def enforce_guard(self) -> None:
        """Re-run the auth guard for the active screen after a session change."""

        if not self._session_changed:
            return
        self._session_changed = False

        screen = self.router.current_screen
        if screen is not None and screen.protected:
            logger.debug("Session changed; re-checking access to %s", self.router.current_path)
            await self.ctx.guard.check()

    async def aclose(self) -> None:
        await self.client.aclose()
