"""Gate run on activation of every protected screen."""

from __future__ import annotations

import logging

from core.interfaces.navigator import Navigator
from core.interfaces.notifier import Notifier
from core.services.session_store import SessionStore

logger = logging.getLogger(__name__)

LANDING_ROUTE = "/"
LOGIN_REQUIRED_NOTICE = "You need to be logged in!"


class AuthGuard:
    def __init__(self, session: SessionStore, navigator: Navigator, notifier: Notifier) -> None:
        self._session = session
        self._navigator = navigator
        self._notifier = notifier

    async def check(self) -> bool:
        """Return True when the session may see protected content.

        Otherwise notify, redirect to the landing route and return False; the
        caller must not schedule any fetch in that case.
        """

        if self._session.is_authenticated:
            return True

        logger.info("Blocked unauthenticated access to %s", self._navigator.current_path)
        self._notifier.error(LOGIN_REQUIRED_NOTICE)
        await self._navigator.go(LANDING_ROUTE)
        return False
