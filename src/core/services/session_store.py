"""Process-wide authentication context.

The store holds the logged-in identity and its opaque token. It is created
once by the application and injected into every screen that needs it; only
`login` and `logout` mutate it.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable

from core.domain.models import Identity

logger = logging.getLogger(__name__)

SessionListener = Callable[["SessionStore"], None]


class SessionState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


class SessionStore:
    """Two-state machine: Unauthenticated (initial) and Authenticated.

    Invariant: `token == ""` if and only if the session is unauthenticated.
    """

    def __init__(self) -> None:
        self._identity = Identity()
        self._token = ""
        self._listeners: list[SessionListener] = []

    @property
    def identity(self) -> Identity:
        return self._identity

    @property
    def token(self) -> str:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._token != ""

    @property
    def state(self) -> SessionState:
        if self.is_authenticated:
            return SessionState.AUTHENTICATED
        return SessionState.UNAUTHENTICATED

    def login(self, identity: Identity, token: str) -> None:
        """Store the result of a successful authentication request."""

        if not token:
            raise ValueError("login requires a non-empty token")

        self._identity = identity.without_password()
        self._token = token
        logger.info("Session started for %s", self._identity.login_name)
        self._notify()

    def logout(self) -> None:
        """Reset identity and token. No-op when already unauthenticated."""

        if not self.is_authenticated:
            return

        logger.info("Session ended for %s", self._identity.login_name)
        self._identity = Identity()
        self._token = ""
        self._notify()

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register a listener called after every transition.

        Returns a callable that removes the listener.
        """

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
