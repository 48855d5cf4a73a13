"""Single rule set for failed remote calls.

Every screen hands its `RequestError` here instead of inspecting the status
itself, so a 401 logs the user out the same way whichever entity or access
operation produced it.
"""

from __future__ import annotations

import logging
from enum import Enum

from core.errors import RequestError
from core.interfaces.notifier import Notifier
from core.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class Classification(str, Enum):
    LOGGED_OUT = "logged_out"
    NOTIFIED = "notified"


class ErrorClassifier:
    def __init__(self, session: SessionStore, notifier: Notifier) -> None:
        self._session = session
        self._notifier = notifier

    def classify(self, error: RequestError, failure_notice: str) -> Classification:
        """Apply the first matching rule.

        1. Unauthorized (401): force logout, no message.
        2. Anything else: show `failure_notice`, session untouched.
        """

        if error.is_unauthorized:
            logger.warning("Unauthorized response from %s %s; logging out", error.method, error.url)
            self._session.logout()
            return Classification.LOGGED_OUT

        logger.warning("%s", error)
        self._notifier.error(failure_notice)
        return Classification.NOTIFIED
