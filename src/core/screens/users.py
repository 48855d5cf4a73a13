"""User screens: login (landing route), registration, profile and logout."""

from __future__ import annotations

import logging

from core.domain.loadable import loaded_value
from core.domain.models import AuthenticatedIdentity, Credentials, Identity
from core.errors import RequestError
from core.screens.base import EntityForm, Screen, ScreenContext
from core.services.error_classifier import Classification

logger = logging.getLogger(__name__)

LANDING_ROUTE = "/"
HOME_ROUTE = "/postagens"

INCONSISTENT_REGISTRATION_NOTICE = "Inconsistent user data! Check the registration information."
INCONSISTENT_LOGIN_NOTICE = "Inconsistent user data!"
REGISTRATION_FAILED_NOTICE = "Failed to register the user."


class RegistrationScreen(EntityForm[Identity]):
    """Public sign-up form.

    Submission is accepted only when the confirmation equals the password and
    the password has at least `settings.min_password_length` characters.
    Success is detected by the returned record getting a non-zero id.
    """

    protected = False
    title = "Sign up"
    model = Identity
    resource_path = "/usuarios/cadastrar"
    collection_route = LANDING_ROUTE
    entity_label = "user"

    def __init__(self, ctx: ScreenContext) -> None:
        super().__init__(ctx)
        self.confirmation = ""

    def change_confirmation(self, value: str) -> None:
        self.confirmation = value

    def password_is_valid(self) -> bool:
        password = self.value("password")
        return self.confirmation == password and len(password) >= self.ctx.settings.min_password_length

    @property
    def is_registered(self) -> bool:
        record = loaded_value(self.record)
        return record is not None and record.id != 0

    async def submit(self) -> bool:
        if not self.can_submit:
            return False

        if not self.password_is_valid():
            self.ctx.notifier.error(INCONSISTENT_REGISTRATION_NOTICE)
            self.change("password", "")
            self.confirmation = ""
            return False

        self.is_submitting = True
        try:
            await self.ctx.api.create_into(
                self.resource_path,
                self._require_record(),
                self._stale.bind(self._set_record),
                model=Identity,
            )
        except RequestError as exc:
            outcome = self.ctx.classifier.classify(exc, REGISTRATION_FAILED_NOTICE)
            if outcome is Classification.LOGGED_OUT:
                # No session to drop on the public form.
                self.ctx.notifier.error(REGISTRATION_FAILED_NOTICE)
            return False
        finally:
            self.is_submitting = False

        self.ctx.notifier.info("User registered successfully!")
        if self.is_registered:
            await self.ctx.navigator.go(LANDING_ROUTE)
        return self.is_registered


class LoginScreen(Screen):
    """Landing route. Posts the credentials and starts the session."""

    protected = False
    title = "Log in"

    def __init__(self, ctx: ScreenContext) -> None:
        super().__init__(ctx)
        self.credentials = Credentials()
        self.is_submitting = False

    async def load(self) -> None:
        if self.ctx.session.is_authenticated:
            await self.ctx.navigator.go(HOME_ROUTE)

    def value(self, name: str) -> str:
        return getattr(self.credentials, name)

    def change(self, name: str, value: str) -> None:
        if name not in Credentials.model_fields:
            raise KeyError(name)
        self.credentials = self.credentials.model_copy(update={name: value})

    async def submit(self) -> bool:
        if self.is_submitting:
            return False

        result: list[AuthenticatedIdentity] = []
        self.is_submitting = True
        try:
            await self.ctx.api.create_into(
                "/usuarios/logar",
                self.credentials,
                self._stale.bind(result.append),
                model=AuthenticatedIdentity,
            )
        except RequestError as exc:
            # Nothing to log out from yet: every failure is a bad login.
            logger.warning("%s", exc)
            self.ctx.notifier.error(INCONSISTENT_LOGIN_NOTICE)
            return False
        finally:
            self.is_submitting = False
            self.credentials = self.credentials.model_copy(update={"password": ""})

        if not result or not result[0].token:
            self.ctx.notifier.error(INCONSISTENT_LOGIN_NOTICE)
            return False

        self.ctx.session.login(result[0].identity(), result[0].token)
        self.ctx.notifier.info("User authenticated successfully!")
        await self.ctx.navigator.go(HOME_ROUTE)
        return True


class ProfileScreen(Screen):
    title = "Profile"

    @property
    def identity(self) -> Identity:
        return self.ctx.session.identity


async def logout(ctx: ScreenContext) -> None:
    """Explicit user logout."""

    ctx.session.logout()
    ctx.notifier.info("User logged out successfully!")
    await ctx.navigator.go(LANDING_ROUTE)
