"""Shared screen controllers.

A screen owns its local state (records, loading and submitting flags) and
drives the access layer. It never renders anything: the CLI reads the state
and calls the public actions (`change`, `submit`, `confirm`, ...).

Lifecycle: the router calls `activate(params)` when the screen becomes
current and `deactivate()` when it leaves. Deactivation invalidates the
screen's `StaleGuard`, so responses that arrive later are dropped.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from adapters.access_layer import AccessLayer, RequestOptions, StaleGuard
from core.config import AppSettings
from core.domain.loadable import Loadable, Loaded, Loading, NotLoaded, loaded_value
from core.errors import RequestError
from core.interfaces.navigator import Navigator
from core.interfaces.notifier import Notifier
from core.services.auth_guard import AuthGuard
from core.services.error_classifier import Classification, ErrorClassifier
from core.services.session_store import SessionStore

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


@dataclass
class ScreenContext:
    """Collaborators injected into every screen."""

    api: AccessLayer
    session: SessionStore
    navigator: Navigator
    notifier: Notifier
    classifier: ErrorClassifier
    guard: AuthGuard
    settings: AppSettings = field(default_factory=AppSettings)

    def request_options(self) -> RequestOptions:
        return RequestOptions.authorized(self.session.token)


class Screen:
    protected: ClassVar[bool] = True
    title: ClassVar[str] = ""

    def __init__(self, ctx: ScreenContext) -> None:
        self.ctx = ctx
        self.params: dict[str, str] = {}
        self.active = False
        self._stale = StaleGuard()

    async def activate(self, params: dict[str, str] | None = None) -> None:
        self.params = dict(params or {})
        self.active = True
        if self.protected and not await self.ctx.guard.check():
            return
        await self.load()

    def deactivate(self) -> None:
        self.active = False
        self._stale.invalidate()

    async def load(self) -> None:
        """Initial data loading; runs only for an allowed session."""


@dataclass(frozen=True)
class ListView(Generic[M]):
    loading: bool
    empty: bool
    cards: list[tuple[Any, M]]


def dedupe_by_id(records: list[M]) -> list[tuple[Any, M]]:
    """Pair each record with its id, keeping the first occurrence of each id."""

    seen: set[Any] = set()
    cards: list[tuple[Any, M]] = []
    for record in records:
        key = getattr(record, "id", None)
        if key in seen:
            logger.warning("Duplicate record id %s in collection response", key)
            continue
        seen.add(key)
        cards.append((key, record))
    return cards


class ListScreen(Screen, Generic[M]):
    collection_path: ClassVar[str]
    model: ClassVar[type[BaseModel]]
    empty_notice: ClassVar[str] = "Nothing found!"
    failure_notice: ClassVar[str] = "Failed to load the list."

    def __init__(self, ctx: ScreenContext) -> None:
        super().__init__(ctx)
        self.records: Loadable[list[M]] = NotLoaded()

    @property
    def is_loading(self) -> bool:
        return isinstance(self.records, Loading)

    async def load(self) -> None:
        generation = self._stale.generation
        self.records = Loading()
        try:
            await self.ctx.api.fetch_into(
                self.collection_path,
                self._stale.bind(self._set_records),
                self.ctx.request_options(),
                model=list[self.model],
            )
        except RequestError as exc:
            self.ctx.classifier.classify(exc, self.failure_notice)
        finally:
            if generation == self._stale.generation and isinstance(self.records, Loading):
                self.records = NotLoaded()

    def _set_records(self, records: list[M]) -> None:
        self.records = Loaded(records)

    def view(self) -> ListView[M]:
        records = loaded_value(self.records)
        if records is None:
            return ListView(loading=self.is_loading, empty=False, cards=[])
        return ListView(loading=False, empty=not records, cards=dedupe_by_id(records))


class EntityForm(Screen, Generic[M]):
    """Create/edit form bound to one local record.

    Create mode (no `id` param) seeds an empty record; edit mode goes
    NotLoaded -> Loading -> Loaded(fetched).
    """

    model: ClassVar[type[BaseModel]]
    resource_path: ClassVar[str]
    collection_route: ClassVar[str]
    entity_label: ClassVar[str] = "record"

    def __init__(self, ctx: ScreenContext) -> None:
        super().__init__(ctx)
        self.record: Loadable[M] = NotLoaded()
        self.is_submitting = False

    @property
    def record_id(self) -> str | None:
        return self.params.get("id")

    @property
    def is_edit(self) -> bool:
        return self.record_id is not None

    async def load(self) -> None:
        if self.record_id is not None:
            await self.load_record(self.record_id)
        else:
            self.record = Loaded(self.model())

    async def load_record(self, record_id: str) -> None:
        self._stale.invalidate()
        generation = self._stale.generation
        self.record = Loading()
        try:
            await self.ctx.api.fetch_into(
                f"{self.resource_path}/{record_id}",
                self._stale.bind(self._set_record),
                self.ctx.request_options(),
                model=self.model,
            )
        except RequestError as exc:
            self.ctx.classifier.classify(exc, f"Failed to load the {self.entity_label}.")
        finally:
            if generation == self._stale.generation and isinstance(self.record, Loading):
                self.record = NotLoaded()

    def _set_record(self, record: M) -> None:
        self.record = Loaded(record)

    def _require_record(self) -> M:
        record = loaded_value(self.record)
        if record is None:
            raise RuntimeError(f"The {self.entity_label} is not loaded yet")
        return record

    def value(self, name: str) -> Any:
        """Current value of a bound field ('' while the record is not loaded)."""

        record = loaded_value(self.record)
        if record is None:
            return ""
        value = getattr(record, name)
        return "" if value is None else value

    def change(self, name: str, value: Any) -> None:
        """Write one field back into the record, keeping every other field."""

        record = self._require_record()
        if name not in type(record).model_fields:
            raise KeyError(name)
        self.record = Loaded(record.model_copy(update={name: value}))

    @property
    def can_submit(self) -> bool:
        return isinstance(self.record, Loaded) and not self.is_submitting

    def prepare_submission(self, record: M) -> M:
        return record

    async def submit(self) -> bool:
        if not self.can_submit:
            return False

        record = self.prepare_submission(self._require_record())
        action = "update" if self.is_edit else "create"
        self.is_submitting = True
        try:
            if self.is_edit:
                await self.ctx.api.update_into(
                    self.resource_path,
                    record,
                    self._stale.bind(self._set_record),
                    self.ctx.request_options(),
                    model=self.model,
                )
            else:
                await self.ctx.api.create_into(
                    self.resource_path,
                    record,
                    self._stale.bind(self._set_record),
                    self.ctx.request_options(),
                    model=self.model,
                )
        except RequestError as exc:
            self.ctx.classifier.classify(exc, f"Failed to {action} the {self.entity_label}.")
            return False
        finally:
            self.is_submitting = False

        self.ctx.notifier.info(f"The {self.entity_label} was {action}d successfully!")
        await self.ctx.navigator.go(self.collection_route)
        return True

    async def cancel(self) -> None:
        await self.ctx.navigator.go(self.collection_route)


class DeleteScreen(Screen, Generic[M]):
    """Confirmation screen: shows the record and deletes it on confirm."""

    model: ClassVar[type[BaseModel]]
    resource_path: ClassVar[str]
    collection_route: ClassVar[str]
    entity_label: ClassVar[str] = "record"

    def __init__(self, ctx: ScreenContext) -> None:
        super().__init__(ctx)
        self.record: Loadable[M] = NotLoaded()
        self.is_submitting = False

    @property
    def record_id(self) -> str:
        return self.params["id"]

    async def load(self) -> None:
        generation = self._stale.generation
        self.record = Loading()
        try:
            await self.ctx.api.fetch_into(
                f"{self.resource_path}/{self.record_id}",
                self._stale.bind(self._set_record),
                self.ctx.request_options(),
                model=self.model,
            )
        except RequestError as exc:
            self.ctx.classifier.classify(exc, f"Failed to load the {self.entity_label}.")
        finally:
            if generation == self._stale.generation and isinstance(self.record, Loading):
                self.record = NotLoaded()

    def _set_record(self, record: M) -> None:
        self.record = Loaded(record)

    async def confirm(self) -> bool:
        if self.is_submitting:
            return False

        self.is_submitting = True
        try:
            await self.ctx.api.delete_at(
                f"{self.resource_path}/{self.record_id}",
                self.ctx.request_options(),
            )
        except RequestError as exc:
            outcome = self.ctx.classifier.classify(exc, f"Failed to delete the {self.entity_label}.")
            if outcome is Classification.NOTIFIED:
                await self.ctx.navigator.go(self.collection_route)
            return False
        finally:
            self.is_submitting = False

        self.ctx.notifier.info(f"The {self.entity_label} was deleted successfully!")
        await self.ctx.navigator.go(self.collection_route)
        return True

    async def cancel(self) -> None:
        await self.ctx.navigator.go(self.collection_route)
