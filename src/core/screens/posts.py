"""Post screens.

The post form loads the theme list before the post itself: a theme has to be
picked (or come with the fetched post) before the form can be submitted.
"""

from __future__ import annotations

from core.domain.loadable import Loadable, Loaded, NotLoaded, loaded_value
from core.domain.models import Post, Theme
from core.errors import RequestError
from core.screens.base import DeleteScreen, EntityForm, ListScreen, ScreenContext

POSTS_ROUTE = "/postagens"


class PostListScreen(ListScreen[Post]):
    title = "Posts"
    collection_path = "/postagens"
    model = Post
    empty_notice = "No posts found!"
    failure_notice = "Failed to load the posts."


class PostFormScreen(EntityForm[Post]):
    model = Post
    resource_path = "/postagens"
    collection_route = POSTS_ROUTE
    entity_label = "post"

    def __init__(self, ctx: ScreenContext) -> None:
        super().__init__(ctx)
        self.themes: Loadable[list[Theme]] = NotLoaded()

    @property
    def title(self) -> str:  # type: ignore[override]
        return "Edit post" if self.is_edit else "New post"

    async def load(self) -> None:
        await self.load_themes()
        if not self.ctx.session.is_authenticated:
            return
        await super().load()

    async def load_themes(self) -> None:
        try:
            await self.ctx.api.fetch_into(
                "/temas",
                self._stale.bind(self._set_themes),
                self.ctx.request_options(),
                model=list[Theme],
            )
        except RequestError as exc:
            self.ctx.classifier.classify(exc, "Failed to load the themes.")

    def _set_themes(self, themes: list[Theme]) -> None:
        self.themes = Loaded(themes)

    @property
    def theme_options(self) -> list[Theme]:
        return loaded_value(self.themes) or []

    @property
    def selected_theme(self) -> Theme | None:
        record = loaded_value(self.record)
        return record.theme if record is not None else None

    async def select_theme(self, theme_id: int | str) -> None:
        """Fetch the chosen theme and embed it in the post."""

        if not isinstance(self.record, Loaded):
            return

        try:
            await self.ctx.api.fetch_into(
                f"/temas/{theme_id}",
                self._stale.bind(self._set_theme),
                self.ctx.request_options(),
                model=Theme,
            )
        except RequestError as exc:
            self.ctx.classifier.classify(exc, "Failed to load the theme.")

    def _set_theme(self, theme: Theme) -> None:
        self.change("theme", theme)

    @property
    def is_theme_resolved(self) -> bool:
        theme = self.selected_theme
        return theme is not None and theme.is_resolved

    @property
    def can_submit(self) -> bool:
        return super().can_submit and self.is_theme_resolved

    def prepare_submission(self, record: Post) -> Post:
        if not self.is_edit and record.author is None:
            return record.model_copy(update={"author": self.ctx.session.identity})
        return record


class PostDeleteScreen(DeleteScreen[Post]):
    title = "Delete post"
    model = Post
    resource_path = "/postagens"
    collection_route = POSTS_ROUTE
    entity_label = "post"
