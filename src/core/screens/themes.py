"""Theme screens: list, create/edit form and delete confirmation."""

from __future__ import annotations

from core.domain.models import Theme
from core.screens.base import DeleteScreen, EntityForm, ListScreen

THEMES_ROUTE = "/temas"


class ThemeListScreen(ListScreen[Theme]):
    title = "Themes"
    collection_path = "/temas"
    model = Theme
    empty_notice = "No themes found!"
    failure_notice = "Failed to load the themes."


class ThemeFormScreen(EntityForm[Theme]):
    model = Theme
    resource_path = "/temas"
    collection_route = THEMES_ROUTE
    entity_label = "theme"

    @property
    def title(self) -> str:  # type: ignore[override]
        return "Edit theme" if self.is_edit else "New theme"


class ThemeDeleteScreen(DeleteScreen[Theme]):
    title = "Delete theme"
    model = Theme
    resource_path = "/temas"
    collection_route = THEMES_ROUTE
    entity_label = "theme"
