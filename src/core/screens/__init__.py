"""Screen controllers and the route table that maps paths to them."""

from __future__ import annotations

from core.screens.base import DeleteScreen, EntityForm, ListScreen, ListView, Screen, ScreenContext
from core.screens.posts import PostDeleteScreen, PostFormScreen, PostListScreen
from core.screens.themes import ThemeDeleteScreen, ThemeFormScreen, ThemeListScreen
from core.screens.users import LoginScreen, ProfileScreen, RegistrationScreen, logout
from core.services.router import Router

ROUTES: dict[str, type[Screen]] = {
    "/": LoginScreen,
    "/cadastro": RegistrationScreen,
    "/perfil": ProfileScreen,
    "/postagens": PostListScreen,
    "/cadastrarpostagem": PostFormScreen,
    "/editarpostagem/:id": PostFormScreen,
    "/deletarpostagem/:id": PostDeleteScreen,
    "/temas": ThemeListScreen,
    "/cadastrartema": ThemeFormScreen,
    "/editartema/:id": ThemeFormScreen,
    "/deletartema/:id": ThemeDeleteScreen,
}


def register_routes(router: Router, ctx: ScreenContext) -> None:
    for pattern, screen_cls in ROUTES.items():
        router.add(pattern, lambda cls=screen_cls: cls(ctx))


__all__ = [
    "ROUTES",
    "DeleteScreen",
    "EntityForm",
    "ListScreen",
    "ListView",
    "LoginScreen",
    "PostDeleteScreen",
    "PostFormScreen",
    "PostListScreen",
    "ProfileScreen",
    "RegistrationScreen",
    "Screen",
    "ScreenContext",
    "ThemeDeleteScreen",
    "ThemeFormScreen",
    "ThemeListScreen",
    "logout",
    "register_routes",
]
