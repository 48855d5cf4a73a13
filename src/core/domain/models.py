"""Modelos del dominio (Pydantic v2).

Los nombres Python van en inglés; los alias son las claves JSON del backend
(`titulo`, `texto`, `descricao`, ...). Para enviar al backend usar
`to_wire(model)`.

Nota:
- Los registros embebidos (`Post.theme`, `Post.author`) son copias
  denormalizadas tal como las devuelve el backend, no claves foráneas.
- Todos los campos tienen default: un formulario vacío es un registro válido.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Identity(_WireModel):
    """Usuario registrado."""

    id: int = Field(
        default=0,
        description="Identificador asignado por el backend (0 = aún no registrado).",
    )
    display_name: str = Field(
        default="",
        alias="nome",
        description="Nombre visible del usuario.",
    )
    login_name: str = Field(
        default="",
        alias="usuario",
        description="Login (típicamente un e-mail).",
    )
    photo_url: str | None = Field(
        default="",
        alias="foto",
        description="URL de avatar público.",
    )
    password: str | None = Field(
        default="",
        alias="senha",
        description="Contraseña; solo viaja en registro/login.",
    )

    def without_password(self) -> "Identity":
        return self.model_copy(update={"password": ""})


class Credentials(_WireModel):
    """Cuerpo de la petición de login."""

    login_name: str = Field(default="", alias="usuario")
    password: str = Field(default="", alias="senha")


class AuthenticatedIdentity(Identity):
    """Respuesta del login: la identidad más el token opaco."""

    token: str = Field(
        default="",
        description="Token tal cual lo entrega el backend (p.ej. 'Bearer ...').",
    )

    def identity(self) -> Identity:
        data = self.model_dump(exclude={"token"})
        return Identity(**data).without_password()


class Theme(_WireModel):
    """Etiqueta de clasificación de postagens."""

    id: int | None = None
    description: str = Field(
        default="",
        alias="descricao",
        description="Texto del tema.",
    )
    posts: list[Post] | None = Field(
        default=None,
        alias="postagem",
        description="Postagens del tema (informativo, puede venir vacío).",
    )

    @property
    def is_resolved(self) -> bool:
        return bool(self.description)


class Post(_WireModel):
    """Postagem de texto con su tema y autor embebidos."""

    id: int | None = None
    title: str = Field(default="", alias="titulo")
    body: str = Field(default="", alias="texto")
    created_at: datetime | None = Field(
        default=None,
        alias="data",
        description="Fecha de creación asignada por el backend.",
    )
    theme: Theme | None = Field(default=None, alias="tema")
    author: Identity | None = Field(default=None, alias="usuario")


Theme.model_rebuild()


def to_wire(value: Any) -> Any:
    """Serializa un modelo (o lista de modelos) con las claves del backend."""

    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, list):
        return [to_wire(item) for item in value]
    return value
