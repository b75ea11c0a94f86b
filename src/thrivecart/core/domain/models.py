"""Modelos del dominio.

Por qué aquí:
- `RequestSpec`/`RawResponse` son valores puros (dataclasses congeladas): el
  builder los produce y el transporte los consume, sin estado oculto.
- `ResourceOwnerProfile` (Pydantic v2) normaliza el perfil OAuth, cuyo JSON
  crudo puede traer cualquier forma.

Nota:
- Estos modelos describen *qué* viaja por la red, no *cómo* se envía.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, Field


class Mode(str, Enum):
    """Operating environment sent to the API in `X-TC-Mode`."""

    LIVE = "live"
    TEST = "test"

    @classmethod
    def from_bool(cls, test: bool) -> "Mode":
        """Derive a mode value from a `--test` style flag."""

        return cls.TEST if test else cls.LIVE


@dataclass(frozen=True)
class RequestSpec:
    """Request ya ensamblado, listo para el transporte.

    - `query` solo existe en GET con parámetros.
    - `body` solo existe en métodos distintos de GET con parámetros (JSON).
    """

    method: str
    url: str
    path: str
    headers: Mapping[str, str] = field(default_factory=dict)
    query: tuple[tuple[str, str], ...] | None = None
    body: bytes | None = None


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Decodifica el cuerpo JSON (`None` si el cuerpo está vacío)."""

        if not self.body.strip():
            return None
        return json.loads(self.body)


_MISSING = object()


def get_value_by_key(data: Any, path: str, default: Any = None) -> Any:
    """Lookup con notación de puntos (`account.owner.email`).

    Si la clave existe tal cual (aunque contenga puntos) se devuelve directa;
    cualquier segmento ausente resuelve a `default` en vez de fallar.
    """

    if not isinstance(data, Mapping):
        return default
    if path in data:
        return data[path]

    current: Any = data
    for segment in path.split("."):
        if not isinstance(current, Mapping):
            return default
        current = current.get(segment, _MISSING)
        if current is _MISSING:
            return default
    return current


class ResourceOwnerProfile(BaseModel):
    """Cuenta/usuario autenticado tras el intercambio OAuth."""

    id: str | None = Field(
        default=None,
        description="ID del usuario que autorizó la app (`user_id`).",
    )
    account_id: str | None = Field(
        default=None,
        description="ID de la cuenta (`account_id`).",
    )
    account_name: str | None = Field(
        default=None,
        description="Nombre de la cuenta (`account_name`).",
    )
    account_email: str | None = Field(
        default=None,
        description="Email de la cuenta; la plataforma lo envía en `name`.",
    )
    role: str | None = Field(
        default=None,
        description="Rol del usuario dentro de la cuenta.",
    )
    raw: dict[str, Any] = Field(
        default_factory=dict,
        description="Respuesta cruda del endpoint de perfil.",
    )

    def to_dict(self) -> dict[str, Any]:
        return dict(self.raw)


RESOURCE_OWNER_FIELDS: dict[str, str] = {
    "id": "user_id",
    "account_id": "account_id",
    "account_name": "account_name",
    "account_email": "name",
    "role": "role",
}


def _as_optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)


def map_resource_owner(raw: Mapping[str, Any] | None) -> ResourceOwnerProfile:
    """Proyecta el perfil crudo (`/authorization/me`) a `ResourceOwnerProfile`."""

    data = dict(raw or {})
    values = {
        attr: _as_optional_str(get_value_by_key(data, path))
        for attr, path in RESOURCE_OWNER_FIELDS.items()
    }
    return ResourceOwnerProfile(**values, raw=data)
