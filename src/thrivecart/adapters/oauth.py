"""Proveedor OAuth2 (authorization code).

Responsabilidad:
- Exponer las tres URLs del servidor de autorización (authorize/token/me).
- Construir la URL de autorización (scopes separados por espacio).
- Revisar respuestas del proveedor y proyectar el perfil del resource owner.

Fuera de alcance: intercambio del código, refresh, PKCE y manejo de `state`
(eso es responsabilidad de la librería OAuth genérica que use la app).
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping
from urllib.parse import urlencode

import httpx

from thrivecart.adapters.http_client import build_client
from thrivecart.core.config import AppSettings
from thrivecart.core.domain.models import ResourceOwnerProfile, map_resource_owner
from thrivecart.core.errors import RemoteError, TransportError


class ThriveCartOAuth:
    """Configuración del proveedor.

    `client_secret` no se usa aquí: queda disponible para la librería OAuth que
    hace el intercambio del código contra `access_token_url`.
    """

    default_scopes: tuple[str, ...] = ()
    scope_separator = " "

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        redirect_uri: str | None = None,
        *,
        base_uri: str | None = None,
        settings: AppSettings | None = None,
    ) -> None:
        settings = settings or AppSettings()
        self.settings = settings
        self.client_id = client_id or settings.oauth_client_id
        self.client_secret = client_secret or settings.oauth_client_secret
        self.redirect_uri = redirect_uri or settings.oauth_redirect_uri
        self.base_uri = (base_uri or settings.oauth_base_uri).rstrip("/")

    @property
    def authorization_url(self) -> str:
        return f"{self.base_uri}/authorization/new"

    @property
    def access_token_url(self) -> str:
        return f"{self.base_uri}/authorization/token"

    @property
    def resource_owner_details_url(self) -> str:
        return f"{self.base_uri}/authorization/me"

    def get_authorization_url(
        self,
        state: str,
        scopes: Iterable[str] | None = None,
        **extra: str,
    ) -> str:
        """URL a la que redirigir al comerciante para autorizar la app."""

        scope_list = list(self.default_scopes if scopes is None else scopes)
        query: dict[str, str] = {
            "response_type": "code",
            "state": state,
        }
        if self.client_id:
            query["client_id"] = self.client_id
        if self.redirect_uri:
            query["redirect_uri"] = self.redirect_uri
        if scope_list:
            query["scope"] = self.scope_separator.join(scope_list)
        query.update(extra)
        return f"{self.authorization_url}?{urlencode(query)}"

    def check_response(
        self,
        status_code: int,
        data: Mapping[str, Any] | None,
        *,
        reason_phrase: str = "",
    ) -> None:
        """Lanza `RemoteError` si el proveedor respondió con status >= 400."""

        if status_code < 400:
            return
        payload = dict(data or {})
        message = payload.get("description") or reason_phrase or f"HTTP {status_code}"
        raise RemoteError(
            str(message),
            status_code=status_code,
            error=str(payload["error"]) if "error" in payload else None,
            reason=str(payload["description"]) if "description" in payload else None,
            payload=payload,
        )

    def create_resource_owner(self, response: Mapping[str, Any] | None) -> ResourceOwnerProfile:
        return map_resource_owner(response)

    def fetch_resource_owner(self, access_token: str, *, client: httpx.Client | None = None) -> ResourceOwnerProfile:
        """`GET /authorization/me` con el token ya obtenido y proyección del perfil."""

        owns_client = client is None
        http = client or build_client(self.settings)
        try:
            response = http.get(
                self.resource_owner_details_url,
                headers={"Authorization": f"Bearer {access_token}", "Accept": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc
        finally:
            if owns_client:
                http.close()

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}
        self.check_response(response.status_code, data, reason_phrase=response.reason_phrase)
        return self.create_resource_owner(data)
