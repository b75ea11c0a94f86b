"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeout y User-Agent para todos los requests.
- Traduce fallos de httpx a `TransportError` en el borde: el Core nunca ve
  excepciones de la librería HTTP.
- Facilita testeo: se puede inyectar un `httpx.Client` con `MockTransport`.
"""

from __future__ import annotations

import logging

import httpx

from thrivecart.core.config import AppSettings
from thrivecart.core.domain.models import RawResponse, RequestSpec
from thrivecart.core.errors import TransportError

logger = logging.getLogger(__name__)


def build_client(
    settings: AppSettings | None = None,
    *,
    timeout: float | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros.

    `timeout` (segundos) tiene prioridad sobre `settings.http_timeout_seconds`.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(timeout if timeout is not None else settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
    )


class HttpxTransport:
    """Implementación de `HttpTransport` sobre `httpx.Client`.

    Si el cliente httpx se recibe desde fuera (pool compartido) no se cierra
    en `close()`.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        settings: AppSettings | None = None,
        timeout: float | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or build_client(settings, timeout=timeout)

    @property
    def client(self) -> httpx.Client:
        return self._client

    def execute(self, spec: RequestSpec) -> RawResponse:
        try:
            response = self._client.request(
                spec.method,
                spec.url,
                headers=dict(spec.headers),
                params=list(spec.query) if spec.query else None,
                content=spec.body,
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed before a response: %s", spec.method, spec.url, exc)
            raise TransportError(str(exc) or type(exc).__name__) from exc

        if response.status_code >= 400:
            raise TransportError(
                f"HTTP {response.status_code} returned for {spec.method} {spec.url}",
                status_code=response.status_code,
                body=response.text,
            )

        return RawResponse(status_code=response.status_code, body=response.content)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
