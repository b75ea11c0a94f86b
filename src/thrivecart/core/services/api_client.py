"""Cliente de la API REST.

Este módulo concentra el pipeline de un request:
validadores (en los grupos de recursos) -> `RequestBuilder` -> transporte ->
cuerpo parseado o error tipado. Los grupos de recursos (`client.products`,
`client.affiliates`, ...) son composiciones que solo conocen `request`.

Modo y base URI son configuración de *cada* instancia: cambiarlos en un
cliente no afecta a otros clientes vivos.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from thrivecart.adapters.http_client import HttpxTransport
from thrivecart.adapters.resources import (
    AffiliatesResource,
    CatalogResource,
    CustomersResource,
    EventsResource,
    RefundsResource,
    SubscriptionsResource,
    TransactionsResource,
)
from thrivecart.core.config import AppSettings
from thrivecart.core.domain.models import Mode, RequestSpec
from thrivecart.core.errors import RemoteError, TransportError, ValidationError, classify_failure
from thrivecart.core.interfaces.transport import HttpTransport
from thrivecart.core.request_builder import RequestBuilder, RequestContext

logger = logging.getLogger(__name__)


class ThriveCartClient:
    """Punto de entrada público.

    Uso típico::

        with ThriveCartClient("token", mode="test") as tc:
            products = tc.products.list()
            tc.refunds.create(order_id=123, reference="abc", reason="duplicate")
    """

    def __init__(
        self,
        access_token: str | None = None,
        *,
        settings: AppSettings | None = None,
        transport: HttpTransport | None = None,
        mode: Mode | str | None = None,
        base_uri: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.settings = settings or AppSettings()

        token = access_token or self.settings.access_token
        if not token:
            raise ValidationError("You must provide an access token.", field="access_token")
        self._access_token = token

        self._mode = self.settings.mode
        if mode is not None:
            self.set_mode(mode)
        self._base_uri = self.settings.base_uri
        if base_uri is not None:
            self.set_base_uri(base_uri)

        self._owns_transport = transport is None
        self._transport: HttpTransport = transport or HttpxTransport(settings=self.settings, timeout=timeout)

        self.products = CatalogResource(self, "products", "product_id")
        self.bumps = CatalogResource(self, "bumps", "bump_id")
        self.upsells = CatalogResource(self, "upsells", "upsell_id")
        self.downsells = CatalogResource(self, "downsells", "downsell_id")
        self.transactions = TransactionsResource(self)
        self.customers = CustomersResource(self)
        self.refunds = RefundsResource(self)
        self.subscriptions = SubscriptionsResource(self)
        self.affiliates = AffiliatesResource(self)
        self.events = EventsResource(self)

    # --- Configuración por instancia ---------------------------------------

    @property
    def mode(self) -> Mode:
        return self._mode

    def set_mode(self, mode: Mode | str) -> None:
        try:
            self._mode = Mode(mode)
        except ValueError:
            raise ValidationError(
                f'Invalid mode provided to the API ("{mode}").',
                field="mode",
                value=mode,
            ) from None

    @property
    def base_uri(self) -> str:
        return self._base_uri

    def set_base_uri(self, base_uri: str) -> None:
        """Base URI alternativa (desarrollo/testing); no hace falta en producción."""

        self._base_uri = base_uri.rstrip("/")

    @property
    def transport(self) -> HttpTransport:
        return self._transport

    def request_builder(self) -> RequestBuilder:
        context = RequestContext(
            access_token=self._access_token,
            mode=self._mode,
            base_uri=self._base_uri,
            endpoint=self.settings.endpoint,
            sdk_version=self.settings.sdk_version,
            api_version=self.settings.api_version,
        )
        return RequestBuilder(context)

    # --- Pipeline ------------------------------------------------------------

    def build(
        self,
        method: str,
        path: str,
        tokens: Mapping[str, Any] | None = None,
        parameters: Mapping[str, Any] | None = None,
    ) -> RequestSpec:
        return self.request_builder().build(method, path, tokens, parameters)

    def request(
        self,
        method: str,
        path: str,
        tokens: Mapping[str, Any] | None = None,
        parameters: Mapping[str, Any] | None = None,
    ) -> Any:
        """Ejecuta un request y devuelve el cuerpo JSON decodificado.

        Lanza:
        - `RemoteError` si la API respondió con un payload de error JSON.
        - `TransportError` para fallos de red o cuerpos no JSON.
        """

        spec = self.build(method, path, tokens, parameters)
        logger.debug("ThriveCart %s %s (mode=%s)", spec.method, spec.url, self._mode.value)

        try:
            response = self._transport.execute(spec)
        except TransportError as exc:
            if exc.body is None:
                raise
            error = classify_failure(exc.body, status_code=exc.status_code, message=exc.message)
            if isinstance(error, RemoteError):
                logger.warning("ThriveCart %s %s -> %s", spec.method, spec.path, error.message)
            raise error from exc

        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                f"Invalid JSON in response to {spec.method} {spec.path}: {response.text[:200]}",
                status_code=response.status_code,
                body=response.text,
            ) from exc

    def ping(self, **parameters: Any) -> Any:
        """Información de la cuenta autenticada."""

        return self.request("GET", "/ping", None, parameters)

    # --- Ciclo de vida ------------------------------------------------------

    def close(self) -> None:
        if self._owns_transport:
            close = getattr(self._transport, "close", None)
            if callable(close):
                close()

    def __enter__(self) -> "ThriveCartClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
