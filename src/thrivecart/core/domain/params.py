"""Parámetros tipados por operación (Pydantic v2).

Por qué modelos y no diccionarios sueltos:
- Cada operación documenta sus campos (nombre Python snake_case, alias de
  wire camelCase cuando la API lo exige).
- Los campos con regla de validación son `Any`: Pydantic no los rechaza antes
  de tiempo y `thrivecart.core.validators` decide, en su orden, con el mensaje
  exacto de la API (`customers.get(email=123)` -> "valid email address").
- `extra="allow"`: campos nuevos de la API pasan sin tocar el SDK.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

class OperationParams(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Payload de wire: alias aplicados, sin campos `None`."""

        return self.model_dump(by_alias=True, exclude_none=True)


class TransactionsParams(OperationParams):
    query: Any = Field(
        default=None,
        description="Búsqueda: email del cliente, order ID, invoice ID, etc.",
    )
    transaction_type: Any = Field(
        default=None,
        alias="transactionType",
        description="any | charge | rebill | refund | cancel.",
    )
    per_page: Any = Field(
        default=None,
        alias="perPage",
        description="Resultados por página (máximo 25).",
    )
    page: Any = Field(
        default=None,
        description="Página, de 1 a N.",
    )


class CustomerParams(OperationParams):
    email: Any = Field(
        default=None,
        description="Email del cliente a buscar.",
    )


class RefundParams(OperationParams):
    order_id: Any = Field(default=None, description="ID del pedido.")
    reference: Any = Field(default=None, description="Referencia del ítem.")
    reason: Any = Field(
        default=None,
        description="Motivo interno (nunca se muestra al cliente, máx. 200 caracteres).",
    )


class SubscriptionParams(OperationParams):
    order_id: Any = Field(default=None, description="ID del pedido.")
    subscription_id: Any = Field(default=None, description="ID de la suscripción.")


class PauseSubscriptionParams(SubscriptionParams):
    auto_resume: Any = Field(
        default=None,
        description="Unix timestamp de reanudación automática (>= 1 día en el futuro).",
    )


class AffiliatesParams(OperationParams):
    product_id: Any = Field(default=None, description="Filtra por producto.")
    query: Any = Field(
        default=None,
        description="Búsqueda: nombre, email o affiliate ID.",
    )
    per_page: Any = Field(default=None, alias="perPage")
    page: Any = None


class AffiliateLookupParams(OperationParams):
    affiliate_id: Any = Field(
        default=None,
        description="ID numérico de usuario, affiliate_id de los links o email.",
    )


class AffiliateParams(OperationParams):
    """Cuerpo de alta/acciones de afiliado.

    `product_ids` acepta lista/tupla/dict (se serializa a JSON string antes de
    enviar) o un string ya codificado.
    """

    product_ids: Any = Field(
        default=None,
        description="Productos afectados; estructura o JSON string.",
    )


class EventSubscriptionParams(OperationParams):
    event: Any = Field(
        default=None,
        description="`*` para todos los eventos o un nombre concreto.",
    )
    target_url: Any = Field(
        default=None,
        description="URL que recibirá los eventos.",
    )
    trigger_fields: dict[str, Any] = Field(
        default_factory=dict,
        description="Campos de disparo del evento.",
    )

    def to_payload(self) -> dict[str, Any]:
        # La API espera siempre las tres claves.
        payload = super().to_payload()
        payload.setdefault("event", self.event)
        payload.setdefault("target_url", self.target_url)
        payload["trigger_fields"] = dict(self.trigger_fields)
        return payload


class EventUnsubscriptionParams(OperationParams):
    target_url: Any = Field(
        default=None,
        description="URL registrada previamente como destino de eventos.",
    )
