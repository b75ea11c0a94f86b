"""Cancelar, pausar y reanudar suscripciones."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Callable

from thrivecart.adapters.resources.base import Resource, build_payload
from thrivecart.core.domain.params import PauseSubscriptionParams, SubscriptionParams
from thrivecart.core.validators import pause_subscription_rules, subscription_rules

if TYPE_CHECKING:
    from thrivecart.core.services.api_client import ThriveCartClient


class SubscriptionsResource(Resource):
    def __init__(self, client: "ThriveCartClient", *, clock: Callable[[], float] = time.time) -> None:
        super().__init__(client)
        self.clock = clock

    def cancel(
        self,
        *,
        order_id: int | str | None = None,
        subscription_id: int | str | None = None,
        **extra: Any,
    ) -> Any:
        """Cancela una suscripción activa o pausada."""

        payload = build_payload(
            SubscriptionParams,
            {"order_id": order_id, "subscription_id": subscription_id, **extra},
        )
        return self._dispatch("POST", "/cancelSubscription", payload=payload, rules=subscription_rules("cancel"))

    def pause(
        self,
        *,
        order_id: int | str | None = None,
        subscription_id: int | str | None = None,
        auto_resume: int | str | None = None,
        **extra: Any,
    ) -> Any:
        """Pausa una suscripción activa.

        `auto_resume` es un Unix timestamp opcional, al menos un día en el futuro.
        """

        payload = build_payload(
            PauseSubscriptionParams,
            {"order_id": order_id, "subscription_id": subscription_id, "auto_resume": auto_resume, **extra},
        )
        return self._dispatch(
            "POST",
            "/pauseSubscription",
            payload=payload,
            rules=pause_subscription_rules(self.clock),
        )

    def resume(
        self,
        *,
        order_id: int | str | None = None,
        subscription_id: int | str | None = None,
        **extra: Any,
    ) -> Any:
        payload = build_payload(
            SubscriptionParams,
            {"order_id": order_id, "subscription_id": subscription_id, **extra},
        )
        return self._dispatch("POST", "/resumeSubscription", payload=payload, rules=subscription_rules("resume"))
