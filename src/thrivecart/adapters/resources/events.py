"""Suscripciones a eventos (webhooks)."""

from __future__ import annotations

from typing import Any

from thrivecart.adapters.resources.base import Resource, build_payload
from thrivecart.core.domain.params import EventSubscriptionParams, EventUnsubscriptionParams
from thrivecart.core.validators import event_subscription_rules


class EventsResource(Resource):
    def subscribe(
        self,
        event: str | None,
        target_url: str | None,
        trigger_fields: dict[str, Any] | None = None,
    ) -> Any:
        """Crea una suscripción: `event` es `*` o un nombre de evento concreto."""

        payload = build_payload(
            EventSubscriptionParams,
            {"event": event, "target_url": target_url, "trigger_fields": trigger_fields or {}},
        )
        return self._dispatch("POST", "/subscribe", payload=payload, rules=event_subscription_rules("create"))

    def unsubscribe(self, target_url: str | None) -> Any:
        payload = build_payload(EventUnsubscriptionParams, {"target_url": target_url})
        return self._dispatch("POST", "/unsubscribe", payload=payload, rules=event_subscription_rules("cancel"))
