from __future__ import annotations

from typing import Any

from thrivecart.adapters.resources.base import Resource, build_payload
from thrivecart.core.domain.params import RefundParams
from thrivecart.core.validators import refund_rules


class RefundsResource(Resource):
    def create(
        self,
        *,
        order_id: int | str | None = None,
        reference: str | None = None,
        reason: str | None = None,
        **extra: Any,
    ) -> Any:
        """Reembolsa una transacción o un rebill."""

        payload = build_payload(
            RefundParams,
            {"order_id": order_id, "reference": reference, "reason": reason, **extra},
        )
        return self._dispatch("POST", "/refund", payload=payload, rules=refund_rules())
