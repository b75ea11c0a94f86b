from __future__ import annotations

from typing import Any

from thrivecart.adapters.resources.base import Resource, build_payload
from thrivecart.core.domain.params import CustomerParams
from thrivecart.core.validators import customer_rules


class CustomersResource(Resource):
    def get(self, email: str | None = None, **extra: Any) -> Any:
        """Todo lo almacenado sobre un cliente, buscado por email."""

        payload = build_payload(CustomerParams, {"email": email, **extra})
        return self._dispatch("POST", "/customer", payload=payload, rules=customer_rules())
