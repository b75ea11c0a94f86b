from __future__ import annotations

from typing import Any

from thrivecart.adapters.resources.base import Resource, build_payload
from thrivecart.core.domain.params import TransactionsParams
from thrivecart.core.validators import transactions_rules


class TransactionsResource(Resource):
    def list(
        self,
        *,
        query: str | None = None,
        transaction_type: str | None = None,
        per_page: int | str | None = None,
        page: int | str | None = None,
        **extra: Any,
    ) -> Any:
        """Una página de transacciones; la paginación la lleva quien llama."""

        payload = build_payload(
            TransactionsParams,
            {"query": query, "transaction_type": transaction_type, "per_page": per_page, "page": page, **extra},
        )
        return self._dispatch("GET", "/transactions", payload=payload, rules=transactions_rules())
