"""Afiliados: listado, búsqueda, alta y acciones sobre un afiliado."""

from __future__ import annotations

from typing import Any

from thrivecart.adapters.resources.base import Resource, build_payload, normalize_product_ids
from thrivecart.core.domain.params import AffiliateLookupParams, AffiliateParams, AffiliatesParams
from thrivecart.core.errors import ValidationError
from thrivecart.core.validators import (
    AFFILIATE_ACTIONS,
    affiliate_action_rules,
    affiliate_lookup_rules,
    affiliates_rules,
    validate,
)


class AffiliatesResource(Resource):
    def list(
        self,
        *,
        product_id: int | str | None = None,
        query: str | None = None,
        per_page: int | str | None = None,
        page: int | str | None = None,
        **extra: Any,
    ) -> Any:
        """Una página de afiliados; la paginación la lleva quien llama."""

        payload = build_payload(
            AffiliatesParams,
            {"product_id": product_id, "query": query, "per_page": per_page, "page": page, **extra},
        )
        return self._dispatch("GET", "/affiliates", payload=payload, rules=affiliates_rules())

    def get(self, affiliate_id: int | str | None = None, **extra: Any) -> Any:
        """Busca un afiliado por user ID, affiliate_id de sus links o email."""

        payload = build_payload(AffiliateLookupParams, {"affiliate_id": affiliate_id, **extra})
        return self._dispatch("POST", "/affiliate", payload=payload, rules=affiliate_lookup_rules())

    def create(self, **fields: Any) -> Any:
        payload = normalize_product_ids(build_payload(AffiliateParams, fields))
        return self._dispatch("POST", "/affiliates", payload=payload)

    def action(self, action: str, affiliate_id: int | str | None, **fields: Any) -> Any:
        """`POST /affiliates/{affiliate_id}/<action>`."""

        if action not in AFFILIATE_ACTIONS:
            raise ValidationError(
                f'Unknown affiliate action (you provided "{action}").',
                field="action",
                value=action,
            )

        validate(affiliate_action_rules(action), {"affiliate_id": affiliate_id})

        payload = normalize_product_ids(build_payload(AffiliateParams, fields))
        return self._dispatch(
            "POST",
            f"/affiliates/{{affiliate_id}}/{action}",
            tokens={"affiliate_id": affiliate_id},
            payload=payload,
        )

    def favorite(self, affiliate_id: int | str | None, **fields: Any) -> Any:
        return self.action("favorite", affiliate_id, **fields)

    def unfavorite(self, affiliate_id: int | str | None, **fields: Any) -> Any:
        return self.action("unfavorite", affiliate_id, **fields)

    def register(self, affiliate_id: int | str | None, **fields: Any) -> Any:
        """Registra al afiliado en productos (`product_ids`)."""

        return self.action("register", affiliate_id, **fields)

    def approve(self, affiliate_id: int | str | None, **fields: Any) -> Any:
        return self.action("approve", affiliate_id, **fields)

    def reject(self, affiliate_id: int | str | None, **fields: Any) -> Any:
        return self.action("reject", affiliate_id, **fields)

    def custom_commissions(self, affiliate_id: int | str | None, **fields: Any) -> Any:
        return self.action("custom_commissions", affiliate_id, **fields)

    def delete(self, affiliate_id: int | str | None, **fields: Any) -> Any:
        return self.action("delete", affiliate_id, **fields)
