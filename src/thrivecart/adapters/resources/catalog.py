"""Productos, bumps, upsells y downsells.

Los cuatro recursos comparten forma: listado, detalle y opciones de precio.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from thrivecart.adapters.resources.base import Resource

if TYPE_CHECKING:
    from thrivecart.core.services.api_client import ThriveCartClient


class CatalogResource(Resource):
    def __init__(self, client: "ThriveCartClient", collection: str, id_token: str) -> None:
        super().__init__(client)
        self.collection = collection
        self.id_token = id_token

    def list(self, **params: Any) -> Any:
        """Todos los elementos de la cuenta (`status="live"|"test"` filtra productos)."""

        return self._dispatch("GET", f"/{self.collection}", payload=params)

    def get(self, item_id: str | int, **params: Any) -> Any:
        return self._dispatch(
            "GET",
            f"/{self.collection}/{{{self.id_token}}}",
            tokens={self.id_token: item_id},
            payload=params,
        )

    def pricing_options(self, item_id: str | int, **params: Any) -> Any:
        return self._dispatch(
            "GET",
            f"/{self.collection}/{{{self.id_token}}}/pricing_options",
            tokens={self.id_token: item_id},
            payload=params,
        )
