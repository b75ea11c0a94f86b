"""Base común de los grupos de recursos."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Iterable, Mapping

from pydantic import ValidationError as PydanticValidationError

from thrivecart.core.domain.params import OperationParams
from thrivecart.core.errors import ValidationError
from thrivecart.core.validators import Rule, render, validate

if TYPE_CHECKING:
    from thrivecart.core.services.api_client import ThriveCartClient


def build_payload(model: type[OperationParams], values: Mapping[str, Any]) -> dict[str, Any]:
    """Valida la forma de los parámetros y devuelve el payload de wire.

    Los errores de tipo de Pydantic se convierten a `ValidationError`.
    """

    try:
        params = model.model_validate(dict(values))
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or None
        value = first.get("input")
        raise ValidationError(
            f'Invalid value for {field} (you provided "{render(value)}").',
            field=field,
            value=value,
        ) from None
    return params.to_payload()


def normalize_product_ids(payload: dict[str, Any]) -> dict[str, Any]:
    """`product_ids` estructurado -> JSON string; los strings pasan tal cual."""

    value = payload.get("product_ids")
    if value is not None and not isinstance(value, str):
        payload["product_ids"] = json.dumps(value, separators=(",", ":"))
    return payload


class Resource:
    def __init__(self, client: "ThriveCartClient") -> None:
        self._client = client

    def _dispatch(
        self,
        method: str,
        path: str,
        *,
        tokens: Mapping[str, Any] | None = None,
        payload: Mapping[str, Any] | None = None,
        rules: Iterable[Rule] = (),
    ) -> Any:
        validate(rules, payload or {})
        return self._client.request(method, path, tokens, payload)
