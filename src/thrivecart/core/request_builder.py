"""Ensamblado de requests.

Responsabilidad:
- Sustituir tokens `{name}` del path.
- Resolver la tabla de headers (auth, modo, SDK/versión) contra el contexto.
- Codificar parámetros: query string en GET, cuerpo JSON en el resto.

Es una transformación pura: mismas entradas -> `RequestSpec` iguales.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from thrivecart.core.domain.models import Mode, RequestSpec

_TOKEN_RE = re.compile(r"\{([^{}]+)\}")


@dataclass(frozen=True)
class RequestContext:
    """Datos del cliente que alimentan los headers."""

    access_token: str
    mode: Mode = Mode.LIVE
    base_uri: str = "https://thrivecart.com"
    endpoint: str = "/api/external"
    sdk_version: str = "1.0.5"
    api_version: str = "1.0.0"
    sdk_name: str = "python"


HeaderSource = Callable[[RequestContext], str]

DEFAULT_HEADER_SOURCES: dict[str, HeaderSource] = {
    "Authorization": lambda ctx: f"Bearer {ctx.access_token}",
    "X-TC-Mode": lambda ctx: Mode(ctx.mode).value,
    "X-TC-Sdk": lambda ctx: f"{ctx.sdk_name}/{ctx.sdk_version}",
    "X-TC-Version": lambda ctx: ctx.api_version,
    "Accept": lambda ctx: "application/json",
}


def substitute_tokens(path_template: str, tokens: Mapping[str, Any] | None = None) -> str:
    """Reemplaza cada `{name}` por `str(tokens[name])`.

    Los placeholders sin token se dejan tal cual en el path.
    """

    if not tokens:
        return path_template

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in tokens:
            return str(tokens[name])
        return match.group(0)

    return _TOKEN_RE.sub(_replace, path_template)


def _query_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def encode_query(parameters: Mapping[str, Any], prefix: str | None = None) -> list[tuple[str, str]]:
    """Aplana parámetros a pares de query (notación `a[b]=c` para anidados)."""

    pairs: list[tuple[str, str]] = []
    for key, value in parameters.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            pairs.extend(encode_query(value, name))
        elif isinstance(value, (list, tuple)):
            pairs.extend(encode_query(dict(enumerate(value)), name))
        else:
            pairs.append((name, _query_scalar(value)))
    return pairs


def encode_json_body(parameters: Mapping[str, Any]) -> bytes:
    return json.dumps(dict(parameters), ensure_ascii=False, separators=(",", ":")).encode("utf-8")


class RequestBuilder:
    """Compone `RequestSpec` a partir de método, path, tokens y parámetros."""

    def __init__(
        self,
        context: RequestContext,
        *,
        header_sources: Mapping[str, HeaderSource] | None = None,
        extra_headers: Mapping[str, str] | None = None,
    ) -> None:
        self.context = context
        self._header_sources = dict(header_sources or DEFAULT_HEADER_SOURCES)
        self._extra_headers = dict(extra_headers or {})

    def headers(self) -> dict[str, str]:
        resolved = {name: source(self.context) for name, source in self._header_sources.items()}
        resolved.update(self._extra_headers)
        return resolved

    def url_for(self, path: str) -> str:
        return self.context.base_uri.rstrip("/") + self.context.endpoint + path

    def build(
        self,
        method: str,
        path_template: str,
        tokens: Mapping[str, Any] | None = None,
        parameters: Mapping[str, Any] | None = None,
    ) -> RequestSpec:
        method = method.upper()
        path = substitute_tokens(path_template, tokens)
        headers = self.headers()

        query: tuple[tuple[str, str], ...] | None = None
        body: bytes | None = None
        if parameters:
            if method == "GET":
                query = tuple(encode_query(parameters)) or None
            else:
                body = encode_json_body(parameters)
                headers["Content-Type"] = "application/json"

        return RequestSpec(
            method=method,
            url=self.url_for(path),
            path=path,
            headers=headers,
            query=query,
            body=body,
        )
