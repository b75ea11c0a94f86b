"""Contrato del transporte HTTP.

Por qué Protocol:
- Contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir httpx por un stub en tests o por otro cliente HTTP
  (pool compartido, proxy, etc.) sin tocar el Core.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from thrivecart.core.domain.models import RawResponse, RequestSpec


@runtime_checkable
class HttpTransport(Protocol):
    """Contrato mínimo para ejecutar un `RequestSpec`.

    Reglas de diseño:
    - `execute` es síncrono: cada operación es un round trip bloqueante.
    - Respuestas con status >= 400 o fallos de red se señalan con
      `thrivecart.core.errors.TransportError`, con status/cuerpo si existen.
    - Sin reintentos: quien llama decide.
    """

    def execute(self, spec: RequestSpec) -> RawResponse:
        """Ejecuta el request y devuelve la respuesta cruda."""

        ...
