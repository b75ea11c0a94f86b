"""Errores tipados del cliente.

Por qué una jerarquía etiquetada:
- `ErrorKind` permite distinguir validación local, fallo de transporte y error
  remoto sin parsear mensajes.
- Todas las excepciones llevan un mensaje legible y, si existe, un código.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    TRANSPORT = "transport"
    REMOTE = "remote"


class ThriveCartError(Exception):
    """Base de todos los errores del cliente."""

    kind: ErrorKind

    def __init__(self, message: str, *, code: str | int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, code={self.code!r}, message={self.message!r})"


class ValidationError(ThriveCartError):
    """Precondición local fallida; nunca llega a la red."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, *, field: str | None = None, value: Any = None) -> None:
        super().__init__(message, code=field)
        self.field = field
        self.value = value


class TransportError(ThriveCartError):
    """Fallo de red/HTTP sin payload de error estructurado."""

    kind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        super().__init__(message, code=status_code)
        self.status_code = status_code
        self.body = body


class RemoteError(ThriveCartError):
    """La API respondió con un payload de error."""

    kind = ErrorKind.REMOTE

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error: str | None = None,
        reason: str | None = None,
        payload: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code=error if error is not None else status_code)
        self.status_code = status_code
        self.error = error
        self.reason = reason
        self.payload = payload or {}


def _compose_remote_message(payload: dict[str, Any]) -> tuple[str, str | None, str | None]:
    if "error" in payload:
        error = str(payload["error"])
        reason = payload.get("reason")
        if reason is not None:
            return f"[{error}] {reason}", error, str(reason)
        return f"[{error}]", error, None

    # Convención antigua: status/title/detail (+ errors).
    if any(key in payload for key in ("status", "title", "detail")):
        message = f"{payload.get('status', '')}: {payload.get('title', '')} - {payload.get('detail', '')}"
        errors = payload.get("errors")
        if errors:
            message += " " + json.dumps(errors, ensure_ascii=False, sort_keys=True)
        detail = payload.get("detail")
        return message, None, str(detail) if detail is not None else None

    return json.dumps(payload, ensure_ascii=False, sort_keys=True), None, None


def classify_failure(
    body: bytes | str | None,
    *,
    status_code: int | None = None,
    message: str | None = None,
) -> ThriveCartError:
    """Convierte el cuerpo de un fallo en `RemoteError` o `TransportError`.

    Reglas:
    - Cuerpo que empieza por `{` y decodifica a un objeto JSON -> `RemoteError`.
    - Cualquier otra cosa -> `TransportError` con el texto crudo (o `message`
      si no hubo respuesta).
    """

    if isinstance(body, bytes):
        text = body.decode("utf-8", errors="replace")
    else:
        text = body or ""

    if text.startswith("{"):
        try:
            payload = json.loads(text)
        except json.JSONDecodeError:
            payload = None
        if isinstance(payload, dict):
            composed, error, reason = _compose_remote_message(payload)
            if error is None and "status" in payload:
                error = str(payload["status"])
            return RemoteError(
                composed,
                status_code=status_code,
                error=error,
                reason=reason,
                payload=payload,
            )

    return TransportError(
        text or message or "Request failed without a response body.",
        status_code=status_code,
        body=text or None,
    )
