"""Configuración del cliente.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Cada `ThriveCartClient` recibe su propia instancia: modo y base URI dejan
  de ser estado global compartido entre clientes.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from thrivecart.core.domain.models import Mode

SDK_VERSION = "1.0.5"
API_VERSION = "1.0.0"

DEFAULT_BASE_URI = "https://thrivecart.com"
DEFAULT_ENDPOINT = "/api/external"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "thrivecart"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "thrivecart"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "thrivecart"
    return Path.home() / ".config" / "thrivecart"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves con valor `None` se ignoran; el resto sobrescribe lo existente.
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# ThriveCart client config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central del cliente.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) antes de construir requests.
    - Un único contrato de configuración para CLI, cliente API y OAuth.
    """

    model_config = SettingsConfigDict(
        env_prefix="THRIVECART_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    access_token: str | None = Field(
        default=None,
        description="Access token de la cuenta (API key o token OAuth).",
    )
    mode: Mode = Field(
        default=Mode.LIVE,
        description="Modo de operación enviado en `X-TC-Mode` (live/test).",
    )
    base_uri: str = Field(
        default=DEFAULT_BASE_URI,
        min_length=8,
        description="Base URI de la plataforma; sobrescribible en dev/test.",
    )
    endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        description="Prefijo del endpoint REST.",
    )
    http_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default=f"thrivecart-python/{SDK_VERSION}",
        min_length=1,
        description="User-Agent de las peticiones.",
    )
    sdk_version: str = Field(
        default=SDK_VERSION,
        min_length=1,
        description="Versión del SDK enviada en `X-TC-Sdk`.",
    )
    api_version: str = Field(
        default=API_VERSION,
        min_length=1,
        description="Versión de la API enviada en `X-TC-Version`.",
    )

    oauth_base_uri: str = Field(
        default=DEFAULT_BASE_URI,
        min_length=8,
        description="Base URI del servidor de autorización OAuth.",
    )
    oauth_client_id: str | None = Field(
        default=None,
        description="Client ID de la app OAuth.",
    )
    oauth_client_secret: str | None = Field(
        default=None,
        description="Client secret de la app OAuth.",
    )
    oauth_redirect_uri: str | None = Field(
        default=None,
        description="URL de retorno registrada para la app OAuth.",
    )
