"""Doctor command for environment diagnostics."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from thrivecart.core.config import AppSettings, write_user_env_vars
from thrivecart.core.domain.models import Mode
from thrivecart.core.errors import ThriveCartError
from thrivecart.core.services.api_client import ThriveCartClient

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_api(settings: AppSettings) -> tuple[bool, str]:
    try:
        with ThriveCartClient(settings=settings) as client:
            data = client.ping()
        name = data.get("account_name") if isinstance(data, dict) else None
        return True, f"Authenticated as {name}" if name else "OK"
    except ThriveCartError as exc:
        return False, f"[{exc.kind.value}] {exc.message}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="ThriveCart Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.access_token:
        table.add_row("Access token", "OK", "Set via THRIVECART_ACCESS_TOKEN / .env")
    else:
        table.add_row("Access token", "MISSING", "Run `thrivecart doctor setup` or export THRIVECART_ACCESS_TOKEN")
    table.add_row("Mode", "OK", settings.mode.value)
    table.add_row("Base URI", "OK", settings.base_uri + settings.endpoint)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("SDK / API version", "OK", f"{settings.sdk_version} / {settings.api_version}")

    # Connectivity (best-effort)
    if settings.access_token:
        ok_api, detail_api = _check_api(settings)
        table.add_row("API ping", "OK" if ok_api else "FAIL", detail_api)
    else:
        table.add_row("API ping", "SKIPPED", "No access token")

    _console.print(table)


@app.command(name="setup")
def setup(
    test: bool = typer.Option(False, "--test", help="Store test mode as the default."),
    base_uri: Optional[str] = typer.Option(None, "--base-uri", help="Custom base URI (dev/testing)."),
) -> None:
    """Interactive setup (stores config in the user config .env)."""

    access_token = typer.prompt("Access token", hide_input=True, confirmation_prompt=False).strip()
    if not access_token:
        raise typer.BadParameter("access token is required")

    env_path = write_user_env_vars(
        {
            "THRIVECART_ACCESS_TOKEN": access_token,
            "THRIVECART_MODE": Mode.from_bool(test).value,
            "THRIVECART_BASE_URI": base_uri,
        }
    )

    _console.print(f"[green]Saved ThriveCart config to:[/green] {env_path}")
