"""CLI `thrivecart` (Typer + Rich).

Comandos de consulta rápida sobre la API; útil para verificar credenciales y
explorar respuestas sin escribir código.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import typer
from rich.console import Console

from thrivecart.cli import doctor
from thrivecart.cli.ui_components import build_error_panel, build_products_table, print_data
from thrivecart.core.config import AppSettings
from thrivecart.core.domain.models import Mode
from thrivecart.core.errors import ThriveCartError
from thrivecart.core.services.api_client import ThriveCartClient

app = typer.Typer(no_args_is_help=True, help="ThriveCart API client.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@dataclass
class CliState:
    token: str | None = None
    test: bool = False
    base_uri: str | None = None
    as_json: bool = False


def _call(ctx: typer.Context, operation: Callable[[ThriveCartClient], Any]) -> Any:
    state: CliState = ctx.obj or CliState()
    try:
        with ThriveCartClient(
            state.token,
            settings=AppSettings(),
            mode=Mode.TEST if state.test else None,
            base_uri=state.base_uri,
        ) as client:
            return operation(client)
    except ThriveCartError as exc:
        _err_console.print(build_error_panel(exc))
        raise typer.Exit(code=1) from exc


@app.callback()
def main(
    ctx: typer.Context,
    token: Optional[str] = typer.Option(None, "--token", help="Access token (defaults to THRIVECART_ACCESS_TOKEN)."),
    test: bool = typer.Option(False, "--test", help="Send requests in test mode."),
    base_uri: Optional[str] = typer.Option(None, "--base-uri", help="Custom base URI (dev/testing)."),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON instead of tables."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = CliState(token=token, test=test, base_uri=base_uri, as_json=as_json)


@app.command()
def ping(ctx: typer.Context) -> None:
    """Show account information for the access token."""

    print_data(_console, _call(ctx, lambda client: client.ping()))


@app.command()
def products(
    ctx: typer.Context,
    status: Optional[str] = typer.Option(None, "--status", help="live or test."),
) -> None:
    """List products."""

    params = {"status": status} if status else {}
    data = _call(ctx, lambda client: client.products.list(**params))
    if ctx.obj.as_json:
        print_data(_console, data)
    else:
        _console.print(build_products_table(data))


@app.command()
def product(ctx: typer.Context, product_id: str = typer.Argument(..., help="Product ID.")) -> None:
    """Show a single product."""

    print_data(_console, _call(ctx, lambda client: client.products.get(product_id)))


@app.command()
def transactions(
    ctx: typer.Context,
    query: Optional[str] = typer.Option(None, "--query", help="Email, order ID, invoice ID..."),
    transaction_type: Optional[str] = typer.Option(None, "--type", help="any|charge|rebill|refund|cancel"),
    per_page: Optional[int] = typer.Option(None, "--per-page", help="Results per page (max 25)."),
    page: Optional[int] = typer.Option(None, "--page", help="Page number (1..N)."),
) -> None:
    """List one page of transactions."""

    data = _call(
        ctx,
        lambda client: client.transactions.list(
            query=query,
            transaction_type=transaction_type,
            per_page=per_page,
            page=page,
        ),
    )
    print_data(_console, data)


@app.command()
def customer(ctx: typer.Context, email: str = typer.Argument(..., help="Customer email.")) -> None:
    """Show everything stored about a customer."""

    print_data(_console, _call(ctx, lambda client: client.customers.get(email)))


def run() -> None:
    app()
