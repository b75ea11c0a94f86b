"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any, Iterable

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from thrivecart.core.errors import ThriveCartError


def _rows(data: Any) -> Iterable[dict[str, Any]]:
    # La API devuelve listas directas o envueltas en una clave.
    if isinstance(data, dict):
        for key in ("products", "items", "data", "results"):
            if isinstance(data.get(key), list):
                data = data[key]
                break
    if isinstance(data, list):
        return [row for row in data if isinstance(row, dict)]
    return []


def build_products_table(data: Any, *, title: str = "Products") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Status", style="green")
    table.add_column("URL", style="magenta")
    for row in _rows(data):
        table.add_row(
            str(row.get("product_id", row.get("id", ""))),
            str(row.get("name", "")),
            str(row.get("status", "")),
            str(row.get("url", "")),
        )
    return table


def print_data(console: Console, data: Any) -> None:
    """JSON coloreado; `None` (cuerpo vacío) se muestra como aviso."""

    if data is None:
        console.print("[dim](empty response)[/dim]")
        return
    console.print_json(data=data)


def build_error_panel(error: ThriveCartError) -> Panel:
    title = Text(f"{error.kind.value} error", style="bold red")
    body = Text(error.message)
    if error.code is not None:
        body.append(f"\ncode: {error.code}", style="dim")
    return Panel(body, title=title, border_style="red")
