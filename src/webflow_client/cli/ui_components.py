"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any, Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from webflow_client.core.domain.errors import MissingArgumentError, RemoteAPIError, WebflowError


def print_banner(console: Console) -> None:
    title = Text("webflow-client", style="bold cyan")
    subtitle = Text("Sites • Collections • Items • Webhooks", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _cell(value: Any) -> str:
    if value is None:
        return "-"
    return str(value)


def build_sites_table(sites: Iterable[Any]) -> Table:
    table = Table(title="Sites")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Short name", style="magenta")
    table.add_column("Last published", style="dim")
    for site in sites:
        table.add_row(
            _cell(site.get("_id")),
            _cell(site.get("name")),
            _cell(site.get("shortName")),
            _cell(site.get("lastPublished")),
        )
    return table


def build_domains_table(domains: Iterable[Any]) -> Table:
    table = Table(title="Domains")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    for domain in domains:
        table.add_row(_cell(domain.get("_id")), _cell(domain.get("name")))
    return table


def build_collections_table(collections: Iterable[Any]) -> Table:
    table = Table(title="Collections")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Slug", style="magenta")
    table.add_column("Last updated", style="dim")
    for collection in collections:
        table.add_row(
            _cell(collection.get("_id")),
            _cell(collection.get("name")),
            _cell(collection.get("slug")),
            _cell(collection.get("lastUpdated")),
        )
    return table


def build_items_table(page: dict[str, Any]) -> Table:
    """Tabla para una página de items; el título incluye la paginación."""

    count = page.get("count")
    total = page.get("total")
    offset = page.get("offset")
    table = Table(title=f"Items ({_cell(count)} of {_cell(total)}, offset {_cell(offset)})")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Slug", style="magenta")
    table.add_column("Draft", style="yellow")
    table.add_column("Archived", style="yellow")
    for item in page.get("items") or []:
        table.add_row(
            _cell(item.get("_id")),
            _cell(item.get("name")),
            _cell(item.get("slug")),
            _cell(item.get("_draft")),
            _cell(item.get("_archived")),
        )
    return table


def build_webhooks_table(webhooks: Iterable[Any]) -> Table:
    table = Table(title="Webhooks")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Trigger", style="white")
    table.add_column("URL", style="magenta")
    table.add_column("Created", style="dim")
    for webhook in webhooks:
        table.add_row(
            _cell(webhook.get("_id")),
            _cell(webhook.get("triggerType")),
            _cell(webhook.get("url")),
            _cell(webhook.get("createdOn")),
        )
    return table


def build_record_panel(record: Any, *, title: str) -> Panel:
    """Panel clave/valor para un único registro (site, item, info...)."""

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold cyan", no_wrap=True)
    table.add_column(style="white")
    for key in record:
        if key == "_meta":
            continue
        table.add_row(str(key), _cell(record[key]))
    return Panel(table, title=Text(title, style="bold"), border_style="cyan")


def format_rate_limit(meta: dict[str, Any] | None) -> Text:
    rate_limit = (meta or {}).get("rateLimit") or {}
    limit = rate_limit.get("limit")
    remaining = rate_limit.get("remaining")
    if limit is None and remaining is None:
        return Text("Rate limit: n/a", style="dim")
    style = "red" if isinstance(remaining, int) and remaining <= 5 else "dim"
    return Text(f"Rate limit: {_cell(remaining)}/{_cell(limit)} remaining", style=style)


def print_error(console: Console, exc: WebflowError) -> None:
    """Imprime un error de la librería distinguiendo su tipo."""

    if isinstance(exc, MissingArgumentError):
        console.print(f"[red]Missing argument:[/red] {exc.message}")
        return
    if isinstance(exc, RemoteAPIError):
        console.print(f"[red]API error ({_cell(exc.status_code)}):[/red] {exc.message}")
        if exc.msg:
            console.print(f"  [dim]{exc.msg}[/dim]")
        for problem in exc.problems or []:
            console.print(f"  - {problem}")
        console.print(format_rate_limit(exc.meta))
        return
    console.print(f"[red]Error:[/red] {exc.message}")
