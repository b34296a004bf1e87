"""CLI de webflow-client (Typer + Rich).

Por qué Typer:
- Comandos tipados a partir de las firmas, ayuda autogenerada.
- Cada comando es un envoltorio fino sobre `Webflow`: no valida nada por
  su cuenta, la librería ya lo hace.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional

import httpx
import typer
from rich.console import Console

from webflow_client.adapters.json_exporter import dumps_envelope, export_envelope_json
from webflow_client.cli import doctor
from webflow_client.cli.ui_components import (
    build_collections_table,
    build_domains_table,
    build_items_table,
    build_record_panel,
    build_sites_table,
    build_webhooks_table,
    format_rate_limit,
    print_banner,
    print_error,
)
from webflow_client.core.config import ClientSettings
from webflow_client.core.domain.entities import MetaList
from webflow_client.core.domain.errors import WebflowError
from webflow_client.core.log import configure_logging
from webflow_client.core.services.webflow import Webflow

app = typer.Typer(no_args_is_help=True, help="Command line client for the Webflow CMS API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


class _State:
    json_output: bool = False
    output: Path | None = None


_state = _State()


def build_client(settings: ClientSettings | None = None) -> Webflow:
    """Punto único de construcción del cliente (los tests lo reemplazan)."""

    return Webflow.from_settings(settings)


def _execute(call: Callable[[Webflow], Awaitable[Any]], render: Callable[[Any], None]) -> None:
    try:
        client = build_client()
        result = asyncio.run(call(client))
    except WebflowError as exc:
        print_error(_console, exc)
        raise typer.Exit(code=1) from exc
    except httpx.HTTPError as exc:
        _console.print(f"[red]Network error:[/red] {exc}")
        raise typer.Exit(code=1) from exc

    if _state.output is not None:
        path = export_envelope_json(payload=result, output_path=_state.output)
        _console.print(f"[green]Saved JSON to:[/green] {path}")
        return
    if _state.json_output:
        typer.echo(dumps_envelope(result))
        return
    render(result)


def _meta_of(result: Any) -> dict[str, Any]:
    if isinstance(result, MetaList):
        return result.meta
    if isinstance(result, dict):
        return result.get("_meta") or {}
    return {}


def _render_table(builder: Callable[[Any], Any]) -> Callable[[Any], None]:
    def render(result: Any) -> None:
        _console.print(builder(result))
        _console.print(format_rate_limit(_meta_of(result)))

    return render


def _render_record(title: str) -> Callable[[Any], None]:
    def render(result: Any) -> None:
        _console.print(build_record_panel(result, title=title))
        # Las entidades sueltas no llevan `_meta` propio; sus datos crudos sí.
        data = result.to_dict() if hasattr(result, "to_dict") else result
        _console.print(format_rate_limit(_meta_of(data)))

    return render


@app.callback()
def main(
    json_output: bool = typer.Option(False, "--json", help="Print raw JSON instead of tables."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the JSON response to a file."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (DEBUG, INFO, WARNING...)."),
    banner: bool = typer.Option(False, "--banner", help="Show the welcome banner."),
) -> None:
    settings = ClientSettings()
    configure_logging(log_level or settings.log_level, json_output=settings.log_json)
    _state.json_output = json_output
    _state.output = output
    if banner and not json_output:
        print_banner(_console)


@app.command()
def info() -> None:
    """Show information about the current token (GET /info)."""

    _execute(lambda api: api.info(), _render_record("Info"))


@app.command()
def sites() -> None:
    """List the sites the token can access."""

    _execute(lambda api: api.sites(), _render_table(build_sites_table))


@app.command()
def site(site_id: str = typer.Argument(..., help="Site ID.")) -> None:
    """Show a single site."""

    _execute(lambda api: api.site(site_id=site_id), _render_record("Site"))


@app.command()
def domains(site_id: str = typer.Argument(..., help="Site ID.")) -> None:
    """List the custom domains of a site."""

    _execute(lambda api: api.domains(site_id=site_id), _render_table(build_domains_table))


@app.command()
def publish(
    site_id: str = typer.Argument(..., help="Site ID."),
    domain: list[str] = typer.Option([], "--domain", "-d", help="Domain to publish to (repeatable)."),
) -> None:
    """Publish a site to the given domains."""

    _execute(lambda api: api.publish_site(site_id=site_id, domains=domain), _render_record("Publish"))


@app.command()
def collections(site_id: str = typer.Argument(..., help="Site ID.")) -> None:
    """List the CMS collections of a site."""

    _execute(lambda api: api.collections(site_id=site_id), _render_table(build_collections_table))


@app.command()
def collection(collection_id: str = typer.Argument(..., help="Collection ID.")) -> None:
    """Show a collection (schema included in --json output)."""

    _execute(lambda api: api.collection(collection_id=collection_id), _render_record("Collection"))


@app.command()
def items(
    collection_id: str = typer.Argument(..., help="Collection ID."),
    limit: Optional[int] = typer.Option(None, "--limit", min=1, max=100, help="Page size."),
    offset: Optional[int] = typer.Option(None, "--offset", min=0, help="Page offset."),
) -> None:
    """List one page of items of a collection."""

    query = {"limit": limit, "offset": offset}
    query = {key: value for key, value in query.items() if value is not None}
    _execute(lambda api: api.items(collection_id=collection_id, query=query), _render_table(build_items_table))


@app.command()
def item(
    collection_id: str = typer.Argument(..., help="Collection ID."),
    item_id: str = typer.Argument(..., help="Item ID."),
) -> None:
    """Show a single item."""

    _execute(lambda api: api.item(collection_id=collection_id, item_id=item_id), _render_record("Item"))


@app.command(name="remove-item")
def remove_item(
    collection_id: str = typer.Argument(..., help="Collection ID."),
    item_id: str = typer.Argument(..., help="Item ID."),
) -> None:
    """Delete an item from a collection."""

    _execute(
        lambda api: api.remove_item(collection_id=collection_id, item_id=item_id),
        _render_record("Removed"),
    )


@app.command()
def webhooks(site_id: str = typer.Argument(..., help="Site ID.")) -> None:
    """List the webhooks registered on a site."""

    _execute(lambda api: api.webhooks(site_id=site_id), _render_table(build_webhooks_table))


@app.command(name="remove-webhook")
def remove_webhook(
    site_id: str = typer.Argument(..., help="Site ID."),
    webhook_id: str = typer.Argument(..., help="Webhook ID."),
) -> None:
    """Delete a webhook."""

    _execute(
        lambda api: api.remove_webhook(site_id=site_id, webhook_id=webhook_id),
        _render_record("Removed"),
    )


def run() -> None:
    app()


if __name__ == "__main__":
    run()
