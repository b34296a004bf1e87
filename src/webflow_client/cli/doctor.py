"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from webflow_client.cli.ui_components import format_rate_limit
from webflow_client.core.config import ClientSettings, write_user_env_vars
from webflow_client.core.domain.errors import WebflowError
from webflow_client.core.services.webflow import Webflow

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def build_client(settings: ClientSettings) -> Webflow:
    return Webflow.from_settings(settings)


async def _check_api(settings: ClientSettings) -> tuple[bool, str, dict]:
    try:
        info = await build_client(settings).info()
    except WebflowError as exc:
        return False, exc.message, exc.meta
    except httpx.HTTPError as exc:
        return False, str(exc), {}
    meta = info.get("_meta", {}) if isinstance(info, dict) else {}
    return True, "GET /info OK", meta


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ClientSettings()

    table = Table(title="webflow-client Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Endpoint", "OK", settings.endpoint)
    table.add_row("API version", "OK", settings.api_version)
    if not settings.token:
        table.add_row("Token", "MISSING", "Set WEBFLOW_TOKEN or run `doctor setup`")
        _console.print(table)
        raise typer.Exit(code=1)
    table.add_row("Token", "OK", f"{len(settings.token)} chars")

    # Connectivity
    ok_api, detail_api, meta = asyncio.run(_check_api(settings))
    table.add_row("API connectivity", "OK" if ok_api else "FAIL", detail_api)

    _console.print(table)
    _console.print(format_rate_limit(meta))

    if not ok_api:
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores the token in the user config .env)."""

    token = typer.prompt("API token", hide_input=True, confirmation_prompt=False).strip()
    endpoint = typer.prompt("API endpoint", default=ClientSettings().endpoint, show_default=True).strip()

    if not token:
        raise typer.BadParameter("token is required")

    env_path = write_user_env_vars(
        {
            "WEBFLOW_TOKEN": token,
            "WEBFLOW_ENDPOINT": endpoint or None,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")

