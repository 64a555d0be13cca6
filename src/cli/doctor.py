"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.pokeapi import PokeApiCatalog
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.domain.errors import FetchFailed
from core.domain.language import Language

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_catalog(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with PokeApiCatalog(settings) as catalog:
            index = await catalog.fetch_index()
        return True, f"{index.total_count} entries"
    except FetchFailed as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="dexwindow Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    table.add_row("Catalog base_url", "OK", settings.catalog_base_url)
    table.add_row("Page size", "OK", str(settings.page_size))
    table.add_row("Language", "OK", settings.default_language.label())
    depth = "unbounded" if settings.lineage_max_depth is None else str(settings.lineage_max_depth)
    table.add_row("Lineage depth", "OK", depth)
    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_catalog(settings))
    table.add_row("Catalog index", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] check DEXWINDOW_CATALOG_BASE_URL or run `dexwindow doctor configure`."
        )


@app.command()
def configure() -> None:
    """Interactive setup (stores config in the user config .env)."""

    current = AppSettings()
    base_url = typer.prompt("Catalog base URL", default=current.catalog_base_url, show_default=True).strip()
    language = typer.prompt(
        "Language for descriptions",
        default=current.default_language.value,
        show_default=True,
    ).strip().lower()

    if not base_url:
        raise typer.BadParameter("base_url is required")
    try:
        Language(language)
    except ValueError:
        choices = ", ".join(lang.value for lang in Language)
        raise typer.BadParameter(f"language must be one of: {choices}") from None

    env_path = write_user_env_vars(
        {
            "DEXWINDOW_CATALOG_BASE_URL": base_url,
            "DEXWINDOW_DEFAULT_LANGUAGE": language,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
