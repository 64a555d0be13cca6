"""CLI entry point (Typer).

The CLI is only a presentation layer: it builds the catalog adapter, hands it
to the core services and renders the view models they emit.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import export_view_json
from adapters.pokeapi import PokeApiCatalog
from cli import doctor
from cli.ui_components import (
    build_detail_panel,
    build_navigation_hint,
    build_page_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.errors import ValidationFailed
from core.domain.models import CatalogPageView, EntityDetailView, LoadState
from core.services.catalog_browser import CatalogBrowser
from core.services.lineage_resolver import EntityDetailResolver
from core.services.lookups import ViewHooks

app = typer.Typer(no_args_is_help=True, help="Browse the PokeAPI catalog page by page.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every fetch (DEBUG)."),
) -> None:
    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)


def _render_page(view: CatalogPageView) -> None:
    if view.state is LoadState.ERROR:
        _console.print(f"[red]{view.error}[/red]")
        return
    _console.print(build_page_table(view))


async def _load_page(settings: AppSettings, number: int) -> CatalogPageView:
    async with PokeApiCatalog(settings) as catalog:
        browser = CatalogBrowser(catalog, settings=settings)
        return await browser.load(number)


@app.command()
def page(
    number: int = typer.Argument(1, help="Page number (1-based)."),
    json_path: Path | None = typer.Option(None, "--json", help="Also write the view model as JSON."),
) -> None:
    """Show one window of the catalog."""

    settings = AppSettings()
    try:
        with _console.status(f"Loading page {number}..."):
            view = asyncio.run(_load_page(settings, number))
    except ValidationFailed as exc:
        raise typer.BadParameter(exc.message) from exc

    _render_page(view)
    if json_path:
        export_view_json(view=view, output_path=json_path)
        _console.print(f"[green]JSON saved to:[/green] {json_path}")
    if view.state is LoadState.ERROR:
        raise typer.Exit(code=1)


async def _browse(settings: AppSettings, start: int) -> None:
    def navigate(target: int) -> None:
        _console.print(f"[dim]→ /page/{target}[/dim]")

    async with PokeApiCatalog(settings) as catalog:
        browser = CatalogBrowser(
            catalog,
            settings=settings,
            hooks=ViewHooks(navigate=navigate),
            initial_page=start,
        )
        view = await browser.load()
        while True:
            _render_page(view)
            _console.print(build_navigation_hint(view))
            choice = (await asyncio.to_thread(typer.prompt, "Go", default="n")).strip().lower()
            if choice in ("q", "quit", "exit"):
                return
            if choice in ("n", "next"):
                view = await browser.next()
            elif choice in ("p", "prev", "previous"):
                view = await browser.previous()
            else:
                try:
                    view = await browser.jump_to(choice)
                except ValidationFailed as exc:
                    _console.print(f"[yellow]{exc.message}[/yellow]")


@app.command()
def browse(start: int = typer.Argument(1, help="Initial page.")) -> None:
    """Interactive pagination: n / p / page number / q."""

    print_banner(_console)
    try:
        asyncio.run(_browse(AppSettings(), start))
    except ValidationFailed as exc:
        raise typer.BadParameter(exc.message) from exc


async def _load_detail(settings: AppSettings, entity_id: int) -> EntityDetailView:
    async with PokeApiCatalog(settings) as catalog:
        resolver = EntityDetailResolver(catalog, settings=settings)
        return await resolver.load(entity_id)


@app.command()
def show(
    entity_id: int = typer.Argument(..., min=1, help="Pokémon id."),
    json_path: Path | None = typer.Option(None, "--json", help="Also write the view model as JSON."),
    moves: bool = typer.Option(False, "--moves", help="List every learnable move."),
) -> None:
    """Show the detail card and evolution chain of one Pokémon."""

    settings = AppSettings()
    with _console.status(f"Loading #{entity_id}..."):
        view = asyncio.run(_load_detail(settings, entity_id))

    _console.print(build_detail_panel(view, show_moves=moves))
    if json_path:
        export_view_json(view=view, output_path=json_path)
        _console.print(f"[green]JSON saved to:[/green] {json_path}")
    if view.state is LoadState.ERROR:
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
