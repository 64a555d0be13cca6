"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Los componentes solo leen view models; nunca disparan fetches.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.table import Table
from rich.text import Text

from core.domain.models import (
    STAT_MAX,
    CatalogPageView,
    EntityDetailView,
    LineageEntry,
)
from core.domain.type_styles import type_color, type_icon_url, type_label


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("dexwindow", style="bold cyan")
    subtitle = Text("Pokédex paginado • Fichas • Cadenas evolutivas", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def type_badges(type_names: tuple[str, ...]) -> Text:
    text = Text()
    for i, name in enumerate(type_names):
        if i:
            text.append(" ")
        text.append(f" {type_label(name)} ", style=f"bold white on {type_color(name)}")
    return text


def type_icon_lines(type_names: tuple[str, ...]) -> Text:
    text = Text(style="dim")
    for name in type_names:
        url = type_icon_url(name)
        if url is None:
            continue
        if text.plain:
            text.append("\n")
        text.append(f"{type_label(name)}: {url}")
    return text


def build_page_table(view: CatalogPageView) -> Table:
    """Tabla de la ventana actual: una fila por tarjeta."""

    table = Table(title=f"Pokédex · Page {view.page_index} of {view.total_pages}")
    table.add_column("#", style="cyan", no_wrap=True, justify="right")
    table.add_column("Name", style="white")
    table.add_column("Types")
    table.add_column("Artwork", style="dim", overflow="fold")
    for item in view.items:
        table.add_row(
            f"{item.id:03d}",
            item.name.capitalize(),
            type_badges(item.type_names),
            item.image_url or "-",
        )
    return table


def build_navigation_hint(view: CatalogPageView) -> Text:
    hint = Text()
    hint.append("[p] Previous", style="bold" if view.can_go_previous else "dim strike")
    hint.append("   ")
    hint.append(f"Page {view.page_index} of {view.total_pages}", style="bold")
    hint.append("   ")
    hint.append("[n] Next", style="bold" if view.can_go_next else "dim strike")
    hint.append("   [number] Go to page   [q] Quit", style="dim")
    return hint


def build_stats_table(view: EntityDetailView) -> Table:
    """Barras de stats sobre una escala fija de 255."""

    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column("Stat", style="bold", no_wrap=True)
    table.add_column("Bar", ratio=1)
    table.add_column("Value", justify="right")
    if view.detail is None:
        return table
    for stat in view.detail.stats:
        bar = ProgressBar(total=STAT_MAX, completed=stat.value, width=40)
        table.add_row(f"{stat.name.replace('-', ' ').capitalize()}:", bar, str(stat.value))
    return table


def build_lineage_text(lineage: tuple[LineageEntry, ...]) -> Text:
    text = Text()
    for i, entry in enumerate(lineage):
        if i:
            text.append("  →  ", style="bold")
        text.append(entry.species_name.capitalize(), style="bold magenta")
        if entry.image_url:
            text.append(f" ({entry.image_url})", style="dim")
    return text


def build_detail_panel(view: EntityDetailView, *, show_moves: bool = False) -> Panel:
    """Ficha completa de un Pokémon."""

    detail = view.detail
    if detail is None:
        return Panel(Text(view.error or "No data", style="red"), border_style="red")

    info = Table(show_header=False, box=None, padding=(0, 1))
    info.add_column("Field", style="bold cyan", no_wrap=True)
    info.add_column("Value", overflow="fold")
    info.add_row("Description", view.description or "")
    info.add_row("Classification", view.genus or "")
    info.add_row("Types", type_badges(detail.type_names))
    info.add_row("Type Icons", type_icon_lines(detail.type_names))
    info.add_row("Height", f"{detail.height_m} m")
    info.add_row("Weight", f"{detail.weight_kg} kg")
    abilities = ", ".join(
        a.name + (" (Hidden Ability)" if a.is_hidden else "") for a in detail.abilities
    )
    info.add_row("Abilities", abilities)
    info.add_row("Evolution Chain", build_lineage_text(view.lineage))
    info.add_row("Base Experience", "-" if detail.base_experience is None else str(detail.base_experience))
    info.add_row("Artwork", detail.image_url or "-")

    parts: list[object] = [info, Text("\nBase Stats", style="bold"), build_stats_table(view)]
    if show_moves and detail.move_names:
        moves = ", ".join(m.replace("-", " ") for m in detail.move_names)
        parts.extend([Text("\nMoves", style="bold"), Text(moves)])

    title = Text(f"{detail.name.capitalize()} (#{detail.id})", style="bold yellow")
    return Panel(Group(*parts), title=title, border_style="yellow")
