"""Tablas estáticas de presentación por tipo elemental.

Son constantes de proceso (solo lectura): color para los badges de la
terminal e id del icono oficial de PokeAPI/sprites.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

TYPE_ICON_BASE_URL = (
    "https://raw.githubusercontent.com/PokeAPI/sprites/master/sprites/types/"
    "generation-ix/scarlet-violet"
)

DEFAULT_TYPE_COLOR = "grey50"

TYPE_COLORS: Mapping[str, str] = MappingProxyType(
    {
        "normal": "grey62",
        "fire": "red3",
        "water": "dodger_blue2",
        "electric": "gold1",
        "grass": "green3",
        "ice": "light_sky_blue1",
        "fighting": "red1",
        "poison": "medium_purple3",
        "ground": "dark_goldenrod",
        "flying": "slate_blue1",
        "psychic": "hot_pink",
        "bug": "chartreuse3",
        "rock": "orange4",
        "ghost": "purple4",
        "dragon": "blue_violet",
        "dark": "grey30",
        "steel": "grey62",
        "fairy": "pink1",
    }
)

# name -> (display name, icon id)
TYPE_ICONS: Mapping[str, tuple[str, str]] = MappingProxyType(
    {
        "normal": ("Normal", "1"),
        "fighting": ("Fighting", "2"),
        "flying": ("Flying", "3"),
        "poison": ("Poison", "4"),
        "ground": ("Ground", "5"),
        "rock": ("Rock", "6"),
        "bug": ("Bug", "7"),
        "ghost": ("Ghost", "8"),
        "steel": ("Steel", "9"),
        "fire": ("Fire", "10"),
        "water": ("Water", "11"),
        "grass": ("Grass", "12"),
        "electric": ("Electric", "13"),
        "psychic": ("Psychic", "14"),
        "ice": ("Ice", "15"),
        "dragon": ("Dragon", "16"),
        "dark": ("Dark", "17"),
        "fairy": ("Fairy", "18"),
        "stellar": ("Stellar", "19"),
        "unknown": ("Unknown", "10001"),
    }
)


def type_color(type_name: str) -> str:
    return TYPE_COLORS.get(type_name, DEFAULT_TYPE_COLOR)


def type_label(type_name: str) -> str:
    icon = TYPE_ICONS.get(type_name)
    return icon[0] if icon else type_name.capitalize()


def type_icon_url(type_name: str) -> str | None:
    icon = TYPE_ICONS.get(type_name)
    if icon is None:
        return None
    return f"{TYPE_ICON_BASE_URL}/{icon[1]}.png"
