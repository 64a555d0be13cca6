"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el adaptador HTTP y los servicios lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language
from core.domain.models import PAGE_SIZE


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "dexwindow"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "dexwindow"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "dexwindow"
    return Path.home() / ".config" / "dexwindow"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# dexwindow user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters/servicios.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEXWINDOW_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
        env_parse_none_str="none",
    )

    catalog_base_url: str = Field(
        default="https://pokeapi.co/api/v2",
        min_length=8,
        description="Base URL del catálogo REST (compatible PokeAPI v2).",
    )
    index_pokedex: int = Field(
        default=1,
        ge=1,
        description="Id del pokedex usado como índice de la colección (1 = nacional).",
    )
    page_size: int = Field(
        default=PAGE_SIZE,
        ge=1,
        le=200,
        description="Tamaño de la ventana paginada.",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    load_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Timeout total de una carga de página o de ficha (segundos).",
    )
    max_concurrency: int = Field(
        default=20,
        ge=1,
        le=200,
        description="Lookups simultáneos máximos al construir una página o un linaje.",
    )
    user_agent: str = Field(
        default="dexwindow/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para peticiones al catálogo.",
    )

    default_language: Language = Field(
        default=Language.ENGLISH,
        description="Idioma para descripción y clasificación (flavor text / genus).",
    )
    lineage_max_depth: int | None = Field(
        default=2,
        ge=0,
        description="Niveles de anidamiento recorridos en la cadena evolutiva (None = sin límite).",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging para la CLI.",
    )
