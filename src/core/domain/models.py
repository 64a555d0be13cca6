"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- Los view models son inmutables: cada carga produce uno nuevo completo y la
  capa de presentación nunca ve un estado a medio construir.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
  El parseo del JSON de PokeAPI vive en `adapters.pokeapi_models`.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterable

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.domain.language import Language


PAGE_SIZE = 20
STAT_MAX = 255


class LoadState(str, Enum):
    """Ciclo de vida compartido por browser y resolver."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


def total_pages_for(total_count: int, page_size: int = PAGE_SIZE) -> int:
    return math.ceil(total_count / page_size) if total_count > 0 else 0


def window_bounds(page_index: int, page_size: int = PAGE_SIZE) -> tuple[int, int]:
    """Offsets `[start, stop)` del índice que corresponden a una página (1-based)."""

    start = (page_index - 1) * page_size
    return start, start + page_size


class LocalizedText(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    language: str


def select_localized(entries: Iterable[LocalizedText], language: Language | str) -> str | None:
    """Primer texto cuyo idioma coincide; `None` si no hay ninguno.

    Los flavor texts de PokeAPI traen saltos de página (form feed) heredados de
    los cartuchos; se normalizan a un espacio.
    """

    code = language.value if isinstance(language, Language) else str(language)
    for entry in entries:
        if entry.language == code:
            return entry.text.replace("\f", " ")
    return None


class IndexEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    entry_number: int = Field(..., ge=1)
    species_name: str = Field(..., min_length=1)
    species_locator: str = Field(
        ...,
        min_length=1,
        description="URL opaca del recurso species (no se reconstruye desde el id).",
    )


class CatalogIndex(BaseModel):
    model_config = ConfigDict(frozen=True)

    entries: tuple[IndexEntry, ...] = ()

    @property
    def total_count(self) -> int:
        return len(self.entries)


class CollectionPage(BaseModel):
    """Posición de la ventana dentro de la colección remota."""

    model_config = ConfigDict(frozen=True)

    page_index: int = Field(..., ge=1)
    page_size: int = Field(default=PAGE_SIZE, ge=1)
    total_count: int = Field(default=0, ge=0)

    @property
    def total_pages(self) -> int:
        return total_pages_for(self.total_count, self.page_size)

    @property
    def offset(self) -> int:
        return window_bounds(self.page_index, self.page_size)[0]

    @property
    def stop(self) -> int:
        return window_bounds(self.page_index, self.page_size)[1]

    @property
    def in_range(self) -> bool:
        return self.page_index <= self.total_pages


class EntitySummary(BaseModel):
    """Tarjeta de un Pokémon dentro de la ventana actual."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    image_url: str | None = Field(
        default=None,
        description="Official artwork; PokeAPI lo deja en null para algunas formas.",
    )
    type_names: tuple[str, ...] = ()


class AbilityEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    is_hidden: bool = False


class StatEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: int = Field(..., ge=0, le=STAT_MAX)

    @property
    def ratio(self) -> float:
        """Proporción sobre la escala fija de 255, no sobre el máximo observado."""

        return self.value / STAT_MAX


class EntityDetail(BaseModel):
    """Registro completo de un Pokémon (`/pokemon/{id}`)."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    image_url: str | None = None
    type_names: tuple[str, ...] = ()
    abilities: tuple[AbilityEntry, ...] = ()
    stats: tuple[StatEntry, ...] = ()
    height: int = Field(default=0, ge=0, description="Decímetros.")
    weight: int = Field(default=0, ge=0, description="Hectogramos.")
    base_experience: int | None = None
    move_names: tuple[str, ...] = ()
    species_locator: str = Field(..., min_length=1)
    is_default: bool = Field(default=True, description="Variedad por defecto de su especie.")

    @property
    def height_m(self) -> float:
        return self.height / 10

    @property
    def weight_kg(self) -> float:
        return self.weight / 10

    def summary(self) -> EntitySummary:
        return EntitySummary(
            id=self.id,
            name=self.name,
            image_url=self.image_url,
            type_names=self.type_names,
        )


class SpeciesDetail(BaseModel):
    """Registro `pokemon-species`: textos localizados y punteros a otros recursos."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    flavor_text_entries: tuple[LocalizedText, ...] = ()
    genera: tuple[LocalizedText, ...] = ()
    lineage_locator: str | None = Field(
        default=None,
        description="URL opaca de la evolution-chain de la especie.",
    )
    variety_locators: tuple[str, ...] = Field(
        default=(),
        description="URLs de los registros pokemon de cada variedad; la default primero.",
    )

    @property
    def default_variety_locator(self) -> str | None:
        return self.variety_locators[0] if self.variety_locators else None

    def description(self, language: Language | str = Language.ENGLISH) -> str | None:
        return select_localized(self.flavor_text_entries, language)

    def genus(self, language: Language | str = Language.ENGLISH) -> str | None:
        return select_localized(self.genera, language)


class LineageNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    species_name: str = Field(..., min_length=1)
    species_locator: str = Field(..., min_length=1)
    children: tuple["LineageNode", ...] = ()


class EvolutionLineage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int | None = None
    root: LineageNode


class LineageEntry(BaseModel):
    """Nodo aplanado de la cadena evolutiva, listo para presentar."""

    model_config = ConfigDict(frozen=True)

    species_name: str
    species_locator: str
    image_url: str | None = Field(
        default=None,
        description="Ausente hasta que se resuelve el registro pokemon de la especie.",
    )


class CatalogPageView(BaseModel):
    """View model del browser paginado."""

    model_config = ConfigDict(frozen=True)

    items: tuple[EntitySummary, ...] = ()
    page_index: int = Field(default=1, ge=1)
    total_pages: int = Field(default=0, ge=0)
    state: LoadState = LoadState.IDLE
    error: str | None = None
    validation_error: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.state is LoadState.LOADING

    @property
    def can_go_previous(self) -> bool:
        return self.page_index > 1

    @property
    def can_go_next(self) -> bool:
        return self.total_pages > 0 and self.page_index < self.total_pages


class EntityDetailView(BaseModel):
    """View model de la ficha de un Pokémon."""

    model_config = ConfigDict(frozen=True)

    entity_id: int | None = None
    detail: EntityDetail | None = None
    species: SpeciesDetail | None = None
    lineage: tuple[LineageEntry, ...] = ()
    state: LoadState = LoadState.IDLE
    error: str | None = None
    language: Language = Language.ENGLISH

    @property
    def is_loading(self) -> bool:
        return self.state is LoadState.LOADING

    @property
    def description(self) -> str | None:
        return self.species.description(self.language) if self.species else None

    @property
    def genus(self) -> str | None:
        return self.species.genus(self.language) if self.species else None
