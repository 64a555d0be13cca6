"""Contrato del catálogo remoto.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- El browser y el resolver dependen solo de esto; en tests se sustituye por
  un catálogo falso controlable (p.ej. para forzar carreras).
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import (
    CatalogIndex,
    EntityDetail,
    EvolutionLineage,
    SpeciesDetail,
)


@runtime_checkable
class CatalogSource(Protocol):
    """Lookups de solo lectura sobre el catálogo.

    Reglas de diseño:
    - Todo es asíncrono porque cada método es un fetch HTTP.
    - Los locators son opacos: se usan tal cual llegan en la respuesta previa.
    - Cualquier fallo (status, red, JSON, esquema) se eleva como `FetchFailed`.
    """

    async def fetch_index(self) -> CatalogIndex:
        """Índice completo de la colección."""

        ...

    async def fetch_entity_by_id(self, entity_id: int) -> EntityDetail:
        ...

    async def fetch_entity(self, locator: str) -> EntityDetail:
        ...

    async def fetch_species(self, locator: str) -> SpeciesDetail:
        ...

    async def fetch_lineage(self, locator: str) -> EvolutionLineage:
        ...
